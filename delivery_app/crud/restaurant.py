from sqlalchemy.ext.asyncio import AsyncSession
from delivery_app.models.delivery import Restaurant
import uuid


async def create_restaurant(db: AsyncSession, name: str, phone=None, address=None):
    restaurant = Restaurant(id=str(uuid.uuid4()), name=name, phone=phone, address=address)
    db.add(restaurant)
    await db.commit()
    await db.refresh(restaurant)
    return restaurant


async def get_restaurant(db: AsyncSession, restaurant_id: str):
    return await db.get(Restaurant, restaurant_id)
