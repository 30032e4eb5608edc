from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from delivery_app.models.delivery import Driver
import uuid


async def create_driver(db: AsyncSession, **fields):
    new_driver = Driver(id=fields.pop("id", None) or str(uuid.uuid4()), **fields)
    db.add(new_driver)
    await db.commit()
    await db.refresh(new_driver)
    return new_driver


async def get_driver(db: AsyncSession, driver_id: str):
    result = await db.execute(
        select(Driver).where(Driver.id == driver_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def update_driver(db: AsyncSession, driver_id: str, updates: dict):
    """Apply a partial update. Returns None if the driver does not exist."""
    driver = await get_driver(db, driver_id)
    if not driver:
        return None

    for key, value in updates.items():
        setattr(driver, key, value)

    await db.commit()
    await db.refresh(driver)
    return driver
