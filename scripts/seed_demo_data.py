# scripts/seed_demo_data.py

import asyncio
import argparse
from datetime import datetime, timedelta
from decimal import Decimal
from sqlalchemy.future import select
from sqlalchemy import delete
from delivery_app.db import async_session, create_db_and_tables
from delivery_app.crud import driver as driver_crud
from delivery_app.crud import order as order_crud
from delivery_app.crud import restaurant as restaurant_crud
from delivery_app.models.delivery import Driver, Order, OrderStatus, Restaurant

# Drivers to seed
DRIVERS_TO_SEED = [
    {"name": "Ahmed", "phone": "+967770000001", "is_available": True},
    {"name": "Salem", "phone": "+967770000002", "is_available": True},
    {"name": "Nasser", "phone": "+967770000003", "is_available": False},
]

# (total, minutes ago) for open orders waiting for a driver
OPEN_ORDERS = [
    (Decimal("120.00"), 2),
    (Decimal("30.00"), 1),
    (Decimal("75.00"), 8),
    (Decimal("40.00"), 20),
]


async def seed():
    await create_db_and_tables()
    async with async_session() as session:
        result = await session.execute(select(Restaurant).where(Restaurant.name == "Al-Zubairi Grill"))
        restaurant = result.scalar_one_or_none()
        if not restaurant:
            restaurant = await restaurant_crud.create_restaurant(
                session, "Al-Zubairi Grill", phone="+967771234567", address="Sanaa, Al-Zubairi Street"
            )
            print(f"Created restaurant: {restaurant.name}")

        for driver_data in DRIVERS_TO_SEED:
            result = await session.execute(select(Driver).where(Driver.phone == driver_data["phone"]))
            if result.scalar_one_or_none():
                print(f"Driver '{driver_data['name']}' already exists. Skipping.")
                continue
            driver = await driver_crud.create_driver(session, **driver_data)
            print(f"Created driver: {driver.name} ({driver.id})")

        now = datetime.utcnow()
        for total, minutes_ago in OPEN_ORDERS:
            order = await order_crud.create_order(
                session,
                customer_name="Demo Customer",
                customer_phone="+967771111111",
                delivery_address="Sanaa, Hadda Street",
                items=[{"name": "Mandi", "quantity": 1}],
                total_amount=total,
                restaurant_id=restaurant.id,
                status=OrderStatus.CONFIRMED,
                created_at=now - timedelta(minutes=minutes_ago),
            )
            print(f"Created order {order.order_number}: total={total}")

        print("Done seeding.\n")


async def clear():
    async with async_session() as session:
        await session.execute(delete(Order))
        await session.execute(delete(Driver))
        await session.execute(delete(Restaurant))
        await session.commit()
        print("Deleted all orders, drivers and restaurants.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo delivery data")
    parser.add_argument("--seed", action="store_true", help="Seed drivers, a restaurant and open orders")
    parser.add_argument("--clear", action="store_true", help="Delete all seeded data")

    args = parser.parse_args()

    if args.seed:
        asyncio.run(seed())
    elif args.clear:
        asyncio.run(clear())
    else:
        print("Usage:")
        print("  python -m scripts.seed_demo_data --seed")
        print("  python -m scripts.seed_demo_data --clear")
