from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy import update
from datetime import datetime
from decimal import Decimal
from typing import Optional
from delivery_app.models.delivery import Order, OrderStatus
import json
import uuid


async def create_order(db: AsyncSession, **fields):
    """Insert an order. Used by seeding; the ordering flow owns creation."""
    if isinstance(fields.get("items"), (list, tuple)):
        fields["items"] = json.dumps(fields["items"])
    if not fields.get("order_number"):
        fields["order_number"] = uuid.uuid4().hex[:8].upper()
    new_order = Order(id=fields.pop("id", None) or str(uuid.uuid4()), **fields)
    db.add(new_order)
    await db.commit()
    await db.refresh(new_order)
    return new_order


async def get_orders(
    db: AsyncSession,
    status: Optional[OrderStatus] = None,
    driver_id: Optional[str] = None,
    unassigned: bool = False,
):
    """Orders filtered by status and/or driver, newest first"""
    query = select(Order)

    if status is not None:
        query = query.where(Order.status == status)
    if driver_id is not None:
        query = query.where(Order.driver_id == driver_id)
    if unassigned:
        query = query.where(Order.driver_id.is_(None))

    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()


async def get_order(db: AsyncSession, order_id: str, with_relations: bool = False):
    query = select(Order).where(Order.id == order_id).execution_options(populate_existing=True)
    if with_relations:
        query = query.options(selectinload(Order.driver), selectinload(Order.restaurant))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def update_order(db: AsyncSession, order_id: str, updates: dict):
    """Apply a partial update. Returns None if the order does not exist."""
    order = await get_order(db, order_id)
    if not order:
        return None

    for key, value in updates.items():
        setattr(order, key, value)

    await db.commit()
    await db.refresh(order)
    return order


async def claim_order(
    db: AsyncSession,
    order_id: str,
    driver_id: str,
    earnings: Decimal,
    accepted_at: datetime,
):
    """
    Assign an unclaimed, confirmed order to a driver in a single conditional UPDATE.

    Returns the updated order, or None when the order was no longer claimable
    (already assigned or not confirmed).
    """
    stmt = (
        update(Order)
        .where(
            Order.id == order_id,
            Order.status == OrderStatus.CONFIRMED,
            Order.driver_id.is_(None),
        )
        .values(
            driver_id=driver_id,
            status=OrderStatus.READY,
            driver_earnings=earnings,
            accepted_at=accepted_at,
        )
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()

    if result.rowcount == 0:
        return None
    return await get_order(db, order_id)


async def get_customer_orders(db: AsyncSession, customer_phone: str):
    result = await db.execute(
        select(Order)
        .where(Order.customer_phone == customer_phone)
        .options(selectinload(Order.driver), selectinload(Order.restaurant))
        .order_by(Order.created_at.desc())
    )
    return result.scalars().all()


async def find_customer_order(db: AsyncSession, order_number: str, customer_phone: str):
    result = await db.execute(
        select(Order)
        .where(Order.order_number == order_number, Order.customer_phone == customer_phone)
        .options(selectinload(Order.driver), selectinload(Order.restaurant))
    )
    return result.scalars().first()
