"""
Driver actions on orders and driver records.

Each function checks preconditions, raises a DeliveryError subclass on failure,
and performs at most one store write.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from delivery_app.core.context import RequestContext
from delivery_app.core.errors import Forbidden, InvalidStateTransition, MissingParameter, NotFound
from delivery_app.crud import driver as driver_crud
from delivery_app.crud import order as order_crud
from delivery_app.models.delivery import Driver, Order, OrderStatus
from delivery_app.models.delivery.order import DRIVER_SETTABLE_STATUSES

log = logging.getLogger(__name__)

# Driver fields a driver may edit on their own profile
PROFILE_FIELDS = ("name", "phone", "email", "current_location", "is_available")

# Profile fields backed by NOT NULL columns; clients may not clear them
REQUIRED_PROFILE_FIELDS = ("name", "phone", "is_available")


async def require_driver(db: AsyncSession, driver_id: Optional[str]) -> Driver:
    if not driver_id:
        raise MissingParameter("Driver ID is required")
    driver = await driver_crud.get_driver(db, driver_id)
    if not driver:
        raise NotFound("Driver not found")
    return driver


async def require_order(db: AsyncSession, order_id: str) -> Order:
    order = await order_crud.get_order(db, order_id)
    if not order:
        raise NotFound("Order not found")
    return order


async def get_driver_order(db: AsyncSession, order_id: str, driver_id: str) -> Order:
    """An order as seen by its assigned driver; other drivers are refused"""
    order = await require_order(db, order_id)
    if order.driver_id != driver_id:
        raise Forbidden("Not authorized to view this order")
    return order


async def accept_order(db: AsyncSession, ctx: RequestContext, order_id: str, driver_id: Optional[str]) -> Order:
    await require_driver(db, driver_id)
    order = await require_order(db, order_id)

    if order.status != OrderStatus.CONFIRMED or order.driver_id:
        log.info("accept refused: order=%s status=%s driver=%s", order_id, order.status, order.driver_id)
        raise InvalidStateTransition("This order cannot be accepted")

    claimed = await order_crud.claim_order(
        db,
        order_id,
        driver_id=driver_id,
        earnings=ctx.settings.default_driver_earnings,
        accepted_at=ctx.now,
    )
    if claimed is None:
        # Lost the race to another driver between the read and the update
        log.warning("accept lost race: order=%s driver=%s", order_id, driver_id)
        raise InvalidStateTransition("This order cannot be accepted")

    log.info("order accepted: order=%s driver=%s", order_id, driver_id)
    return claimed


def parse_driver_status(status: str) -> OrderStatus:
    try:
        parsed = OrderStatus(status)
    except ValueError:
        raise InvalidStateTransition("Invalid status")
    if parsed not in DRIVER_SETTABLE_STATUSES:
        raise InvalidStateTransition("Invalid status")
    return parsed


async def update_order_status(
    db: AsyncSession,
    ctx: RequestContext,
    order_id: str,
    driver_id: Optional[str],
    status: Optional[str],
    location: Optional[str] = None,
) -> Order:
    if not driver_id or not status:
        raise MissingParameter("Driver ID and status are required")

    order = await require_order(db, order_id)
    if order.driver_id != driver_id:
        raise Forbidden("Not authorized to update this order")

    new_status = parse_driver_status(status)
    previous = order.status

    updates = {"status": new_status}
    if new_status == OrderStatus.DELIVERED:
        updates["delivered_at"] = ctx.now
    if location:
        updates["delivery_location"] = location

    updated = await order_crud.update_order(db, order_id, updates)
    log.info("order status: order=%s driver=%s %s -> %s", order_id, driver_id, previous, new_status)
    return updated


async def update_profile(db: AsyncSession, driver_id: Optional[str], fields: dict) -> Driver:
    """Apply only allow-listed profile fields; anything else is dropped"""
    if not driver_id:
        raise MissingParameter("Driver ID is required")

    updates = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
    for key in REQUIRED_PROFILE_FIELDS:
        if key in updates and updates[key] is None:
            raise MissingParameter(f"{key} cannot be empty")

    driver = await driver_crud.update_driver(db, driver_id, updates)
    if not driver:
        raise NotFound("Driver not found")

    log.info("profile updated: driver=%s fields=%s", driver_id, sorted(updates))
    return driver


async def update_location(
    db: AsyncSession,
    ctx: RequestContext,
    driver_id: str,
    latitude: float,
    longitude: float,
) -> Driver:
    driver = await driver_crud.update_driver(
        db,
        driver_id,
        {"current_location": f"{latitude},{longitude}", "last_active_at": ctx.now},
    )
    if not driver:
        raise NotFound("Driver not found")
    return driver
