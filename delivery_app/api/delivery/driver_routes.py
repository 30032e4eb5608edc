"""
Delivery Driver Routes

Driver-facing JSON endpoints: dashboard, accepting and progressing orders,
order history, stats and profile. There is no login; the driver identifies
themselves with ``driverId`` on every request.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from delivery_app.db import get_db
from delivery_app.core.context import RequestContext, get_context, require_driver_id
from delivery_app.crud import order as order_crud
from delivery_app.models.delivery import OrderStatus
from delivery_app.models.delivery.order import ACTIVE_DRIVER_STATUSES
from delivery_app.schemas.delivery import (
    AcceptOrderRequest,
    AvailableOrderRead,
    DashboardResponse,
    DashboardStatsRead,
    DriverRead,
    LocationUpdateRequest,
    OrderActionResponse,
    OrderRead,
    PeriodStatsRead,
    ProfileResponse,
    ProfileUpdateRequest,
    StatusUpdateRequest,
)
from delivery_app.services import order_actions
from delivery_app.services.prioritizer import prioritize_orders
from delivery_app.services.stats import aggregate_period, dashboard_stats

router = APIRouter()
drivers_router = APIRouter()


def _available_order(prioritized) -> AvailableOrderRead:
    base = OrderRead.model_validate(prioritized.order).model_dump()
    return AvailableOrderRead(
        **base,
        estimated_earnings=prioritized.estimated_earnings,
        priority=prioritized.priority,
        age_in_minutes=prioritized.age_in_minutes,
    )


# ==================== DASHBOARD ====================

@router.get("/dashboard", response_model=DashboardResponse)
async def driver_dashboard(
    driver_id: str = Depends(require_driver_id),
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """Stats, top available orders and in-progress orders for one driver"""
    driver = await order_actions.require_driver(db, driver_id)
    settings = ctx.settings

    driver_orders = await order_crud.get_orders(db, driver_id=driver_id)
    open_orders = await order_crud.get_orders(db, status=OrderStatus.CONFIRMED, unassigned=True)

    stats = dashboard_stats(
        driver_orders,
        ctx.now,
        tz_name=settings.timezone,
        average_rating=settings.default_driver_rating,
    )
    ranked = prioritize_orders(open_orders, ctx.now, settings.estimated_earnings_rate)
    current = [o for o in driver_orders if o.status in ACTIVE_DRIVER_STATUSES]

    return DashboardResponse(
        stats=DashboardStatsRead.model_validate(stats),
        available_orders=[_available_order(p) for p in ranked[:settings.available_orders_limit]],
        current_orders=[OrderRead.model_validate(o) for o in current],
        driver_location=driver.current_location,
        last_active_at=ctx.now,
    )


# ==================== ORDER ACTIONS ====================

@router.post("/orders/{order_id}/accept", response_model=OrderActionResponse)
async def accept_order(
    order_id: str,
    body: Optional[AcceptOrderRequest] = None,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """Claim a confirmed, unassigned order"""
    driver_id = body.driver_id if body else None
    order = await order_actions.accept_order(db, ctx, order_id, driver_id)
    return OrderActionResponse(success=True, order=OrderRead.model_validate(order))


@router.put("/orders/{order_id}/status", response_model=OrderActionResponse)
async def update_order_status(
    order_id: str,
    body: Optional[StatusUpdateRequest] = None,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """Move an owned order to ready, picked_up or delivered"""
    body = body or StatusUpdateRequest()
    order = await order_actions.update_order_status(
        db, ctx, order_id, body.driver_id, body.status, body.location
    )
    return OrderActionResponse(success=True, order=OrderRead.model_validate(order))


# ==================== ORDER LOOKUPS ====================

@router.get("/orders/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: str,
    driver_id: str = Depends(require_driver_id),
    db: AsyncSession = Depends(get_db),
):
    order = await order_actions.get_driver_order(db, order_id, driver_id)
    return OrderRead.model_validate(order)


@router.get("/orders", response_model=List[OrderRead])
async def list_driver_orders(
    driver_id: str = Depends(require_driver_id),
    status: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Orders assigned to the driver, newest first, optionally by status"""
    if status:
        try:
            status_filter = OrderStatus(status)
        except ValueError:
            return []
    else:
        status_filter = None

    orders = await order_crud.get_orders(db, status=status_filter, driver_id=driver_id)
    return [OrderRead.model_validate(o) for o in orders]


# ==================== STATS & PROFILE ====================

@router.get("/stats", response_model=PeriodStatsRead)
async def driver_stats(
    driver_id: str = Depends(require_driver_id),
    period: str = Query("today"),
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """Counts and earnings for today, week, month or total"""
    await order_actions.require_driver(db, driver_id)
    driver_orders = await order_crud.get_orders(db, driver_id=driver_id)

    stats = aggregate_period(
        driver_orders,
        period,
        ctx.now,
        tz_name=ctx.settings.timezone,
        average_rating=ctx.settings.default_driver_rating,
    )
    return PeriodStatsRead.model_validate(stats)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update name, phone, email, location or availability"""
    fields = body.model_dump(exclude_unset=True, exclude={"driver_id"})
    driver = await order_actions.update_profile(db, body.driver_id, fields)
    return ProfileResponse(success=True, driver=DriverRead.model_validate(driver))


# ==================== LOCATION ====================

@drivers_router.put("/{driver_id}/location", response_model=ProfileResponse)
async def update_driver_location(
    driver_id: str,
    body: LocationUpdateRequest,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """Periodic GPS ping from the driver app"""
    driver = await order_actions.update_location(db, ctx, driver_id, body.latitude, body.longitude)
    return ProfileResponse(success=True, driver=DriverRead.model_validate(driver))
