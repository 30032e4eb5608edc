"""
Customer Order Tracking Routes

Read-only order lookups for the customer tracking pages, enriched with
restaurant and driver contact details.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from delivery_app.db import get_db
from delivery_app.core.context import RequestContext, get_context
from delivery_app.core.errors import MissingParameter, NotFound
from delivery_app.crud import order as order_crud
from delivery_app.schemas.delivery import OrderRead, TrackedOrderRead
from delivery_app.services.restaurants import restaurant_for_order

router = APIRouter()


def tracked_order(order, settings) -> TrackedOrderRead:
    restaurant = restaurant_for_order(order, settings)
    driver = order.driver
    return TrackedOrderRead(
        **OrderRead.model_validate(order).model_dump(),
        restaurant_name=restaurant.name,
        restaurant_phone=restaurant.phone,
        restaurant_address=restaurant.address,
        driver_name=driver.name if driver else None,
        driver_phone=driver.phone if driver else None,
    )


@router.get("/customer/{customer_phone}", response_model=List[TrackedOrderRead])
async def customer_orders(
    customer_phone: str,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    """All orders placed from a phone number, newest first"""
    orders = await order_crud.get_customer_orders(db, customer_phone)
    return [tracked_order(o, ctx.settings) for o in orders]


@router.get("/search", response_model=TrackedOrderRead)
async def search_order(
    order_number: Optional[str] = Query(None, alias="orderNumber"),
    customer_phone: Optional[str] = Query(None, alias="customerPhone"),
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_context),
):
    if not order_number or not customer_phone:
        raise MissingParameter("Order number and customer phone are required")

    order = await order_crud.find_customer_order(db, order_number, customer_phone)
    if not order:
        raise NotFound("Order not found")
    return tracked_order(order, ctx.settings)
