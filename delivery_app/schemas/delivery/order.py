from typing import Optional
from datetime import datetime
from decimal import Decimal

from delivery_app.models.delivery import OrderStatus
from delivery_app.services.prioritizer import Priority
from .common import CamelModel


# ---------- Order ----------
class OrderRead(CamelModel):
    id: str
    order_number: Optional[str] = None
    customer_name: str
    customer_phone: str
    delivery_address: str
    items: str  # JSON-encoded item list
    total_amount: Decimal
    restaurant_id: Optional[str] = None
    driver_id: Optional[str] = None
    status: OrderStatus
    created_at: datetime
    accepted_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    delivery_location: Optional[str] = None
    driver_earnings: Optional[Decimal] = None


class AvailableOrderRead(OrderRead):
    estimated_earnings: int
    priority: Priority
    age_in_minutes: int


class TrackedOrderRead(OrderRead):
    restaurant_name: str
    restaurant_phone: Optional[str] = None
    restaurant_address: Optional[str] = None
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None


# ---------- Requests ----------
class AcceptOrderRequest(CamelModel):
    driver_id: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    driver_id: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None


# ---------- Responses ----------
class OrderActionResponse(CamelModel):
    success: bool = True
    order: OrderRead
