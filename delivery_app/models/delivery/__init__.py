from .driver import Driver
from .order import Order, OrderStatus
from .restaurant import Restaurant

__all__ = [
    "Driver",
    "Order",
    "OrderStatus",
    "Restaurant",
]
