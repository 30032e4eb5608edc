from .base import Base
from .delivery import Driver, Order, OrderStatus, Restaurant
