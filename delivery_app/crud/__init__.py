from . import driver
from . import order
from . import restaurant

__all__ = [
    "driver",
    "order",
    "restaurant",
]
