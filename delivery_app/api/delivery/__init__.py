from fastapi import APIRouter
from . import driver_routes
from . import tracking_routes

router = APIRouter()

# Driver dashboard and actions
router.include_router(driver_routes.router, prefix="/driver", tags=["Delivery Driver"])

# Driver device pings
router.include_router(driver_routes.drivers_router, prefix="/drivers", tags=["Delivery Driver"])

# Customer order tracking
router.include_router(tracking_routes.router, prefix="/orders", tags=["Order Tracking"])

__all__ = ["router"]
