from .common import CamelModel
from .order import (
    OrderRead,
    AvailableOrderRead,
    TrackedOrderRead,
    AcceptOrderRequest,
    StatusUpdateRequest,
    OrderActionResponse,
)
from .driver import (
    DriverRead,
    ProfileUpdateRequest,
    LocationUpdateRequest,
    ProfileResponse,
)
from .stats import PeriodStatsRead, DashboardStatsRead, DashboardResponse
