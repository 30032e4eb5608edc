from typing import List, Optional
from datetime import datetime

from .common import CamelModel
from .order import AvailableOrderRead, OrderRead


class PeriodStatsRead(CamelModel):
    total_orders: int
    completed_orders: int
    cancelled_orders: int
    total_earnings: float
    avg_order_value: float
    average_rating: float
    success_rate: int
    period: str
    start_date: datetime
    end_date: datetime


class DashboardStatsRead(CamelModel):
    today_orders: int
    today_earnings: float
    weekly_orders: int
    weekly_earnings: float
    monthly_orders: int
    monthly_earnings: float
    completed_today: int
    total_orders: int
    total_earnings: float
    completed_orders: int
    cancelled_orders: int
    average_rating: float
    average_delivery_time: int
    success_rate: int


class DashboardResponse(CamelModel):
    stats: DashboardStatsRead
    available_orders: List[AvailableOrderRead]
    current_orders: List[OrderRead]
    driver_location: Optional[str] = None
    last_active_at: datetime
