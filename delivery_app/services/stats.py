"""
Driver statistics over rolling time windows.

All functions are pure: they take orders already loaded for one driver plus
the current time, and never touch the database.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Tuple

from dateutil.relativedelta import relativedelta

from delivery_app.models.delivery import OrderStatus
from delivery_app.utils.money import round_half_up, to_decimal
from delivery_app.utils.timezones import local_midnight_utc

PERIODS = ("today", "week", "month", "total")
EPOCH = datetime(1970, 1, 1)


@dataclass
class PeriodStats:
    period: str
    start_date: datetime
    end_date: datetime
    total_orders: int
    completed_orders: int
    cancelled_orders: int
    total_earnings: Decimal
    avg_order_value: Decimal
    success_rate: int
    average_rating: float = 0.0


@dataclass
class DashboardStats:
    today_orders: int
    today_earnings: Decimal
    weekly_orders: int
    weekly_earnings: Decimal
    monthly_orders: int
    monthly_earnings: Decimal
    completed_today: int
    total_orders: int
    total_earnings: Decimal
    completed_orders: int
    cancelled_orders: int
    average_rating: float
    average_delivery_time: int
    success_rate: int


def period_window(period: str, now: datetime, tz_name: str = "UTC") -> Tuple[datetime, datetime]:
    """
    [start, now] for a period token.

    Unknown tokens behave like "total".
    """
    if period == "today":
        start = local_midnight_utc(now, tz_name)
    elif period == "week":
        start = now - timedelta(days=7)
    elif period == "month":
        # Calendar month, clamped: Mar 31 -> Feb 28/29
        start = now - relativedelta(months=1)
    else:
        start = EPOCH
    return start, now


def _delivered(orders: Iterable) -> List:
    return [o for o in orders if o.status == OrderStatus.DELIVERED]


def _cancelled(orders: Iterable) -> List:
    return [o for o in orders if o.status == OrderStatus.CANCELLED]


def sum_earnings(orders: Iterable) -> Decimal:
    return sum((to_decimal(o.driver_earnings) for o in orders), Decimal("0"))


def success_rate(delivered_count: int, total_count: int) -> int:
    if total_count == 0:
        return 0
    return round_half_up(Decimal(delivered_count) * 100 / Decimal(total_count))


def orders_in_window(orders: Iterable, start: datetime, end: datetime) -> List:
    return [o for o in orders if start <= o.created_at <= end]


def aggregate_period(
    orders: Iterable,
    period: str,
    now: datetime,
    tz_name: str = "UTC",
    average_rating: float = 0.0,
) -> PeriodStats:
    start, end = period_window(period, now, tz_name)
    in_period = orders_in_window(orders, start, end)
    delivered = _delivered(in_period)
    earnings = sum_earnings(delivered)

    return PeriodStats(
        period=period,
        start_date=start,
        end_date=end,
        total_orders=len(in_period),
        completed_orders=len(delivered),
        cancelled_orders=len(_cancelled(in_period)),
        total_earnings=earnings,
        avg_order_value=earnings / len(delivered) if delivered else Decimal("0"),
        success_rate=success_rate(len(delivered), len(in_period)),
        average_rating=average_rating,
    )


def average_delivery_time(orders: Iterable) -> float:
    """Mean minutes from acceptance to delivery over delivered orders with both stamps"""
    durations = [
        (o.delivered_at - o.accepted_at).total_seconds() / 60
        for o in _delivered(orders)
        if o.accepted_at and o.delivered_at
    ]
    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def dashboard_stats(
    orders: Iterable,
    now: datetime,
    tz_name: str = "UTC",
    average_rating: float = 0.0,
) -> DashboardStats:
    orders = list(orders)
    today = aggregate_period(orders, "today", now, tz_name)
    week = aggregate_period(orders, "week", now, tz_name)
    month = aggregate_period(orders, "month", now, tz_name)

    # Lifetime figures cover every order regardless of timestamp
    delivered = _delivered(orders)

    return DashboardStats(
        today_orders=today.total_orders,
        today_earnings=today.total_earnings,
        weekly_orders=week.total_orders,
        weekly_earnings=week.total_earnings,
        monthly_orders=month.total_orders,
        monthly_earnings=month.total_earnings,
        completed_today=today.completed_orders,
        total_orders=len(orders),
        total_earnings=sum_earnings(delivered),
        completed_orders=len(delivered),
        cancelled_orders=len(_cancelled(orders)),
        average_rating=average_rating,
        average_delivery_time=round_half_up(average_delivery_time(orders)),
        success_rate=success_rate(len(delivered), len(orders)),
    )
