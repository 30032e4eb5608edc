from .prioritizer import Priority, PrioritizedOrder, prioritize_orders
from .stats import DashboardStats, PeriodStats, aggregate_period, dashboard_stats

__all__ = [
    "Priority",
    "PrioritizedOrder",
    "prioritize_orders",
    "DashboardStats",
    "PeriodStats",
    "aggregate_period",
    "dashboard_stats",
]
