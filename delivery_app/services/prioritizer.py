"""
Order Prioritizer

Tags unassigned orders with an estimated driver payout and a priority, then
orders them so the most urgent work is offered first:
- high:   total above 100, or waiting more than 15 minutes
- low:    total below 50 and younger than 5 minutes
- medium: everything else

Priority is never stored; it depends on "now" and is recomputed per listing.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, List

from delivery_app.models.delivery import Order, OrderStatus
from delivery_app.utils.money import round_half_up, to_decimal

HIGH_VALUE_TOTAL = Decimal("100")
LOW_VALUE_TOTAL = Decimal("50")
STALE_AFTER_MINUTES = 15
FRESH_UNDER_MINUTES = 5

DEFAULT_EARNINGS_RATE = Decimal("0.15")


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


@dataclass
class PrioritizedOrder:
    order: Order
    priority: Priority
    estimated_earnings: int
    age_minutes: float

    @property
    def age_in_minutes(self) -> int:
        return round_half_up(self.age_minutes)


def order_age_minutes(created_at: datetime, now: datetime) -> float:
    return (now - created_at).total_seconds() / 60


def classify_priority(total_amount, age_minutes: float) -> Priority:
    total = to_decimal(total_amount)
    if total > HIGH_VALUE_TOTAL or age_minutes > STALE_AFTER_MINUTES:
        return Priority.HIGH
    if total < LOW_VALUE_TOTAL and age_minutes < FRESH_UNDER_MINUTES:
        return Priority.LOW
    return Priority.MEDIUM


def estimate_earnings(total_amount, rate: Decimal = DEFAULT_EARNINGS_RATE) -> int:
    return round_half_up(to_decimal(total_amount) * to_decimal(rate))


def is_available(order) -> bool:
    """Confirmed and not yet claimed by any driver"""
    return order.status == OrderStatus.CONFIRMED and not order.driver_id


def prioritize_orders(
    orders: Iterable,
    now: datetime,
    earnings_rate: Decimal = DEFAULT_EARNINGS_RATE,
) -> List[PrioritizedOrder]:
    """
    Filter to available orders, annotate them, and sort by priority rank
    (highest first), then oldest first, then id.

    Pure: callers may slice the result (e.g. top 10) freely.
    """
    prioritized = []
    for order in orders:
        if not is_available(order):
            continue
        age = order_age_minutes(order.created_at, now)
        prioritized.append(
            PrioritizedOrder(
                order=order,
                priority=classify_priority(order.total_amount, age),
                estimated_earnings=estimate_earnings(order.total_amount, earnings_rate),
                age_minutes=age,
            )
        )

    prioritized.sort(
        key=lambda p: (-PRIORITY_RANK[p.priority], p.order.created_at, str(p.order.id))
    )
    return prioritized
