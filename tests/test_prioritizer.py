import random
from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import NOW, make_order_stub
from delivery_app.models.delivery import OrderStatus
from delivery_app.services.prioritizer import (
    Priority,
    classify_priority,
    estimate_earnings,
    prioritize_orders,
)


def minutes_ago(minutes):
    return NOW - timedelta(minutes=minutes)


@pytest.mark.parametrize("age", [0, 3, 10, 30])
def test_large_orders_are_high_priority_at_any_age(age):
    assert classify_priority(Decimal("100.01"), age) == Priority.HIGH
    assert classify_priority(Decimal("250"), age) == Priority.HIGH


@pytest.mark.parametrize("total", ["0", "10", "49.99"])
def test_small_fresh_orders_are_low_priority(total):
    assert classify_priority(Decimal(total), 4.9) == Priority.LOW


def test_old_orders_become_high_priority():
    assert classify_priority(Decimal("20"), 15.5) == Priority.HIGH


@pytest.mark.parametrize(
    "total, age",
    [
        ("100", 0),    # not strictly above 100
        ("50", 0),     # not strictly below 50
        ("40", 5),     # no longer fresh
        ("60", 15),    # not strictly older than 15 minutes
        ("75", 8),
    ],
)
def test_everything_else_is_medium(total, age):
    assert classify_priority(Decimal(total), age) == Priority.MEDIUM


def test_large_new_order_scenario():
    [ranked] = prioritize_orders([make_order_stub(total_amount=Decimal("120"), created_at=NOW)], NOW)
    assert ranked.priority == Priority.HIGH
    assert ranked.estimated_earnings == 18


def test_small_new_order_scenario_rounds_half_up():
    [ranked] = prioritize_orders([make_order_stub(total_amount=Decimal("30"), created_at=NOW)], NOW)
    assert ranked.priority == Priority.LOW
    # 30 * 0.15 = 4.5
    assert ranked.estimated_earnings == 5


def test_estimate_earnings_accepts_string_totals():
    assert estimate_earnings("66.60") == 10
    assert estimate_earnings(None) == 0


def test_only_confirmed_unassigned_orders_are_offered():
    orders = [
        make_order_stub(id="open"),
        make_order_stub(id="taken", driver_id="driver-2"),
        make_order_stub(id="pending", status=OrderStatus.PENDING),
        make_order_stub(id="done", status=OrderStatus.DELIVERED),
    ]

    ranked = prioritize_orders(orders, NOW)

    assert [p.order.id for p in ranked] == ["open"]


def test_sorted_by_priority_then_oldest_first():
    orders = [
        make_order_stub(id="low", total_amount=Decimal("20"), created_at=minutes_ago(1)),
        make_order_stub(id="medium-new", total_amount=Decimal("70"), created_at=minutes_ago(2)),
        make_order_stub(id="high", total_amount=Decimal("150"), created_at=minutes_ago(1)),
        make_order_stub(id="medium-old", total_amount=Decimal("70"), created_at=minutes_ago(10)),
        make_order_stub(id="stale", total_amount=Decimal("20"), created_at=minutes_ago(30)),
    ]

    ranked = prioritize_orders(orders, NOW)

    assert [p.order.id for p in ranked] == ["stale", "high", "medium-old", "medium-new", "low"]


def test_ordering_does_not_depend_on_input_order():
    orders = [
        make_order_stub(id=f"order-{i}", total_amount=Decimal("70"), created_at=minutes_ago(i % 3))
        for i in range(12)
    ]
    expected = [p.order.id for p in prioritize_orders(orders, NOW)]

    for _ in range(5):
        shuffled = orders[:]
        random.shuffle(shuffled)
        assert [p.order.id for p in prioritize_orders(shuffled, NOW)] == expected


def test_age_in_minutes_is_rounded():
    [ranked] = prioritize_orders([make_order_stub(created_at=NOW - timedelta(minutes=7, seconds=30))], NOW)
    assert ranked.age_minutes == pytest.approx(7.5)
    assert ranked.age_in_minutes == 8


def test_custom_earnings_rate():
    [ranked] = prioritize_orders([make_order_stub(total_amount=Decimal("100"))], NOW, Decimal("0.2"))
    assert ranked.estimated_earnings == 20


def test_empty_input():
    assert prioritize_orders([], NOW) == []
