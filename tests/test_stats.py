from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from conftest import NOW, make_order_stub
from delivery_app.models.delivery import OrderStatus
from delivery_app.services.stats import (
    EPOCH,
    aggregate_period,
    average_delivery_time,
    dashboard_stats,
    period_window,
    success_rate,
)


def delivered(created_at=NOW, earnings="10.00", **kw):
    return make_order_stub(
        status=OrderStatus.DELIVERED,
        driver_id="driver-1",
        created_at=created_at,
        driver_earnings=Decimal(earnings) if earnings is not None else None,
        **kw,
    )


def cancelled(created_at=NOW):
    return make_order_stub(status=OrderStatus.CANCELLED, driver_id="driver-1", created_at=created_at)


def in_progress(created_at=NOW):
    return make_order_stub(status=OrderStatus.PICKED_UP, driver_id="driver-1", created_at=created_at)


# ---------- windows ----------

def test_today_starts_at_midnight():
    start, end = period_window("today", NOW)
    assert start == datetime(2026, 10, 19, 0, 0, 0)
    assert end == NOW


def test_today_uses_local_midnight():
    # 02:00 UTC is 05:00 in Aden (UTC+3), so the local day began at 21:00 UTC the day before
    now = datetime(2026, 10, 19, 2, 0, 0)
    start, _ = period_window("today", now, "Asia/Aden")
    assert start == datetime(2026, 10, 18, 21, 0, 0)


def test_week_is_seven_days_back():
    start, _ = period_window("week", NOW)
    assert start == NOW - timedelta(days=7)


def test_month_is_one_calendar_month_back():
    start, _ = period_window("month", NOW)
    assert start == datetime(2026, 9, 19, 12, 0, 0)


def test_month_clamps_to_end_of_shorter_month():
    start, _ = period_window("month", datetime(2026, 3, 31, 9, 0, 0))
    assert start == datetime(2026, 2, 28, 9, 0, 0)


@pytest.mark.parametrize("period", ["total", "forever", ""])
def test_total_and_unknown_periods_start_at_epoch(period):
    start, _ = period_window(period, NOW)
    assert start == EPOCH


# ---------- aggregation ----------

def test_no_orders_gives_zero_rates_without_dividing():
    stats = aggregate_period([], "week", NOW)
    assert stats.total_orders == 0
    assert stats.success_rate == 0
    assert stats.avg_order_value == 0
    assert stats.total_earnings == 0


def test_earnings_only_count_delivered_orders_in_window():
    orders = [
        delivered(earnings="10.00"),
        delivered(earnings="12.50", created_at=NOW - timedelta(days=2)),
        delivered(earnings="99.00", created_at=NOW - timedelta(days=30)),
        cancelled(),
        in_progress(),
    ]

    stats = aggregate_period(orders, "week", NOW)

    assert stats.total_orders == 4
    assert stats.completed_orders == 2
    assert stats.cancelled_orders == 1
    assert stats.total_earnings == Decimal("22.50")
    assert stats.avg_order_value == Decimal("11.25")
    assert stats.success_rate == 50


def test_total_period_earnings_equal_all_delivered_earnings():
    orders = [
        delivered(earnings="10.00", created_at=datetime(2020, 1, 1)),
        delivered(earnings="7.25", created_at=NOW - timedelta(days=40)),
        delivered(earnings="3.00"),
        cancelled(),
    ]

    stats = aggregate_period(orders, "total", NOW)

    assert stats.total_earnings == Decimal("20.25")
    assert stats.start_date == EPOCH


def test_missing_earnings_count_as_zero():
    stats = aggregate_period([delivered(earnings=None), delivered(earnings="5")], "today", NOW)
    assert stats.total_earnings == Decimal("5")


def test_orders_after_now_are_outside_the_window():
    stats = aggregate_period([delivered(created_at=NOW + timedelta(minutes=1))], "today", NOW)
    assert stats.total_orders == 0


def test_success_rate_rounds_half_up():
    # 1 of 8 delivered = 12.5%
    assert success_rate(1, 8) == 13
    assert success_rate(2, 3) == 67
    assert success_rate(0, 0) == 0


# ---------- delivery time ----------

def test_average_delivery_time_uses_orders_with_both_stamps():
    orders = [
        delivered(accepted_at=NOW - timedelta(minutes=40), delivered_at=NOW - timedelta(minutes=10)),
        delivered(accepted_at=NOW - timedelta(minutes=20), delivered_at=NOW),
        delivered(accepted_at=None, delivered_at=NOW),
        in_progress(),
    ]
    assert average_delivery_time(orders) == pytest.approx(25.0)


def test_average_delivery_time_without_data_is_zero():
    assert average_delivery_time([delivered(), in_progress()]) == 0


# ---------- dashboard ----------

def test_dashboard_for_driver_with_nothing_delivered_this_week():
    stats = dashboard_stats([cancelled(created_at=NOW - timedelta(days=1))], NOW)
    assert stats.weekly_earnings == 0
    assert stats.success_rate == 0


def test_dashboard_mixes_periods_and_lifetime_figures():
    orders = [
        delivered(earnings="10.00"),
        delivered(earnings="10.00", created_at=NOW - timedelta(days=3)),
        delivered(earnings="10.00", created_at=NOW - timedelta(days=20)),
        delivered(earnings="10.00", created_at=NOW - timedelta(days=90)),
        cancelled(created_at=NOW - timedelta(days=1)),
        in_progress(),
    ]

    stats = dashboard_stats(orders, NOW, average_rating=4.8)

    assert stats.today_orders == 2
    assert stats.completed_today == 1
    assert stats.today_earnings == Decimal("10.00")
    assert stats.weekly_orders == 4
    assert stats.weekly_earnings == Decimal("20.00")
    assert stats.monthly_orders == 5
    assert stats.monthly_earnings == Decimal("30.00")
    assert stats.total_orders == 6
    assert stats.total_earnings == Decimal("40.00")
    assert stats.completed_orders == 4
    assert stats.cancelled_orders == 1
    assert stats.success_rate == 67
    assert stats.average_rating == 4.8
