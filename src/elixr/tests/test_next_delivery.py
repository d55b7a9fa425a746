import pytest
from datetime import datetime, timezone

from src.elixr.domain.enums import PlanFrequency
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.next_delivery import calculate_next_delivery_date, parse_plan


def test_daily_after_sunday_is_monday(make_subscription):
    sub = make_subscription(plan="daily", last_delivery=datetime(2024, 12, 1))
    nxt = calculate_next_delivery_date(sub)

    assert nxt == datetime(2024, 12, 2)
    assert nxt.day == 2


def test_weekly_keeps_weekday(make_subscription):
    sub = make_subscription(plan="weekly", last_delivery=datetime(2024, 12, 1))
    nxt = calculate_next_delivery_date(sub)

    assert nxt == datetime(2024, 12, 8)
    assert nxt.day == 8


def test_daily_after_friday_skips_weekend(make_subscription):
    sub = make_subscription(plan="daily", last_delivery=datetime(2024, 11, 29, 8, 0))
    assert calculate_next_delivery_date(sub) == datetime(2024, 12, 2, 8, 0)


def test_start_date_is_anchor_without_deliveries(make_subscription):
    sub = make_subscription(plan="weekly", start_date=datetime(2025, 7, 1))
    assert calculate_next_delivery_date(sub) == datetime(2025, 7, 8)


@pytest.mark.parametrize(
    "anchor, expected",
    [
        (datetime(2025, 1, 31), datetime(2025, 2, 28)),
        (datetime(2024, 1, 31), datetime(2024, 2, 29)),
        (datetime(2025, 3, 31), datetime(2025, 4, 30)),
        (datetime(2025, 1, 30), datetime(2025, 2, 28)),
        (datetime(2025, 1, 29), datetime(2025, 2, 28)),
        (datetime(2025, 1, 15), datetime(2025, 2, 15)),
    ],
)
def test_monthly_clamps_to_month_end(make_subscription, anchor, expected):
    sub = make_subscription(plan="monthly", last_delivery=anchor)
    assert calculate_next_delivery_date(sub) == expected


def test_unknown_plan_falls_back_to_one_day(make_subscription, caplog):
    # Saturday stays Saturday: the fallback applies no weekend rule
    sub = make_subscription(plan="fortnightly", last_delivery=datetime(2024, 11, 29))

    assert calculate_next_delivery_date(sub) == datetime(2024, 11, 30)
    assert "unknown plan" in caplog.text


def test_does_not_mutate_subscription(make_subscription):
    sub = make_subscription(plan="daily", last_delivery=datetime(2024, 12, 1))
    calculate_next_delivery_date(sub)
    assert sub.last_delivery == datetime(2024, 12, 1)


def test_parse_plan():
    assert parse_plan(" Weekly ") == PlanFrequency.WEEKLY
    assert parse_plan(PlanFrequency.MONTHLY) == PlanFrequency.MONTHLY
    assert parse_plan("yearly") is None
    with pytest.raises(ValidationError):
        parse_plan("yearly", strict=True)


def test_string_anchor_is_parsed(make_subscription):
    sub = make_subscription(plan="daily", last_delivery="2024-11-29T08:00:00")
    assert calculate_next_delivery_date(sub) == datetime(2024, 12, 2, 8, 0)


def test_offset_anchor_is_shop_local(make_subscription):
    # 02:30 UTC on Sunday is 08:00 in the shop
    sub = make_subscription(plan="weekly", last_delivery=datetime(2024, 12, 1, 2, 30, tzinfo=timezone.utc))
    assert calculate_next_delivery_date(sub) == datetime(2024, 12, 8, 8, 0)


def test_malformed_anchor_rejected(make_subscription):
    with pytest.raises(ValidationError):
        calculate_next_delivery_date(make_subscription(last_delivery="yesterday"))
