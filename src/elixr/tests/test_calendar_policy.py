import pytest
from datetime import date, datetime, timedelta

from src.elixr.domain.enums import PlanFrequency
from src.elixr.domain.services.calendar_policy import (
    CalendarPolicy,
    SUNDAY_ONLY,
    UNRESTRICTED,
    WEEKDAY_ONLY,
    calculate_delivery_date,
    policy_for_plan,
)


def test_weekday_only_blocks_weekend():
    assert WEEKDAY_ONLY.is_blocked_day(date(2024, 11, 30))  # Saturday
    assert WEEKDAY_ONLY.is_blocked_day(date(2024, 12, 1))  # Sunday
    assert not WEEKDAY_ONLY.is_blocked_day(date(2024, 11, 29))  # Friday


def test_weekday_only_advance_is_smallest_weekday_on_or_after():
    start = date(2024, 11, 25)  # Monday
    for offset in range(21):
        d = start + timedelta(days=offset)
        result = WEEKDAY_ONLY.advance_to_allowed_day(d)

        assert result.weekday() < 5
        assert result >= d
        # nothing allowed between d and result
        cursor = d
        while cursor < result:
            assert WEEKDAY_ONLY.is_blocked_day(cursor)
            cursor += timedelta(days=1)


def test_saturday_advances_to_monday():
    assert WEEKDAY_ONLY.advance_to_allowed_day(date(2024, 11, 30)) == date(2024, 12, 2)


def test_sunday_only_moves_sunday_by_one_day_and_keeps_saturday():
    assert SUNDAY_ONLY.advance_to_allowed_day(date(2025, 7, 20)) == date(2025, 7, 21)
    assert SUNDAY_ONLY.advance_to_allowed_day(date(2025, 7, 19)) == date(2025, 7, 19)


def test_advance_keeps_time_of_day():
    moment = datetime(2025, 7, 20, 8, 30)
    assert SUNDAY_ONLY.advance_to_allowed_day(moment) == datetime(2025, 7, 21, 8, 30)


def test_unrestricted_never_moves():
    d = date(2024, 12, 1)
    assert UNRESTRICTED.advance_to_allowed_day(d) == d


def test_policy_blocking_every_day_is_rejected():
    with pytest.raises(ValueError):
        CalendarPolicy("closed", frozenset(range(7)))


def test_policy_for_plan():
    assert policy_for_plan(PlanFrequency.DAILY) is WEEKDAY_ONLY
    assert policy_for_plan(PlanFrequency.WEEKLY) is UNRESTRICTED
    assert policy_for_plan(None) is UNRESTRICTED


@pytest.mark.parametrize(
    "order_date, expected",
    [
        (date(2024, 11, 28), date(2024, 11, 29)),  # Thu -> Fri
        (date(2024, 11, 29), date(2024, 12, 2)),  # Fri -> Mon
        (date(2024, 11, 30), date(2024, 12, 2)),  # Sat -> Mon
    ],
)
def test_generic_next_day_delivery_skips_weekend(order_date, expected):
    assert calculate_delivery_date(order_date) == expected
