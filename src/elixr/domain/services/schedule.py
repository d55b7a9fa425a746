from datetime import date, datetime
from typing import Iterable, Optional, Union

from src.elixr.domain.enums import PlanFrequency
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.calendar_policy import policy_for_plan
from src.elixr.domain.services.dates import add_months, coerce_datetime
from src.elixr.domain.services.next_delivery import increment, resolve_plan
from src.elixr.domain.value_objects import SubscriptionDeliveryDates


def _check_duration(duration: int) -> None:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ValidationError(f"Duration must be a positive integer, got {duration!r}.")


def generate_delivery_dates(
    plan: Union[PlanFrequency, str],
    start_date: datetime,
    duration: int,
    end_date: Optional[datetime] = None,
) -> list[datetime]:
    """
    Materialized schedule for a subscription's lifetime.

    The first delivery is `start_date` (pushed past blocked days for daily
    plans), each following one is a plan increment later. Generation stops
    after `duration` deliveries or before passing `end_date`.
    Monthly dates are offset from the start, not chained, so a 31st keeps
    coming back after short months.
    """
    _check_duration(duration)
    start_date = coerce_datetime(start_date, "start_date")
    if end_date is not None:
        end_date = coerce_datetime(end_date, "end_date")
    if end_date is not None and start_date > end_date:
        return []

    frequency = resolve_plan(plan)
    dates: list[datetime] = []

    if frequency == PlanFrequency.MONTHLY:
        candidates = (add_months(start_date, n) for n in range(duration))
    else:
        candidates = _chained(start_date, frequency, duration)

    for candidate in candidates:
        if end_date is not None and candidate > end_date:
            break
        dates.append(candidate)
    return dates


def _chained(start_date: datetime, frequency: Optional[PlanFrequency], duration: int):
    current = policy_for_plan(frequency).advance_to_allowed_day(start_date)
    for _ in range(duration):
        yield current
        current = increment(current, frequency)


def get_delivery_dates_for_date_range(
    schedule: Union[SubscriptionDeliveryDates, Iterable[datetime]],
    range_start: datetime,
    range_end: datetime,
) -> list[datetime]:
    dates = schedule.delivery_dates if isinstance(schedule, SubscriptionDeliveryDates) else schedule
    range_start = coerce_datetime(range_start, "range_start")
    range_end = coerce_datetime(range_end, "range_end")
    return [d for d in dates if range_start <= coerce_datetime(d) <= range_end]


def next_upcoming_delivery(dates: Iterable[datetime], today: Union[date, datetime]) -> Optional[datetime]:
    """Earliest delivery falling on `today` or later (calendar-day granularity)."""
    day = today.date() if isinstance(today, datetime) else today
    upcoming = [d for d in dates if d.date() >= day]
    return min(upcoming) if upcoming else None


def is_delivery_on(delivery: datetime, day: Union[date, datetime]) -> bool:
    day = day.date() if isinstance(day, datetime) else day
    return delivery.date() == day
