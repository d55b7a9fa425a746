"""
Gap-based delivery schedules ("every other day", "every 3 days").

Used for juice and customized boxes and for rescheduling a subscription
after reactivation. Sundays are skipped; a skipped Sunday does not shift
the rhythm, the walk simply continues from Monday.
"""
import logging
from datetime import datetime, timedelta
from typing import Mapping, Optional, Union

from src.elixr.domain.enums import PlanFrequency, SubscriptionType
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.calendar_policy import CalendarPolicy, SUNDAY_ONLY
from src.elixr.domain.services.cutoff import (
    DEFAULT_CUTOFF_HOUR,
    DEFAULT_DELIVERY_HOUR,
    resolve_first_delivery_date,
)
from src.elixr.domain.services.dates import add_months, coerce_datetime, start_of_day
from src.elixr.domain.services.next_delivery import parse_plan
from src.elixr.domain.value_objects import DeliveryGap, SubscriptionDeliveryDates

logger = logging.getLogger(__name__)

DAILY_GAP = DeliveryGap(gap_days=1, is_daily=True, description="Daily delivery")
EVERY_OTHER_DAY_GAP = DeliveryGap(gap_days=1, description="Every other day delivery")

DEFAULT_DELIVERY_GAPS: Mapping[SubscriptionType, DeliveryGap] = {
    SubscriptionType.JUICES: EVERY_OTHER_DAY_GAP,
    SubscriptionType.FRUIT_BOWLS: DAILY_GAP,
    SubscriptionType.CUSTOMIZED: DeliveryGap(gap_days=2, description="Every 3 days"),
}

PLAN_ID_TYPES: Mapping[str, SubscriptionType] = {
    "juice_weekly": SubscriptionType.JUICES,
    "juice_monthly": SubscriptionType.JUICES,
    "fruit_bowl_daily": SubscriptionType.FRUIT_BOWLS,
    "fruit_bowl_weekly": SubscriptionType.FRUIT_BOWLS,
    "customized_weekly": SubscriptionType.CUSTOMIZED,
    "customized_monthly": SubscriptionType.CUSTOMIZED,
}


def subscription_type_from_plan_id(plan_id: str) -> SubscriptionType:
    if plan_id in PLAN_ID_TYPES:
        return PLAN_ID_TYPES[plan_id]

    lowered = plan_id.lower()
    if "juice" in lowered:
        return SubscriptionType.JUICES
    if "fruit" in lowered or "bowl" in lowered:
        return SubscriptionType.FRUIT_BOWLS
    return SubscriptionType.CUSTOMIZED


def gap_for_type(
    subscription_type: SubscriptionType,
    gaps: Mapping[SubscriptionType, DeliveryGap] = DEFAULT_DELIVERY_GAPS,
) -> DeliveryGap:
    gap = gaps.get(subscription_type)
    if gap is not None:
        return gap
    logger.warning("no delivery gap configured for %s, using fallback", subscription_type)
    if subscription_type == SubscriptionType.FRUIT_BOWLS:
        return DAILY_GAP
    return DeliveryGap(gap_days=3)


def gap_for_frequency(plan: Union[PlanFrequency, str]) -> DeliveryGap:
    # weekly/monthly boxes arrive every other day; daily (and unknown) every day
    if parse_plan(plan) in (PlanFrequency.WEEKLY, PlanFrequency.MONTHLY):
        return EVERY_OTHER_DAY_GAP
    return DAILY_GAP


def describe_delivery_gap(gap: DeliveryGap) -> str:
    if gap.is_daily:
        return "Daily delivery (every day)"
    return f"Every {gap.step_days} days"


def generate_interval_delivery_dates(
    start: datetime,
    step_days: int,
    end: Optional[datetime] = None,
    count: Optional[int] = None,
    policy: CalendarPolicy = SUNDAY_ONLY,
) -> list[datetime]:
    if step_days < 1:
        raise ValidationError(f"step_days must be at least 1, got {step_days}.")
    if end is None and count is None:
        raise ValidationError("Either an end date or a delivery count is required.")
    if count is not None and count < 0:
        raise ValidationError(f"count cannot be negative, got {count}.")
    if end is not None:
        end = coerce_datetime(end, "end")

    dates: list[datetime] = []
    current = coerce_datetime(start, "start")
    while True:
        if end is not None and current > end:
            break
        if count is not None and len(dates) >= count:
            break
        if policy.is_blocked_day(current):
            current += timedelta(days=1)
            continue
        dates.append(current)
        current += timedelta(days=step_days)
    return dates


def generate_period_delivery_dates(
    gap: DeliveryGap,
    duration_months: int,
    start_date: datetime,
) -> SubscriptionDeliveryDates:
    """All deliveries from midnight of `start_date` through `duration_months` later, inclusive."""
    if duration_months <= 0:
        raise ValidationError(f"duration_months must be positive, got {duration_months}.")

    start_date = coerce_datetime(start_date, "start_date")
    first = start_of_day(start_date)
    end = add_months(first, duration_months)
    return SubscriptionDeliveryDates(
        start_date=start_date,
        end_date=end,
        delivery_dates=generate_interval_delivery_dates(first, gap.step_days, end=end),
    )


def next_interval_delivery_date(
    current_delivery: datetime,
    gap: DeliveryGap,
    policy: CalendarPolicy = SUNDAY_ONLY,
) -> datetime:
    nxt = start_of_day(current_delivery + timedelta(days=gap.step_days))
    return policy.advance_to_allowed_day(nxt)


def reschedule_after_reactivation(
    reactivated_at: datetime,
    count: int,
    gap: DeliveryGap = EVERY_OTHER_DAY_GAP,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    delivery_hour: int = DEFAULT_DELIVERY_HOUR,
) -> list[datetime]:
    first = resolve_first_delivery_date(reactivated_at, cutoff_hour, delivery_hour)
    return generate_interval_delivery_dates(first, gap.step_days, count=count)
