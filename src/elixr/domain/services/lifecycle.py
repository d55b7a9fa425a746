import math
from datetime import datetime, timedelta

from src.elixr.domain.entities.subscription import Subscription
from src.elixr.domain.enums import ExpiryStatus
from src.elixr.domain.services.dates import add_months, coerce_datetime
from src.elixr.domain.services.next_delivery import calculate_next_delivery_date
from src.elixr.domain.value_objects import (
    ExpiryState,
    PauseCheck,
    ReactivationCheck,
    RenewalNotice,
)

PAUSE_NOTICE_HOURS = 24
MODIFY_NOTICE_HOURS = 12
REACTIVATION_WINDOW_MONTHS = 3
RENEWAL_NOTICE_DAYS = 5

_DAY = timedelta(days=1)
_HOUR = timedelta(hours=1)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n > 1 else ''}"


def _until(moment: datetime, now: datetime) -> timedelta:
    return coerce_datetime(moment) - coerce_datetime(now, "now")


def _days_left(deadline: datetime, now: datetime) -> int:
    return math.ceil(_until(deadline, now) / _DAY)


def can_pause(next_delivery: datetime, now: datetime, notice_hours: int = PAUSE_NOTICE_HOURS) -> PauseCheck:
    hours = _until(next_delivery, now) / _HOUR
    if hours < notice_hours:
        return PauseCheck(
            allowed=False,
            reason=(
                f"Cannot pause subscription. Next delivery is in {math.floor(hours + 0.5)} hours. "
                f"Minimum {notice_hours} hours notice required."
            ),
        )
    return PauseCheck(allowed=True)


def reactivation_deadline(pause_date: datetime, window_months: int = REACTIVATION_WINDOW_MONTHS) -> datetime:
    return add_months(coerce_datetime(pause_date, "pause_date"), window_months)


def can_reactivate(
    pause_date: datetime,
    now: datetime,
    window_months: int = REACTIVATION_WINDOW_MONTHS,
) -> ReactivationCheck:
    days_left = _days_left(reactivation_deadline(pause_date, window_months), now)
    if days_left <= 0:
        return ReactivationCheck(
            allowed=False,
            days_left=0,
            reason="Reactivation period has expired. Please create a new subscription.",
        )
    return ReactivationCheck(allowed=True, days_left=days_left)


def subscription_end_date(start_date: datetime, months: int) -> datetime:
    return add_months(coerce_datetime(start_date, "start_date"), months)


def renewal_notice(end_date: datetime, now: datetime, notice_days: int = RENEWAL_NOTICE_DAYS) -> RenewalNotice:
    days_left = _days_left(end_date, now)
    return RenewalNotice(
        needs_notification=0 < days_left <= notice_days,
        days_left=max(0, days_left),
    )


def get_expiry_status(end_date: datetime, now: datetime, notice_days: int = RENEWAL_NOTICE_DAYS) -> ExpiryState:
    days_left = _days_left(end_date, now)

    if days_left < 0:
        return ExpiryState(
            status=ExpiryStatus.EXPIRED,
            days_left=0,
            message="Your subscription has expired. Please renew to continue receiving deliveries.",
        )
    if days_left <= notice_days:
        return ExpiryState(
            status=ExpiryStatus.EXPIRING_SOON,
            days_left=days_left,
            message=(
                f"Your subscription expires in {_plural(days_left, 'day')}. "
                "Renew now to avoid interruption."
            ),
        )
    return ExpiryState(
        status=ExpiryStatus.ACTIVE,
        days_left=days_left,
        message=f"Your subscription is active for {days_left} more days.",
    )


def can_modify_subscription(
    subscription: Subscription,
    now: datetime,
    notice_hours: int = MODIFY_NOTICE_HOURS,
) -> bool:
    next_delivery = calculate_next_delivery_date(subscription)
    return _until(next_delivery, now) / _HOUR > notice_hours


def time_until_delivery(delivery: datetime, now: datetime) -> str:
    remaining = _until(delivery, now)
    if remaining <= timedelta(0):
        return "Delivery is due"

    days = remaining.days
    hours = remaining.seconds // 3600
    if days > 0:
        return f"{_plural(days, 'day')} and {_plural(hours, 'hour')}"
    return _plural(hours, "hour")
