from datetime import datetime, timedelta

from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.calendar_policy import CalendarPolicy, SUNDAY_ONLY
from src.elixr.domain.services.dates import at_hour, coerce_datetime
from src.elixr.domain.value_objects import FirstDelivery

DEFAULT_CUTOFF_HOUR = 18
DEFAULT_DELIVERY_HOUR = 8


def _check_hour(hour: int, field: str) -> None:
    if not 0 <= hour <= 23:
        raise ValidationError(f"{field} must be between 0 and 23, got {hour}.")


def resolve_first_delivery_offset(event_timestamp: datetime, cutoff_hour: int = DEFAULT_CUTOFF_HOUR) -> int:
    """
    Days between the event (order or reactivation) and its first delivery.
    Before the cutoff: next day. At or after the cutoff: the day after.
    """
    _check_hour(cutoff_hour, "cutoff_hour")
    event_timestamp = coerce_datetime(event_timestamp, "event_timestamp")
    return 2 if event_timestamp.hour >= cutoff_hour else 1


def resolve_first_delivery_date(
    event_timestamp: datetime,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    delivery_hour: int = DEFAULT_DELIVERY_HOUR,
    policy: CalendarPolicy = SUNDAY_ONLY,
) -> datetime:
    _check_hour(delivery_hour, "delivery_hour")
    event_timestamp = coerce_datetime(event_timestamp, "event_timestamp")
    offset = resolve_first_delivery_offset(event_timestamp, cutoff_hour)
    delivery = at_hour(event_timestamp + timedelta(days=offset), delivery_hour)
    return policy.advance_to_allowed_day(delivery)


def calculate_first_delivery(
    order_time: datetime,
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR,
    delivery_hour: int = DEFAULT_DELIVERY_HOUR,
) -> FirstDelivery:
    order_time = coerce_datetime(order_time, "order_time")
    first = resolve_first_delivery_date(order_time, cutoff_hour, delivery_hour)
    return FirstDelivery(
        first_delivery_date=first,
        order_cutoff_time=at_hour(order_time, cutoff_hour),
        is_after_cutoff=order_time.hour >= cutoff_hour,
    )
