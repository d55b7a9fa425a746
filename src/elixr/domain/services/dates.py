from datetime import date, datetime, time, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from src.elixr.domain.errors import ValidationError

SHOP_TIMEZONE = ZoneInfo("Asia/Kolkata")


def to_local(moment: datetime, tz: tzinfo = SHOP_TIMEZONE) -> datetime:
    """Aware values are converted to naive time in `tz`; naive values are already local."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def coerce_datetime(value: Any, field: str = "date", tz: tzinfo = SHOP_TIMEZONE) -> datetime:
    """
    Accepts datetime, date or an ISO-8601 string.
    A bare date becomes midnight of that day. Results are always naive
    shop-local time, so values with an offset ("...Z", "+05:30") compare
    with naive ones.
    """
    if isinstance(value, datetime):
        return to_local(value, tz)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return to_local(datetime.fromisoformat(value.strip()), tz)
        except ValueError:
            raise ValidationError(f"Invalid {field}: {value!r} is not an ISO-8601 date.")
    raise ValidationError(f"Invalid {field}: expected a date, got {type(value).__name__}.")


def add_months(moment: datetime, months: int) -> datetime:
    # relativedelta clamps: Jan 31 + 1 month = Feb 28/29
    return moment + relativedelta(months=months)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def at_hour(moment: datetime, hour: int) -> datetime:
    return moment.replace(hour=hour, minute=0, second=0, microsecond=0)
