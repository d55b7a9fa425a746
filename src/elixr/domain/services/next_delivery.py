import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from src.elixr.domain.entities.subscription import Subscription
from src.elixr.domain.enums import PlanFrequency
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.calendar_policy import policy_for_plan
from src.elixr.domain.services.dates import add_months, coerce_datetime

logger = logging.getLogger(__name__)


def parse_plan(value: Union[PlanFrequency, str, None], strict: bool = False) -> Optional[PlanFrequency]:
    """
    Normalizes a plan label ("Daily", " weekly ").
    Unknown labels give None, or ValidationError when strict.
    """
    if isinstance(value, PlanFrequency):
        return value
    if isinstance(value, str):
        try:
            return PlanFrequency(value.strip().lower())
        except ValueError:
            pass
    if strict:
        raise ValidationError(f"Invalid subscription plan: {value!r}.")
    return None


def increment(anchor: datetime, frequency: Optional[PlanFrequency]) -> datetime:
    """One plan increment from `anchor`, with the plan's calendar policy applied."""
    if frequency == PlanFrequency.WEEKLY:
        nxt = anchor + timedelta(days=7)
    elif frequency == PlanFrequency.MONTHLY:
        nxt = add_months(anchor, 1)
    else:
        # daily, and the fallback for unknown plans
        nxt = anchor + timedelta(days=1)

    return policy_for_plan(frequency).advance_to_allowed_day(nxt)


def resolve_plan(plan: Union[PlanFrequency, str, None]) -> Optional[PlanFrequency]:
    frequency = parse_plan(plan)
    if frequency is None:
        logger.warning("unknown plan %r, falling back to a one-day increment", plan)
    return frequency


def calculate_next_delivery_date(subscription: Subscription) -> datetime:
    if subscription.last_delivery is not None:
        anchor = coerce_datetime(subscription.last_delivery, "last_delivery")
    else:
        anchor = coerce_datetime(subscription.start_date, "start_date")
    return increment(anchor, resolve_plan(subscription.plan))
