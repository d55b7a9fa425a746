from datetime import datetime

from src.elixr.domain.entities.subscription_request import SubscriptionRequest
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.dates import coerce_datetime
from src.elixr.domain.services.next_delivery import parse_plan

MIN_SUBSCRIPTION_DAYS = 7


def collect_subscription_errors(
    request: SubscriptionRequest,
    now: datetime,
    min_duration: int = MIN_SUBSCRIPTION_DAYS,
) -> list[str]:
    errors: list[str] = []

    if parse_plan(request.plan) is None:
        errors.append("Invalid subscription plan")

    if not request.duration or request.duration < min_duration:
        errors.append(f"Duration must be at least {min_duration} days")

    if not request.items:
        errors.append("Subscription must contain at least one item")

    start_date = None
    if request.start_date is not None:
        try:
            start_date = coerce_datetime(request.start_date, "start_date")
        except ValidationError:
            start_date = None
    if start_date is None:
        errors.append("Valid start date is required")
    elif start_date < coerce_datetime(now, "now"):
        errors.append("Start date cannot be in the past")

    customer = request.customer
    if customer is None or not customer.name or not customer.email:
        errors.append("Customer information is required")

    return errors


def validate_subscription_request(
    request: SubscriptionRequest,
    now: datetime,
    min_duration: int = MIN_SUBSCRIPTION_DAYS,
) -> None:
    errors = collect_subscription_errors(request, now, min_duration)
    if errors:
        raise ValidationError("; ".join(errors), details=errors)
