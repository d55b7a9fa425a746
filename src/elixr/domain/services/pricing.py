from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from src.elixr.domain.enums import PlanFrequency
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.value_objects import PricingBreakdown, SubscriptionItem

# (minimum duration, discount percent), highest tier first
DISCOUNT_TIERS: tuple[tuple[int, int], ...] = (
    (90, 20),
    (60, 15),
    (30, 10),
)


def round_currency(amount: float) -> int:
    """Whole currency units, halves rounded up."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def discount_percent_for(duration: int) -> int:
    for threshold, percent in DISCOUNT_TIERS:
        if duration >= threshold:
            return percent
    return 0


def calculate_subscription_pricing(
    items: Iterable[SubscriptionItem],
    duration: int,
    plan: Optional[Union[PlanFrequency, str]] = None,
) -> PricingBreakdown:
    """
    Price of `duration` deliveries of the given items.

    Tiers are applied to the delivery count whatever the plan frequency,
    so `plan` does not change the result.
    """
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ValidationError(f"Duration must be a positive integer, got {duration!r}.")

    daily_price = sum(item.price for item in items)
    if daily_price < 0:
        raise ValidationError("Item prices cannot be negative.")

    # only the reported daily price is cut to cents, totals use the exact sum
    base_total = daily_price * duration
    percent = discount_percent_for(duration)
    savings = base_total * percent / 100

    return PricingBreakdown(
        daily_price=round(daily_price, 2),
        total_price=round_currency(base_total - savings),
        discount_percent=percent,
        savings=round_currency(savings),
    )
