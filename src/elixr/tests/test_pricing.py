import pytest

from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.pricing import (
    calculate_subscription_pricing,
    discount_percent_for,
    round_currency,
)
from src.elixr.domain.value_objects import SubscriptionItem

ITEMS = [
    SubscriptionItem(id=1, name="Rejoice", price=120),
    SubscriptionItem(id=2, name="Green Vitality", price=80),
]


@pytest.mark.parametrize(
    "duration, total, percent, savings",
    [
        (6, 1200, 0, 0),
        (29, 5800, 0, 0),
        (30, 5400, 10, 600),
        (59, 10620, 10, 1180),
        (60, 10200, 15, 1800),
        (89, 15130, 15, 2670),
        (90, 14400, 20, 3600),
        (365, 58400, 20, 14600),
    ],
)
def test_discount_tiers(duration, total, percent, savings):
    result = calculate_subscription_pricing(ITEMS, duration, "daily")

    assert result.daily_price == 200
    assert result.total_price == total
    assert result.discount_percent == percent
    assert result.savings == savings


def test_discount_never_exceeds_ceiling():
    assert max(discount_percent_for(d) for d in range(1, 1000)) == 20


def test_pricing_is_idempotent():
    assert calculate_subscription_pricing(ITEMS, 45, "weekly") == calculate_subscription_pricing(ITEMS, 45, "weekly")


def test_plan_does_not_change_price():
    daily = calculate_subscription_pricing(ITEMS, 60, "daily")
    assert calculate_subscription_pricing(ITEMS, 60, "monthly") == daily


def test_rounds_to_whole_units_half_up():
    items = [SubscriptionItem(id=1, name="Berry Bliss", price=6.29)]
    result = calculate_subscription_pricing(items, 30)

    # 188.7 - 18.87 = 169.83
    assert result.total_price == 170
    assert result.savings == 19
    assert round_currency(2.5) == 3


def test_empty_items_cost_nothing():
    result = calculate_subscription_pricing([], 30)
    assert result.total_price == 0
    assert result.savings == 0


@pytest.mark.parametrize("duration", [0, -1])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(ValidationError):
        calculate_subscription_pricing(ITEMS, duration)


def test_negative_item_price_rejected():
    with pytest.raises(ValidationError):
        SubscriptionItem(id=3, name="Refund", price=-5)


def test_totals_use_the_unrounded_daily_price():
    items = [SubscriptionItem(id=1, name="Pulp Shot", price=1.004)]
    result = calculate_subscription_pricing(items, 1000)

    # 1004 - 200.8 = 803.2
    assert result.daily_price == 1.0
    assert result.total_price == 803
    assert result.savings == 201
