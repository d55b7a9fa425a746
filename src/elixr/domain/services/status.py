from datetime import datetime

from src.elixr.domain.entities.subscription import Subscription
from src.elixr.domain.enums import SubscriptionStatus
from src.elixr.domain.services.dates import coerce_datetime


def get_subscription_status(subscription: Subscription, now: datetime) -> SubscriptionStatus:
    # order matters: a paused subscription past its end is still "cancelled"
    if not subscription.is_active:
        return SubscriptionStatus.CANCELLED
    now = coerce_datetime(now, "now")
    if coerce_datetime(subscription.end_date, "end_date") < now:
        return SubscriptionStatus.EXPIRED
    if coerce_datetime(subscription.start_date, "start_date") > now:
        return SubscriptionStatus.UPCOMING
    return SubscriptionStatus.ACTIVE


def is_status_stale(subscription: Subscription, now: datetime) -> bool:
    """True when the stored label disagrees with the derived one and needs writing back."""
    if subscription.status is None:
        return True
    return str(subscription.status) != get_subscription_status(subscription, now).value
