import dataclasses
import logging
from datetime import date, datetime, time
from typing import Callable, Iterable, Optional, Union
from zoneinfo import ZoneInfo

from src.elixr.core.settings import Settings
from src.elixr.domain.entities.subscription import Subscription
from src.elixr.domain.entities.subscription_request import SubscriptionRequest
from src.elixr.domain.enums import PlanFrequency, SubscriptionStatus, SubscriptionType
from src.elixr.domain.services import cutoff, interval_schedule, lifecycle, pricing, schedule, status, validation
from src.elixr.domain.services.dates import coerce_datetime
from src.elixr.domain.services.next_delivery import calculate_next_delivery_date
from src.elixr.domain.value_objects import (
    ExpiryState,
    FirstDelivery,
    PauseCheck,
    PricingBreakdown,
    ReactivationCheck,
    RenewalNotice,
    SubscriptionDeliveryDates,
    SubscriptionItem,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class DeliveryService:
    """
    Application edge of the delivery engine: supplies the configured
    constants and the shop-local clock to the pure domain functions.
    Every `now`/timestamp argument is optional and defaults to the clock;
    values carrying an offset are converted to the configured timezone.
    """

    def __init__(self, settings: Settings, clock: Optional[Clock] = None):
        self.settings = settings
        self._tz = ZoneInfo(settings.TIMEZONE)
        self._clock = clock or self._local_clock

    def _local_clock(self) -> datetime:
        # domain works in naive shop-local time
        return datetime.now(self._tz).replace(tzinfo=None)

    def now(self) -> datetime:
        return self.local(self._clock())

    def local(self, value, field: str = "date") -> datetime:
        return coerce_datetime(value, field, tz=self._tz)

    def _or_now(self, value) -> datetime:
        return self.now() if value is None else self.local(value)

    def _local_subscription(self, subscription: Subscription) -> Subscription:
        last = subscription.last_delivery
        return dataclasses.replace(
            subscription,
            start_date=self.local(subscription.start_date, "start_date"),
            end_date=self.local(subscription.end_date, "end_date"),
            last_delivery=None if last is None else self.local(last, "last_delivery"),
        )

    # Scheduling
    def first_delivery(self, order_time: Optional[datetime] = None) -> FirstDelivery:
        order_time = self._or_now(order_time)
        result = cutoff.calculate_first_delivery(
            order_time,
            cutoff_hour=self.settings.ORDER_CUTOFF_HOUR,
            delivery_hour=self.settings.DELIVERY_HOUR,
        )
        logger.debug("order at %s -> first delivery %s", order_time, result.first_delivery_date)
        return result

    def reactivation_delivery_date(self, reactivated_at: Optional[datetime] = None) -> datetime:
        return cutoff.resolve_first_delivery_date(
            self._or_now(reactivated_at),
            cutoff_hour=self.settings.ORDER_CUTOFF_HOUR,
            delivery_hour=self.settings.DELIVERY_HOUR,
        )

    def reschedule_after_reactivation(
        self,
        subscription_type: SubscriptionType,
        count: int,
        reactivated_at: Optional[datetime] = None,
    ) -> list[datetime]:
        reactivated_at = self._or_now(reactivated_at)
        dates = interval_schedule.reschedule_after_reactivation(
            reactivated_at,
            count,
            gap=interval_schedule.gap_for_type(subscription_type),
            cutoff_hour=self.settings.ORDER_CUTOFF_HOUR,
            delivery_hour=self.settings.DELIVERY_HOUR,
        )
        logger.info(
            "rescheduled %s deliveries for %s after reactivation at %s",
            len(dates), subscription_type, reactivated_at,
        )
        return dates

    def delivery_dates(
        self,
        plan: Union[PlanFrequency, str],
        start_date: datetime,
        duration: int,
        end_date: Optional[datetime] = None,
    ) -> list[datetime]:
        return schedule.generate_delivery_dates(
            plan,
            self.local(start_date, "start_date"),
            duration,
            None if end_date is None else self.local(end_date, "end_date"),
        )

    def subscription_delivery_dates(self, subscription: Subscription) -> list[datetime]:
        subscription = self._local_subscription(subscription)
        return schedule.generate_delivery_dates(
            subscription.plan,
            subscription.start_date,
            subscription.duration,
            subscription.end_date,
        )

    def interval_delivery_dates(
        self,
        subscription_type: SubscriptionType,
        duration_months: int,
        start_date: datetime,
    ) -> SubscriptionDeliveryDates:
        gap = interval_schedule.gap_for_type(subscription_type)
        return interval_schedule.generate_period_delivery_dates(
            gap, duration_months, self.local(start_date, "start_date")
        )

    def deliveries_on(self, dates: Iterable[datetime], day: date) -> list[datetime]:
        """Deliveries landing on `day`, for the daily manifest."""
        return schedule.get_delivery_dates_for_date_range(
            dates,
            datetime.combine(day, time.min),
            datetime.combine(day, time.max),
        )

    def next_delivery(self, subscription: Subscription) -> datetime:
        return calculate_next_delivery_date(self._local_subscription(subscription))

    # Lifecycle
    def status(self, subscription: Subscription, now: Optional[datetime] = None) -> SubscriptionStatus:
        now = self._or_now(now)
        local = self._local_subscription(subscription)
        derived = status.get_subscription_status(local, now)
        if status.is_status_stale(local, now):
            logger.info(
                "subscription %s stored status %r differs from derived %r",
                subscription.id, subscription.status, derived.value,
            )
        return derived

    def can_pause(self, next_delivery: datetime, now: Optional[datetime] = None) -> PauseCheck:
        return lifecycle.can_pause(self.local(next_delivery), self._or_now(now), self.settings.PAUSE_NOTICE_HOURS)

    def can_reactivate(self, pause_date: datetime, now: Optional[datetime] = None) -> ReactivationCheck:
        return lifecycle.can_reactivate(self.local(pause_date), self._or_now(now), self.settings.REACTIVATION_WINDOW_MONTHS)

    def can_modify(self, subscription: Subscription, now: Optional[datetime] = None) -> bool:
        return lifecycle.can_modify_subscription(
            self._local_subscription(subscription),
            self._or_now(now),
            self.settings.MODIFY_NOTICE_HOURS,
        )

    def renewal_notice(self, end_date: datetime, now: Optional[datetime] = None) -> RenewalNotice:
        return lifecycle.renewal_notice(self.local(end_date), self._or_now(now), self.settings.RENEWAL_NOTICE_DAYS)

    def expiry_status(self, end_date: datetime, now: Optional[datetime] = None) -> ExpiryState:
        return lifecycle.get_expiry_status(self.local(end_date), self._or_now(now), self.settings.RENEWAL_NOTICE_DAYS)

    # Checkout
    def validate_request(self, request: SubscriptionRequest, now: Optional[datetime] = None) -> None:
        try:
            validation.validate_subscription_request(
                request, self._or_now(now), self.settings.MIN_SUBSCRIPTION_DAYS
            )
        except ValueError as exc:
            logger.info("rejected subscription request: %s", exc)
            raise

    def quote(
        self,
        items: Iterable[SubscriptionItem],
        duration: int,
        plan: Optional[Union[PlanFrequency, str]] = None,
    ) -> PricingBreakdown:
        return pricing.calculate_subscription_pricing(items, duration, plan)
