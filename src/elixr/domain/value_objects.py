from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Union

from src.elixr.domain.enums import ExpiryStatus
from src.elixr.domain.errors import ValidationError


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError("Date range end must not precede its start.")

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

@dataclass(frozen=True)
class SubscriptionItem:
    id: Union[int, str]
    name: str
    price: float

    def __post_init__(self):
        if self.price < 0:
            raise ValidationError(f"Item '{self.name}' has a negative price.")

@dataclass(frozen=True)
class Customer:
    name: str
    email: str
    phone: Optional[str] = None

@dataclass(frozen=True)
class PricingBreakdown:
    daily_price: float
    total_price: int
    discount_percent: int
    savings: int

@dataclass(frozen=True)
class FirstDelivery:
    first_delivery_date: datetime
    order_cutoff_time: datetime
    is_after_cutoff: bool

    @property
    def next_delivery_date(self) -> datetime:
        return self.first_delivery_date

@dataclass(frozen=True)
class DeliveryGap:
    """
    Spacing between two deliveries of a subscription type.
    gap_days counts the empty days in between: gap 1 means every other day.
    """
    gap_days: int
    is_daily: bool = False
    description: str = ""

    def __post_init__(self):
        if self.gap_days < 0:
            raise ValidationError("Delivery gap cannot be negative.")

    @property
    def step_days(self) -> int:
        return 1 if self.is_daily else self.gap_days + 1

@dataclass(frozen=True)
class SubscriptionDeliveryDates:
    start_date: datetime
    end_date: datetime
    delivery_dates: List[datetime] = field(default_factory=list)

    @property
    def total_deliveries(self) -> int:
        return len(self.delivery_dates)

@dataclass(frozen=True)
class PauseCheck:
    allowed: bool
    reason: Optional[str] = None

@dataclass(frozen=True)
class ReactivationCheck:
    allowed: bool
    days_left: int
    reason: Optional[str] = None

@dataclass(frozen=True)
class RenewalNotice:
    needs_notification: bool
    days_left: int

@dataclass(frozen=True)
class ExpiryState:
    status: ExpiryStatus
    days_left: int
    message: str
