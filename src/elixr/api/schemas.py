from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field, ConfigDict

from src.elixr.domain.enums import SubscriptionType
from src.elixr.domain.value_objects import SubscriptionItem


# Schedules
class SchedulePreviewRequest(BaseModel):
    plan: str
    start_date: datetime
    duration: int = Field(..., gt=0, description="Number of deliveries")
    end_date: Optional[datetime] = None


class SchedulePreviewResponse(BaseModel):
    plan: str
    delivery_dates: list[datetime]
    total_deliveries: int


class IntervalScheduleRequest(BaseModel):
    subscription_type: SubscriptionType
    start_date: datetime
    duration_months: int = Field(..., gt=0)


class IntervalScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subscription_type: SubscriptionType
    schedule: str
    start_date: datetime
    end_date: datetime
    delivery_dates: list[datetime]
    total_deliveries: int


class FirstDeliveryRequest(BaseModel):
    event_time: Optional[datetime] = Field(None, description="Order or reactivation time, defaults to now")


class FirstDeliveryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    first_delivery_date: datetime
    order_cutoff_time: datetime
    is_after_cutoff: bool


# Pricing
class ItemRequest(BaseModel):
    id: Union[int, str]
    name: str
    price: float = Field(..., ge=0)


class PricingQuoteRequest(BaseModel):
    items: list[ItemRequest] = Field(default_factory=list)
    duration: int = Field(..., gt=0)
    plan: Optional[str] = None


class PricingQuoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    daily_price: float
    total_price: int
    discount_percent: int
    savings: int


# Subscriptions
class SubscriptionStatusRequest(BaseModel):
    id: str
    plan: str
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    last_delivery: Optional[datetime] = None
    status: Optional[str] = None
    now: Optional[datetime] = None


class SubscriptionStatusResponse(BaseModel):
    id: str
    status: str
    stored_status: Optional[str] = None
    next_delivery_date: Optional[datetime] = None


def item_from_request(item: ItemRequest) -> SubscriptionItem:
    return SubscriptionItem(id=item.id, name=item.name, price=item.price)
