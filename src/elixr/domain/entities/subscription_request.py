from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List
from src.elixr.domain.value_objects import Customer, SubscriptionItem

@dataclass
class SubscriptionRequest:
    """Checkout draft, before it becomes a Subscription."""
    plan: str
    duration: int
    start_date: Optional[datetime]
    customer: Optional[Customer]
    items: List[SubscriptionItem] = field(default_factory=list)
