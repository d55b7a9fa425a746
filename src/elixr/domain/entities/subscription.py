from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Union
from src.elixr.domain.enums import PlanFrequency, SubscriptionStatus
from src.elixr.domain.value_objects import SubscriptionItem

@dataclass
class Subscription:
    id: str
    plan: Union[PlanFrequency, str]
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    duration: int = 0
    last_delivery: Optional[datetime] = None
    status: Optional[SubscriptionStatus] = None
    items: List[SubscriptionItem] = field(default_factory=list)
