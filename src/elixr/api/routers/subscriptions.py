from fastapi import APIRouter, Depends

from src.elixr.api.deps import get_delivery_service
from src.elixr.api.schemas import SubscriptionStatusRequest, SubscriptionStatusResponse
from src.elixr.domain.entities.subscription import Subscription
from src.elixr.domain.enums import SubscriptionStatus
from src.elixr.services.delivery_service import DeliveryService


router = APIRouter(prefix="/api/delivery/subscriptions", tags=["subscriptions"])


@router.post("/status", response_model=SubscriptionStatusResponse)
def subscription_status(
    req: SubscriptionStatusRequest,
    svc: DeliveryService = Depends(get_delivery_service),
):
    sub = Subscription(
        id=req.id,
        plan=req.plan,
        start_date=req.start_date,
        end_date=req.end_date,
        is_active=req.is_active,
        last_delivery=req.last_delivery,
        status=req.status,
    )
    derived = svc.status(sub, req.now)

    # nothing more is delivered once cancelled or expired
    next_delivery = None
    if derived in (SubscriptionStatus.ACTIVE, SubscriptionStatus.UPCOMING):
        next_delivery = svc.next_delivery(sub)

    return SubscriptionStatusResponse(
        id=sub.id,
        status=derived.value,
        stored_status=req.status,
        next_delivery_date=next_delivery,
    )
