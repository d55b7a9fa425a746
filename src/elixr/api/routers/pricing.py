from fastapi import APIRouter, Depends, HTTPException, status

from src.elixr.api.deps import get_delivery_service
from src.elixr.api.schemas import PricingQuoteRequest, PricingQuoteResponse, item_from_request
from src.elixr.domain.errors import ValidationError
from src.elixr.services.delivery_service import DeliveryService


router = APIRouter(prefix="/api/delivery/pricing", tags=["pricing"])


@router.post("/quote", response_model=PricingQuoteResponse)
def quote(
    req: PricingQuoteRequest,
    svc: DeliveryService = Depends(get_delivery_service),
):
    try:
        items = [item_from_request(i) for i in req.items]
        return svc.quote(items, req.duration, req.plan)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.details)
