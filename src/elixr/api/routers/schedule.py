from fastapi import APIRouter, Depends, HTTPException, status

from src.elixr.api.deps import get_delivery_service
from src.elixr.api.schemas import (
    FirstDeliveryRequest,
    FirstDeliveryResponse,
    IntervalScheduleRequest,
    IntervalScheduleResponse,
    SchedulePreviewRequest,
    SchedulePreviewResponse,
)
from src.elixr.domain.errors import ValidationError
from src.elixr.domain.services.interval_schedule import describe_delivery_gap, gap_for_type
from src.elixr.services.delivery_service import DeliveryService


router = APIRouter(prefix="/api/delivery", tags=["delivery"])


@router.post("/schedule/preview", response_model=SchedulePreviewResponse)
def preview_schedule(
    req: SchedulePreviewRequest,
    svc: DeliveryService = Depends(get_delivery_service),
):
    try:
        dates = svc.delivery_dates(req.plan, req.start_date, req.duration, req.end_date)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.details)

    return SchedulePreviewResponse(plan=req.plan, delivery_dates=dates, total_deliveries=len(dates))


@router.post("/schedule/interval", response_model=IntervalScheduleResponse)
def interval_schedule(
    req: IntervalScheduleRequest,
    svc: DeliveryService = Depends(get_delivery_service),
):
    try:
        result = svc.interval_delivery_dates(req.subscription_type, req.duration_months, req.start_date)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.details)

    return IntervalScheduleResponse(
        subscription_type=req.subscription_type,
        schedule=describe_delivery_gap(gap_for_type(req.subscription_type)),
        start_date=result.start_date,
        end_date=result.end_date,
        delivery_dates=result.delivery_dates,
        total_deliveries=result.total_deliveries,
    )


@router.post("/first-delivery", response_model=FirstDeliveryResponse)
def first_delivery(
    req: FirstDeliveryRequest,
    svc: DeliveryService = Depends(get_delivery_service),
):
    try:
        return svc.first_delivery(req.event_time)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
