from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.app.dependencies import get_business_registry, get_reservation_service
from src.schemas.reservation import HealthResponse, ReservationOutcome, ReservationRequest
from src.services.business import BusinessRegistry
from src.services.reservation import ReservationService

router = APIRouter()

RESERVATION_PATH = "/webhook/reservation"


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
def health(registry: BusinessRegistry = Depends(get_business_registry)) -> HealthResponse:
    return HealthResponse(status="healthy", businesses=registry.ids())


@router.post(
    RESERVATION_PATH,
    response_model=ReservationOutcome,
    response_model_exclude_none=True,
)
def create_reservation(
    payload: ReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationOutcome:
    return service.handle(payload)
