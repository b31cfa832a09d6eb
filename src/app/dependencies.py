from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from src.app.config import Settings, get_settings
from src.services.business import BusinessRegistry, load_registry
from src.services.reservation import (
    CalendarClientFactory,
    ReservationService,
    default_client_factory,
)


@lru_cache(maxsize=1)
def get_business_registry() -> BusinessRegistry:
    return load_registry(get_settings())


def get_calendar_client_factory() -> CalendarClientFactory:
    return default_client_factory


def get_reservation_service(
    settings: Settings = Depends(get_settings),
    registry: BusinessRegistry = Depends(get_business_registry),
    client_factory: CalendarClientFactory = Depends(get_calendar_client_factory),
) -> ReservationService:
    return ReservationService(
        registry=registry,
        client_factory=client_factory,
        default_business_id=settings.default_business_id,
        availability_policy=settings.availability_policy,
        insert_failure_policy=settings.insert_failure_policy,
        enforce_business_hours=settings.enforce_business_hours,
    )
