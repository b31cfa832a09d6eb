from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover
    from src.app.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusinessConfig:
    id: str
    display_name: str
    calendar_id: str
    credentials: Mapping[str, Any] = field(repr=False)
    timezone: str
    default_duration_minutes: int
    open_hour: int
    close_hour: int


class BusinessRegistry:
    """Read-only lookup of configured businesses, built once at startup."""

    def __init__(self, businesses: Iterable[BusinessConfig] = ()) -> None:
        self._businesses: Mapping[str, BusinessConfig] = MappingProxyType(
            {business.id: business for business in businesses}
        )

    def get(self, business_id: Optional[str]) -> Optional[BusinessConfig]:
        if not business_id:
            return None
        return self._businesses.get(business_id)

    def ids(self) -> List[str]:
        return list(self._businesses)

    def __len__(self) -> int:
        return len(self._businesses)

    def __contains__(self, business_id: object) -> bool:
        return business_id in self._businesses


def parse_service_account_key(raw: str) -> Dict[str, Any]:
    if not raw or not raw.strip():
        raise ValueError("Service account key is empty")
    key = json.loads(raw)
    if not isinstance(key, dict):
        raise ValueError("Service account key must be a JSON object")
    return key


def load_registry(settings: "Settings") -> BusinessRegistry:
    """Build the registry from settings.

    A missing or unparseable service account key leaves the registry empty so
    the process can still start and answer health checks.
    """
    try:
        credentials = parse_service_account_key(settings.service_account_key)
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError subclass
        logger.warning("Service account not configured, no businesses loaded: %s", exc)
        return BusinessRegistry()

    business = BusinessConfig(
        id=settings.default_business_id,
        display_name=settings.business_name,
        calendar_id=settings.google_calendar_id,
        credentials=MappingProxyType(credentials),
        timezone=settings.business_timezone,
        default_duration_minutes=settings.reservation_duration_minutes,
        open_hour=settings.open_hour,
        close_hour=settings.close_hour,
    )
    logger.info("Business configured: %s (%s)", business.id, business.display_name)
    return BusinessRegistry([business])
