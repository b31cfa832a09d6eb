from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class AvailabilityPolicy(str, Enum):
    """What a failed calendar read means for the requested slot."""

    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


class EventLister(Protocol):
    def list_events(self, calendar_id: str, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        ...


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) in an aware timezone."""

    start: datetime
    end: datetime

    @classmethod
    def starting_at(cls, start: datetime, duration_minutes: int) -> "TimeWindow":
        # elapsed time, not wall-clock time, across DST changes
        end = (start.astimezone(timezone.utc) + timedelta(minutes=duration_minutes)).astimezone(start.tzinfo)
        return cls(start=start, end=end)


def is_available(
    gateway: EventLister,
    calendar_id: str,
    window: TimeWindow,
    policy: AvailabilityPolicy = AvailabilityPolicy.FAIL_OPEN,
) -> bool:
    try:
        events = gateway.list_events(
            calendar_id=calendar_id,
            time_min=window.start.isoformat(),
            time_max=window.end.isoformat(),
        )
    except Exception as exc:
        if policy is AvailabilityPolicy.FAIL_CLOSED:
            logger.error("Calendar read failed for %s, treating slot as taken: %s", calendar_id, exc)
            return False
        logger.warning("Calendar read failed for %s, assuming slot is free: %s", calendar_id, exc)
        return True

    if events:
        logger.info(
            "Found %d conflicting event(s) in %s between %s and %s",
            len(events),
            calendar_id,
            window.start.isoformat(),
            window.end.isoformat(),
        )
    return not events
