from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

try:
    from google.oauth2 import service_account
    from googleapiclient.discovery import build
except ImportError:  # pragma: no cover
    service_account = None
    build = None


CALENDAR_SCOPES = ("https://www.googleapis.com/auth/calendar",)


@dataclass
class CalendarClient:
    """Google Calendar v3 access for a single service account.

    Errors from the API are left to propagate; callers decide how a failed
    read or write affects a reservation.
    """

    service_account_info: Dict[str, Any]
    scopes: tuple[str, ...] = CALENDAR_SCOPES
    _cached_service: Any = field(default=None, init=False, repr=False)

    def _service(self):
        if self._cached_service is not None:
            return self._cached_service
        if not service_account or not build:
            raise RuntimeError("google-api-python-client is required for Calendar access")
        credentials = service_account.Credentials.from_service_account_info(
            self.service_account_info, scopes=list(self.scopes)
        )
        self._cached_service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        return self._cached_service

    def list_events(self, calendar_id: str, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        service = self._service()
        response = (
            service.events()
            .list(calendarId=calendar_id, timeMin=time_min, timeMax=time_max, singleEvents=True)
            .execute()
        )
        return list(response.get("items") or [])

    def insert_event(self, calendar_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        service = self._service()
        event = service.events().insert(calendarId=calendar_id, body=body).execute()
        return event
