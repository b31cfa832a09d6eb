from __future__ import annotations

import pytest

from src.adapters import calendar_client as calendar_module
from src.adapters.calendar_client import CALENDAR_SCOPES, CalendarClient


class FakeRequest:
    def __init__(self, result=None, error=None) -> None:
        self._result = result
        self._error = error

    def execute(self):
        if self._error:
            raise self._error
        return self._result


class FakeEvents:
    def __init__(self, list_result=None, error=None) -> None:
        self.list_result = list_result if list_result is not None else {}
        self.error = error
        self.calls = []

    def list(self, **kwargs):
        self.calls.append(("list", kwargs))
        return FakeRequest(self.list_result, self.error)

    def insert(self, **kwargs):
        self.calls.append(("insert", kwargs))
        return FakeRequest({"id": "evt-new", **kwargs["body"]}, self.error)


class FakeService:
    def __init__(self, events: FakeEvents) -> None:
        self._events = events

    def events(self):
        return self._events


class FakeCredentials:
    captured = []

    @classmethod
    def from_service_account_info(cls, info, scopes):
        cls.captured.append((info, scopes))
        return "credentials"


@pytest.fixture()
def fake_google(monkeypatch):
    events = FakeEvents()
    builds = []

    def fake_build(name, version, credentials, cache_discovery):
        builds.append((name, version, credentials, cache_discovery))
        return FakeService(events)

    FakeCredentials.captured = []
    monkeypatch.setattr(calendar_module, "build", fake_build)
    monkeypatch.setattr(
        calendar_module,
        "service_account",
        type("ServiceAccountModule", (), {"Credentials": FakeCredentials}),
    )
    return events, builds


def test_list_events_returns_items(fake_google):
    events, builds = fake_google
    events.list_result = {"items": [{"id": "evt-1"}]}
    client = CalendarClient(service_account_info={"client_email": "svc@example.com"})

    items = client.list_events("cal-1", "2026-11-20T18:00:00-05:00", "2026-11-20T19:30:00-05:00")

    assert items == [{"id": "evt-1"}]
    assert events.calls == [
        (
            "list",
            {
                "calendarId": "cal-1",
                "timeMin": "2026-11-20T18:00:00-05:00",
                "timeMax": "2026-11-20T19:30:00-05:00",
                "singleEvents": True,
            },
        )
    ]
    assert builds == [("calendar", "v3", "credentials", False)]
    assert FakeCredentials.captured == [({"client_email": "svc@example.com"}, list(CALENDAR_SCOPES))]


def test_list_events_without_items_is_empty(fake_google):
    client = CalendarClient(service_account_info={})
    assert client.list_events("cal-1", "a", "b") == []


def test_service_built_once_per_client(fake_google):
    _, builds = fake_google
    client = CalendarClient(service_account_info={})

    client.list_events("cal-1", "a", "b")
    client.insert_event("cal-1", {"summary": "Reservation"})

    assert len(builds) == 1


def test_insert_event_passes_body(fake_google):
    events, _ = fake_google
    client = CalendarClient(service_account_info={})

    created = client.insert_event("cal-1", {"summary": "Reservation: Casey (2 people)"})

    assert created["id"] == "evt-new"
    assert events.calls == [("insert", {"calendarId": "cal-1", "body": {"summary": "Reservation: Casey (2 people)"}})]


def test_errors_propagate(fake_google):
    events, _ = fake_google
    events.error = ConnectionError("socket closed")
    client = CalendarClient(service_account_info={})

    with pytest.raises(ConnectionError):
        client.list_events("cal-1", "a", "b")


def test_missing_google_client_raises(monkeypatch):
    monkeypatch.setattr(calendar_module, "build", None)
    client = CalendarClient(service_account_info={})

    with pytest.raises(RuntimeError):
        client.list_events("cal-1", "a", "b")
