from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.services.availability import AvailabilityPolicy, TimeWindow, is_available


class RecordingLister:
    def __init__(self, events=None, error=None) -> None:
        self.events = events or []
        self.error = error
        self.calls = []

    def list_events(self, calendar_id, time_min, time_max):
        self.calls.append((calendar_id, time_min, time_max))
        if self.error:
            raise self.error
        return self.events


def _window() -> TimeWindow:
    return TimeWindow.starting_at(datetime(2026, 11, 20, 18, 0, tzinfo=timezone.utc), 90)


def test_window_spans_duration():
    window = _window()
    assert window.end == datetime(2026, 11, 20, 19, 30, tzinfo=timezone.utc)


def test_empty_calendar_is_available_and_queries_exact_window():
    lister = RecordingLister()

    assert is_available(lister, "cal-1", _window()) is True
    assert lister.calls == [
        ("cal-1", "2026-11-20T18:00:00+00:00", "2026-11-20T19:30:00+00:00"),
    ]


def test_any_overlap_is_unavailable():
    partial = RecordingLister(events=[{"id": "evt-1", "summary": "Birthday party"}])
    assert is_available(partial, "cal-1", _window()) is False


def test_read_failure_defaults_to_available():
    lister = RecordingLister(error=ConnectionError("timed out"))
    assert is_available(lister, "cal-1", _window()) is True


def test_read_failure_fail_closed():
    lister = RecordingLister(error=ConnectionError("timed out"))
    assert is_available(lister, "cal-1", _window(), AvailabilityPolicy.FAIL_CLOSED) is False


def test_window_duration_is_elapsed_time_over_spring_forward():
    new_york = ZoneInfo("America/New_York")
    window = TimeWindow.starting_at(datetime(2026, 3, 8, 1, 30, tzinfo=new_york), 90)

    assert window.end.astimezone(timezone.utc) - window.start.astimezone(timezone.utc) == timedelta(minutes=90)
    assert (window.end.hour, window.end.minute) == (4, 0)
