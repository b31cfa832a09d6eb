from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Optional
from zoneinfo import ZoneInfo

from src.adapters.calendar_client import CalendarClient
from src.schemas.reservation import ReservationOutcome, ReservationRequest, SuggestedAction
from src.services.availability import AvailabilityPolicy, TimeWindow, is_available
from src.services.business import BusinessConfig, BusinessRegistry

logger = logging.getLogger(__name__)

MISSING_INFORMATION = "Missing information. Please provide all details."
INVALID_DETAILS = "Invalid date, time, or party size. Please use YYYY-MM-DD, HH:MM and a positive party size."
BUSINESS_NOT_FOUND = "Business not found."
SLOT_UNAVAILABLE = "That time slot is not available. Please try another time."
OUTSIDE_HOURS = "We're only taking reservations between {open_hour}:00 and {close_hour}:00. Please try another time."
BOOKING_NOT_SAVED = "We couldn't save your reservation right now. Please try again."
GENERIC_FAILURE = "Something went wrong. Please try again."
CONFIRMATION = (
    "Perfect! Your reservation is confirmed for {name} at {time} on {date}. "
    "We look forward to serving your party of {party_size}!"
)

TIME_FORMATS = ("%H:%M", "%H:%M:%S")

CalendarClientFactory = Callable[[BusinessConfig], CalendarClient]


class InsertFailurePolicy(str, Enum):
    """What the caller is told when the calendar insert fails."""

    REPORT_SUCCESS = "report_success"
    REPORT_FAILURE = "report_failure"


class InvalidReservation(ValueError):
    pass


@dataclass(frozen=True)
class ParsedReservation:
    customer_name: str
    day: date
    start_time: time
    party_size: int
    phone_number: str
    special_requests: Optional[str] = None


def default_client_factory(business: BusinessConfig) -> CalendarClient:
    return CalendarClient(service_account_info=dict(business.credentials))


def parse_request(request: ReservationRequest) -> ParsedReservation:
    try:
        day = date.fromisoformat(request.date or "")
    except ValueError as exc:
        raise InvalidReservation(f"Unrecognised date: {request.date!r}") from exc

    start_time = None
    for fmt in TIME_FORMATS:
        try:
            start_time = datetime.strptime(request.time or "", fmt).time()
            break
        except ValueError:
            continue
    if start_time is None:
        raise InvalidReservation(f"Unrecognised time: {request.time!r}")

    try:
        party_size = int(request.party_size)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidReservation(f"Unrecognised party size: {request.party_size!r}") from exc
    if party_size <= 0:
        raise InvalidReservation(f"Party size must be positive, got {party_size}")

    return ParsedReservation(
        customer_name=request.customer_name or "",
        day=day,
        start_time=start_time,
        party_size=party_size,
        phone_number=request.phone_number or "",
        special_requests=request.special_requests or None,
    )


def window_for(reservation: ParsedReservation, business: BusinessConfig) -> TimeWindow:
    start = datetime.combine(reservation.day, reservation.start_time, tzinfo=ZoneInfo(business.timezone))
    return TimeWindow.starting_at(start, business.default_duration_minutes)


def within_business_hours(window: TimeWindow, business: BusinessConfig) -> bool:
    midnight = window.start.replace(hour=0, minute=0, second=0, microsecond=0)
    opens = midnight + timedelta(hours=business.open_hour)
    closes = midnight + timedelta(hours=business.close_hour)
    return opens <= window.start and window.end <= closes


def build_event_body(reservation: ParsedReservation, window: TimeWindow, timezone: str) -> Dict[str, Any]:
    description = f"Phone: {reservation.phone_number}\nParty Size: {reservation.party_size}"
    if reservation.special_requests:
        description += f"\nSpecial Requests: {reservation.special_requests}"
    return {
        "summary": f"Reservation: {reservation.customer_name} ({reservation.party_size} people)",
        "description": description,
        "start": {"dateTime": window.start.isoformat(), "timeZone": timezone},
        "end": {"dateTime": window.end.isoformat(), "timeZone": timezone},
    }


class ReservationService:
    """Checks a business calendar for conflicts and books the reservation."""

    def __init__(
        self,
        registry: BusinessRegistry,
        client_factory: CalendarClientFactory = default_client_factory,
        default_business_id: Optional[str] = None,
        availability_policy: AvailabilityPolicy = AvailabilityPolicy.FAIL_OPEN,
        insert_failure_policy: InsertFailurePolicy = InsertFailurePolicy.REPORT_SUCCESS,
        enforce_business_hours: bool = False,
    ) -> None:
        self._registry = registry
        self._client_factory = client_factory
        self._default_business_id = default_business_id
        self._availability_policy = availability_policy
        self._insert_failure_policy = insert_failure_policy
        self._enforce_business_hours = enforce_business_hours

    def handle(self, request: ReservationRequest) -> ReservationOutcome:
        try:
            return self._handle(request)
        except Exception:
            logger.exception("Unexpected error while handling reservation")
            return ReservationOutcome(success=False, message=GENERIC_FAILURE)

    def _handle(self, request: ReservationRequest) -> ReservationOutcome:
        missing = request.missing_fields()
        if missing:
            logger.info("Rejecting reservation, missing fields: %s", ", ".join(missing))
            return ReservationOutcome(success=False, message=MISSING_INFORMATION)

        try:
            reservation = parse_request(request)
        except InvalidReservation as exc:
            logger.info("Rejecting reservation: %s", exc)
            return ReservationOutcome(success=False, message=INVALID_DETAILS)

        business_id = request.business_id or self._default_business_id
        business = self._registry.get(business_id)
        if business is None:
            logger.info("Rejecting reservation for unknown business %r", business_id)
            return ReservationOutcome(success=False, message=BUSINESS_NOT_FOUND)

        window = window_for(reservation, business)
        if self._enforce_business_hours and not within_business_hours(window, business):
            return ReservationOutcome(
                success=False,
                message=OUTSIDE_HOURS.format(open_hour=business.open_hour, close_hour=business.close_hour),
                suggested_action=SuggestedAction.ASK_ALTERNATIVE_TIME,
            )

        client = self._client_factory(business)
        if not is_available(client, business.calendar_id, window, self._availability_policy):
            return ReservationOutcome(
                success=False,
                message=SLOT_UNAVAILABLE,
                suggested_action=SuggestedAction.ASK_ALTERNATIVE_TIME,
            )

        if not self._book(client, business, reservation, window):
            return ReservationOutcome(success=False, message=BOOKING_NOT_SAVED)

        return ReservationOutcome(
            success=True,
            message=CONFIRMATION.format(
                name=reservation.customer_name,
                time=request.time,
                date=request.date,
                party_size=reservation.party_size,
            ),
        )

    def _book(
        self,
        client: CalendarClient,
        business: BusinessConfig,
        reservation: ParsedReservation,
        window: TimeWindow,
    ) -> bool:
        body = build_event_body(reservation, window, business.timezone)
        try:
            created = client.insert_event(calendar_id=business.calendar_id, body=body)
        except Exception as exc:
            logger.error("Event creation failed for %s: %s", business.calendar_id, exc)
            return self._insert_failure_policy is InsertFailurePolicy.REPORT_SUCCESS
        logger.info("Reservation booked for %s: event %s", business.id, (created or {}).get("id"))
        return True
