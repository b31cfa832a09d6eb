from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SuggestedAction(str, Enum):
    ASK_ALTERNATIVE_TIME = "ask_alternative_time"


class ReservationRequest(BaseModel):
    """Inbound webhook payload.

    Every field is optional here so incomplete requests reach the handler and
    get a conversational "missing information" reply instead of a 422.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    business_id: Optional[str] = Field(default=None, description="Configured business key")
    customer_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("customer_name", "name"),
    )
    date: Optional[str] = Field(default=None, description="ISO calendar date, YYYY-MM-DD")
    time: Optional[str] = Field(default=None, description="Local time of day, HH:MM")
    party_size: Optional[Union[int, str]] = Field(default=None)
    phone_number: Optional[str] = Field(default=None)
    special_requests: Optional[str] = Field(default=None)

    @field_validator(
        "business_id", "customer_name", "date", "time", "phone_number", "special_requests",
        mode="before",
    )
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        # numbers are accepted wherever text is expected
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("party_size", mode="before")
    @classmethod
    def _whole_party_size(cls, value: Any) -> Any:
        if isinstance(value, float):
            return int(value) if value.is_integer() else str(value)
        return value

    def missing_fields(self) -> List[str]:
        required = {
            "customer_name": self.customer_name,
            "date": self.date,
            "time": self.time,
            "party_size": self.party_size,
            "phone_number": self.phone_number,
        }
        return [name for name, value in required.items() if value in (None, "", 0, "0")]


class ReservationOutcome(BaseModel):
    success: bool
    message: str
    suggested_action: Optional[SuggestedAction] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    businesses: List[str] = Field(default_factory=list)
