from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.services.availability import AvailabilityPolicy
from src.services.reservation import InsertFailurePolicy


class Settings(BaseSettings):
    """Central application configuration."""

    app_name: str = Field(default="Reservation Webhook")
    debug: bool = Field(default=False)
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")

    # Google Calendar
    service_account_key: str = Field(
        default="",
        validation_alias=AliasChoices("SERVICE_ACCOUNT_KEY", "GOOGLE_SERVICE_ACCOUNT_KEY"),
    )
    google_calendar_id: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_CALENDAR_ID", "CALENDAR_ID"),
    )

    # Business
    default_business_id: str = Field(
        default="dollar-shop",
        validation_alias=AliasChoices("BUSINESS_ID", "DEFAULT_BUSINESS_ID"),
    )
    business_name: str = Field(default="Dollar Shop Hot Pot")
    business_timezone: str = Field(default="America/New_York")
    reservation_duration_minutes: int = Field(default=90, gt=0)
    open_hour: int = Field(default=11, ge=0, le=24)
    close_hour: int = Field(default=22, ge=0, le=24)
    enforce_business_hours: bool = Field(default=False)

    # Failure policies
    availability_policy: AvailabilityPolicy = Field(default=AvailabilityPolicy.FAIL_OPEN)
    insert_failure_policy: InsertFailurePolicy = Field(default=InsertFailurePolicy.REPORT_SUCCESS)

    @field_validator("business_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
