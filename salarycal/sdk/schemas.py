"""Pydantic schemas for salary-calendar configuration.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in config files cause clear errors rather than silent ignoring.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .payment_dates import DEFAULT_PAYMENT_DAYS
from .schedule import DEFAULT_COUNT, MAX_SALARY_AMOUNT


DEFAULT_PROVIDER_URL = "https://isdayoff.ru"
DEFAULT_PROVIDER_TIMEOUT = 10.0


class SettingsSchema(BaseModel):
    """Machine-specific settings (settings.json)."""

    model_config = ConfigDict(extra="forbid")

    provider_url: str = Field(
        default=DEFAULT_PROVIDER_URL,
        description="Base URL of the production calendar service",
    )
    provider_timeout: float = Field(
        default=DEFAULT_PROVIDER_TIMEOUT, gt=0,
        description=(
            "Seconds before a calendar request is abandoned. A timed out "
            "request falls back to the weekend-only rule for that day."
        ),
    )
    profile: Optional[str] = Field(
        default=None,
        description="Custom location of profile.yaml",
    )


class ProfileSchema(BaseModel):
    """User profile (profile.yaml)."""

    model_config = ConfigDict(extra="forbid")

    monthly_salary: Optional[int] = Field(
        default=None, gt=0, le=MAX_SALARY_AMOUNT,
        description="Monthly salary in whole currency units",
    )
    payment_days: List[int] = Field(
        default_factory=lambda: list(DEFAULT_PAYMENT_DAYS),
        min_length=1,
        description="Nominal days of month the salary is paid on",
    )
    count: int = Field(
        default=DEFAULT_COUNT, gt=0, le=24,
        description="Number of upcoming payments to compute",
    )
    vacations: List[str] = Field(
        default_factory=list,
        description="Vacation dates or ranges, e.g. '01.07.2026-14.07.2026'",
    )

    @field_validator("payment_days")
    @classmethod
    def normalize_payment_days(cls, value: List[int]) -> List[int]:
        """Sort and de-duplicate; every day must be a valid day of month."""
        for day in value:
            if not 1 <= day <= 31:
                raise ValueError(f"payment day {day} is not between 1 and 31")
        return sorted(set(value))
