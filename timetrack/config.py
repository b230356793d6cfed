# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time tracking settings."""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import Jurisdiction


class VacationCountMode(str, Enum):
    """How vacation time off is converted into used vacation days."""

    # Every calendar day of the vacation range counts
    CALENDAR_DAYS = "calendar_days"
    # Only days the classifier resolves to VACATION count
    WORKING_DAYS = "working_days"


class TimeTrackingSettings(BaseModel):
    """Tunables of the time accounting engine."""

    model_config = ConfigDict(frozen=True)

    default_jurisdiction: Jurisdiction = Field(
        default=Jurisdiction.BERLIN,
        title="Default Jurisdiction",
        description="State used for public holidays when a user has none",
    )
    status_tolerance_hours: Decimal = Field(
        default=Decimal("0.01"),
        ge=0,
        title="Status Tolerance",
        description="Hours actual may differ from expected and still match",
    )
    vacation_count_mode: VacationCountMode = Field(
        default=VacationCountMode.CALENDAR_DAYS,
        title="Vacation Count Mode",
        description="Count calendar days or only effective vacation days",
    )
    half_day_holidays_enabled: bool = Field(
        default=False,
        title="Half-Day Holidays",
        description="Dec 24 and Dec 31 count as half vacation days",
    )
    default_annual_allowance_days: Decimal = Field(
        default=Decimal("30"),
        ge=0,
        title="Default Annual Allowance",
        description="Vacation days per year for users without a balance",
    )
    max_carryover_days: Decimal | None = Field(
        default=None,
        ge=0,
        title="Maximum Carry-over",
        description="Cap on unused days carried into the next year",
    )

    @classmethod
    def from_settings(cls, settings: dict[str, Any] | None) -> "TimeTrackingSettings":
        """Build settings from a plain configuration mapping.

        Unknown keys are ignored so a shared settings dictionary can be passed.

        Args:
            settings: Configuration values keyed by field name.

        Returns:
            The validated settings.
        """
        settings = settings or {}
        known = {key: value for key, value in settings.items() if key in cls.model_fields}
        return cls.model_validate(known)

    @classmethod
    def get_config_schema(cls) -> dict[str, Any]:
        """Return JSON Schema for the settings."""
        return cls.model_json_schema()


DEFAULT_SETTINGS = TimeTrackingSettings()
