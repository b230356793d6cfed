# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for engine settings."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from timetrack.config import DEFAULT_SETTINGS, TimeTrackingSettings, VacationCountMode
from timetrack.models import Jurisdiction


class TestTimeTrackingSettings:
    """Tests for TimeTrackingSettings."""

    def test_defaults(self) -> None:
        """Defaults count calendar days with a 0.01 hour tolerance."""
        assert DEFAULT_SETTINGS.default_jurisdiction == Jurisdiction.BERLIN
        assert DEFAULT_SETTINGS.status_tolerance_hours == Decimal("0.01")
        assert DEFAULT_SETTINGS.vacation_count_mode == VacationCountMode.CALENDAR_DAYS
        assert DEFAULT_SETTINGS.half_day_holidays_enabled is False
        assert DEFAULT_SETTINGS.default_annual_allowance_days == Decimal("30")
        assert DEFAULT_SETTINGS.max_carryover_days is None

    def test_from_settings(self) -> None:
        """Plain values are validated and unknown keys ignored."""
        settings = TimeTrackingSettings.from_settings(
            {
                "default_jurisdiction": "brandenburg",
                "vacation_count_mode": "working_days",
                "max_carryover_days": "5",
                "reminder_enabled": True,
            }
        )

        assert settings.default_jurisdiction == Jurisdiction.BRANDENBURG
        assert settings.vacation_count_mode == VacationCountMode.WORKING_DAYS
        assert settings.max_carryover_days == Decimal("5")

    def test_from_empty_settings(self) -> None:
        """None gives the defaults."""
        assert TimeTrackingSettings.from_settings(None) == DEFAULT_SETTINGS

    def test_negative_tolerance_rejected(self) -> None:
        """Negative tolerances are invalid."""
        with pytest.raises(ValidationError):
            TimeTrackingSettings(status_tolerance_hours=Decimal("-0.5"))

    def test_unknown_jurisdiction_rejected(self) -> None:
        """Only supported states are accepted."""
        with pytest.raises(ValidationError):
            TimeTrackingSettings.from_settings({"default_jurisdiction": "bavaria"})

    def test_settings_are_frozen(self) -> None:
        """Settings cannot be changed after creation."""
        with pytest.raises(ValidationError):
            DEFAULT_SETTINGS.half_day_holidays_enabled = True

    def test_config_schema(self) -> None:
        """The JSON schema lists every setting."""
        schema = TimeTrackingSettings.get_config_schema()

        assert schema["type"] == "object"
        assert set(schema["properties"]) == set(TimeTrackingSettings.model_fields)
        assert schema["properties"]["half_day_holidays_enabled"]["title"] == (
            "Half-Day Holidays"
        )
