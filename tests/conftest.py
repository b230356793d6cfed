# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from timetrack.models import (
    Jurisdiction,
    TimeEntry,
    TimeOff,
    TimeOffType,
    UserCalendar,
    WorkingHours,
)

TEST_USER_ID = "user1"


@pytest.fixture
def standard_week() -> list[WorkingHours]:
    """Monday to Friday with 8 hours each, weekend off."""
    return [
        WorkingHours(
            user_id=TEST_USER_ID,
            weekday=weekday,
            is_working_day=weekday <= 5,
            hours=Decimal("8") if weekday <= 5 else Decimal("0"),
        )
        for weekday in range(1, 8)
    ]


@pytest.fixture
def make_entry() -> Callable[..., TimeEntry]:
    """Factory for completed or active time entries on one day."""

    def _make_entry(
        day: date,
        start: time,
        end: time | None = None,
        break_minutes: int = 0,
        user_id: str | None = TEST_USER_ID,
    ) -> TimeEntry:
        return TimeEntry(
            user_id=user_id,
            entry_date=day,
            clock_in=datetime.combine(day, start),
            clock_out=datetime.combine(day, end) if end is not None else None,
            break_minutes=break_minutes,
        )

    return _make_entry


@pytest.fixture
def make_time_off() -> Callable[..., TimeOff]:
    """Factory for time off records."""

    def _make_time_off(
        start: date,
        end: date,
        time_off_type: TimeOffType = TimeOffType.VACATION,
        hours_per_day: Decimal | None = None,
        user_id: str | None = TEST_USER_ID,
    ) -> TimeOff:
        return TimeOff(
            user_id=user_id,
            start_date=start,
            end_date=end,
            time_off_type=time_off_type,
            hours_per_day=hours_per_day,
        )

    return _make_time_off


@pytest.fixture
def make_calendar(standard_week: list[WorkingHours]) -> Callable[..., UserCalendar]:
    """Factory for a Berlin user calendar on the standard week."""

    def _make_calendar(**kwargs) -> UserCalendar:
        kwargs.setdefault("working_hours", standard_week)
        kwargs.setdefault("user_id", TEST_USER_ID)
        kwargs.setdefault("jurisdiction", Jurisdiction.BERLIN)
        return UserCalendar(**kwargs)

    return _make_calendar
