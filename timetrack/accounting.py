# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Daily hours accounting: expected vs actual hours per date."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from .classifier import (
    classify_day,
    holidays_for,
    matching_time_off,
    template_for,
    time_off_for_day,
)
from .config import DEFAULT_SETTINGS, TimeTrackingSettings
from .models import (
    ZERO,
    DailyResult,
    DailyStatus,
    DayCategory,
    TimeEntry,
    TimeOff,
    UserCalendar,
    WorkingHours,
    minutes_to_hours,
)
from .validators import validate_working_hours

# Categories where nothing is expected to be worked
ZERO_HOUR_CATEGORIES = frozenset(
    {
        DayCategory.WEEKEND,
        DayCategory.PUBLIC_HOLIDAY,
        DayCategory.RECURRING_OFF_DAY,
    }
)


def expected_minutes_for(
    category: DayCategory,
    template: WorkingHours,
    covering: Iterable[TimeOff] = (),
) -> Decimal:
    """Calculate the expected minutes of a classified day.

    Args:
        category: The day's category.
        template: The working hours row for the day's weekday.
        covering: Time off records covering the day.

    Returns:
        Zero for weekends, holidays and recurring off-days; the time off's
        hours per day override when set; the template target otherwise.
    """
    if category in ZERO_HOUR_CATEGORIES:
        return ZERO

    time_off = matching_time_off(category, covering)
    if time_off is not None and time_off.hours_per_day is not None:
        return time_off.hours_per_day * 60

    return template.target_minutes


def expected_hours_for(
    category: DayCategory,
    template: WorkingHours,
    covering: Iterable[TimeOff] = (),
) -> Decimal:
    """Expected hours of a classified day, quantized for display."""
    return minutes_to_hours(expected_minutes_for(category, template, covering))


def actual_minutes_for(entries: Iterable[TimeEntry]) -> int:
    """Sum net minutes of completed entries; active entries count as zero."""
    minutes = [entry.worked_minutes for entry in entries]
    return sum(m for m in minutes if m is not None)


def actual_hours_for(entries: Iterable[TimeEntry]) -> Decimal:
    """Sum net hours of completed entries, converted once from minutes."""
    return minutes_to_hours(actual_minutes_for(entries))


def determine_status(
    category: DayCategory,
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = DEFAULT_SETTINGS.status_tolerance_hours,
) -> DailyStatus:
    """Determine status by comparing actual vs expected hours."""
    if actual == ZERO:
        if category == DayCategory.NO_ENTRY:
            return DailyStatus.NO_ENTRY
        if category.is_off_day:
            return DailyStatus.MATCHED

    if abs(actual - expected) <= tolerance:
        return DailyStatus.MATCHED
    if actual < expected:
        return DailyStatus.BELOW_EXPECTED
    return DailyStatus.ABOVE_EXPECTED


def account_day(
    day: date,
    category: DayCategory,
    template: WorkingHours,
    entries: Sequence[TimeEntry] = (),
    time_off: Iterable[TimeOff] = (),
    tolerance: Decimal = DEFAULT_SETTINGS.status_tolerance_hours,
    recurring_off_day_conflict: bool = False,
) -> DailyResult:
    """Build the daily result for an already classified date.

    Args:
        day: The date.
        category: The date's category.
        template: Working hours row for the date's weekday.
        entries: Time entries; only those dated ``day`` are used.
        time_off: Time off records; only those covering ``day`` are used.
        tolerance: Hours actual may differ from expected and still match.
        recurring_off_day_conflict: Whether work was recorded on a
            recurring off-day.

    Returns:
        The daily result.
    """
    day_entries = tuple(
        sorted(
            (entry for entry in entries if entry.entry_date == day),
            key=lambda entry: entry.clock_in,
        )
    )
    covering = time_off_for_day(day, time_off)

    expected_minutes = expected_minutes_for(category, template, covering)
    actual_minutes = actual_minutes_for(day_entries)
    expected = minutes_to_hours(expected_minutes)
    actual = minutes_to_hours(actual_minutes)

    return DailyResult(
        date=day,
        category=category,
        expected_hours=expected,
        actual_hours=actual,
        status=determine_status(category, actual, expected, tolerance),
        expected_minutes=expected_minutes,
        actual_minutes=actual_minutes,
        entries=day_entries,
        time_off=tuple(covering),
        recurring_off_day_conflict=recurring_off_day_conflict,
    )


def compute_day(
    day: date,
    calendar: UserCalendar,
    settings: TimeTrackingSettings | None = None,
) -> DailyResult:
    """Classify a date and account its hours for a user calendar.

    Args:
        day: The date.
        calendar: The user's inputs.
        settings: Optional engine settings.

    Returns:
        The daily result.

    Raises:
        InvalidInputError: If the working hours template is incomplete.
    """
    settings = settings or DEFAULT_SETTINGS
    working_hours = validate_working_hours(calendar.working_hours)
    day_entries = [entry for entry in calendar.time_entries if entry.entry_date == day]

    category = classify_day(
        day,
        working_hours,
        holidays_for(calendar, day.year, settings),
        calendar.time_off,
        calendar.recurring_off_day,
        day_entries,
    )
    rule = calendar.recurring_off_day
    conflict = bool(day_entries) and rule is not None and rule(day)

    return account_day(
        day,
        category,
        template_for(day, working_hours),
        day_entries,
        calendar.time_off,
        settings.status_tolerance_hours,
        conflict,
    )
