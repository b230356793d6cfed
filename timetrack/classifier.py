# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Day classification by strict day type precedence.

Precedence (highest to lowest):
1. Weekend - weekday not configured as a working day
2. Public holiday - statutory or declared holiday
3. Sick - overrides recurring off-days, illness is not a scheduling choice
4. Personal - overrides recurring off-days like sick leave
5. Recurring off-day - a pre-scheduled off day never consumes vacation
6. Vacation
7. Work - at least one time entry recorded
8. No entry - none of the above
"""

import logging
from collections.abc import Callable, Collection, Iterable, Mapping
from datetime import date

from .config import DEFAULT_SETTINGS, TimeTrackingSettings
from .models import (
    DAY_TYPE_PRECEDENCE,
    TIME_OFF_CATEGORIES,
    DayCategory,
    RecurringOffDayRule,
    TimeEntry,
    TimeOff,
    TimeOffType,
    UserCalendar,
    WorkingHours,
)
from .public_holidays import holidays
from .validators import InvalidInputError, validate_working_hours

logger = logging.getLogger(__name__)

PRECEDENCE_ORDER: tuple[DayCategory, ...] = tuple(
    sorted(DAY_TYPE_PRECEDENCE, key=DAY_TYPE_PRECEDENCE.__getitem__)
)


def template_for(day: date, working_hours: Mapping[int, WorkingHours]) -> WorkingHours:
    """Return the template row for the weekday of ``day``.

    Raises:
        InvalidInputError: If the weekday has no configuration.
    """
    template = working_hours.get(day.isoweekday())
    if template is None:
        raise InvalidInputError(
            f"No working hours configuration for weekday {day.isoweekday()}"
        )
    return template


def time_off_for_day(day: date, time_off: Iterable[TimeOff]) -> list[TimeOff]:
    """Return the time off records covering ``day``, earliest start first."""
    covering = [record for record in time_off if record.covers(day)]
    return sorted(covering, key=lambda record: record.start_date)


def matching_time_off(
    category: DayCategory, covering: Iterable[TimeOff]
) -> TimeOff | None:
    """Return the time off record that produced ``category``, if any."""
    time_off_type = TIME_OFF_CATEGORIES.get(category)
    if time_off_type is None:
        return None
    return next(
        (record for record in covering if record.time_off_type == time_off_type),
        None,
    )


def classify_day(
    day: date,
    working_hours: Mapping[int, WorkingHours],
    holiday_dates: Collection[date],
    time_off: Iterable[TimeOff] = (),
    recurring_off_day: RecurringOffDayRule | None = None,
    entries: Iterable[TimeEntry] = (),
) -> DayCategory:
    """Classify a date into exactly one day category.

    Categories are checked in precedence order and the first match wins, so
    the result never depends on the order of the input records.

    Args:
        day: The date to classify.
        working_hours: Template rows keyed by ISO weekday.
        holiday_dates: Public holidays that apply to the user.
        time_off: The user's time off records.
        recurring_off_day: Optional predicate for recurring off-days.
        entries: The user's time entries.

    Returns:
        The winning day category.

    Raises:
        InvalidInputError: If the weekday has no template row.
    """
    template = template_for(day, working_hours)
    covering_types = {
        record.time_off_type for record in time_off_for_day(day, time_off)
    }

    if len(covering_types) > 1:
        logger.warning(
            f"Conflicting time off types on {day}: "
            f"{sorted(t.value for t in covering_types)}; resolved by precedence"
        )

    checks: dict[DayCategory, Callable[[], bool]] = {
        DayCategory.WEEKEND: lambda: not template.is_working_day,
        DayCategory.PUBLIC_HOLIDAY: lambda: (
            day in holiday_dates or TimeOffType.PUBLIC_HOLIDAY in covering_types
        ),
        DayCategory.SICK: lambda: TimeOffType.SICK in covering_types,
        DayCategory.PERSONAL: lambda: TimeOffType.PERSONAL in covering_types,
        DayCategory.RECURRING_OFF_DAY: lambda: (
            recurring_off_day is not None and recurring_off_day(day)
        ),
        DayCategory.VACATION: lambda: TimeOffType.VACATION in covering_types,
        DayCategory.WORK: lambda: any(entry.entry_date == day for entry in entries),
        DayCategory.NO_ENTRY: lambda: True,
    }

    return next(category for category in PRECEDENCE_ORDER if checks[category]())


def holidays_for(
    calendar: UserCalendar,
    year: int,
    settings: TimeTrackingSettings = DEFAULT_SETTINGS,
) -> Collection[date]:
    """Return the holiday dates applying to a user calendar for a year."""
    if calendar.holidays is not None:
        return calendar.holidays
    return holidays(year, calendar.jurisdiction or settings.default_jurisdiction)


def classify(
    day: date,
    calendar: UserCalendar,
    settings: TimeTrackingSettings | None = None,
) -> DayCategory:
    """Classify a date for a user calendar.

    Args:
        day: The date to classify.
        calendar: The user's inputs.
        settings: Optional engine settings.

    Returns:
        The winning day category.
    """
    settings = settings or DEFAULT_SETTINGS
    return classify_day(
        day,
        validate_working_hours(calendar.working_hours),
        holidays_for(calendar, day.year, settings),
        calendar.time_off,
        calendar.recurring_off_day,
        calendar.time_entries,
    )
