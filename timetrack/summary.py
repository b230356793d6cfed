# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Daily summaries over a date range."""

import logging
from calendar import monthrange
from collections import Counter, defaultdict
from collections.abc import Iterator
from datetime import date, timedelta

from .accounting import account_day
from .classifier import classify_day, holidays_for, template_for
from .config import DEFAULT_SETTINGS, TimeTrackingSettings
from .models import (
    ZERO,
    DailyResult,
    RangeSummary,
    TimeEntry,
    UserCalendar,
    minutes_to_hours,
)
from .validators import validate_date_range, validate_ownership, validate_working_hours

logger = logging.getLogger(__name__)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def iter_daily_results(
    calendar: UserCalendar,
    start: date,
    end: date,
    settings: TimeTrackingSettings | None = None,
) -> Iterator[DailyResult]:
    """Yield one daily result per date in [start, end], in ascending order.

    Dates without any data resolve to NO_ENTRY, so there are never gaps.
    Calling it again with the same inputs yields the same results.

    Args:
        calendar: The user's inputs.
        start: First date (inclusive).
        end: Last date (inclusive).
        settings: Optional engine settings.

    Yields:
        The daily results.

    Raises:
        InvalidInputError: On an inverted range, an incomplete working
            hours template, or records of another user.
    """
    settings = settings or DEFAULT_SETTINGS
    validate_date_range(start, end)
    validate_ownership(calendar.user_id, calendar.time_entries, calendar.time_off)
    working_hours = validate_working_hours(calendar.working_hours)

    entries_by_date: dict[date, list[TimeEntry]] = defaultdict(list)
    for entry in calendar.time_entries:
        if start <= entry.entry_date <= end:
            entries_by_date[entry.entry_date].append(entry)

    time_off = [
        record
        for record in calendar.time_off
        if record.start_date <= end and record.end_date >= start
    ]
    rule = calendar.recurring_off_day

    for day in iter_dates(start, end):
        day_entries = entries_by_date.get(day, [])
        category = classify_day(
            day,
            working_hours,
            holidays_for(calendar, day.year, settings),
            time_off,
            rule,
            day_entries,
        )
        yield account_day(
            day,
            category,
            template_for(day, working_hours),
            day_entries,
            time_off,
            settings.status_tolerance_hours,
            bool(day_entries) and rule is not None and rule(day),
        )


def summarize(
    calendar: UserCalendar,
    start: date,
    end: date,
    settings: TimeTrackingSettings | None = None,
) -> RangeSummary:
    """Summarize a user's days over an inclusive date range.

    Args:
        calendar: The user's inputs.
        start: First date (inclusive).
        end: Last date (inclusive).
        settings: Optional engine settings.

    Returns:
        The daily results with actual and expected totals. Totals are
        converted from the summed minutes of all days.
    """
    days = tuple(iter_daily_results(calendar, start, end, settings))

    total_actual = minutes_to_hours(sum(day.actual_minutes for day in days))
    total_expected = minutes_to_hours(
        sum((day.expected_minutes for day in days), ZERO)
    )
    counts = Counter(day.category for day in days)

    logger.debug(
        f"Generated {len(days)} daily summaries for user {calendar.user_id} "
        f"from {start} to {end}: actual={total_actual}, expected={total_expected}"
    )

    return RangeSummary(
        start=start,
        end=end,
        days=days,
        total_actual_hours=total_actual,
        total_expected_hours=total_expected,
        category_counts=dict(counts),
    )


def summarize_month(
    calendar: UserCalendar,
    year: int,
    month: int,
    settings: TimeTrackingSettings | None = None,
) -> RangeSummary:
    """Summarize a whole calendar month."""
    _, last_day = monthrange(year, month)
    return summarize(calendar, date(year, month, 1), date(year, month, last_day), settings)
