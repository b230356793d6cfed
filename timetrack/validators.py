# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time tracking input validators.

The accounting core assumes validated input. These checks let callers fail
fast with a descriptive error instead of producing a silently wrong result.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from .models import TimeEntry, TimeOff, WorkingHours

WEEKDAYS = range(1, 8)


class TimeTrackingError(Exception):
    """Base exception for time tracking errors."""


class InvalidInputError(TimeTrackingError, ValueError):
    """Input records do not satisfy the accounting preconditions."""


class ConflictingTimeOffError(InvalidInputError):
    """Time off records of different types overlap on the same date."""

    def __init__(self, conflicts: "list[TimeOffConflict]") -> None:
        self.conflicts = conflicts
        first = conflicts[0]
        super().__init__(
            f"{len(conflicts)} conflicting time off overlap(s), first: "
            f"{first.first.time_off_type.value} and "
            f"{first.second.time_off_type.value} "
            f"from {first.start} to {first.end}"
        )


@dataclass(frozen=True)
class TimeOffConflict:
    """Two time off records of different types sharing dates."""

    first: TimeOff
    second: TimeOff
    start: date
    end: date


def validate_working_hours(
    working_hours: Iterable[WorkingHours],
) -> dict[int, WorkingHours]:
    """Check that the template has exactly one row per weekday.

    Args:
        working_hours: The user's working hours template rows.

    Returns:
        Mapping of ISO weekday (1=Monday) to its template row.

    Raises:
        InvalidInputError: If a weekday is missing or configured twice.
    """
    by_weekday: dict[int, WorkingHours] = {}
    for row in working_hours:
        if row.weekday in by_weekday:
            raise InvalidInputError(
                f"Duplicate working hours configuration for weekday {row.weekday}"
            )
        by_weekday[row.weekday] = row

    missing = [weekday for weekday in WEEKDAYS if weekday not in by_weekday]
    if missing:
        raise InvalidInputError(
            f"No working hours configuration for weekday(s): "
            f"{', '.join(str(weekday) for weekday in missing)}"
        )

    return by_weekday


def validate_date_range(start: date, end: date) -> None:
    """Reject inverted ranges."""
    if start > end:
        raise InvalidInputError(f"Start date {start} is after end date {end}")


def validate_ownership(
    user_id: str | None,
    time_entries: Iterable[TimeEntry] = (),
    time_off: Iterable[TimeOff] = (),
) -> None:
    """Ensure all records belong to ``user_id``.

    Records without a user id are accepted. Nothing is checked when
    ``user_id`` is None.

    Raises:
        InvalidInputError: If a record belongs to another user.
    """
    if user_id is None:
        return

    for record in (*time_entries, *time_off):
        if record.user_id is not None and record.user_id != user_id:
            raise InvalidInputError(
                f"{type(record).__name__} {record.id} belongs to user "
                f"{record.user_id}, expected {user_id}"
            )


def find_time_off_conflicts(time_off: Sequence[TimeOff]) -> list[TimeOffConflict]:
    """Find overlapping time off records of different types.

    Overlaps of the same type are not conflicts, they classify the same way.

    Args:
        time_off: Time off records of a single user.

    Returns:
        The conflicting pairs, ordered by the earlier record's start date.
    """
    ordered = sorted(time_off, key=lambda record: (record.start_date, record.end_date))
    conflicts: list[TimeOffConflict] = []

    for index, first in enumerate(ordered):
        for second in ordered[index + 1:]:
            if second.start_date > first.end_date:
                break
            if second.time_off_type == first.time_off_type:
                continue
            conflicts.append(
                TimeOffConflict(
                    first=first,
                    second=second,
                    start=second.start_date,
                    end=min(first.end_date, second.end_date),
                )
            )

    return conflicts


def validate_time_off(time_off: Sequence[TimeOff]) -> None:
    """Reject overlapping time off of conflicting types.

    Raises:
        ConflictingTimeOffError: If any conflicting overlap exists.
    """
    conflicts = find_time_off_conflicts(time_off)
    if conflicts:
        raise ConflictingTimeOffError(conflicts)
