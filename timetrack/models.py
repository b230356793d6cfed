# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time tracking domain records and computed result types."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

HOURS_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")

RecurringOffDayRule = Callable[[date], bool]


def minutes_to_hours(minutes: int | Decimal) -> Decimal:
    """Convert minutes into hours, quantized to 0.01h.

    Quantize once per displayed value. Totals must be converted from summed
    minutes, never summed from converted hours.

    Args:
        minutes: Number of minutes.

    Returns:
        The hours as a fixed-point decimal.
    """
    return (Decimal(minutes) / Decimal(60)).quantize(
        HOURS_QUANTUM, rounding=ROUND_HALF_UP
    )


def minutes_between(start: time, end: time) -> int:
    """Calculate minutes between two times of the same day."""
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    return end_minutes - start_minutes


class EntryType(str, Enum):
    """Types of time entries.

    Only WORK is recorded as an entry - absences are tracked as TimeOff.
    """

    WORK = "work"


class TimeOffType(str, Enum):
    """Types of time off."""

    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    PUBLIC_HOLIDAY = "public_holiday"


class DayCategory(str, Enum):
    """The single winning classification of a calendar date."""

    WEEKEND = "weekend"
    PUBLIC_HOLIDAY = "public_holiday"
    SICK = "sick"
    PERSONAL = "personal"
    RECURRING_OFF_DAY = "recurring_off_day"
    VACATION = "vacation"
    WORK = "work"
    NO_ENTRY = "no_entry"

    @property
    def priority(self) -> int:
        """Numeric priority; lower values win."""
        return DAY_TYPE_PRECEDENCE[self]

    def has_higher_priority_than(self, other: "DayCategory") -> bool:
        """Return True if this category wins over ``other``."""
        return self.priority < other.priority

    @property
    def is_off_day(self) -> bool:
        """True for categories where no work is expected to be recorded."""
        return self not in (DayCategory.WORK, DayCategory.NO_ENTRY)


# Precedence table: category -> priority (1 = highest).
DAY_TYPE_PRECEDENCE: dict[DayCategory, int] = {
    DayCategory.WEEKEND: 1,
    DayCategory.PUBLIC_HOLIDAY: 2,
    DayCategory.SICK: 3,
    DayCategory.PERSONAL: 4,
    DayCategory.RECURRING_OFF_DAY: 5,
    DayCategory.VACATION: 6,
    DayCategory.WORK: 7,
    DayCategory.NO_ENTRY: 8,
}

# TimeOff type that produces each time-off category.
TIME_OFF_CATEGORIES: dict[DayCategory, TimeOffType] = {
    DayCategory.PUBLIC_HOLIDAY: TimeOffType.PUBLIC_HOLIDAY,
    DayCategory.SICK: TimeOffType.SICK,
    DayCategory.PERSONAL: TimeOffType.PERSONAL,
    DayCategory.VACATION: TimeOffType.VACATION,
}


class DailyStatus(str, Enum):
    """Status comparing actual vs expected hours for a day."""

    NO_ENTRY = "no_entry"
    BELOW_EXPECTED = "below_expected"
    MATCHED = "matched"
    ABOVE_EXPECTED = "above_expected"


class Jurisdiction(str, Enum):
    """German states supported for public holiday calculation."""

    BERLIN = "berlin"
    BRANDENBURG = "brandenburg"


# --- Input records ---


class WorkingHours(BaseModel):
    """Working hours template row for one weekday of a user."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    user_id: str | None = None
    weekday: int = Field(ge=1, le=7)  # ISO weekday, 1=Monday
    is_working_day: bool
    hours: Decimal = ZERO
    start_time: time | None = None
    end_time: time | None = None
    break_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_times(self) -> "WorkingHours":
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("start_time and end_time must be set together")
        if self.start_time is not None and self.end_time is not None:
            if self.end_time <= self.start_time:
                raise ValueError("end_time must be after start_time")
            span = minutes_between(self.start_time, self.end_time)
            if self.break_minutes > span:
                raise ValueError(
                    f"break_minutes ({self.break_minutes}) exceeds "
                    f"working span ({span} min)"
                )
        elif self.hours < ZERO:
            raise ValueError("hours must not be negative")
        return self

    @property
    def target_minutes(self) -> Decimal:
        """Target minutes, derived from start/end time when both are set."""
        if self.start_time is not None and self.end_time is not None:
            span = minutes_between(self.start_time, self.end_time)
            return Decimal(span - self.break_minutes)
        return self.hours * 60

    @property
    def target_hours(self) -> Decimal:
        """Target hours for display."""
        if self.start_time is not None and self.end_time is not None:
            return minutes_to_hours(self.target_minutes)
        return self.hours


class TimeEntry(BaseModel):
    """A recorded work session (clock in / clock out pair)."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = None
    user_id: str | None = None
    entry_date: date
    clock_in: datetime
    clock_out: datetime | None = None
    break_minutes: int = Field(default=0, ge=0)
    entry_type: EntryType = EntryType.WORK
    notes: str | None = None

    @model_validator(mode="after")
    def _check_clock_out(self) -> "TimeEntry":
        if self.clock_out is None:
            return self
        if self.clock_out <= self.clock_in:
            raise ValueError("clock_out must be strictly after clock_in")
        gross = int((self.clock_out - self.clock_in).total_seconds() // 60)
        if self.break_minutes > gross:
            raise ValueError(
                f"break_minutes ({self.break_minutes}) exceeds "
                f"clocked time ({gross} min)"
            )
        return self

    @property
    def is_active(self) -> bool:
        """Check if the entry is still running (not clocked out)."""
        return self.clock_out is None

    @property
    def worked_minutes(self) -> int | None:
        """Net minutes worked, or None while the entry is active."""
        if self.clock_out is None:
            return None
        gross = int((self.clock_out - self.clock_in).total_seconds() // 60)
        return gross - self.break_minutes

    @property
    def hours_worked(self) -> Decimal | None:
        """Net hours worked, or None while the entry is active."""
        minutes = self.worked_minutes
        return minutes_to_hours(minutes) if minutes is not None else None


class TimeOff(BaseModel):
    """Time off entry (vacation, sick days, etc.) over an inclusive range."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = None
    user_id: str | None = None
    start_date: date
    end_date: date
    time_off_type: TimeOffType
    hours_per_day: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None

    @model_validator(mode="after")
    def _check_range(self) -> "TimeOff":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    def covers(self, day: date) -> bool:
        """Check whether ``day`` falls inside this time off."""
        return self.start_date <= day <= self.end_date

    def days_within(self, start: date, end: date) -> list[date]:
        """List the dates of this time off that fall inside [start, end]."""
        first = max(self.start_date, start)
        last = min(self.end_date, end)
        if first > last:
            return []
        return [first + timedelta(days=n) for n in range((last - first).days + 1)]


class VacationAllowance(BaseModel):
    """Stored vacation entitlement of a user for one year."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    user_id: str | None = None
    year: int
    annual_allowance_days: Decimal = Decimal("30")
    carried_over_days: Decimal = ZERO
    adjustment_days: Decimal = ZERO


# --- Computed results ---


@dataclass(frozen=True)
class VacationBalance:
    """Vacation balance of a user for one year, in days."""

    user_id: str | None
    year: int
    annual_allowance_days: Decimal
    carried_over_days: Decimal
    adjustment_days: Decimal
    used_days: Decimal
    planned_days: Decimal = ZERO

    @property
    def remaining_days(self) -> Decimal:
        """Allowance + carried over + adjustment - used."""
        return (
            self.annual_allowance_days
            + self.carried_over_days
            + self.adjustment_days
            - self.used_days
        )

    @property
    def available_after_planned(self) -> Decimal:
        """Remaining days once planned vacation is taken as well."""
        return self.remaining_days - self.planned_days


@dataclass(frozen=True)
class DailyResult:
    """Classification and hours accounting for a single day."""

    date: date
    category: DayCategory
    expected_hours: Decimal
    actual_hours: Decimal
    status: DailyStatus
    # Unrounded amounts, summed by range totals
    expected_minutes: Decimal = ZERO
    actual_minutes: int = 0
    entries: tuple[TimeEntry, ...] = ()
    time_off: tuple[TimeOff, ...] = ()
    recurring_off_day_conflict: bool = False

    @property
    def has_active_entry(self) -> bool:
        """True while any entry of the day is still clocked in."""
        return any(entry.is_active for entry in self.entries)

    @property
    def difference_hours(self) -> Decimal:
        """Actual minus expected hours."""
        return self.actual_hours - self.expected_hours


@dataclass(frozen=True)
class RangeSummary:
    """Daily results for a date range plus totals."""

    start: date
    end: date
    days: tuple[DailyResult, ...]
    total_actual_hours: Decimal = ZERO
    total_expected_hours: Decimal = ZERO
    category_counts: dict[DayCategory, int] = field(default_factory=dict)

    @property
    def balance_hours(self) -> Decimal:
        """Overtime (positive) or shortfall (negative) over the range."""
        return self.total_actual_hours - self.total_expected_hours

    def __len__(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class UserCalendar:
    """All per-user inputs needed to classify and account dates.

    Gathered by the caller from storage; the core never loads data itself.
    """

    working_hours: Sequence[WorkingHours]
    user_id: str | None = None
    jurisdiction: Jurisdiction | None = None
    time_entries: Sequence[TimeEntry] = ()
    time_off: Sequence[TimeOff] = ()
    recurring_off_day: RecurringOffDayRule | None = None
    holidays: frozenset[date] | None = None
