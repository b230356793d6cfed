# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Vacation balance calculation."""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from .classifier import classify_day, holidays_for
from .config import DEFAULT_SETTINGS, TimeTrackingSettings, VacationCountMode
from .models import (
    ZERO,
    DayCategory,
    TimeOff,
    TimeOffType,
    UserCalendar,
    VacationAllowance,
    VacationBalance,
)
from .public_holidays import is_half_day_holiday
from .validators import InvalidInputError, validate_ownership, validate_working_hours

logger = logging.getLogger(__name__)

FULL_DAY = Decimal("1")
HALF_DAY = Decimal("0.5")


def vacation_dates(time_off: Iterable[TimeOff], year: int) -> list[date]:
    """Collect the dates of every vacation record falling inside ``year``.

    Each record contributes its own dates, so a date covered by two
    overlapping vacation records appears twice.
    """
    year_start = date(year, 1, 1)
    year_end = date(year, 12, 31)
    dates: list[date] = []
    for record in time_off:
        if record.time_off_type == TimeOffType.VACATION:
            dates.extend(record.days_within(year_start, year_end))
    return sorted(dates)


def _day_weights(
    dates: list[date],
    time_off: list[TimeOff],
    mode: VacationCountMode,
    calendar: UserCalendar | None,
    settings: TimeTrackingSettings,
) -> list[tuple[date, Decimal]]:
    if mode == VacationCountMode.CALENDAR_DAYS:
        return [(day, FULL_DAY) for day in dates]

    if calendar is None:
        raise InvalidInputError(
            "Counting vacation working days requires the user's calendar"
        )

    working_hours = validate_working_hours(calendar.working_hours)
    weights: list[tuple[date, Decimal]] = []
    for day in dates:
        category = classify_day(
            day,
            working_hours,
            holidays_for(calendar, day.year, settings),
            time_off,
            calendar.recurring_off_day,
        )
        if category != DayCategory.VACATION:
            continue
        if settings.half_day_holidays_enabled and is_half_day_holiday(day):
            weights.append((day, HALF_DAY))
        else:
            weights.append((day, FULL_DAY))
    return weights


def count_vacation_days(
    time_off: Iterable[TimeOff],
    year: int,
    mode: VacationCountMode = VacationCountMode.CALENDAR_DAYS,
    calendar: UserCalendar | None = None,
    settings: TimeTrackingSettings | None = None,
) -> Decimal:
    """Count vacation days of a year.

    Args:
        time_off: Time off records; non-vacation records are ignored.
        year: The year to count.
        mode: Count calendar days, or only days classified as vacation.
        calendar: The user's calendar, required for working day counting.
        settings: Optional engine settings.

    Returns:
        The number of vacation days, possibly fractional.
    """
    settings = settings or DEFAULT_SETTINGS
    records = list(time_off)
    weights = _day_weights(
        vacation_dates(records, year), records, mode, calendar, settings
    )
    return sum((weight for _, weight in weights), ZERO)


def calculate_vacation_balance(
    allowance: VacationAllowance | None,
    time_off: Iterable[TimeOff],
    year: int,
    user_id: str | None = None,
    calendar: UserCalendar | None = None,
    as_of: date | None = None,
    settings: TimeTrackingSettings | None = None,
) -> VacationBalance:
    """Recalculate the vacation balance of a user for a year.

    Used days are always derived from the time off records, never read from
    a stored value, and remaining days follow from them.

    Args:
        allowance: Stored entitlement; the configured default when None.
        time_off: The user's time off records.
        year: The year.
        user_id: Optional owner; records of other users are rejected.
        calendar: The user's calendar, required for working day counting.
        as_of: When set, vacation after this date counts as planned only.
        settings: Optional engine settings.

    Returns:
        The recomputed vacation balance.
    """
    settings = settings or DEFAULT_SETTINGS
    records = list(time_off)
    user_id = user_id or (allowance.user_id if allowance else None)
    validate_ownership(user_id, time_off=records)

    if allowance is None:
        allowance = VacationAllowance(
            user_id=user_id,
            year=year,
            annual_allowance_days=settings.default_annual_allowance_days,
        )
    elif allowance.year != year:
        raise InvalidInputError(f"Allowance is for year {allowance.year}, not {year}")

    weights = _day_weights(
        vacation_dates(records, year),
        records,
        settings.vacation_count_mode,
        calendar,
        settings,
    )
    used = ZERO
    planned = ZERO
    for day, weight in weights:
        if as_of is not None and day > as_of:
            planned += weight
        else:
            used += weight

    balance = VacationBalance(
        user_id=user_id,
        year=year,
        annual_allowance_days=allowance.annual_allowance_days,
        carried_over_days=allowance.carried_over_days,
        adjustment_days=allowance.adjustment_days,
        used_days=used,
        planned_days=planned,
    )
    logger.debug(
        f"Vacation balance for user {user_id} and year {year}: "
        f"used={balance.used_days}, planned={balance.planned_days}, "
        f"remaining={balance.remaining_days}"
    )
    return balance


def calculate_carryover(
    balance: VacationBalance,
    max_carryover_days: Decimal | None = None,
) -> Decimal:
    """Calculate how many days can be carried over to the next year.

    Nothing carries over from an exhausted or overdrawn balance.
    """
    remaining = balance.remaining_days
    if remaining <= ZERO:
        return ZERO
    if max_carryover_days is None:
        return remaining
    return min(remaining, max_carryover_days)


def next_year_allowance(
    balance: VacationBalance,
    annual_allowance_days: Decimal | None = None,
    settings: TimeTrackingSettings | None = None,
) -> VacationAllowance:
    """Create next year's allowance with carry-over from ``balance``."""
    settings = settings or DEFAULT_SETTINGS
    if annual_allowance_days is None:
        annual_allowance_days = balance.annual_allowance_days
    return VacationAllowance(
        user_id=balance.user_id,
        year=balance.year + 1,
        annual_allowance_days=annual_allowance_days,
        carried_over_days=calculate_carryover(balance, settings.max_carryover_days),
    )
