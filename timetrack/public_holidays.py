# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Public holiday calculation for the supported German states."""

from datetime import date, timedelta
from functools import lru_cache

from .models import Jurisdiction

# First year of the Gregorian calendar the Easter computation is valid for
GREGORIAN_START_YEAR = 1583

NATIONWIDE_FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "New Year's Day"),
    (5, 1, "Labour Day"),
    (10, 3, "German Unity Day"),
    (12, 25, "Christmas Day"),
    (12, 26, "Second Day of Christmas"),
)

STATE_FIXED_HOLIDAYS: dict[Jurisdiction, tuple[tuple[int, int, str], ...]] = {
    Jurisdiction.BERLIN: ((3, 8, "International Women's Day"),),
    Jurisdiction.BRANDENBURG: ((10, 31, "Reformation Day"),),
}

# Offsets in days from Easter Sunday
EASTER_OFFSETS: tuple[tuple[int, str], ...] = (
    (-2, "Good Friday"),
    (1, "Easter Monday"),
    (39, "Ascension Day"),
    (50, "Whit Monday"),
)

HALF_DAY_HOLIDAYS: tuple[tuple[int, int], ...] = ((12, 24), (12, 31))


def calculate_easter_sunday(year: int) -> date:
    """Calculate Easter Sunday with the Meeus/Jones/Butcher algorithm.

    Args:
        year: Gregorian year, 1583 or later.

    Returns:
        The date of Easter Sunday.

    Raises:
        ValueError: If the year predates the Gregorian calendar.
    """
    if year < GREGORIAN_START_YEAR:
        raise ValueError(
            f"Easter calculation requires a Gregorian year >= "
            f"{GREGORIAN_START_YEAR}, got {year}"
        )

    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1

    return date(year, month, day)


@lru_cache(maxsize=256)
def _holiday_table(
    year: int, jurisdiction: Jurisdiction
) -> tuple[tuple[date, str], ...]:
    entries: dict[date, str] = {}

    for month, day, name in NATIONWIDE_FIXED_HOLIDAYS:
        entries[date(year, month, day)] = name

    for month, day, name in STATE_FIXED_HOLIDAYS.get(jurisdiction, ()):
        entries[date(year, month, day)] = name

    easter = calculate_easter_sunday(year)
    for offset, name in EASTER_OFFSETS:
        entries[easter + timedelta(days=offset)] = name

    return tuple(sorted(entries.items()))


def get_public_holidays(year: int, jurisdiction: Jurisdiction) -> dict[date, str]:
    """Get public holidays for a year.

    Args:
        year: The year.
        jurisdiction: The state whose holidays apply.

    Returns:
        Dictionary mapping dates to holiday names, ordered by date.
    """
    return dict(_holiday_table(year, Jurisdiction(jurisdiction)))


def holidays(year: int, jurisdiction: Jurisdiction) -> frozenset[date]:
    """Return the set of public holiday dates for a year."""
    table = _holiday_table(year, Jurisdiction(jurisdiction))
    return frozenset(holiday_date for holiday_date, _ in table)


def is_public_holiday(check_date: date, jurisdiction: Jurisdiction) -> bool:
    """Check if a date is a public holiday in the given state."""
    return check_date in holidays(check_date.year, jurisdiction)


def get_holiday_name(check_date: date, jurisdiction: Jurisdiction) -> str | None:
    """Get the name of the holiday on a date, or None if it is no holiday."""
    return get_public_holidays(check_date.year, jurisdiction).get(check_date)


def is_half_day_holiday(check_date: date) -> bool:
    """Check if a date is Christmas Eve or New Year's Eve."""
    return (check_date.month, check_date.day) in HALF_DAY_HOLIDAYS
