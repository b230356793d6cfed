# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Recurring off-day rules (e.g. every 2nd Monday of the month)."""

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .models import RecurringOffDayRule

logger = logging.getLogger(__name__)

LAST_OCCURRENCE = 5


class RecurrencePattern(str, Enum):
    """Recurrence pattern types for recurring off-days."""

    EVERY_NTH_WEEK = "every_nth_week"  # e.g. every 4 weeks
    NTH_WEEKDAY_OF_MONTH = "nth_weekday_of_month"  # e.g. 4th Monday


class RecurringOffDay(BaseModel):
    """Recurring off-day pattern of a user."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str | None = None
    user_id: str | None = None
    recurrence_pattern: RecurrencePattern
    weekday: int = Field(ge=1, le=7)  # ISO weekday, 1=Monday
    # EVERY_NTH_WEEK
    week_interval: int | None = None
    reference_date: date | None = None
    # NTH_WEEKDAY_OF_MONTH: 1-4, or 5 for the last occurrence
    week_of_month: int | None = None
    start_date: date
    end_date: date | None = None
    is_active: bool = True
    description: str | None = None


class RecurringOffDayExemption(BaseModel):
    """A single date on which a recurring off-day rule does not apply."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    recurring_off_day_id: str | None = None
    exemption_date: date
    reason: str | None = None


def applies_to_date(rule: RecurringOffDay, check_date: date) -> bool:
    """Check if a recurring off-day pattern matches a date.

    Exemptions are not considered here, see :func:`build_off_day_rule`.

    Args:
        rule: The recurring off-day rule.
        check_date: The date to check.

    Returns:
        True if the rule's pattern matches this date.
    """
    if not rule.is_active:
        return False

    if check_date < rule.start_date:
        return False
    if rule.end_date is not None and check_date > rule.end_date:
        return False

    if check_date.isoweekday() != rule.weekday:
        return False

    if rule.recurrence_pattern == RecurrencePattern.EVERY_NTH_WEEK:
        return _matches_every_nth_week(rule, check_date)
    return _matches_nth_weekday_of_month(rule, check_date)


def _matches_every_nth_week(rule: RecurringOffDay, check_date: date) -> bool:
    interval = rule.week_interval
    if rule.reference_date is None or interval is None or interval < 1:
        logger.warning(
            f"Invalid EVERY_NTH_WEEK configuration for recurring off-day {rule.id}"
        )
        return False

    days = (check_date - rule.reference_date).days
    if days < 0:
        return False
    return (days // 7) % interval == 0


def _matches_nth_weekday_of_month(rule: RecurringOffDay, check_date: date) -> bool:
    week_of_month = rule.week_of_month
    if week_of_month is None or not 1 <= week_of_month <= LAST_OCCURRENCE:
        logger.warning(
            f"Invalid NTH_WEEKDAY_OF_MONTH configuration for recurring off-day "
            f"{rule.id}"
        )
        return False

    if week_of_month == LAST_OCCURRENCE:
        return (check_date + timedelta(weeks=1)).month != check_date.month

    occurrence = (check_date.day - 1) // 7 + 1
    return occurrence == week_of_month


def build_off_day_rule(
    rules: Iterable[RecurringOffDay],
    exemptions: Iterable[RecurringOffDayExemption] = (),
) -> RecurringOffDayRule:
    """Compile stored rules and exemptions into a date predicate.

    A date is an off-day when any rule matches it and that rule has no
    exemption for the date.

    Args:
        rules: The user's recurring off-day rules.
        exemptions: Exemptions, matched to rules by ``recurring_off_day_id``.

    Returns:
        A predicate usable as the classifier's recurring off-day rule.
    """
    rule_list = tuple(rules)
    # Exemptions without a rule id cannot be matched to a rule
    exempted: set[tuple[str, date]] = {
        (exemption.recurring_off_day_id, exemption.exemption_date)
        for exemption in exemptions
        if exemption.recurring_off_day_id is not None
    }

    def is_recurring_off_day(check_date: date) -> bool:
        return any(
            applies_to_date(rule, check_date)
            and (rule.id is None or (rule.id, check_date) not in exempted)
            for rule in rule_list
        )

    return is_recurring_off_day
