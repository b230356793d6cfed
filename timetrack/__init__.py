# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Time tracking accounting core.

Classifies calendar days, accounts expected vs actual hours and keeps
vacation balances for users with a weekly working hours template.
"""

from .accounting import compute_day
from .classifier import classify
from .config import DEFAULT_SETTINGS, TimeTrackingSettings, VacationCountMode
from .models import (
    DailyResult,
    DailyStatus,
    DayCategory,
    EntryType,
    Jurisdiction,
    RangeSummary,
    TimeEntry,
    TimeOff,
    TimeOffType,
    UserCalendar,
    VacationAllowance,
    VacationBalance,
    WorkingHours,
)
from .public_holidays import get_public_holidays, holidays, is_public_holiday
from .recurring import (
    RecurrencePattern,
    RecurringOffDay,
    RecurringOffDayExemption,
    build_off_day_rule,
)
from .summary import iter_daily_results, summarize, summarize_month
from .vacation import calculate_vacation_balance, next_year_allowance
from .validators import ConflictingTimeOffError, InvalidInputError, TimeTrackingError

__all__ = [
    "DEFAULT_SETTINGS",
    "ConflictingTimeOffError",
    "DailyResult",
    "DailyStatus",
    "DayCategory",
    "EntryType",
    "InvalidInputError",
    "Jurisdiction",
    "RangeSummary",
    "RecurrencePattern",
    "RecurringOffDay",
    "RecurringOffDayExemption",
    "TimeEntry",
    "TimeOff",
    "TimeOffType",
    "TimeTrackingError",
    "TimeTrackingSettings",
    "UserCalendar",
    "VacationAllowance",
    "VacationBalance",
    "VacationCountMode",
    "WorkingHours",
    "build_off_day_rule",
    "calculate_vacation_balance",
    "classify",
    "compute_day",
    "get_public_holidays",
    "holidays",
    "is_public_holiday",
    "iter_daily_results",
    "next_year_allowance",
    "summarize",
    "summarize_month",
]
