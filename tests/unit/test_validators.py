# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for input validators."""

from datetime import date, time

import pytest

from timetrack.models import TimeOffType
from timetrack.validators import (
    ConflictingTimeOffError,
    InvalidInputError,
    TimeTrackingError,
    find_time_off_conflicts,
    validate_date_range,
    validate_ownership,
    validate_time_off,
    validate_working_hours,
)


class TestValidateWorkingHours:
    """Tests for the weekly template check."""

    def test_complete_week(self, standard_week) -> None:
        """Seven rows map to ISO weekdays."""
        by_weekday = validate_working_hours(standard_week)

        assert sorted(by_weekday) == [1, 2, 3, 4, 5, 6, 7]
        assert by_weekday[6].is_working_day is False

    def test_missing_weekdays(self, standard_week) -> None:
        """Missing weekdays are listed in the error."""
        with pytest.raises(InvalidInputError, match="6, 7"):
            validate_working_hours(standard_week[:5])

    def test_duplicate_weekday(self, standard_week) -> None:
        """A weekday configured twice is rejected."""
        with pytest.raises(InvalidInputError, match="Duplicate"):
            validate_working_hours([*standard_week, standard_week[0]])


class TestValidateDateRange:
    """Tests for date range checks."""

    def test_valid_range(self) -> None:
        """Equal start and end is a valid range."""
        validate_date_range(date(2025, 6, 1), date(2025, 6, 1))

    def test_inverted_range(self) -> None:
        """Start after end is rejected."""
        with pytest.raises(InvalidInputError):
            validate_date_range(date(2025, 6, 2), date(2025, 6, 1))


class TestValidateOwnership:
    """Tests for record ownership checks."""

    def test_records_without_user_are_accepted(self, make_entry) -> None:
        """Records without a user id belong to anyone."""
        entry = make_entry(date(2025, 6, 2), time(9), time(17), user_id=None)
        validate_ownership("user1", time_entries=[entry])

    def test_other_user_rejected(self, make_time_off) -> None:
        """A record of another user is rejected."""
        record = make_time_off(date(2025, 6, 2), date(2025, 6, 2), user_id="user2")
        with pytest.raises(InvalidInputError, match="belongs to user user2"):
            validate_ownership("user1", time_off=[record])

    def test_no_user_skips_check(self, make_time_off) -> None:
        """Nothing is checked without an expected user."""
        record = make_time_off(date(2025, 6, 2), date(2025, 6, 2), user_id="user2")
        validate_ownership(None, time_off=[record])


class TestTimeOffConflicts:
    """Tests for overlapping time off detection."""

    def test_overlap_of_different_types(self, make_time_off) -> None:
        """Sick leave inside a vacation is a conflict."""
        vacation = make_time_off(date(2025, 6, 2), date(2025, 6, 13))
        sick = make_time_off(date(2025, 6, 4), date(2025, 6, 5), TimeOffType.SICK)
        conflicts = find_time_off_conflicts([sick, vacation])

        assert len(conflicts) == 1
        assert conflicts[0].first == vacation
        assert conflicts[0].second == sick
        assert conflicts[0].start == date(2025, 6, 4)
        assert conflicts[0].end == date(2025, 6, 5)

    def test_same_type_overlap_is_no_conflict(self, make_time_off) -> None:
        """Overlapping vacation records do not conflict."""
        time_off = [
            make_time_off(date(2025, 6, 2), date(2025, 6, 6)),
            make_time_off(date(2025, 6, 5), date(2025, 6, 10)),
        ]
        assert find_time_off_conflicts(time_off) == []

    def test_adjacent_ranges(self, make_time_off) -> None:
        """Back to back records of different types do not conflict."""
        time_off = [
            make_time_off(date(2025, 6, 2), date(2025, 6, 6)),
            make_time_off(date(2025, 6, 7), date(2025, 6, 8), TimeOffType.SICK),
        ]
        validate_time_off(time_off)

    def test_validate_time_off_raises(self, make_time_off) -> None:
        """Conflicts raise with the conflicting pairs attached."""
        time_off = [
            make_time_off(date(2025, 6, 2), date(2025, 6, 6)),
            make_time_off(date(2025, 6, 6), date(2025, 6, 6), TimeOffType.PERSONAL),
        ]
        with pytest.raises(ConflictingTimeOffError) as exc_info:
            validate_time_off(time_off)

        assert len(exc_info.value.conflicts) == 1
        assert "vacation and personal" in str(exc_info.value)

    def test_error_hierarchy(self) -> None:
        """Validation errors are time tracking errors and value errors."""
        assert issubclass(ConflictingTimeOffError, InvalidInputError)
        assert issubclass(InvalidInputError, TimeTrackingError)
        assert issubclass(InvalidInputError, ValueError)
