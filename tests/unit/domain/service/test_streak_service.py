"""Unit tests for StreakService."""

from datetime import datetime

from ritual.domain.model import ProgressState
from ritual.domain.service import StreakService
from ritual.domain.value import date_key


class TestEvaluate:
    """Tests for calendar-day classification."""

    def test_next_day_maintains(self):
        check = StreakService().evaluate("2026-03-09", "2026-03-10")
        assert check.maintained
        assert check.day_difference == 1

    def test_gap_breaks(self):
        check = StreakService().evaluate("2026-03-07", "2026-03-10")
        assert check.broken
        assert check.day_difference == 3

    def test_same_day(self):
        assert StreakService().evaluate("2026-03-10", "2026-03-10").same_day

    def test_no_previous_day_is_first(self):
        assert StreakService().evaluate(None, "2026-03-10").first

    def test_midnight_crossing_counts_as_one_day(self):
        """Two minutes of elapsed time across midnight is still one calendar day."""
        before = date_key(datetime(2026, 3, 9, 23, 59))
        after = date_key(datetime(2026, 3, 10, 0, 1))

        assert StreakService().evaluate(before, after).maintained


class TestAdvance:
    """Tests for advancing the streak."""

    def test_consecutive_day_increments(self):
        # Arrange
        state = ProgressState(streak=3, last_streak_date="2026-03-09")

        # Act
        advance = StreakService().advance(state, "2026-03-10", is_first_entry_today=True)

        # Assert
        assert advance.streak == 4
        assert advance.last_streak_date == "2026-03-10"
        assert advance.event is not None
        assert advance.event.day == 4
        assert not advance.event.milestone

    def test_milestone_is_flagged(self):
        state = ProgressState(streak=4, last_streak_date="2026-03-09")

        advance = StreakService().advance(state, "2026-03-10", is_first_entry_today=True)

        assert advance.event.milestone

    def test_gap_restarts_at_one_and_counts_non_consecutive(self):
        # Arrange
        state = ProgressState(
            streak=6, last_streak_date="2026-03-01", non_consecutive_count=2
        )

        # Act
        advance = StreakService().advance(state, "2026-03-10", is_first_entry_today=True)

        # Assert
        assert advance.streak == 1
        assert advance.non_consecutive_count == 3

    def test_first_ever_entry_starts_streak(self):
        advance = StreakService().advance(ProgressState(), "2026-03-10", is_first_entry_today=True)

        assert advance.streak == 1
        assert advance.last_streak_date == "2026-03-10"

    def test_second_entry_of_day_does_not_advance(self):
        state = ProgressState(streak=3, last_streak_date="2026-03-09")

        advance = StreakService().advance(state, "2026-03-10", is_first_entry_today=False)

        assert advance.streak == 3
        assert not advance.changed

    def test_same_day_does_not_advance_twice(self):
        state = ProgressState(streak=3, last_streak_date="2026-03-10")

        advance = StreakService().advance(state, "2026-03-10", is_first_entry_today=True)

        assert advance.streak == 3
        assert advance.event is None


class TestIsBroken:
    def test_lapsed_streak_is_broken(self):
        state = ProgressState(streak=5, last_streak_date="2026-03-07")
        assert StreakService().is_broken(state, "2026-03-10")

    def test_yesterday_is_not_broken(self):
        state = ProgressState(streak=5, last_streak_date="2026-03-09")
        assert not StreakService().is_broken(state, "2026-03-10")

    def test_no_streak_is_not_broken(self):
        assert not StreakService().is_broken(ProgressState(), "2026-03-10")
