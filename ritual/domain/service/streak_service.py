"""Streak cadence tracker."""

from typing import Optional

from ritual.domain.model import ProgressState, StreakEvent
from ritual.domain.model.common import DomainModel
from ritual.domain.value import DateKey, day_difference

from .base import Service

DEFAULT_MILESTONES = frozenset({5, 7, 10, 20, 40, 50, 100, 200, 250, 300, 350})


class StreakCheck(DomainModel):
    """Outcome of comparing the last streak day with today."""

    maintained: bool = False
    broken: bool = False
    same_day: bool = False
    first: bool = False
    day_difference: Optional[int] = None


class StreakAdvance(DomainModel):
    """New streak counters plus the event to emit, if any."""

    streak: int
    last_streak_date: Optional[DateKey]
    non_consecutive_count: int
    event: Optional[StreakEvent] = None

    @property
    def changed(self) -> bool:
        return self.event is not None


class StreakService(Service):
    """Calendar-day streak rules.

    Day differences are computed on date keys, so crossing midnight always
    counts as one day regardless of elapsed time.
    """

    def __init__(self, milestones: frozenset[int] = DEFAULT_MILESTONES) -> None:
        self.milestones = frozenset(milestones)

    def evaluate(self, last_date: Optional[DateKey], today: DateKey) -> StreakCheck:
        """Classify today relative to the last streak day.

        Args:
            last_date: Last day the streak advanced, if any
            today: Today's date key

        Returns:
            StreakCheck with exactly one of maintained/broken/same_day/first set
        """
        diff = day_difference(last_date, today) if last_date else None
        if diff is None:
            return StreakCheck(first=True)
        if diff <= 0:
            return StreakCheck(same_day=True, day_difference=diff)
        if diff == 1:
            return StreakCheck(maintained=True, day_difference=diff)
        return StreakCheck(broken=True, day_difference=diff)

    def is_broken(self, state: ProgressState, today: DateKey) -> bool:
        """Whether the stored streak has lapsed as of today."""
        if not state.last_streak_date:
            return False
        return self.evaluate(state.last_streak_date, today).broken

    def advance(
        self, state: ProgressState, today: DateKey, is_first_entry_today: bool
    ) -> StreakAdvance:
        """Advance the streak for a qualifying action.

        Only the first qualifying action of a day may advance the streak; the
        caller computes that guard once and passes it in.

        Args:
            state: Current progress
            today: Today's date key
            is_first_entry_today: Whether this is the day's first entry

        Returns:
            StreakAdvance; unchanged counters and no event when nothing moved
        """
        unchanged = StreakAdvance(
            streak=state.streak,
            last_streak_date=state.last_streak_date,
            non_consecutive_count=state.non_consecutive_count,
        )
        if not is_first_entry_today:
            return unchanged

        check = self.evaluate(state.last_streak_date, today)
        if check.same_day:
            return unchanged

        non_consecutive = state.non_consecutive_count
        if check.maintained:
            streak = state.streak + 1
        else:
            streak = 1
            non_consecutive += 1

        return StreakAdvance(
            streak=streak,
            last_streak_date=today,
            non_consecutive_count=non_consecutive,
            event=StreakEvent(day=streak, milestone=streak in self.milestones),
        )
