"""XP and league progression ledger."""

import math

from ritual.domain.model import LEAGUES, League, LevelUpEvent, ProgressState
from ritual.domain.model.common import DomainModel

from .base import Service


class XPAward(DomainModel):
    """Result of an XP award."""

    state: ProgressState
    previous_total: int
    level_ups: list[LevelUpEvent] = []

    @property
    def awarded(self) -> int:
        return self.state.total_xp - self.previous_total


class XPService(Service):
    """Converts XP totals into leagues and detects league crossings."""

    def __init__(self, level_threshold: int = 500) -> None:
        """Initialize XP service.

        Args:
            level_threshold: XP span of each league
        """
        self.level_threshold = level_threshold

    def league_index_of(self, xp: int) -> int:
        """League index for an XP total, clamped to the last league."""
        index = max(0, xp) // self.level_threshold
        return min(index, len(LEAGUES) - 1)

    def league_of(self, xp: int) -> League:
        return LEAGUES[self.league_index_of(xp)]

    def progress_within_league(self, xp: int) -> float:
        """Percentage progress through the current league, in [0, 100]."""
        floor = self.league_index_of(xp) * self.level_threshold
        percent = (xp - floor) / self.level_threshold * 100
        return max(0.0, min(100.0, percent))

    def next_level_xp(self, xp: int) -> int:
        """XP total at which the next league starts."""
        return (self.league_index_of(xp) + 1) * self.level_threshold

    def apply_multiplier(self, amount: int, multiplier: float) -> int:
        return math.floor(amount * multiplier)

    def award_xp(self, state: ProgressState, amount: int) -> XPAward:
        """Add XP and list every league crossed, lowest first.

        A single award that spans several thresholds yields one event per
        crossed league so none is skipped.

        Args:
            state: Current progress
            amount: XP to add; non-positive amounts are ignored

        Returns:
            XPAward with the updated state and level-up events
        """
        previous = state.total_xp
        if amount <= 0:
            return XPAward(state=state, previous_total=previous)

        new_total = previous + amount
        old_index = self.league_index_of(previous)
        new_index = self.league_index_of(new_total)
        level_ups = [
            LevelUpEvent(league=LEAGUES[index], total_xp=new_total)
            for index in range(old_index + 1, new_index + 1)
        ]
        return XPAward(
            state=state.model_copy(update={"total_xp": new_total}),
            previous_total=previous,
            level_ups=level_ups,
        )
