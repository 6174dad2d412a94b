"""Events emitted by progress mutations for the presentation layer."""

from ritual.domain.model.common import DomainModel
from ritual.domain.model.league import League


class LevelUpEvent(DomainModel):
    """A single league crossing. Multi-league jumps produce one per league."""

    league: League
    total_xp: int


class StreakEvent(DomainModel):
    """Streak advanced by the day's first qualifying entry."""

    day: int
    milestone: bool = False


class MarkNotification(DomainModel):
    """One-shot notification for a newly unlocked mark."""

    mark_id: str
    title: str
    message: str
