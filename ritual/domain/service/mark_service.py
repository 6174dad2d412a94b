"""Achievement (marks) rule engine.

Rules are pure predicates over a RuleContext: the progress state after the
action was applied, plus facts about the action itself. Rules are grouped by
the action that triggers them and always evaluated in catalog order.
"""

from collections import Counter
from typing import Callable, Iterable, Mapping, Optional, Sequence

import logfire

from ritual.domain.model import MARK_CATALOG, MARKS_BY_ID, MarkNotification, ProgressState
from ritual.domain.model.common import DomainModel
from ritual.domain.model.league import ETERNAL_LEAGUE_KEY
from ritual.domain.model.mark import DEFAULT_WHISPER

from .base import Service
from .merge_service import sort_entries


class RuleContext(DomainModel):
    """State after an action plus facts about the action."""

    state: ProgressState
    text: str = ""
    genre: Optional[str] = None
    genre_is_new: bool = False
    hour: Optional[int] = None
    release_year: Optional[int] = None
    vote_average: Optional[float] = None
    league_key: str = ""
    exact_length: int = 180


Rule = Callable[[RuleContext], bool]


def _genre_count(ctx: RuleContext) -> int:
    if not ctx.genre:
        return 0
    return Counter(e.genre for e in ctx.state.journal_entries)[ctx.genre]


def _exact_count(ctx: RuleContext) -> int:
    return sum(1 for e in ctx.state.journal_entries if len(e.text) == ctx.exact_length)


def _recent_genres_distinct(ctx: RuleContext, window: int = 5) -> bool:
    recent = sort_entries(ctx.state.journal_entries)[:window]
    genres = [e.genre for e in recent if e.genre]
    return len(recent) == window and len(set(genres)) == window


RITUAL_RULES: dict[str, Rule] = {
    "first_mark": lambda ctx: ctx.state.entry_count >= 1,
    "mystery_solver": lambda ctx: ctx.state.entry_count >= 1,
    "180_exact": lambda ctx: len(ctx.text) == ctx.exact_length,
    "minimalist": lambda ctx: 0 < len(ctx.text) < 40,
    "deep_diver": lambda ctx: len(ctx.text) > 200,
    "precision_loop": lambda ctx: _exact_count(ctx) >= 3,
    "no_rush": lambda ctx: ctx.state.non_consecutive_count >= 10,
    "daily_regular": lambda ctx: ctx.state.streak >= 3,
    "held_for_five": lambda ctx: ctx.state.streak >= 5,
    "seven_quiet_days": lambda ctx: ctx.state.streak >= 7,
    "genre_discovery": lambda ctx: ctx.genre_is_new and len(ctx.state.unique_genres) >= 3,
    "wide_lens": lambda ctx: ctx.genre_is_new and len(ctx.state.unique_genres) >= 10,
    "one_genre_devotion": lambda ctx: _genre_count(ctx) >= 20,
    "genre_nomad": _recent_genres_distinct,
    "ritual_marathon": lambda ctx: ctx.state.entry_count >= 20,
    "archive_keeper": lambda ctx: ctx.state.entry_count >= 50,
    "classic_soul": lambda ctx: ctx.release_year is not None and ctx.release_year < 1990,
    "hidden_gem": lambda ctx: ctx.vote_average is not None and ctx.vote_average <= 7.9,
    "midnight_ritual": lambda ctx: ctx.hour == 0,
    "watched_on_time": lambda ctx: ctx.hour is not None and 5 <= ctx.hour < 7,
}

PRESENCE_RULES: dict[str, Rule] = {
    "eternal_mark": lambda ctx: ctx.league_key == ETERNAL_LEAGUE_KEY,
    "daybreaker": lambda ctx: len(ctx.state.active_days) >= 14,
    "legacy": lambda ctx: len(ctx.state.active_days) >= 30,
}

ECHO_GIVEN_RULES: dict[str, Rule] = {
    "echo_initiate": lambda ctx: ctx.state.echoes_given >= 1,
    "echo_chamber": lambda ctx: ctx.state.echoes_given >= 10,
}

ECHO_RECEIVED_RULES: dict[str, Rule] = {
    "first_echo": lambda ctx: ctx.state.echoes_received >= 1,
    "echo_receiver": lambda ctx: ctx.state.echoes_received >= 1,
    "influencer": lambda ctx: ctx.state.echoes_received >= 5,
    "resonator": lambda ctx: ctx.state.echoes_received >= 5,
}

FOLLOW_RULES: dict[str, Rule] = {
    "quiet_following": lambda ctx: len(ctx.state.following) >= 5,
}


class MarkEvaluation(DomainModel):
    """Marks after evaluation plus notifications for new unlocks."""

    marks: list[str]
    notifications: list[MarkNotification] = []

    @property
    def unlocked(self) -> list[str]:
        return [n.mark_id for n in self.notifications]


class MarkService(Service):
    """Unlocks marks idempotently."""

    def try_unlock(
        self, mark_id: str, marks: Sequence[str]
    ) -> tuple[list[str], Optional[MarkNotification]]:
        """Unlock a mark once.

        Args:
            mark_id: Mark to unlock
            marks: Currently unlocked marks

        Returns:
            (marks, notification); notification is None if already unlocked
        """
        if mark_id in marks:
            return list(marks), None

        definition = MARKS_BY_ID.get(mark_id)
        notification = MarkNotification(
            mark_id=mark_id,
            title=definition.title if definition else mark_id,
            message=definition.whisper if definition else DEFAULT_WHISPER,
        )
        logfire.info("Mark unlocked", mark_id=mark_id)
        return [*marks, mark_id], notification

    def evaluate(
        self, rules: Mapping[str, Rule], ctx: RuleContext, marks: Optional[Iterable[str]] = None
    ) -> MarkEvaluation:
        """Evaluate a rule set in catalog order.

        Args:
            rules: Predicates keyed by mark id
            ctx: Rule context
            marks: Starting marks; defaults to the context state's marks

        Returns:
            MarkEvaluation with the final marks and new notifications
        """
        current = list(ctx.state.marks if marks is None else marks)
        notifications: list[MarkNotification] = []
        for definition in MARK_CATALOG:
            rule = rules.get(definition.id)
            if rule is None or definition.id in current or not rule(ctx):
                continue
            current, notification = self.try_unlock(definition.id, current)
            if notification:
                notifications.append(notification)
        return MarkEvaluation(marks=current, notifications=notifications)
