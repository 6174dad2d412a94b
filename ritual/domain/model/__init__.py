"""Domain model entities for the progress engine."""

from ritual.domain.model.events import LevelUpEvent, MarkNotification, StreakEvent
from ritual.domain.model.identity import Identity
from ritual.domain.model.invite import InviteDeviceGuard, InviteRegistryEntry
from ritual.domain.model.league import LEAGUES, League
from ritual.domain.model.mark import MARK_CATALOG, MARKS_BY_ID, MarkDefinition
from ritual.domain.model.normalize import (
    is_placeholder_title,
    normalize_entries,
    normalize_entry,
    normalize_progress,
)
from ritual.domain.model.progress import (
    EchoLog,
    JournalEntry,
    ProgressState,
    empty_progress,
)

__all__ = [
    "EchoLog",
    "Identity",
    "InviteDeviceGuard",
    "InviteRegistryEntry",
    "JournalEntry",
    "LEAGUES",
    "League",
    "LevelUpEvent",
    "MARK_CATALOG",
    "MARKS_BY_ID",
    "MarkDefinition",
    "MarkNotification",
    "ProgressState",
    "StreakEvent",
    "empty_progress",
    "is_placeholder_title",
    "normalize_entries",
    "normalize_entry",
    "normalize_progress",
]
