"""In-memory repository implementations for testing and local-only mode."""

from .base import FailureInjection
from .follow import InMemoryFollowRepository
from .invite import InMemoryInviteRegistryRepository
from .journal import InMemoryJournalEntryRepository
from .profile import InMemoryProfileRepository

__all__ = [
    "FailureInjection",
    "InMemoryFollowRepository",
    "InMemoryInviteRegistryRepository",
    "InMemoryJournalEntryRepository",
    "InMemoryProfileRepository",
]
