"""Remote repository implementations."""

from ritual.persistence.repository.follow import PostgresFollowRepository
from ritual.persistence.repository.invite import PostgresInviteRegistryRepository
from ritual.persistence.repository.journal import PostgresJournalEntryRepository
from ritual.persistence.repository.local import LocalInviteRegistryRepository
from ritual.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "LocalInviteRegistryRepository",
    "PostgresFollowRepository",
    "PostgresInviteRegistryRepository",
    "PostgresJournalEntryRepository",
    "PostgresProfileRepository",
]
