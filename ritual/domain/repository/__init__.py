"""Repository interfaces for the progress engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from ritual.domain.repository.follow import FollowRepository
from ritual.domain.repository.invite import InviteRegistryRepository
from ritual.domain.repository.journal import JournalEntryRepository
from ritual.domain.repository.key_value import KeyValueStore
from ritual.domain.repository.profile import ProfileRepository

__all__ = [
    "FollowRepository",
    "InviteRegistryRepository",
    "JournalEntryRepository",
    "KeyValueStore",
    "ProfileRepository",
]
