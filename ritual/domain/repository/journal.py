"""Remote journal entry repository interface."""

from abc import ABC, abstractmethod

from ritual.domain.model import JournalEntry
from ritual.domain.value import IdentityId


class JournalEntryRepository(ABC):
    """Append-only remote journal entry table."""

    @abstractmethod
    async def find_by_identity(
        self, identity_id: IdentityId, limit: int = 500
    ) -> list[JournalEntry]:
        """List entries for an identity, newest first.

        Args:
            identity_id: Entry author
            limit: Maximum number of entries

        Returns:
            Normalized entries ordered by creation time descending
        """
        pass

    @abstractmethod
    async def insert(self, identity_id: IdentityId, entry: JournalEntry) -> None:
        """Append an entry."""
        pass

    @abstractmethod
    async def delete(self, identity_id: IdentityId, entry_id: str) -> None:
        """Remove an entry by id. Missing entries are ignored."""
        pass
