"""In-memory journal entry repository."""

from ritual.domain.model import JournalEntry
from ritual.domain.repository import JournalEntryRepository
from ritual.domain.value import IdentityId

from .base import FailureInjection


class InMemoryJournalEntryRepository(FailureInjection, JournalEntryRepository):
    """In-memory implementation of JournalEntryRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[IdentityId, list[JournalEntry]] = {}

    async def find_by_identity(
        self, identity_id: IdentityId, limit: int = 500
    ) -> list[JournalEntry]:
        self._check()
        entries = self._entries.get(identity_id, [])
        # Newest first
        return list(reversed(entries))[:limit]

    async def insert(self, identity_id: IdentityId, entry: JournalEntry) -> None:
        self._check()
        self._entries.setdefault(identity_id, []).append(entry)

    async def delete(self, identity_id: IdentityId, entry_id: str) -> None:
        self._check()
        self._entries[identity_id] = [
            e for e in self._entries.get(identity_id, []) if e.id != entry_id
        ]
