"""In-memory invite registry repository."""

from typing import Optional

from ritual.domain.model import InviteRegistryEntry
from ritual.domain.repository import InviteRegistryRepository
from ritual.domain.value import IdentityId

from .base import FailureInjection


class InMemoryInviteRegistryRepository(FailureInjection, InviteRegistryRepository):
    """In-memory implementation of InviteRegistryRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._entries: dict[str, InviteRegistryEntry] = {}

    async def find_by_code(self, code: str) -> Optional[InviteRegistryEntry]:
        self._check()
        return self._entries.get(code)

    async def find_by_owner(self, owner_id: IdentityId) -> Optional[InviteRegistryEntry]:
        self._check()
        for entry in self._entries.values():
            if entry.owner_id == owner_id:
                return entry
        return None

    async def save(self, entry: InviteRegistryEntry) -> InviteRegistryEntry:
        self._check()
        self._entries[entry.code] = entry
        return entry
