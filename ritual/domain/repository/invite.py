"""Invite registry repository interface."""

from abc import ABC, abstractmethod

from ritual.domain.model import InviteRegistryEntry
from ritual.domain.value import IdentityId


class InviteRegistryRepository(ABC):
    """Shared registry of issued invite codes, keyed by code."""

    @abstractmethod
    async def find_by_code(self, code: str) -> InviteRegistryEntry | None:
        """Find the registry entry for a code.

        Args:
            code: Normalized invite code

        Returns:
            The entry if the code was issued, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: IdentityId) -> InviteRegistryEntry | None:
        """Find the code issued to an owner, if any."""
        pass

    @abstractmethod
    async def save(self, entry: InviteRegistryEntry) -> InviteRegistryEntry:
        """Create or update a registry entry (keyed by code)."""
        pass
