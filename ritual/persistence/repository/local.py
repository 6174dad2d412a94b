"""Device-local invite registry.

Used when the remote registry is capability-restricted. The registry is one
JSON map of code to entry under a single local key.
"""

from typing import Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from ritual.domain.model import InviteRegistryEntry
from ritual.domain.repository import InviteRegistryRepository
from ritual.domain.service import LocalCacheService
from ritual.domain.value import IdentityId, is_valid_invite_code

INVITE_REGISTRY_KEY = "180_invite_registry_v1"


class LocalInviteRegistryRepository(InviteRegistryRepository):
    """InviteRegistryRepository over the local key-value store."""

    def __init__(self, cache: LocalCacheService) -> None:
        """Initialize repository.

        Args:
            cache: Local cache service holding the registry map
        """
        self.cache = cache

    def _load(self) -> dict[str, InviteRegistryEntry]:
        raw = self.cache.read_json(INVITE_REGISTRY_KEY)
        if not isinstance(raw, dict):
            return {}
        entries: dict[str, InviteRegistryEntry] = {}
        for code, value in raw.items():
            if not is_valid_invite_code(code) or not isinstance(value, dict):
                continue
            try:
                entries[code] = InviteRegistryEntry.model_validate({**value, "code": code})
            except PydanticValidationError:
                logfire.warn("Skipping malformed invite registry entry", code=code)
        return entries

    async def find_by_code(self, code: str) -> Optional[InviteRegistryEntry]:
        return self._load().get(code)

    async def find_by_owner(self, owner_id: IdentityId) -> Optional[InviteRegistryEntry]:
        for entry in self._load().values():
            if entry.owner_id == owner_id:
                return entry
        return None

    async def save(self, entry: InviteRegistryEntry) -> InviteRegistryEntry:
        entries = self._load()
        entries[entry.code] = entry
        self.cache.write_json(
            INVITE_REGISTRY_KEY, {code: e.to_payload() for code, e in entries.items()}
        )
        return entry
