"""Invite registry access with local fallback."""

from typing import Awaitable, Callable, Optional, TypeVar

import logfire

from ritual.adapter.error import CapabilityError
from ritual.application.sync import RemoteSync
from ritual.domain.model import InviteRegistryEntry
from ritual.domain.repository import InviteRegistryRepository
from ritual.domain.value import IdentityId, SyncChannel
from ritual.persistence.repository.local import LocalInviteRegistryRepository

T = TypeVar("T")


class InviteRegistry:
    """Remote invite registry, falling back to the device-local registry.

    Once the remote registry proves capability-restricted the referral
    channel is disabled and every call goes to the local registry. Saves are
    written through to the local registry so codes issued while the channel
    was up remain resolvable afterwards. Transient remote errors propagate.
    """

    def __init__(
        self,
        remote: InviteRegistryRepository,
        local: LocalInviteRegistryRepository,
        sync: RemoteSync,
    ) -> None:
        self.remote = remote
        self.local = local
        self.sync = sync

    async def _call(
        self, action: str, fn: Callable[[InviteRegistryRepository], Awaitable[T]]
    ) -> T:
        if self.sync.is_enabled(SyncChannel.REFERRAL):
            try:
                return await self.sync.call(SyncChannel.REFERRAL, action, lambda: fn(self.remote))
            except CapabilityError:
                logfire.info("Invite registry falling back to local", action=action)
        return await fn(self.local)

    @property
    def is_local_only(self) -> bool:
        return not self.sync.is_enabled(SyncChannel.REFERRAL)

    async def find_by_code(self, code: str) -> Optional[InviteRegistryEntry]:
        return await self._call("find_by_code", lambda repo: repo.find_by_code(code))

    async def find_by_owner(self, owner_id: IdentityId) -> Optional[InviteRegistryEntry]:
        return await self._call("find_by_owner", lambda repo: repo.find_by_owner(owner_id))

    async def save(self, entry: InviteRegistryEntry) -> InviteRegistryEntry:
        saved = await self._call("save", lambda repo: repo.save(entry))
        if not self.is_local_only:
            await self.local.save(entry)
        return saved
