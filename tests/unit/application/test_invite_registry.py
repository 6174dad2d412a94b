"""Unit tests for the invite registry with local fallback."""

from datetime import datetime

import pytest

from ritual.adapter.error import CapabilityError, TransientError
from ritual.application.registry import InviteRegistry
from ritual.application.sync import RemoteSync
from ritual.config import CacheSettings
from ritual.domain.model import InviteRegistryEntry
from ritual.domain.service import LocalCacheService
from ritual.domain.value import IdentityId, SyncChannel
from ritual.persistence.cache import InMemoryKeyValueStore
from ritual.persistence.repository import LocalInviteRegistryRepository
from ritual.persistence.repository.inmemory import InMemoryInviteRegistryRepository


@pytest.fixture
def remote() -> InMemoryInviteRegistryRepository:
    return InMemoryInviteRegistryRepository()


@pytest.fixture
def local() -> LocalInviteRegistryRepository:
    return LocalInviteRegistryRepository(
        LocalCacheService(InMemoryKeyValueStore(), CacheSettings())
    )


@pytest.fixture
def registry(remote, local) -> InviteRegistry:
    return InviteRegistry(remote=remote, local=local, sync=RemoteSync())


def make_invite(code: str = "ABCD1234") -> InviteRegistryEntry:
    return InviteRegistryEntry(
        code=code, owner_id=IdentityId("owner-1"), created_at=datetime(2026, 3, 1)
    )


class TestInviteRegistry:
    @pytest.mark.asyncio
    async def test_saves_write_through_to_local(self, registry, remote, local):
        await registry.save(make_invite())

        assert await remote.find_by_code("ABCD1234") is not None
        assert await local.find_by_code("ABCD1234") is not None

    @pytest.mark.asyncio
    async def test_capability_error_falls_back_to_local(self, registry, remote):
        await registry.save(make_invite())
        remote.fail_with = CapabilityError('relation "referral_invites" does not exist')

        found = await registry.find_by_code("ABCD1234")

        assert found is not None
        assert registry.is_local_only
        assert not registry.sync.is_enabled(SyncChannel.REFERRAL)

    @pytest.mark.asyncio
    async def test_local_only_registry_skips_remote(self, registry, remote, local):
        registry.sync.disable(SyncChannel.REFERRAL, "missing table")

        await registry.save(make_invite("EFGH5678"))
        owner = await registry.find_by_owner(IdentityId("owner-1"))

        assert remote.calls == 0
        assert owner.code == "EFGH5678"

    @pytest.mark.asyncio
    async def test_transient_error_propagates(self, registry, remote):
        remote.fail_with = TransientError("timeout")

        with pytest.raises(TransientError):
            await registry.find_by_code("ABCD1234")
        assert not registry.is_local_only
