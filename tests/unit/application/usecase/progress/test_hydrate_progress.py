"""Unit tests for HydrateProgressUseCase."""

import json

import pytest

from ritual.adapter.error import CapabilityError
from ritual.application.session import ProgressSession
from ritual.application.usecase.progress import GetProgressRequest, GetProgressUseCase
from ritual.domain.model import Identity, ProgressState
from ritual.domain.repository import (
    FollowRepository,
    JournalEntryRepository,
    KeyValueStore,
    ProfileRepository,
)
from ritual.domain.service import LocalCacheService
from ritual.domain.value import IdentityId, SyncChannel
from tests.conftest import make_entry, seed_local, sign_in
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

IDENTITY = Identity(id=IdentityId("user-1"), email="ada@example.com")


class TestHydrateProgress:
    """Test suite for sign-in hydration."""

    @pytest.mark.asyncio
    async def test_new_identity_starts_empty(self, unit_env):
        # Act
        response = await sign_in(unit_env)

        # Assert
        assert response.ok
        assert response.sources == []
        assert response.state == ProgressState()
        session = await unit_env.get(ProgressSession)
        assert session.hydrated

    @pytest.mark.asyncio
    async def test_merges_local_and_remote_sources(self, unit_env):
        # Arrange
        cache = await unit_env.get(LocalCacheService)
        profiles = await unit_env.get(ProfileRepository)
        journal = await unit_env.get(JournalEntryRepository)

        await seed_local(
            unit_env, ProgressState(total_xp=100, full_name="Local Name", marks=["first_mark"])
        )
        cache.write_backup(IDENTITY, [make_entry("local-1", "2026-03-08", subject_id=7)])
        await profiles.save_progress(
            IDENTITY.id,
            IDENTITY.email,
            ProgressState(
                total_xp=80,
                full_name="Remote Name",
                marks=["180_exact"],
                journal_entries=[make_entry("remote-1", "2026-03-09", subject_id=8)],
            ),
        )
        # Same ritual as the backup copy, stored remotely under another id
        await journal.insert(IDENTITY.id, make_entry("row-9", "2026-03-08", subject_id=7))

        # Act
        response = await sign_in(unit_env)

        # Assert
        state = response.state
        assert response.sources == ["backup", "remote_entries", "local", "remote_profile"]
        assert state.total_xp == 100
        assert state.full_name == "Remote Name"
        assert state.marks == ["180_exact", "first_mark"]
        assert [e.id for e in state.journal_entries] == ["remote-1", "local-1"]

    @pytest.mark.asyncio
    async def test_hydrated_state_is_cached_and_backed_up(self, unit_env):
        # Arrange
        profiles = await unit_env.get(ProfileRepository)
        await profiles.save_progress(
            IDENTITY.id,
            IDENTITY.email,
            ProgressState(total_xp=60, journal_entries=[make_entry("r1", "2026-03-09")]),
        )

        # Act
        await sign_in(unit_env)

        # Assert
        cache = await unit_env.get(LocalCacheService)
        assert cache.read(IDENTITY).total_xp == 60
        assert [e.id for e in cache.read_backup(IDENTITY)] == ["r1"]

    @pytest.mark.asyncio
    async def test_legacy_snapshot_is_migrated(self, unit_env):
        # Arrange
        store = await unit_env.get(KeyValueStore)
        legacy_key = "180_xp_data_ada@example.com"
        store.set(
            legacy_key,
            json.dumps(
                {
                    "xp": 55,
                    "dailyRituals": [
                        {"id": "old", "date": "2026-01-02", "movieTitle": "Heat", "text": "x"}
                    ],
                }
            ),
        )

        # Act
        response = await sign_in(unit_env)

        # Assert
        assert "legacy" in response.sources
        assert response.state.total_xp == 55
        assert [e.id for e in response.state.journal_entries] == ["old"]
        assert store.get(legacy_key) is None
        assert store.get("180_progress_v2:user-1") is not None

    @pytest.mark.asyncio
    async def test_unavailable_remote_profile_falls_back_to_local(self, unit_env):
        # Arrange
        profiles = await unit_env.get(ProfileRepository)
        profiles.fail_with = CapabilityError("permission denied for table profiles")
        await seed_local(unit_env, ProgressState(total_xp=30))

        # Act
        response = await sign_in(unit_env)

        # Assert
        assert response.ok
        assert response.state.total_xp == 30
        progress = await (await unit_env.get(GetProgressUseCase)).execute(GetProgressRequest())
        assert progress.disabled_channels == [SyncChannel.PROFILE]

    @pytest.mark.asyncio
    async def test_follow_graph_is_remote_authoritative(self, unit_env):
        # Arrange
        follows = await unit_env.get(FollowRepository)
        await follows.follow(IdentityId("user-1"), "bob")
        await follows.follow(IdentityId("user-2"), "ada")
        await follows.follow(IdentityId("user-3"), "ada")
        await seed_local(unit_env, ProgressState(followers=10))

        # Act
        response = await sign_in(unit_env)

        # Assert
        assert "remote_follows" in response.sources
        assert response.state.following == ["bob"]
        assert response.state.followers == 2

    @pytest.mark.asyncio
    async def test_follower_key_prefers_username(self, unit_env):
        # Arrange
        follows = await unit_env.get(FollowRepository)
        await follows.follow(IdentityId("user-2"), "adalove")
        await seed_local(unit_env, ProgressState(username="adalove"))

        # Act
        response = await sign_in(unit_env)

        # Assert
        assert response.state.followers == 1

    @pytest.mark.asyncio
    async def test_switching_identity_does_not_leak_state(self, unit_env):
        # Arrange
        await seed_local(unit_env, ProgressState(total_xp=300, full_name="Ada"))
        await sign_in(unit_env)

        # Act
        response = await sign_in(unit_env, identity_id="user-2", email="bob@example.com")

        # Assert
        assert response.state.total_xp == 0
        assert response.state.full_name == ""
        session = await unit_env.get(ProgressSession)
        assert session.identity.id == "user-2"
