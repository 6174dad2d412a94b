"""Unit tests for DeleteEntryUseCase."""

import pytest

from ritual.application.session import ProgressSession
from ritual.application.usecase.ritual import (
    DeleteEntryRequest,
    DeleteEntryUseCase,
    SubmitRitualRequest,
    SubmitRitualUseCase,
)
from ritual.domain.repository import JournalEntryRepository
from ritual.domain.value import ErrorCode, IdentityId
from tests.conftest import sign_in
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestDeleteEntry:
    @pytest.mark.asyncio
    async def test_removes_entry_but_keeps_rewards(self, unit_env):
        # Arrange
        await sign_in(unit_env)
        submit = await unit_env.get(SubmitRitualUseCase)
        delete = await unit_env.get(DeleteEntryUseCase)
        journal = await unit_env.get(JournalEntryRepository)
        session = await unit_env.get(ProgressSession)
        submitted = await submit.execute(SubmitRitualRequest(subject_id=3, text="Rain."))
        await session.flush()

        # Act
        response = await delete.execute(DeleteEntryRequest(entry_id=submitted.entry.id))
        await session.flush()

        # Assert
        assert response.ok
        assert response.state.journal_entries == []
        assert response.state.total_xp == submitted.state.total_xp
        assert response.state.streak == 1
        assert await journal.find_by_identity(IdentityId("user-1")) == []

    @pytest.mark.asyncio
    async def test_unknown_entry(self, unit_env):
        await sign_in(unit_env)
        delete = await unit_env.get(DeleteEntryUseCase)

        response = await delete.execute(DeleteEntryRequest(entry_id="missing"))

        assert response.error_code == ErrorCode.INVALID_ENTRY
