"""Unit tests for giving and receiving echoes."""

import pytest

from ritual.application.usecase.social import (
    EchoRitualRequest,
    EchoRitualUseCase,
    ReceiveEchoRequest,
    ReceiveEchoUseCase,
)
from ritual.domain.model import ProgressState
from ritual.domain.value import ErrorCode
from tests.conftest import seed_local, sign_in
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestEchoRitual:
    @pytest.mark.asyncio
    async def test_giving_an_echo(self, unit_env):
        # Arrange
        await sign_in(unit_env)
        use_case = await unit_env.get(EchoRitualUseCase)

        # Act
        response = await use_case.execute(EchoRitualRequest(ritual_id="r-1"))

        # Assert
        assert response.xp_awarded == 1
        assert response.state.echoes_given == 1
        assert [n.mark_id for n in response.unlocked] == ["echo_initiate"]

    @pytest.mark.asyncio
    async def test_tenth_echo_unlocks_chamber(self, unit_env):
        await seed_local(unit_env, ProgressState(echoes_given=9, marks=["echo_initiate"]))
        await sign_in(unit_env)
        use_case = await unit_env.get(EchoRitualUseCase)

        response = await use_case.execute(EchoRitualRequest())

        assert [n.mark_id for n in response.unlocked] == ["echo_chamber"]

    @pytest.mark.asyncio
    async def test_requires_hydrated_session(self, unit_env):
        use_case = await unit_env.get(EchoRitualUseCase)

        response = await use_case.execute(EchoRitualRequest())

        assert response.error_code == ErrorCode.NOT_READY


class TestReceiveEcho:
    @pytest.mark.asyncio
    async def test_receiving_an_echo(self, unit_env):
        # Arrange
        await sign_in(unit_env)
        use_case = await unit_env.get(ReceiveEchoUseCase)

        # Act
        response = await use_case.execute(
            ReceiveEchoRequest(echo_id="echo-1", subject_title="Stalker")
        )

        # Assert
        assert response.xp_awarded == 3
        assert response.state.echoes_received == 1
        assert response.state.echo_history[0].subject_title == "Stalker"
        assert response.state.echo_history[0].date == "2026-03-10"
        assert {n.mark_id for n in response.unlocked} == {"first_echo", "echo_receiver"}

    @pytest.mark.asyncio
    async def test_replayed_echo_is_ignored(self, unit_env):
        await sign_in(unit_env)
        use_case = await unit_env.get(ReceiveEchoUseCase)
        await use_case.execute(ReceiveEchoRequest(echo_id="echo-1"))

        response = await use_case.execute(ReceiveEchoRequest(echo_id="echo-1"))

        assert response.xp_awarded == 0
        assert response.state.echoes_received == 1

    @pytest.mark.asyncio
    async def test_history_is_capped(self, unit_env):
        await sign_in(unit_env)
        use_case = await unit_env.get(ReceiveEchoUseCase)

        for index in range(12):
            response = await use_case.execute(ReceiveEchoRequest(echo_id=f"echo-{index}"))

        assert response.state.echoes_received == 12
        assert len(response.state.echo_history) == 10
        assert response.state.echo_history[0].id == "echo-11"
        assert {"influencer", "resonator"} <= set(response.state.marks)
