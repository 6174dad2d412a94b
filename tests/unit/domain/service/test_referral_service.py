"""Unit tests for ReferralService."""

from datetime import datetime

import pytest

from ritual.config import ReferralSettings
from ritual.domain.error import ConflictError, ValidationError
from ritual.domain.model import InviteDeviceGuard, InviteRegistryEntry, ProgressState
from ritual.domain.service import ReferralService
from ritual.domain.value import ErrorCode, is_valid_invite_code
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

TODAY = "2026-03-10"


@pytest.fixture
def referral_service() -> ReferralService:
    return ReferralService(ReferralSettings())


class TestGenerateCode:
    def test_code_is_deterministic_and_well_formed(self, referral_service):
        first = referral_service.generate_code("user-1", 0)

        assert first == referral_service.generate_code("user-1", 0)
        assert is_valid_invite_code(first)

    def test_attempt_changes_code(self, referral_service):
        assert referral_service.generate_code("user-1", 0) != referral_service.generate_code(
            "user-1", 1
        )


class TestCheckClaimant:
    """Claimant checks and their precedence."""

    def test_code_is_normalized(self, referral_service):
        assert referral_service.check_claimant(ProgressState(), " abcd-1234 ") == "ABCD1234"

    def test_malformed_code(self, referral_service):
        with pytest.raises(ValidationError) as exc_info:
            referral_service.check_claimant(ProgressState(), "abc")
        assert exc_info.value.code == ErrorCode.INVALID_CODE

    def test_already_claimed_wins_over_self_invite(self, referral_service):
        state = ProgressState(invite_code="ABCD1234", invited_by_code="ZZZZ9999")

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_claimant(state, "ABCD1234")
        assert exc_info.value.code == ErrorCode.ALREADY_CLAIMED

    def test_own_code_is_self_invite(self, referral_service):
        state = ProgressState(invite_code="ABCD1234")

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_claimant(state, "abcd1234")
        assert exc_info.value.code == ErrorCode.SELF_INVITE


class TestCheckDevice:
    def test_reuse_wins_over_daily_limit(self, referral_service):
        guard = InviteDeviceGuard(date=TODAY, claim_count=3, claimed_codes=["ABCD1234"])

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_device(guard, "ABCD1234", TODAY)
        assert exc_info.value.code == ErrorCode.DEVICE_CODE_REUSE

    def test_daily_limit(self, referral_service):
        guard = InviteDeviceGuard(date=TODAY, claim_count=3)

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_device(guard, "ABCD1234", TODAY)
        assert exc_info.value.code == ErrorCode.DEVICE_DAILY_LIMIT

    def test_second_account_on_same_device_is_reuse(self, referral_service):
        guard = referral_service.record_device_claim(InviteDeviceGuard(), "ABCDEF12", TODAY)

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_device(guard, "ABCDEF12", TODAY)
        assert exc_info.value.code == ErrorCode.DEVICE_CODE_REUSE

    def test_daily_counter_rolls_over(self, referral_service):
        guard = InviteDeviceGuard(date="2026-03-09", claim_count=3)

        referral_service.check_device(guard, "ABCD1234", TODAY)

    def test_reuse_survives_day_change(self, referral_service):
        guard = InviteDeviceGuard(date="2026-01-01", claim_count=1, claimed_codes=["ABCD1234"])

        with pytest.raises(ConflictError):
            referral_service.check_device(guard, "ABCD1234", TODAY)

    def test_record_device_claim(self, referral_service):
        guard = InviteDeviceGuard(date="2026-03-09", claim_count=2, claimed_codes=["OLD00001"])

        updated = referral_service.record_device_claim(guard, "ABCD1234", TODAY)

        assert updated.date == TODAY
        assert updated.claim_count == 1
        assert updated.claimed_codes == ["OLD00001", "ABCD1234"]


class TestCheckOwner:
    def test_missing_entry(self, referral_service):
        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_owner(None, "user-2")
        assert exc_info.value.code == ErrorCode.INVITE_NOT_FOUND

    def test_owner_cannot_claim(self, referral_service):
        entry = InviteRegistryEntry(code="ABCD1234", owner_id="user-2")

        with pytest.raises(ConflictError) as exc_info:
            referral_service.check_owner(entry, "user-2")
        assert exc_info.value.code == ErrorCode.SELF_INVITE


class TestRewards:
    """Tests for reward bookkeeping."""

    @pytest.mark.asyncio
    async def test_inviter_rewarded_once_per_claimant(self, unit_env):
        # Arrange
        referral_service = await unit_env.get(ReferralService)
        inviter = ProgressState(total_xp=10)

        # Act
        first, granted = referral_service.grant_inviter_reward(inviter, "user-2")
        second, granted_again = referral_service.grant_inviter_reward(first, "user-2")

        # Assert
        assert granted
        assert not granted_again
        assert second.total_xp == 50
        assert second.invite_claims_count == 1
        assert second.invite_rewards_earned == 40
        assert second.referral_accepted_keys == ["user-2"]

    def test_accepted_keys_are_capped(self, referral_service):
        keys = [f"user-{i}" for i in range(200)]
        inviter = ProgressState(referral_accepted_keys=keys)

        updated, granted = referral_service.grant_inviter_reward(inviter, "user-new")

        assert granted
        assert len(updated.referral_accepted_keys) == 200
        assert updated.referral_accepted_keys[0] == "user-1"
        assert updated.referral_accepted_keys[-1] == "user-new"

    def test_mark_claimed_is_write_once(self, referral_service):
        claimed_at = datetime(2026, 3, 10, 9, 30)

        state = referral_service.mark_claimed(ProgressState(), "ABCD1234", claimed_at)
        again = referral_service.mark_claimed(state, "ZZZZ9999", claimed_at)

        assert state.invited_by_code == "ABCD1234"
        assert state.invite_claimed_at == "2026-03-10T09:30:00"
        assert again.invited_by_code == "ABCD1234"
