"""Referral claim protocol domain service."""

import base64
import hashlib
from datetime import datetime
from typing import Optional

import logfire

from ritual.config import ReferralSettings
from ritual.domain.error import ConflictError, ValidationError
from ritual.domain.model import InviteDeviceGuard, InviteRegistryEntry, ProgressState
from ritual.domain.value import (
    INVITE_CODE_LENGTH,
    DateKey,
    ErrorCode,
    IdentityId,
    is_valid_invite_code,
    normalize_invite_code,
)

from .base import Service


class ReferralService(Service):
    """Invite code issuance, claim guards and reward bookkeeping.

    Claim rules are checked in a fixed precedence: format, account already
    claimed, own code, device guard, registry owner. Each check raises a
    ValidationError or ConflictError carrying the rejection code.
    """

    def __init__(self, referral_settings: ReferralSettings) -> None:
        """Initialize referral service.

        Args:
            referral_settings: Rewards, device limit and dedup cap
        """
        self.settings = referral_settings

    # Issuance -----------------------------------------------------------
    def generate_code(self, seed: str, attempt: int = 0) -> str:
        """Deterministic invite code for a seed and attempt counter."""
        digest = hashlib.sha256(f"{seed}:{attempt}".encode("utf-8")).digest()
        return base64.b32encode(digest).decode("ascii")[:INVITE_CODE_LENGTH]

    # Claim checks -------------------------------------------------------
    def check_claimant(self, state: ProgressState, raw_code: str) -> str:
        """Format, already-claimed and self-invite checks.

        Args:
            state: Claimant progress
            raw_code: Code as typed or captured from a link

        Returns:
            Normalized code

        Raises:
            ValidationError: INVALID_CODE
            ConflictError: ALREADY_CLAIMED or SELF_INVITE
        """
        code = normalize_invite_code(raw_code)
        if not is_valid_invite_code(code):
            raise ValidationError(ErrorCode.INVALID_CODE, "Invite code is invalid.")
        if state.invited_by_code:
            raise ConflictError(ErrorCode.ALREADY_CLAIMED, "Account already used an invite code.")
        if state.invite_code and state.invite_code == code:
            raise ConflictError(ErrorCode.SELF_INVITE, "Self invite is not allowed.")
        return code

    def check_device(self, guard: InviteDeviceGuard, code: str, today: DateKey) -> None:
        """Device reuse check, then the daily limit.

        Raises:
            ConflictError: DEVICE_CODE_REUSE or DEVICE_DAILY_LIMIT
        """
        guard = guard.for_day(today)
        if code in guard.claimed_codes:
            raise ConflictError(
                ErrorCode.DEVICE_CODE_REUSE, "This device already claimed this code."
            )
        if guard.claim_count >= self.settings.device_daily_limit:
            raise ConflictError(
                ErrorCode.DEVICE_DAILY_LIMIT, "Device daily invite limit reached."
            )

    def check_owner(
        self, entry: Optional[InviteRegistryEntry], claimant_id: IdentityId
    ) -> InviteRegistryEntry:
        """Registry lookup result check.

        Raises:
            ConflictError: INVITE_NOT_FOUND or SELF_INVITE
        """
        if entry is None:
            raise ConflictError(ErrorCode.INVITE_NOT_FOUND, "Invite code was not found.")
        if entry.owner_id == claimant_id:
            raise ConflictError(ErrorCode.SELF_INVITE, "Self invite is not allowed.")
        return entry

    # Bookkeeping --------------------------------------------------------
    def record_device_claim(
        self, guard: InviteDeviceGuard, code: str, today: DateKey
    ) -> InviteDeviceGuard:
        guard = guard.for_day(today)
        codes = guard.claimed_codes if code in guard.claimed_codes else [*guard.claimed_codes, code]
        return guard.model_copy(
            update={"claim_count": guard.claim_count + 1, "claimed_codes": codes}
        )

    def record_registry_claim(
        self, entry: InviteRegistryEntry, claimed_at: datetime
    ) -> InviteRegistryEntry:
        return entry.model_copy(
            update={"claim_count": entry.claim_count + 1, "last_claim_at": claimed_at}
        )

    def mark_claimed(
        self, state: ProgressState, code: str, claimed_at: datetime
    ) -> ProgressState:
        """Record the code on the claimant. Written at most once."""
        if state.invited_by_code:
            return state
        return state.model_copy(
            update={"invited_by_code": code, "invite_claimed_at": claimed_at.isoformat()}
        )

    def grant_inviter_reward(
        self, inviter: ProgressState, claimant_key: str
    ) -> tuple[ProgressState, bool]:
        """Reward the inviter once per distinct claimant.

        Args:
            inviter: Inviter progress
            claimant_key: Stable key of the claimant identity

        Returns:
            (state, granted); granted is False when already rewarded
        """
        if not claimant_key or claimant_key in inviter.referral_accepted_keys:
            logfire.info("Inviter reward already granted", claimant_key=claimant_key)
            return inviter, False

        reward = self.settings.inviter_reward_xp
        keys = [*inviter.referral_accepted_keys, claimant_key][-self.settings.accepted_keys_cap :]
        return (
            inviter.model_copy(
                update={
                    "referral_accepted_keys": keys,
                    "invite_claims_count": inviter.invite_claims_count + 1,
                    "invite_rewards_earned": inviter.invite_rewards_earned + reward,
                    "total_xp": inviter.total_xp + reward,
                }
            ),
            True,
        )
