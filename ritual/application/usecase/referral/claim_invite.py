"""Claim invite use case."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ritual.adapter.error import RemoteError, TransientError
from ritual.application.registry import InviteRegistry
from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse, BaseUseCase
from ritual.config import ReferralSettings
from ritual.domain.error import ConflictError, DomainError, NotReadyError
from ritual.domain.model import Identity, InviteDeviceGuard, InviteRegistryEntry
from ritual.domain.service import ReferralService, XPService
from ritual.domain.value import ErrorCode, SyncChannel, normalize_invite_code

PENDING_INVITE_KEY = "180_pending_invite_code"
DEVICE_GUARD_KEY = "180_invite_device_guard_v1"
DEVICE_KEY = "180_referral_device_key_v1"

# Deterministic rejections; retrying the same code can never succeed
CLEARS_PENDING = frozenset(
    {
        ErrorCode.INVALID_CODE,
        ErrorCode.INVITE_NOT_FOUND,
        ErrorCode.SELF_INVITE,
        ErrorCode.ALREADY_CLAIMED,
        ErrorCode.DEVICE_CODE_REUSE,
    }
)


class ClaimInviteRequest(BaseModel):
    """Claim invite request."""

    code: str


class ClaimInviteResponse(ActionResponse):
    """Claim invite result."""

    code: Optional[str] = None
    inviter_id: Optional[str] = None
    inviter_rewarded: bool = False


class ClaimInviteUseCase(BaseUseCase):
    """Claim a referral invite code for the signed-in identity.

    Checks run in a fixed order (format, account already claimed, own code,
    device reuse, device daily limit, registry owner). On success the
    claimant gets the invitee reward, the device guard and registry counters
    are updated and the inviter is rewarded once per distinct claimant.
    Concurrent claims of the same code by the same identity are rejected
    while the first is in flight.
    """

    def __init__(
        self,
        session: ProgressSession,
        referral_service: ReferralService,
        xp_service: XPService,
        registry: InviteRegistry,
        referral_settings: ReferralSettings,
    ) -> None:
        """Initialize claim invite use case.

        Args:
            session: Progress session
            referral_service: Claim rules and reward bookkeeping
            xp_service: XP and league ledger
            registry: Invite registry with local fallback
            referral_settings: Reward amounts
        """
        self.session = session
        self.referral_service = referral_service
        self.xp_service = xp_service
        self.registry = registry
        self.settings = referral_settings

    # Local device state -------------------------------------------------
    def _load_guard(self) -> InviteDeviceGuard:
        raw = self.session.local_cache.read_json(DEVICE_GUARD_KEY)
        if not isinstance(raw, dict):
            return InviteDeviceGuard()
        try:
            return InviteDeviceGuard.model_validate(raw)
        except PydanticValidationError:
            logfire.warn("Discarding malformed invite device guard")
            return InviteDeviceGuard()

    def _device_key(self) -> str:
        cache = self.session.local_cache
        key = cache.read_text(DEVICE_KEY)
        if not key:
            key = f"device:{uuid4().hex}"
            cache.write_text(DEVICE_KEY, key)
        return key

    def _clear_pending(self, code: str, force: bool = False) -> None:
        cache = self.session.local_cache
        pending = cache.read_text(PENDING_INVITE_KEY)
        if pending is None:
            return
        if force or normalize_invite_code(pending) == code:
            cache.delete(PENDING_INVITE_KEY)
            logfire.info("Pending invite code cleared", code=code)

    # Execution ----------------------------------------------------------
    async def execute(self, request: ClaimInviteRequest) -> ClaimInviteResponse:
        code = normalize_invite_code(request.code)
        with logfire.span("claim_invite.execute", code=code):
            try:
                identity, _ = self.session.require_ready()
            except DomainError as e:
                return ClaimInviteResponse.failure(e)

            flight_key = (identity.id, code)
            if flight_key in self.session.claims_in_flight:
                return ClaimInviteResponse.failure(
                    ConflictError(ErrorCode.CLAIM_IN_FLIGHT, "A claim for this code is in progress.")
                )

            self.session.claims_in_flight.add(flight_key)
            try:
                return await self._claim(identity, request.code)
            finally:
                self.session.claims_in_flight.discard(flight_key)

    async def _claim(self, identity: Identity, raw_code: str) -> ClaimInviteResponse:
        referral = self.referral_service
        today = self.session.clock.today()
        code = normalize_invite_code(raw_code)

        try:
            _, state = self.session.require_ready()
            code = referral.check_claimant(state, raw_code)
            referral.check_device(self._load_guard(), code, today)

            try:
                entry = await self.registry.find_by_code(code)
            except TransientError as e:
                logfire.warn("Invite lookup failed", code=code, error=str(e))
                return ClaimInviteResponse(
                    ok=False, error_code=ErrorCode.SERVER_ERROR, message="Invite claim failed."
                )
            entry = referral.check_owner(entry, identity.id)

            # State may have moved while the lookup was awaited
            current, state = self.session.require_ready()
            if current.id != identity.id:
                raise NotReadyError("Identity changed during claim")
            referral.check_claimant(state, code)
            guard = self._load_guard()
            referral.check_device(guard, code, today)
        except DomainError as e:
            if e.code in CLEARS_PENDING:
                self._clear_pending(code, force=e.code == ErrorCode.ALREADY_CLAIMED)
            logfire.info("Invite claim rejected", code=code, reason=e.code.value)
            return ClaimInviteResponse.failure(e, code=code or None)

        now = self.session.clock.now()
        self.session.local_cache.write_json(
            DEVICE_GUARD_KEY, referral.record_device_claim(guard, code, today).to_payload()
        )
        award = self.xp_service.award_xp(
            referral.mark_claimed(state, code, now), self.settings.invitee_reward_xp
        )
        self.session.commit(award.state, award.level_ups)
        self._clear_pending(code, force=True)

        logfire.info(
            "Invite claimed",
            code=code,
            inviter_id=entry.owner_id,
            device_key=self._device_key(),
            local_only=self.registry.is_local_only,
        )

        try:
            await self.registry.save(referral.record_registry_claim(entry, now))
        except RemoteError as e:
            logfire.warn("Invite registry update failed", code=code, error=str(e))

        inviter_rewarded = await self._reward_inviter(entry, identity)

        return ClaimInviteResponse(
            state=award.state,
            xp_awarded=award.awarded,
            level_ups=award.level_ups,
            code=code,
            inviter_id=entry.owner_id,
            inviter_rewarded=inviter_rewarded,
        )

    async def _reward_inviter(self, entry: InviteRegistryEntry, claimant: Identity) -> bool:
        """Grant the inviter reward remotely, else on the local inviter snapshot."""
        referral = self.referral_service
        session = self.session
        profiles = session.profile_repository

        try:
            inviter_state = await session.sync.call(
                SyncChannel.PROFILE,
                "find_inviter_progress",
                lambda: profiles.find_progress(entry.owner_id),
            )
            if inviter_state is not None:
                updated, granted = referral.grant_inviter_reward(inviter_state, claimant.id)
                if granted:
                    await session.sync.call(
                        SyncChannel.PROFILE,
                        "save_inviter_progress",
                        lambda: profiles.save_progress(entry.owner_id, entry.owner_email, updated),
                    )
                    logfire.info("Inviter rewarded", inviter_id=entry.owner_id, remote=True)
                return granted
        except RemoteError as e:
            logfire.info("Inviter reward falling back to local", error=str(e))

        inviter = Identity(id=entry.owner_id, email=entry.owner_email)
        inviter_state = session.local_cache.read(inviter)
        if inviter_state is None:
            return False
        updated, granted = referral.grant_inviter_reward(inviter_state, claimant.id)
        if granted:
            session.local_cache.write(inviter, updated)
            logfire.info("Inviter rewarded", inviter_id=entry.owner_id, remote=False)
        return granted
