"""Ensure invite code use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from ritual.adapter.error import TransientError
from ritual.application.registry import InviteRegistry
from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse, BaseUseCase
from ritual.domain.error import DomainError, NotReadyError
from ritual.domain.model import Identity, InviteRegistryEntry
from ritual.domain.service import ReferralService
from ritual.domain.value import ErrorCode

MAX_ISSUE_ATTEMPTS = 8


class EnsureInviteCodeRequest(BaseModel):
    """Ensure invite code request."""

    pass


class EnsureInviteCodeResponse(ActionResponse):
    """Ensure invite code result."""

    code: Optional[str] = None


class EnsureInviteCodeUseCase(BaseUseCase):
    """Return the identity's invite code, issuing and registering one if needed.

    Codes are derived from the identity id and an attempt counter, so the
    same identity gets the same code on every device. A collision with
    another owner moves on to the next attempt.
    """

    def __init__(
        self,
        session: ProgressSession,
        referral_service: ReferralService,
        registry: InviteRegistry,
    ) -> None:
        self.session = session
        self.referral_service = referral_service
        self.registry = registry

    async def execute(self, request: EnsureInviteCodeRequest) -> EnsureInviteCodeResponse:
        with logfire.span("ensure_invite_code.execute"):
            try:
                identity, state = self.session.require_ready()
                try:
                    code = await self._resolve(identity, state.invite_code)
                except TransientError as e:
                    logfire.warn("Invite code issuance failed", error=str(e))
                    if state.invite_code:
                        return EnsureInviteCodeResponse(state=state, code=state.invite_code)
                    return EnsureInviteCodeResponse(
                        ok=False,
                        error_code=ErrorCode.SERVER_ERROR,
                        message="Invite code could not be issued.",
                    )

                current, state = self.session.require_ready()
                if current.id != identity.id:
                    raise NotReadyError("Identity changed during issuance")
            except DomainError as e:
                return EnsureInviteCodeResponse.failure(e)

            if code is None:
                return EnsureInviteCodeResponse(
                    ok=False,
                    error_code=ErrorCode.SERVER_ERROR,
                    message="No free invite code found.",
                )

            if state.invite_code != code:
                state = self.session.commit(state.model_copy(update={"invite_code": code}))
            return EnsureInviteCodeResponse(state=state, code=code)

    async def _resolve(self, identity: Identity, known_code: str) -> Optional[str]:
        existing = await self.registry.find_by_owner(identity.id)
        if existing is not None:
            return existing.code

        for attempt in range(MAX_ISSUE_ATTEMPTS):
            if attempt == 0 and known_code:
                candidate = known_code
            else:
                candidate = self.referral_service.generate_code(identity.id, attempt)
            found = await self.registry.find_by_code(candidate)
            if found is not None and found.owner_id != identity.id:
                logfire.info("Invite code collision", attempt=attempt)
                continue
            if found is None:
                await self.registry.save(
                    InviteRegistryEntry(
                        code=candidate,
                        owner_id=identity.id,
                        owner_email=identity.normalized_email,
                        created_at=self.session.clock.now(),
                    )
                )
                logfire.info("Invite code issued", code=candidate, identity_id=identity.id)
            return candidate
        return None
