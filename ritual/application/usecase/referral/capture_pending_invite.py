"""Capture pending invite use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse, BaseUseCase
from ritual.application.usecase.referral.claim_invite import (
    PENDING_INVITE_KEY,
    ClaimInviteRequest,
    ClaimInviteUseCase,
)
from ritual.domain.error import ValidationError
from ritual.domain.value import ErrorCode, InviteCode


class CapturePendingInviteRequest(BaseModel):
    """Invite code taken from an entry link."""

    code: str


class CapturePendingInviteResponse(ActionResponse):
    """Capture result."""

    code: Optional[str] = None
    invite_claim: Optional[ActionResponse] = None


class CapturePendingInviteUseCase(BaseUseCase):
    """Remember an invite code until the user is signed in.

    Works before sign-in. If a hydrated session already exists the code is
    claimed right away.
    """

    def __init__(self, session: ProgressSession, claim_invite: ClaimInviteUseCase) -> None:
        self.session = session
        self.claim_invite = claim_invite

    async def execute(
        self, request: CapturePendingInviteRequest
    ) -> CapturePendingInviteResponse:
        with logfire.span("capture_pending_invite.execute"):
            try:
                code = InviteCode(request.code).root
            except PydanticValidationError:
                return CapturePendingInviteResponse.failure(
                    ValidationError(ErrorCode.INVALID_CODE, "Invite code is invalid.")
                )

            self.session.local_cache.write_text(PENDING_INVITE_KEY, code)

            invite_claim = None
            if self.session.identity is not None and self.session.hydrated:
                invite_claim = await self.claim_invite.execute(ClaimInviteRequest(code=code))
            return CapturePendingInviteResponse(code=code, invite_claim=invite_claim)
