"""Award XP use case."""

import logfire
from pydantic import BaseModel, Field

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.domain.error import DomainError
from ritual.domain.service import XPService


class AwardXPRequest(BaseModel):
    """Award XP request."""

    amount: int = Field(gt=0)
    reason: str = ""


class AwardXPUseCase:
    """Add XP and queue every league crossed."""

    def __init__(self, session: ProgressSession, xp_service: XPService) -> None:
        """Initialize award XP use case.

        Args:
            session: Progress session
            xp_service: XP and league ledger
        """
        self.session = session
        self.xp_service = xp_service

    async def execute(self, request: AwardXPRequest) -> ActionResponse:
        with logfire.span("award_xp.execute", amount=request.amount, reason=request.reason):
            try:
                _, state = self.session.require_ready()
            except DomainError as e:
                return ActionResponse.failure(e)

            award = self.xp_service.award_xp(state, request.amount)
            self.session.commit(award.state, award.level_ups)
            return ActionResponse(
                state=award.state,
                xp_awarded=award.awarded,
                level_ups=award.level_ups,
            )
