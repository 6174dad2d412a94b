"""Share reward use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import ConflictError, DomainError
from ritual.domain.service import XPService
from ritual.domain.value import ErrorCode


class ClaimShareRewardRequest(BaseModel):
    """Share reward request."""

    platform: str = ""


class ClaimShareRewardUseCase:
    """Award the share bonus once per calendar day."""

    def __init__(
        self,
        session: ProgressSession,
        xp_service: XPService,
        progress_settings: ProgressSettings,
    ) -> None:
        self.session = session
        self.xp_service = xp_service
        self.settings = progress_settings

    async def execute(self, request: ClaimShareRewardRequest) -> ActionResponse:
        today = self.session.clock.today()
        with logfire.span("claim_share_reward.execute", platform=request.platform):
            try:
                _, state = self.session.require_ready()
                if state.last_share_reward_date == today:
                    raise ConflictError(
                        ErrorCode.ALREADY_REWARDED_TODAY, "Share reward already claimed today."
                    )
            except DomainError as e:
                return ActionResponse.failure(e)

            award = self.xp_service.award_xp(
                state.model_copy(update={"last_share_reward_date": today}),
                self.settings.share_reward_xp,
            )
            self.session.commit(award.state, award.level_ups)
            return ActionResponse(
                state=award.state, xp_awarded=award.awarded, level_ups=award.level_ups
            )
