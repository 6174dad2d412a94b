"""Dwell reward use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import ConflictError, DomainError
from ritual.domain.service import XPService
from ritual.domain.value import ErrorCode


class AwardDwellRequest(BaseModel):
    """One dwell tick."""

    pass


class AwardDwellUseCase:
    """Small XP reward for time spent, capped per calendar day."""

    def __init__(
        self,
        session: ProgressSession,
        xp_service: XPService,
        progress_settings: ProgressSettings,
    ) -> None:
        self.session = session
        self.xp_service = xp_service
        self.settings = progress_settings

    async def execute(self, request: AwardDwellRequest) -> ActionResponse:
        today = self.session.clock.today()
        with logfire.span("award_dwell.execute", today=today):
            try:
                _, state = self.session.require_ready()
                earned = state.daily_dwell_xp if state.last_dwell_date == today else 0
                remaining = self.settings.max_daily_dwell_xp - earned
                if remaining <= 0:
                    raise ConflictError(
                        ErrorCode.DWELL_LIMIT_REACHED, "Daily dwell reward already earned."
                    )
            except DomainError as e:
                return ActionResponse.failure(e)

            amount = min(self.settings.dwell_step_xp, remaining)
            award = self.xp_service.award_xp(
                state.model_copy(
                    update={"daily_dwell_xp": earned + amount, "last_dwell_date": today}
                ),
                amount,
            )
            self.session.commit(award.state, award.level_ups)
            return ActionResponse(
                state=award.state, xp_awarded=award.awarded, level_ups=award.level_ups
            )
