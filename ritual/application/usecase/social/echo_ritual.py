"""Give echo use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import DomainError
from ritual.domain.service import ECHO_GIVEN_RULES, MarkService, RuleContext, XPService


class EchoRitualRequest(BaseModel):
    """Echo someone else's ritual."""

    ritual_id: str = ""


class EchoRitualUseCase:
    """Reward the identity for echoing a ritual."""

    def __init__(
        self,
        session: ProgressSession,
        xp_service: XPService,
        mark_service: MarkService,
        progress_settings: ProgressSettings,
    ) -> None:
        self.session = session
        self.xp_service = xp_service
        self.mark_service = mark_service
        self.settings = progress_settings

    async def execute(self, request: EchoRitualRequest) -> ActionResponse:
        with logfire.span("echo_ritual.execute", ritual_id=request.ritual_id):
            try:
                _, state = self.session.require_ready()
            except DomainError as e:
                return ActionResponse.failure(e)

            award = self.xp_service.award_xp(
                state.model_copy(update={"echoes_given": state.echoes_given + 1}),
                self.settings.echo_given_xp,
            )
            evaluation = self.mark_service.evaluate(
                ECHO_GIVEN_RULES, RuleContext(state=award.state)
            )
            state = award.state.model_copy(update={"marks": evaluation.marks})
            self.session.commit(state, award.level_ups)
            return ActionResponse(
                state=state,
                xp_awarded=award.awarded,
                unlocked=evaluation.notifications,
                level_ups=award.level_ups,
            )
