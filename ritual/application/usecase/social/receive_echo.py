"""Receive echo use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import DomainError
from ritual.domain.model import EchoLog
from ritual.domain.model.progress import MAX_ECHO_HISTORY
from ritual.domain.service import ECHO_RECEIVED_RULES, MarkService, RuleContext, XPService


class ReceiveEchoRequest(BaseModel):
    """An echo arrived on one of the identity's rituals."""

    echo_id: str
    subject_title: str = ""


class ReceiveEchoUseCase:
    """Reward a received echo. Replays of the same echo id are ignored."""

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

    async def execute(self, request: ReceiveEchoRequest) -> ActionResponse:
        with logfire.span("receive_echo.execute", echo_id=request.echo_id):
            try:
                _, state = self.session.require_ready()
            except DomainError as e:
                return ActionResponse.failure(e)

            if any(echo.id == request.echo_id for echo in state.echo_history):
                return ActionResponse(state=state)

            echo = EchoLog(
                id=request.echo_id,
                subject_title=request.subject_title,
                date=self.session.clock.today(),
            )
            award = self.xp_service.award_xp(
                state.model_copy(
                    update={
                        "echoes_received": state.echoes_received + 1,
                        "echo_history": [echo, *state.echo_history][:MAX_ECHO_HISTORY],
                    }
                ),
                self.settings.echo_received_xp,
            )
            evaluation = self.mark_service.evaluate(
                ECHO_RECEIVED_RULES, RuleContext(state=award.state)
            )
            state = award.state.model_copy(update={"marks": evaluation.marks})
            self.session.commit(state, award.level_ups)
            return ActionResponse(
                state=state,
                xp_awarded=award.awarded,
                unlocked=evaluation.notifications,
                level_ups=award.level_ups,
            )
