"""Direct mark unlock use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.domain.error import DomainError, ValidationError
from ritual.domain.model import MARKS_BY_ID
from ritual.domain.service import MarkService
from ritual.domain.value import ErrorCode


class UnlockMarkRequest(BaseModel):
    """Unlock a catalog mark triggered outside the built-in rules."""

    mark_id: str


class UnlockMarkUseCase:
    """Unlock a mark once; repeats are silent no-ops."""

    def __init__(self, session: ProgressSession, mark_service: MarkService) -> None:
        self.session = session
        self.mark_service = mark_service

    async def execute(self, request: UnlockMarkRequest) -> ActionResponse:
        with logfire.span("unlock_mark.execute", mark_id=request.mark_id):
            try:
                _, state = self.session.require_ready()
                if request.mark_id not in MARKS_BY_ID:
                    raise ValidationError(ErrorCode.UNKNOWN_MARK, "Unknown mark.")
            except DomainError as e:
                return ActionResponse.failure(e)

            marks, notification = self.mark_service.try_unlock(request.mark_id, state.marks)
            if notification is None:
                return ActionResponse(state=state)

            state = self.session.commit(state.model_copy(update={"marks": marks}))
            return ActionResponse(state=state, unlocked=[notification])
