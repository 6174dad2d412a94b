"""Toggle featured mark use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.domain.error import DomainError, ValidationError
from ritual.domain.model.progress import MAX_FEATURED_MARKS
from ritual.domain.value import ErrorCode


class ToggleFeaturedMarkRequest(BaseModel):
    """Feature or unfeature an unlocked mark."""

    mark_id: str


class ToggleFeaturedMarkUseCase:
    """Featured marks are a subset of unlocked marks, oldest evicted past three."""

    def __init__(self, session: ProgressSession) -> None:
        self.session = session

    async def execute(self, request: ToggleFeaturedMarkRequest) -> ActionResponse:
        with logfire.span("toggle_featured_mark.execute", mark_id=request.mark_id):
            try:
                _, state = self.session.require_ready()
                if request.mark_id not in state.marks:
                    raise ValidationError(
                        ErrorCode.MARK_NOT_UNLOCKED, "Only unlocked marks can be featured."
                    )
            except DomainError as e:
                return ActionResponse.failure(e)

            if request.mark_id in state.featured_marks:
                featured = [m for m in state.featured_marks if m != request.mark_id]
            else:
                featured = [*state.featured_marks, request.mark_id][-MAX_FEATURED_MARKS:]

            state = self.session.commit(state.model_copy(update={"featured_marks": featured}))
            return ActionResponse(state=state)
