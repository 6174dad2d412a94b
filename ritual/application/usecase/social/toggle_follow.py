"""Toggle follow use case."""

import logfire
from pydantic import BaseModel, field_validator

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.domain.error import DomainError
from ritual.domain.repository import FollowRepository
from ritual.domain.service import FOLLOW_RULES, MarkService, RuleContext
from ritual.domain.value import SyncChannel


class ToggleFollowRequest(BaseModel):
    """Follow or unfollow a username."""

    follow_key: str

    @field_validator("follow_key")
    @classmethod
    def strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("follow_key cannot be empty")
        return v


class ToggleFollowResponse(ActionResponse):
    """Toggle follow result."""

    following: bool = False


class ToggleFollowUseCase:
    """Flip a follow edge locally, then mirror it remotely."""

    def __init__(
        self,
        session: ProgressSession,
        mark_service: MarkService,
        follow_repository: FollowRepository,
    ) -> None:
        self.session = session
        self.mark_service = mark_service
        self.follow_repository = follow_repository

    async def execute(self, request: ToggleFollowRequest) -> ToggleFollowResponse:
        key = request.follow_key
        with logfire.span("toggle_follow.execute", follow_key=key):
            try:
                identity, state = self.session.require_ready()
            except DomainError as e:
                return ToggleFollowResponse.failure(e)

            now_following = key not in state.following
            if now_following:
                state = state.model_copy(update={"following": sorted({*state.following, key})})
                evaluation = self.mark_service.evaluate(FOLLOW_RULES, RuleContext(state=state))
                state = state.model_copy(update={"marks": evaluation.marks})
                unlocked = evaluation.notifications
                write = self.follow_repository.follow
            else:
                state = state.model_copy(
                    update={"following": [k for k in state.following if k != key]}
                )
                unlocked = []
                write = self.follow_repository.unfollow

            self.session.commit(state)
            self.session.schedule(
                self.session.sync.run(
                    SyncChannel.FOLLOWS, "toggle_follow", lambda: write(identity.id, key)
                )
            )
            return ToggleFollowResponse(state=state, unlocked=unlocked, following=now_following)
