"""Profile identity update use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import DomainError, ValidationError
from ritual.domain.model.progress import DEFAULT_AVATAR_ID, DEFAULT_BIO
from ritual.domain.value import ErrorCode


class UpdateIdentityRequest(BaseModel):
    """Profile fields to change; omitted fields stay as they are."""

    full_name: Optional[str] = None
    username: Optional[str] = None
    gender: Optional[str] = None
    birth_date: Optional[str] = None
    bio: Optional[str] = None
    avatar_id: Optional[str] = None
    avatar_url: Optional[str] = None


class UpdateIdentityUseCase:
    """Update display fields on the progress record."""

    def __init__(self, session: ProgressSession, progress_settings: ProgressSettings) -> None:
        self.session = session
        self.settings = progress_settings

    async def execute(self, request: UpdateIdentityRequest) -> ActionResponse:
        changes = {
            field: value.strip()
            for field, value in request.model_dump(exclude_none=True).items()
        }
        with logfire.span("update_identity.execute", fields=sorted(changes)):
            try:
                _, state = self.session.require_ready()
                if len(changes.get("bio", "")) > self.settings.max_entry_chars:
                    raise ValidationError(
                        ErrorCode.INVALID_PROFILE,
                        f"Bio can be at most {self.settings.max_entry_chars} characters.",
                    )
            except DomainError as e:
                return ActionResponse.failure(e)

            if "bio" in changes and not changes["bio"]:
                changes["bio"] = DEFAULT_BIO
            if "avatar_id" in changes and not changes["avatar_id"]:
                changes["avatar_id"] = DEFAULT_AVATAR_ID

            state = self.session.commit(state.model_copy(update=changes))
            return ActionResponse(state=state)
