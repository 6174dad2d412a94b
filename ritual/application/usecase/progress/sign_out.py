"""Sign-out use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse


class SignOutRequest(BaseModel):
    """Sign-out request."""

    pass


class SignOutUseCase:
    """Replace the session state with an empty one.

    Remote writes already in flight are left to finish on their own.
    """

    def __init__(self, session: ProgressSession) -> None:
        self.session = session

    async def execute(self, request: SignOutRequest) -> ActionResponse:
        identity_id = self.session.identity.id if self.session.identity else None
        with logfire.span("sign_out.execute", identity_id=identity_id):
            self.session.reset()
            return ActionResponse(state=self.session.store.get())
