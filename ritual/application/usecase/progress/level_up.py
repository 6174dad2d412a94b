"""Level-up acknowledgement use case."""

from typing import Optional

from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.domain.model import LevelUpEvent


class AcknowledgeLevelUpRequest(BaseModel):
    """Dismiss the level-up currently on display."""

    pass


class AcknowledgeLevelUpResponse(BaseModel):
    """Next level-up to display."""

    next: Optional[LevelUpEvent] = None
    remaining: int = 0


class AcknowledgeLevelUpUseCase:
    """Drain the level-up queue one event at a time."""

    def __init__(self, session: ProgressSession) -> None:
        self.session = session

    async def execute(self, request: AcknowledgeLevelUpRequest) -> AcknowledgeLevelUpResponse:
        upcoming = self.session.level_ups.acknowledge()
        return AcknowledgeLevelUpResponse(
            next=upcoming, remaining=len(self.session.level_ups)
        )
