"""Progress snapshot use case."""

from typing import Optional

from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.domain.model import League, LevelUpEvent, ProgressState
from ritual.domain.service import XPService
from ritual.domain.value import SyncChannel


class GetProgressRequest(BaseModel):
    """Progress snapshot request."""

    pass


class GetProgressResponse(BaseModel):
    """Read-only progress view for the presentation layer."""

    hydrated: bool
    state: ProgressState
    league: League
    progress_percent: float
    next_level_xp: int
    pending_level_up: Optional[LevelUpEvent] = None
    disabled_channels: list[SyncChannel] = []


class GetProgressUseCase:
    """Current snapshot plus league position."""

    def __init__(self, session: ProgressSession, xp_service: XPService) -> None:
        self.session = session
        self.xp_service = xp_service

    async def execute(self, request: GetProgressRequest) -> GetProgressResponse:
        state = self.session.store.get()
        xp = state.total_xp
        return GetProgressResponse(
            hydrated=self.session.hydrated,
            state=state,
            league=self.xp_service.league_of(xp),
            progress_percent=self.xp_service.progress_within_league(xp),
            next_level_xp=self.xp_service.next_level_xp(xp),
            pending_level_up=self.session.level_ups.current,
            disabled_channels=sorted(self.session.sync.disabled_channels, key=lambda c: c.value),
        )
