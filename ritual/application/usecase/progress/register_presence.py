"""Daily presence use case."""

import logfire
from pydantic import BaseModel

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse
from ritual.config import ProgressSettings
from ritual.domain.error import DomainError
from ritual.domain.service import PRESENCE_RULES, MarkService, RuleContext, StreakService, XPService


class RegisterPresenceRequest(BaseModel):
    """Daily presence request."""

    pass


class RegisterPresenceResponse(ActionResponse):
    """Daily presence result."""

    first_visit_today: bool = False
    streak_reset: bool = False


class RegisterPresenceUseCase:
    """Record the first visit of the calendar day.

    The first visit awards the daily login XP, resets the dwell budget,
    records the active day, clears a lapsed streak and checks presence marks.
    Later visits on the same day change nothing.
    """

    def __init__(
        self,
        session: ProgressSession,
        xp_service: XPService,
        streak_service: StreakService,
        mark_service: MarkService,
        progress_settings: ProgressSettings,
    ) -> None:
        self.session = session
        self.xp_service = xp_service
        self.streak_service = streak_service
        self.mark_service = mark_service
        self.settings = progress_settings

    async def execute(self, request: RegisterPresenceRequest) -> RegisterPresenceResponse:
        today = self.session.clock.today()
        with logfire.span("register_presence.execute", today=today):
            try:
                _, state = self.session.require_ready()
            except DomainError as e:
                return RegisterPresenceResponse.failure(e)

            if state.last_login_date == today:
                return RegisterPresenceResponse(state=state)

            streak_reset = self.streak_service.is_broken(state, today)
            update: dict = {
                "last_login_date": today,
                "daily_dwell_xp": 0,
                "last_dwell_date": today,
                "active_days": sorted({*state.active_days, today}),
            }
            if streak_reset:
                update.update({"streak": 0, "last_streak_date": None})
                logfire.info("Streak lapsed", previous_streak=state.streak)

            award = self.xp_service.award_xp(
                state.model_copy(update=update), self.settings.daily_login_xp
            )
            state = award.state
            evaluation = self.mark_service.evaluate(
                PRESENCE_RULES,
                RuleContext(
                    state=state, league_key=self.xp_service.league_of(state.total_xp).key
                ),
            )
            state = state.model_copy(update={"marks": evaluation.marks})

            self.session.commit(state, award.level_ups)
            return RegisterPresenceResponse(
                state=state,
                xp_awarded=award.awarded,
                unlocked=evaluation.notifications,
                level_ups=award.level_ups,
                first_visit_today=True,
                streak_reset=streak_reset,
            )
