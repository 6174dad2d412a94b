"""Ritual submission use case."""

from typing import Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from ritual.application.session import ProgressSession
from ritual.application.usecase.base import ActionResponse, BaseUseCase
from ritual.config import ProgressSettings
from ritual.domain.error import ConflictError, DomainError, ValidationError
from ritual.domain.model import JournalEntry, ProgressState, StreakEvent
from ritual.domain.repository import JournalEntryRepository
from ritual.domain.service import (
    RITUAL_RULES,
    ContentModerator,
    MarkService,
    ModerationLimits,
    RuleContext,
    StreakService,
    XPService,
)
from ritual.domain.service.merge_service import normalize_text
from ritual.domain.value import ErrorCode, SyncChannel


class SubmitRitualRequest(BaseModel):
    """Submit ritual request."""

    subject_id: int = Field(default=0, ge=0)
    subject_title: str = ""
    text: str
    rating: Optional[float] = None
    genre: Optional[str] = None
    poster_ref: Optional[str] = None
    release_year: Optional[int] = None
    vote_average: Optional[float] = None


class SubmitRitualResponse(ActionResponse):
    """Submit ritual result."""

    entry: Optional[JournalEntry] = None
    streak_event: Optional[StreakEvent] = None


class SubmitRitualUseCase(BaseUseCase):
    """Journal entry submission pipeline.

    moderation -> duplicate check -> first-entry-of-day guard -> XP ->
    streak -> marks -> append -> local commit -> remote insert.

    The first-entry guard is computed once, before any state changes, and
    passed to the streak step. The remote insert runs after the local
    commit and cannot undo it.
    """

    def __init__(
        self,
        session: ProgressSession,
        moderator: ContentModerator,
        xp_service: XPService,
        streak_service: StreakService,
        mark_service: MarkService,
        journal_repository: JournalEntryRepository,
        progress_settings: ProgressSettings,
    ) -> None:
        """Initialize submit ritual use case.

        Args:
            session: Progress session
            moderator: Content moderator
            xp_service: XP and league ledger
            streak_service: Streak cadence tracker
            mark_service: Marks rule engine
            journal_repository: Remote journal entries
            progress_settings: XP tuning and moderation limits
        """
        self.session = session
        self.moderator = moderator
        self.xp_service = xp_service
        self.streak_service = streak_service
        self.mark_service = mark_service
        self.journal_repository = journal_repository
        self.settings = progress_settings

    def _entry_xp(self, text: str, streak: int) -> int:
        amount = self.settings.entry_base_xp
        if len(text) == self.settings.exact_length:
            amount += self.settings.exact_length_bonus_xp
        if streak >= self.settings.streak_multiplier_threshold:
            amount = self.xp_service.apply_multiplier(amount, self.settings.streak_multiplier)
        return amount

    def _is_duplicate(self, state: ProgressState, request: SubmitRitualRequest, today: str) -> bool:
        if request.subject_id:
            return state.has_entry_for_subject_on(request.subject_id, today)
        title = normalize_text(request.subject_title)
        return bool(title) and any(
            e.date == today and normalize_text(e.subject_title) == title
            for e in state.journal_entries
        )

    async def execute(self, request: SubmitRitualRequest) -> SubmitRitualResponse:
        """Submit a journal entry.

        Args:
            request: Entry fields plus subject facts used by marks

        Returns:
            SubmitRitualResponse; moderation and duplicate rejections come
            back with ok=False and leave state untouched
        """
        now = self.session.clock.now()
        today = self.session.clock.today()
        with logfire.span(
            "submit_ritual.execute", subject_id=request.subject_id, length=len(request.text)
        ):
            try:
                identity, state = self.session.require_ready()

                verdict = self.moderator.moderate(
                    request.text,
                    ModerationLimits(
                        max_chars=self.settings.max_entry_chars,
                        max_emoji_count=self.settings.max_emoji_count,
                        max_emoji_ratio=self.settings.max_emoji_ratio,
                    ),
                )
                if not verdict.ok:
                    logfire.info("Ritual rejected by moderation", code=verdict.code)
                    raise ValidationError(
                        ErrorCode.MODERATION_REJECTED,
                        verdict.message or "Entry rejected by moderation.",
                    )

                if self._is_duplicate(state, request, today):
                    raise ConflictError(
                        ErrorCode.DUPLICATE_ENTRY, "This film was already journaled today."
                    )
            except DomainError as e:
                return SubmitRitualResponse.failure(e)

            text = request.text.strip()
            is_first_entry_today = not state.has_entry_on(today)
            advance = self.streak_service.advance(state, today, is_first_entry_today)
            amount = self._entry_xp(text, advance.streak)

            entry = JournalEntry(
                id=uuid4().hex,
                date=today,
                subject_id=request.subject_id,
                subject_title=request.subject_title.strip(),
                text=text,
                genre=request.genre or None,
                rating=request.rating,
                poster_ref=request.poster_ref or None,
            )

            award = self.xp_service.award_xp(state, amount)

            genre = entry.genre
            genre_is_new = bool(genre) and genre not in award.state.unique_genres
            unique_genres = sorted({*award.state.unique_genres, genre}) if genre else award.state.unique_genres

            state = award.state.model_copy(
                update={
                    "streak": advance.streak,
                    "last_streak_date": advance.last_streak_date,
                    "non_consecutive_count": advance.non_consecutive_count,
                    "unique_genres": unique_genres,
                    "journal_entries": [entry, *award.state.journal_entries],
                }
            )

            evaluation = self.mark_service.evaluate(
                RITUAL_RULES,
                RuleContext(
                    state=state,
                    text=text,
                    genre=genre,
                    genre_is_new=genre_is_new,
                    hour=now.hour,
                    release_year=request.release_year,
                    vote_average=request.vote_average,
                    exact_length=self.settings.exact_length,
                ),
            )
            state = state.model_copy(update={"marks": evaluation.marks})

            self.session.commit(state, award.level_ups, backup=True)
            self.session.schedule(
                self.session.sync.run(
                    SyncChannel.ENTRIES,
                    "insert_entry",
                    lambda: self.journal_repository.insert(identity.id, entry),
                )
            )

            logfire.info(
                "Ritual submitted",
                entry_id=entry.id,
                xp=award.awarded,
                streak=state.streak,
                unlocked=evaluation.unlocked,
            )
            return SubmitRitualResponse(
                state=state,
                entry=entry,
                xp_awarded=award.awarded,
                streak_event=advance.event,
                unlocked=evaluation.notifications,
                level_ups=award.level_ups,
            )
