"""Progress aggregate.

One ProgressState exists per authenticated identity. It is hydrated by
merging local and remote snapshots, mutated only by the engine, and persisted
after every mutation.
"""

from typing import Optional

from pydantic import Field

from ritual.domain.model.common import StoredModel

DEFAULT_BIO = "A silent observer."
DEFAULT_AVATAR_ID = "geo_1"

MAX_FEATURED_MARKS = 3
MAX_ECHO_HISTORY = 10


class JournalEntry(StoredModel):
    """A single daily ritual entry about a film.

    The id alone is not a reliable identity: entries written offline get a
    local id and may come back from the remote store under another one.
    """

    id: str
    date: str
    subject_id: int = Field(default=0, alias="movieId")
    subject_title: str = Field(default="", alias="movieTitle")
    text: str = ""
    genre: Optional[str] = None
    rating: Optional[float] = None
    poster_ref: Optional[str] = Field(default=None, alias="posterPath")


class EchoLog(StoredModel):
    """A received echo, kept in a short history."""

    id: str
    subject_title: str = Field(default="", alias="movieTitle")
    date: str = ""


class ProgressState(StoredModel):
    """Cumulative progress record for one identity.

    Invariants:
    - featured_marks is a subset of marks with at most 3 entries
    - streak > 0 exactly when last_streak_date is set
    - invited_by_code is written at most once
    """

    total_xp: int = Field(default=0, ge=0, alias="totalXP")
    last_login_date: Optional[str] = None
    daily_dwell_xp: int = Field(default=0, ge=0, alias="dailyDwellXP")
    last_dwell_date: Optional[str] = None

    journal_entries: list[JournalEntry] = Field(default_factory=list)

    marks: list[str] = Field(default_factory=list)
    featured_marks: list[str] = Field(default_factory=list)
    active_days: list[str] = Field(default_factory=list)
    unique_genres: list[str] = Field(default_factory=list)

    streak: int = Field(default=0, ge=0)
    last_streak_date: Optional[str] = None
    non_consecutive_count: int = Field(default=0, ge=0)

    echoes_given: int = Field(default=0, ge=0)
    echoes_received: int = Field(default=0, ge=0)
    echo_history: list[EchoLog] = Field(default_factory=list)

    followers: int = Field(default=0, ge=0)
    following: list[str] = Field(default_factory=list)

    full_name: str = ""
    username: str = ""
    gender: str = ""
    birth_date: str = ""
    bio: str = DEFAULT_BIO
    avatar_id: str = DEFAULT_AVATAR_ID
    avatar_url: str = ""

    last_share_reward_date: Optional[str] = None

    invite_code: str = ""
    invited_by_code: str = ""
    invite_claims_count: int = Field(default=0, ge=0)
    invite_rewards_earned: int = Field(default=0, ge=0)
    invite_claimed_at: str = ""
    referral_accepted_keys: list[str] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.journal_entries)

    def has_entry_on(self, day: str) -> bool:
        """Whether any entry exists for the calendar day."""
        return any(entry.date == day for entry in self.journal_entries)

    def has_entry_for_subject_on(self, subject_id: int, day: str) -> bool:
        """Whether the subject was already journaled on the calendar day."""
        return any(
            entry.date == day and entry.subject_id == subject_id
            for entry in self.journal_entries
        )


def empty_progress() -> ProgressState:
    """Fresh state for a new or signed-out identity."""
    return ProgressState()
