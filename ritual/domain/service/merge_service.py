"""State merge resolver.

Sources are stale in different dimensions (the local cache may have newer
entries while the remote profile has a newer login), so merging is done per
field rather than last-write-wins for the whole snapshot:

- growing counters take the maximum
- date-stamped daily counters follow the source with the latest date
- set-like collections are unioned and sorted
- journal entries and echoes are merged by fingerprint
- identity text fields take the first non-empty, non-default value scanning the inputs
  in reverse order, so later inputs win for identity only

Merging is pure and deterministic: the same inputs in the same order always
produce the same output.
"""

import re
from typing import Callable, Iterable, Optional, Sequence

import logfire

from ritual.domain.model import EchoLog, JournalEntry, ProgressState
from ritual.domain.model.normalize import is_placeholder_title
from ritual.domain.model.progress import MAX_ECHO_HISTORY, MAX_FEATURED_MARKS
from ritual.domain.value import is_valid_invite_code, latest_date_key

from .base import Service

REFERRAL_ACCEPTED_KEYS_CAP = 200

_WHITESPACE = re.compile(r"\s+")

MAX_COUNTERS = (
    "total_xp",
    "followers",
    "echoes_given",
    "echoes_received",
    "invite_claims_count",
    "invite_rewards_earned",
    "non_consecutive_count",
)

SET_FIELDS = ("marks", "active_days", "unique_genres", "following")

IDENTITY_FIELDS = (
    "full_name",
    "username",
    "gender",
    "birth_date",
    "bio",
    "avatar_id",
    "avatar_url",
    "invite_claimed_at",
)

INVITE_CODE_FIELDS = ("invite_code", "invited_by_code")


def normalize_text(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip().lower()


def entry_fingerprint(entry: JournalEntry) -> tuple[str, str, str]:
    """Semantic identity of an entry across sources.

    (date, subject identity, normalized text). The subject identity is the
    subject id when known, otherwise the title, otherwise the entry id.
    """
    if entry.subject_id:
        subject = f"id:{entry.subject_id}"
    elif not is_placeholder_title(entry.subject_title):
        subject = f"title:{normalize_text(entry.subject_title)}"
    else:
        subject = f"entry:{entry.id}"
    return (entry.date, subject, normalize_text(entry.text))


def sort_entries(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Canonical order: date descending, id descending as tiebreak."""
    return sorted(entries, key=lambda e: (e.date, e.id), reverse=True)


def combine_entries(current: JournalEntry, other: JournalEntry) -> JournalEntry:
    """Combine two copies of the same entry, keeping the richest fields."""
    text = other.text if len(other.text) > len(current.text) else current.text
    title = current.subject_title
    if is_placeholder_title(title) and not is_placeholder_title(other.subject_title):
        title = other.subject_title
    return current.model_copy(
        update={
            "id": current.id or other.id,
            "text": text,
            "subject_title": title or other.subject_title,
            "subject_id": current.subject_id or other.subject_id,
            "poster_ref": current.poster_ref or other.poster_ref,
            "genre": current.genre or other.genre,
            "rating": current.rating if current.rating is not None else other.rating,
        }
    )


def merge_entries(groups: Iterable[Sequence[JournalEntry]]) -> list[JournalEntry]:
    merged: dict[tuple[str, str, str], JournalEntry] = {}
    for entries in groups:
        for entry in entries:
            key = entry_fingerprint(entry)
            existing = merged.get(key)
            merged[key] = entry if existing is None else combine_entries(existing, entry)
    return sort_entries(merged.values())


def echo_fingerprint(echo: EchoLog) -> str:
    if echo.id:
        return f"id:{echo.id}"
    return f"title:{normalize_text(echo.subject_title)}|{echo.date}"


def merge_echoes(groups: Iterable[Sequence[EchoLog]]) -> list[EchoLog]:
    merged: dict[str, EchoLog] = {}
    for echoes in groups:
        for echo in echoes:
            merged.setdefault(echo_fingerprint(echo), echo)
    ordered = sorted(merged.values(), key=lambda e: (e.date, e.id), reverse=True)
    return ordered[:MAX_ECHO_HISTORY]


def _union_sorted(values: Iterable[Iterable[str]]) -> list[str]:
    return sorted({item for group in values for item in group if item})


def _union_ordered(values: Iterable[Iterable[str]], cap: int) -> list[str]:
    seen: dict[str, None] = {}
    for group in values:
        for item in group:
            if item:
                seen.setdefault(item, None)
    keys = list(seen)
    return keys[-cap:] if len(keys) > cap else keys


def _first_reverse(
    states: Sequence[ProgressState],
    field: str,
    accept: Callable[[str], bool] = bool,
) -> Optional[str]:
    default = ProgressState.model_fields[field].default
    for state in reversed(states):
        value = getattr(state, field)
        if value and value != default and accept(value):
            return value
    return None


def _latest_dated(
    states: Sequence[ProgressState], value_field: str, date_field: str
) -> tuple[int, Optional[str]]:
    """Value from the source with the latest date; ties fall back to max."""
    latest = latest_date_key(*(getattr(s, date_field) for s in states))
    candidates = [s for s in states if latest and getattr(s, date_field) == latest]
    if not candidates:
        candidates = list(states)
    return max(getattr(s, value_field) for s in candidates), latest


class MergeService(Service):
    """Combines partial progress snapshots into one canonical snapshot."""

    def merge(self, states: Sequence[Optional[ProgressState]]) -> Optional[ProgressState]:
        """Merge snapshots.

        Args:
            states: Snapshots in priority order; later inputs win for
                identity fields only

        Returns:
            Merged snapshot, or None if every input is None
        """
        present = [state for state in states if state is not None]
        if not present:
            return None

        with logfire.span("merge_progress", sources=len(present)):
            merged = merge_progress(present)
            logfire.debug(
                "Progress merged",
                sources=len(present),
                total_xp=merged.total_xp,
                entries=len(merged.journal_entries),
            )
            return merged


def merge_progress(states: Sequence[ProgressState]) -> ProgressState:
    """Pure merge of at least one snapshot. See module docstring."""
    base = states[-1]
    update: dict = {}

    for field in MAX_COUNTERS:
        update[field] = max(getattr(s, field) for s in states)

    for field in SET_FIELDS:
        update[field] = _union_sorted(getattr(s, field) for s in states)

    update["referral_accepted_keys"] = _union_ordered(
        (s.referral_accepted_keys for s in states), REFERRAL_ACCEPTED_KEYS_CAP
    )

    update["daily_dwell_xp"], update["last_dwell_date"] = _latest_dated(
        states, "daily_dwell_xp", "last_dwell_date"
    )
    streak, last_streak_date = _latest_dated(states, "streak", "last_streak_date")
    if not last_streak_date:
        streak = 0
    update["streak"] = streak
    update["last_streak_date"] = last_streak_date if streak else None

    update["last_login_date"] = latest_date_key(*(s.last_login_date for s in states))
    update["last_share_reward_date"] = latest_date_key(
        *(s.last_share_reward_date for s in states)
    )

    update["journal_entries"] = merge_entries(s.journal_entries for s in states)
    update["echo_history"] = merge_echoes(s.echo_history for s in states)

    for field in IDENTITY_FIELDS:
        update[field] = _first_reverse(states, field) or getattr(base, field)
    for field in INVITE_CODE_FIELDS:
        update[field] = _first_reverse(states, field, is_valid_invite_code) or ""

    marks = set(update["marks"])
    featured: list[str] = []
    for state in reversed(states):
        if state.featured_marks:
            featured = [m for m in state.featured_marks if m in marks]
            break
    update["featured_marks"] = featured[:MAX_FEATURED_MARKS]

    return base.model_copy(update=update)
