"""Normalization of loosely shaped stored payloads.

Every read boundary (local cache, legacy cache, remote profile blob, remote
entry rows) goes through ``normalize_progress``. Stored shape is never
trusted: every field is defaulted and coerced, and malformed nested records
are dropped rather than failing the whole snapshot.
"""

import math
import re
from typing import Any, Iterable, Optional

from ritual.domain.model.progress import (
    DEFAULT_AVATAR_ID,
    DEFAULT_BIO,
    MAX_ECHO_HISTORY,
    MAX_FEATURED_MARKS,
    EchoLog,
    JournalEntry,
    ProgressState,
)
from ritual.domain.value import is_valid_invite_code, normalize_date_key, normalize_invite_code

PLACEHOLDER_TITLE = "Unknown Title"
_GENERATED_TITLE = re.compile(r"^Film #\d+$")


def is_placeholder_title(title: Optional[str]) -> bool:
    """Titles that carry no information about the subject."""
    if not title or not title.strip():
        return True
    title = title.strip()
    return title == PLACEHOLDER_TITLE or bool(_GENERATED_TITLE.match(title))


def _pick(raw: dict, *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return default
        return max(0, int(value))
    if isinstance(value, str):
        try:
            return max(0, int(float(value)))
        except ValueError:
            return default
    return default


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return default


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    seen: dict[str, None] = {}
    for item in value:
        text = _as_str(item)
        if text:
            seen.setdefault(text, None)
    return list(seen)


def _as_code(value: Any) -> str:
    code = normalize_invite_code(value)
    return code if is_valid_invite_code(code) else ""


def normalize_entry(raw: Any) -> Optional[JournalEntry]:
    """Coerce a stored entry; returns None when it has no usable date."""
    if not isinstance(raw, dict):
        return None
    day = normalize_date_key(_pick(raw, "date", "day", "created_at", "createdAt"))
    if day is None:
        return None
    subject_id = _as_int(_pick(raw, "movieId", "subject_id", "subjectId", "movie_id"))
    title = _as_str(_pick(raw, "movieTitle", "subject_title", "subjectTitle", "movie_title"))
    if is_placeholder_title(title) and subject_id:
        title = title or f"Film #{subject_id}"
    poster = _as_str(_pick(raw, "posterPath", "poster_ref", "posterRef", "poster_path"))
    genre = _as_str(_pick(raw, "genre"))
    return JournalEntry(
        id=_as_str(_pick(raw, "id")),
        date=day,
        subject_id=subject_id,
        subject_title=title,
        text=_as_str(_pick(raw, "text")),
        genre=genre or None,
        rating=_as_float(_pick(raw, "rating")),
        poster_ref=poster or None,
    )


def normalize_entries(raw: Any) -> list[JournalEntry]:
    if not isinstance(raw, (list, tuple)):
        return []
    entries: Iterable[Optional[JournalEntry]] = (normalize_entry(item) for item in raw)
    return [entry for entry in entries if entry is not None]


def normalize_echo(raw: Any) -> Optional[EchoLog]:
    if not isinstance(raw, dict):
        return None
    echo_id = _as_str(_pick(raw, "id"))
    title = _as_str(_pick(raw, "movieTitle", "subject_title", "subjectTitle"))
    if not echo_id and not title:
        return None
    return EchoLog(
        id=echo_id,
        subject_title=title,
        date=normalize_date_key(_pick(raw, "date")) or _as_str(_pick(raw, "date")),
    )


def normalize_progress(raw: Any) -> ProgressState:
    """Build a ProgressState from any stored payload, defaulting every field."""
    if not isinstance(raw, dict):
        return ProgressState()

    marks = _as_str_list(_pick(raw, "marks"))
    featured = [m for m in _as_str_list(_pick(raw, "featuredMarks", "featured_marks")) if m in marks]

    streak = _as_int(_pick(raw, "streak"))
    last_streak_date = normalize_date_key(_pick(raw, "lastStreakDate", "last_streak_date"))
    if streak == 0 or last_streak_date is None:
        streak, last_streak_date = 0, None

    raw_echoes = _pick(raw, "echoHistory", "echo_history")
    if not isinstance(raw_echoes, (list, tuple)):
        raw_echoes = []
    echoes = [e for e in (normalize_echo(item) for item in raw_echoes) if e]

    return ProgressState(
        total_xp=_as_int(_pick(raw, "totalXP", "total_xp", "xp")),
        last_login_date=normalize_date_key(_pick(raw, "lastLoginDate", "last_login_date")),
        daily_dwell_xp=_as_int(_pick(raw, "dailyDwellXP", "daily_dwell_xp")),
        last_dwell_date=normalize_date_key(_pick(raw, "lastDwellDate", "last_dwell_date")),
        journal_entries=normalize_entries(
            _pick(raw, "journalEntries", "journal_entries", "dailyRituals")
        ),
        marks=marks,
        featured_marks=featured[:MAX_FEATURED_MARKS],
        active_days=[d for d in (normalize_date_key(v) for v in _as_str_list(_pick(raw, "activeDays", "active_days"))) if d],
        unique_genres=_as_str_list(_pick(raw, "uniqueGenres", "unique_genres")),
        streak=streak,
        last_streak_date=last_streak_date,
        non_consecutive_count=_as_int(_pick(raw, "nonConsecutiveCount", "non_consecutive_count")),
        echoes_given=_as_int(_pick(raw, "echoesGiven", "echoes_given")),
        echoes_received=_as_int(_pick(raw, "echoesReceived", "echoes_received")),
        echo_history=echoes[:MAX_ECHO_HISTORY],
        followers=_as_int(_pick(raw, "followers")),
        following=_as_str_list(_pick(raw, "following")),
        full_name=_as_str(_pick(raw, "fullName", "full_name")),
        username=_as_str(_pick(raw, "username")),
        gender=_as_str(_pick(raw, "gender")),
        birth_date=_as_str(_pick(raw, "birthDate", "birth_date")),
        bio=_as_str(_pick(raw, "bio")) or DEFAULT_BIO,
        avatar_id=_as_str(_pick(raw, "avatarId", "avatar_id")) or DEFAULT_AVATAR_ID,
        avatar_url=_as_str(_pick(raw, "avatarUrl", "avatar_url")),
        last_share_reward_date=normalize_date_key(
            _pick(raw, "lastShareRewardDate", "last_share_reward_date")
        ),
        invite_code=_as_code(_pick(raw, "inviteCode", "invite_code")),
        invited_by_code=_as_code(_pick(raw, "invitedByCode", "invited_by_code")),
        invite_claims_count=_as_int(_pick(raw, "inviteClaimsCount", "invite_claims_count")),
        invite_rewards_earned=_as_int(_pick(raw, "inviteRewardsEarned", "invite_rewards_earned")),
        invite_claimed_at=_as_str(_pick(raw, "inviteClaimedAt", "invite_claimed_at")),
        referral_accepted_keys=_as_str_list(
            _pick(raw, "referralAcceptedKeys", "referral_accepted_keys")
        ),
    )
