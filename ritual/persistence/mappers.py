"""Mappers for converting between database rows and domain models.

Rows are mapped by hand because domain models are frozen pydantic models.
Stored progress blobs go through normalization rather than strict
validation, since older clients wrote other shapes.
"""

from typing import Any, Dict

from ritual.domain.model import InviteRegistryEntry, JournalEntry, ProgressState
from ritual.domain.model.normalize import normalize_entry, normalize_progress
from ritual.domain.value import IdentityId


def row_to_progress(row: Dict[str, Any]) -> ProgressState:
    """Convert a profile row to ProgressState.

    Args:
        row: Database row as dict

    Returns:
        Normalized progress
    """
    return normalize_progress(row.get("xp_state") or {})


def progress_to_dict(
    identity_id: IdentityId, email: str, state: ProgressState
) -> Dict[str, Any]:
    """Convert ProgressState to a profile row dict."""
    return {
        "user_id": identity_id,
        "email": email,
        "display_name": state.full_name or state.username or None,
        "xp_state": state.to_payload(),
    }


def row_to_journal_entry(row: Dict[str, Any]) -> JournalEntry | None:
    """Convert a journal entry row to JournalEntry.

    Returns:
        Entry, or None when the row has no usable date
    """
    return normalize_entry(
        {
            "id": row.get("id"),
            "date": row.get("entry_date") or row.get("created_at"),
            "movieId": row.get("movie_id"),
            "movieTitle": row.get("movie_title"),
            "text": row.get("text"),
            "genre": row.get("genre"),
            "rating": row.get("rating"),
            "posterPath": row.get("poster_path"),
        }
    )


def journal_entry_to_dict(identity_id: IdentityId, entry: JournalEntry) -> Dict[str, Any]:
    """Convert JournalEntry to a row dict."""
    return {
        "id": entry.id,
        "user_id": identity_id,
        "entry_date": entry.date,
        "movie_id": entry.subject_id,
        "movie_title": entry.subject_title,
        "text": entry.text,
        "genre": entry.genre,
        "rating": entry.rating,
        "poster_path": entry.poster_ref,
    }


def row_to_invite(row: Dict[str, Any]) -> InviteRegistryEntry:
    """Convert a referral invite row to InviteRegistryEntry."""
    return InviteRegistryEntry(
        code=row["code"],
        owner_id=IdentityId(str(row["inviter_user_id"])),
        owner_email=row.get("inviter_email") or "",
        created_at=row["created_at"],
        claim_count=row.get("claim_count") or 0,
        last_claim_at=row.get("last_claim_at"),
    )


def invite_to_dict(entry: InviteRegistryEntry) -> Dict[str, Any]:
    """Convert InviteRegistryEntry to a row dict."""
    return {
        "code": entry.code,
        "inviter_user_id": entry.owner_id,
        "inviter_email": entry.owner_email,
        "created_at": entry.created_at,
        "claim_count": entry.claim_count,
        "last_claim_at": entry.last_claim_at,
    }
