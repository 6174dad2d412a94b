"""Domain value objects for the progress engine.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum
from typing import Any

from pydantic import field_validator

from ritual.domain.value.common import RootValueObject

INVITE_CODE_LENGTH = 8
INVITE_CODE_PATTERN = re.compile(rf"^[A-Z0-9]{{{INVITE_CODE_LENGTH}}}$")


class ErrorCode(str, Enum):
    """Reason codes surfaced to callers in structured results."""

    # Validation
    MODERATION_REJECTED = "moderation_rejected"
    INVALID_ENTRY = "invalid_entry"
    INVALID_CODE = "INVALID_CODE"
    MARK_NOT_UNLOCKED = "mark_not_unlocked"
    UNKNOWN_MARK = "unknown_mark"
    INVALID_PROFILE = "invalid_profile"

    # Conflict
    DUPLICATE_ENTRY = "duplicate_entry"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    SELF_INVITE = "SELF_INVITE"
    DEVICE_DAILY_LIMIT = "DEVICE_DAILY_LIMIT"
    DEVICE_CODE_REUSE = "DEVICE_CODE_REUSE"
    INVITE_NOT_FOUND = "INVITE_NOT_FOUND"
    CLAIM_IN_FLIGHT = "claim_in_flight"
    ALREADY_REWARDED_TODAY = "already_rewarded_today"
    DWELL_LIMIT_REACHED = "dwell_limit_reached"

    # Session
    NOT_READY = "not_ready"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Remote
    SERVER_ERROR = "SERVER_ERROR"


class ModerationCode(str, Enum):
    """Reasons a content moderator may reject text."""

    EMPTY = "empty"
    TOO_LONG = "too_long"
    TOO_MANY_EMOJI = "too_many_emoji"
    BLOCKED_LANGUAGE = "blocked_language"


class MarkCategory(str, Enum):
    """Catalog grouping for marks."""

    PRESENCE = "Presence"
    WRITING = "Writing"
    RHYTHM = "Rhythm"
    DISCOVERY = "Discovery"
    RITUAL = "Ritual"
    SOCIAL = "Social"
    LEGACY = "Legacy"


class SyncChannel(str, Enum):
    """Independent remote write channels."""

    PROFILE = "profile"
    ENTRIES = "entries"
    FOLLOWS = "follows"
    REFERRAL = "referral"


def normalize_invite_code(value: Any) -> str:
    """Uppercase and strip anything that is not A-Z or 0-9."""
    text = str(value or "").strip()[:12].upper()
    return re.sub(r"[^A-Z0-9]", "", text)


def is_valid_invite_code(value: Any) -> bool:
    """Whether the value is already a well-formed invite code."""
    return isinstance(value, str) and bool(INVITE_CODE_PATTERN.match(value))


class InviteCode(RootValueObject[str]):
    """Referral invite code.

    Fixed length, uppercase alphanumeric. Examples: 'ABCDEF12', 'K7Q2M9XZ'
    """

    @field_validator("root", mode="before")
    @classmethod
    def validate_invite_code(cls, v: Any) -> str:
        """Normalize and validate invite code format."""
        code = normalize_invite_code(v)
        if not INVITE_CODE_PATTERN.match(code):
            raise ValueError(
                f"Invite code must be {INVITE_CODE_LENGTH} uppercase letters or digits"
            )
        return code
