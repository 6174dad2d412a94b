"""Domain value objects for the progress engine."""

from ritual.domain.value.dates import (
    DateKey,
    date_key,
    day_difference,
    latest_date_key,
    normalize_date_key,
    parse_date_key,
)
from ritual.domain.value.identifiers import IdentityId
from ritual.domain.value.types import (
    INVITE_CODE_LENGTH,
    ErrorCode,
    InviteCode,
    MarkCategory,
    ModerationCode,
    SyncChannel,
    is_valid_invite_code,
    normalize_invite_code,
)

__all__ = [
    # Identifiers
    "IdentityId",
    # Dates
    "DateKey",
    "date_key",
    "day_difference",
    "latest_date_key",
    "normalize_date_key",
    "parse_date_key",
    # Types
    "INVITE_CODE_LENGTH",
    "ErrorCode",
    "InviteCode",
    "MarkCategory",
    "ModerationCode",
    "SyncChannel",
    "is_valid_invite_code",
    "normalize_invite_code",
]
