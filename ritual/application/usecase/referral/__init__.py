"""Referral use cases."""

from ritual.application.usecase.referral.capture_pending_invite import (
    CapturePendingInviteRequest,
    CapturePendingInviteResponse,
    CapturePendingInviteUseCase,
)
from ritual.application.usecase.referral.claim_invite import (
    DEVICE_GUARD_KEY,
    PENDING_INVITE_KEY,
    ClaimInviteRequest,
    ClaimInviteResponse,
    ClaimInviteUseCase,
)
from ritual.application.usecase.referral.ensure_invite_code import (
    EnsureInviteCodeRequest,
    EnsureInviteCodeResponse,
    EnsureInviteCodeUseCase,
)

__all__ = [
    "CapturePendingInviteRequest",
    "CapturePendingInviteResponse",
    "CapturePendingInviteUseCase",
    "ClaimInviteRequest",
    "ClaimInviteResponse",
    "ClaimInviteUseCase",
    "DEVICE_GUARD_KEY",
    "EnsureInviteCodeRequest",
    "EnsureInviteCodeResponse",
    "EnsureInviteCodeUseCase",
    "PENDING_INVITE_KEY",
]
