"""Progress session use cases."""

from .award_dwell import AwardDwellRequest, AwardDwellUseCase
from .award_xp import AwardXPRequest, AwardXPUseCase
from .claim_share_reward import ClaimShareRewardRequest, ClaimShareRewardUseCase
from .get_progress import GetProgressRequest, GetProgressResponse, GetProgressUseCase
from .hydrate_progress import (
    HydrateProgressRequest,
    HydrateProgressResponse,
    HydrateProgressUseCase,
)
from .level_up import (
    AcknowledgeLevelUpRequest,
    AcknowledgeLevelUpResponse,
    AcknowledgeLevelUpUseCase,
)
from .register_presence import (
    RegisterPresenceRequest,
    RegisterPresenceResponse,
    RegisterPresenceUseCase,
)
from .sign_out import SignOutRequest, SignOutUseCase

__all__ = [
    "AcknowledgeLevelUpRequest",
    "AcknowledgeLevelUpResponse",
    "AcknowledgeLevelUpUseCase",
    "AwardDwellRequest",
    "AwardDwellUseCase",
    "AwardXPRequest",
    "AwardXPUseCase",
    "ClaimShareRewardRequest",
    "ClaimShareRewardUseCase",
    "GetProgressRequest",
    "GetProgressResponse",
    "GetProgressUseCase",
    "HydrateProgressRequest",
    "HydrateProgressResponse",
    "HydrateProgressUseCase",
    "RegisterPresenceRequest",
    "RegisterPresenceResponse",
    "RegisterPresenceUseCase",
    "SignOutRequest",
    "SignOutUseCase",
]
