"""Domain services for progress rules."""

from .base import Service
from .cache_service import LocalCacheService, write_with_degradation
from .mark_service import (
    ECHO_GIVEN_RULES,
    ECHO_RECEIVED_RULES,
    FOLLOW_RULES,
    PRESENCE_RULES,
    RITUAL_RULES,
    MarkEvaluation,
    MarkService,
    RuleContext,
)
from .merge_service import MergeService, merge_progress
from .moderation_service import (
    BasicContentModerator,
    ContentModerator,
    ModerationLimits,
    ModerationResult,
)
from .referral_service import ReferralService
from .streak_service import StreakAdvance, StreakCheck, StreakService
from .xp_service import XPAward, XPService

__all__ = [
    "BasicContentModerator",
    "ContentModerator",
    "ECHO_GIVEN_RULES",
    "ECHO_RECEIVED_RULES",
    "FOLLOW_RULES",
    "LocalCacheService",
    "MarkEvaluation",
    "MarkService",
    "MergeService",
    "ModerationLimits",
    "ModerationResult",
    "PRESENCE_RULES",
    "RITUAL_RULES",
    "ReferralService",
    "RuleContext",
    "Service",
    "StreakAdvance",
    "StreakCheck",
    "StreakService",
    "XPAward",
    "XPService",
    "merge_progress",
    "write_with_degradation",
]
