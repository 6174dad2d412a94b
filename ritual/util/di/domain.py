"""Domain layer DI providers."""

from dishka import Scope, provide

from ritual.config import CacheSettings, ProgressSettings, ReferralSettings
from ritual.domain.repository import KeyValueStore
from ritual.domain.service import (
    BasicContentModerator,
    ContentModerator,
    LocalCacheService,
    MarkService,
    MergeService,
    ReferralService,
    StreakService,
    XPService,
)
from ritual.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are stateless apart from settings, so they live for the
    whole app scope alongside the progress session that uses them.
    """

    scope = Scope.APP

    @provide
    def get_xp_service(self, progress_settings: ProgressSettings) -> XPService:
        """Provide XP and league domain service."""
        return XPService(level_threshold=progress_settings.level_threshold)

    @provide
    def get_streak_service(self, progress_settings: ProgressSettings) -> StreakService:
        """Provide streak domain service."""
        return StreakService(milestones=frozenset(progress_settings.streak_milestones))

    @provide
    def get_mark_service(self) -> MarkService:
        """Provide mark domain service."""
        return MarkService()

    @provide
    def get_merge_service(self) -> MergeService:
        """Provide merge domain service."""
        return MergeService()

    @provide
    def get_referral_service(self, referral_settings: ReferralSettings) -> ReferralService:
        """Provide referral domain service."""
        return ReferralService(referral_settings=referral_settings)

    @provide
    def get_content_moderator(self, progress_settings: ProgressSettings) -> ContentModerator:
        """Provide the content moderator for journal text."""
        return BasicContentModerator(
            blocked_terms=progress_settings.blocked_terms,
            blocked_phrases=progress_settings.blocked_phrases,
        )

    @provide
    def get_local_cache_service(
        self, store: KeyValueStore, cache_settings: CacheSettings
    ) -> LocalCacheService:
        """Provide local cache service over the device key-value store."""
        return LocalCacheService(store=store, cache_settings=cache_settings)
