"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from ritual.config import CacheSettings, ProgressSettings, ReferralSettings, Settings
from ritual.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide engine settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_progress_settings(self, settings: Settings) -> ProgressSettings:
        """Provide XP and streak settings."""
        return settings.progress

    @provide(scope=Scope.APP)
    def provide_referral_settings(self, settings: Settings) -> ReferralSettings:
        """Provide referral settings."""
        return settings.referral

    @provide(scope=Scope.APP)
    def provide_cache_settings(self, settings: Settings) -> CacheSettings:
        """Provide local cache settings."""
        return settings.cache
