"""Persistence infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ritual.config import CacheSettings, Settings
from ritual.domain.repository import (
    FollowRepository,
    InviteRegistryRepository,
    JournalEntryRepository,
    KeyValueStore,
    ProfileRepository,
)
from ritual.persistence.cache import JsonFileKeyValueStore
from ritual.persistence.database import create_engine, create_session_factory
from ritual.persistence.repository import (
    PostgresFollowRepository,
    PostgresInviteRegistryRepository,
    PostgresJournalEntryRepository,
    PostgresProfileRepository,
)
from ritual.util.di.base import ProviderBase
from ritual.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    PostgreSQL for the remote store, a JSON file for the device-local store.
    Repositories open one session per operation, so they are APP-scoped
    alongside the progress session.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_key_value_store(self, cache_settings: CacheSettings) -> KeyValueStore:
        """Provide the device-local key-value store."""
        return JsonFileKeyValueStore(
            path=cache_settings.path, quota_bytes=cache_settings.quota_bytes
        )

    @provide(scope=Scope.APP)
    def get_profile_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_journal_entry_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> JournalEntryRepository:
        """Provide JournalEntry repository."""
        return PostgresJournalEntryRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_follow_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> FollowRepository:
        """Provide Follow repository."""
        return PostgresFollowRepository(session_factory)

    @provide(scope=Scope.APP)
    def get_invite_registry_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> InviteRegistryRepository:
        """Provide InviteRegistry repository."""
        return PostgresInviteRegistryRepository(session_factory)
