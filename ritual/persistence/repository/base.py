"""Shared session handling for PostgreSQL repositories."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ritual.adapter.error import classify_remote_error


class PostgresRepository:
    """Base for repositories that open one session per operation.

    The engine is long-lived, so repositories hold the session factory
    rather than a request-scoped session. Driver and SQL errors leave as
    CapabilityError or TransientError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session that commits on success.

        Raises:
            CapabilityError: Table, function or policy is absent
            TransientError: Any other remote failure
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except (SQLAlchemyError, OSError) as e:
            raise classify_remote_error(e) from e
