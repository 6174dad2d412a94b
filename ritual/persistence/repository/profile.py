"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert

from ritual.domain.model import ProgressState
from ritual.domain.repository import ProfileRepository
from ritual.domain.value import IdentityId
from ritual.persistence.mappers import progress_to_dict, row_to_progress
from ritual.persistence.tables import profiles_table

from .base import PostgresRepository


class PostgresProfileRepository(PostgresRepository, ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    async def find_progress(self, identity_id: IdentityId) -> Optional[ProgressState]:
        """Load the progress blob for an identity.

        Args:
            identity_id: Profile owner

        Returns:
            Normalized progress if the profile exists, None otherwise
        """
        stmt = select(profiles_table).where(profiles_table.c.user_id == identity_id)
        async with self.session() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_progress(dict(row)) if row else None

    async def save_progress(
        self, identity_id: IdentityId, email: str, state: ProgressState
    ) -> None:
        """Upsert the profile record."""
        values = progress_to_dict(identity_id, email, state)
        stmt = insert(profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.user_id],
            set_={
                "email": stmt.excluded.email,
                "display_name": stmt.excluded.display_name,
                "xp_state": stmt.excluded.xp_state,
                "updated_at": func.now(),
            },
        )
        async with self.session() as session:
            await session.execute(stmt)
