"""PostgreSQL implementation of InviteRegistry repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert

from ritual.domain.model import InviteRegistryEntry
from ritual.domain.repository import InviteRegistryRepository
from ritual.domain.value import IdentityId
from ritual.persistence.mappers import invite_to_dict, row_to_invite
from ritual.persistence.tables import referral_invites_table

from .base import PostgresRepository


class PostgresInviteRegistryRepository(PostgresRepository, InviteRegistryRepository):
    """PostgreSQL implementation of InviteRegistryRepository."""

    async def find_by_code(self, code: str) -> Optional[InviteRegistryEntry]:
        """Find an invite by code.

        Args:
            code: Normalized invite code

        Returns:
            Registry entry if found, None otherwise
        """
        stmt = select(referral_invites_table).where(referral_invites_table.c.code == code)
        async with self.session() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_owner(self, owner_id: IdentityId) -> Optional[InviteRegistryEntry]:
        stmt = select(referral_invites_table).where(
            referral_invites_table.c.inviter_user_id == owner_id
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def save(self, entry: InviteRegistryEntry) -> InviteRegistryEntry:
        """Upsert by code. Claim counters are overwritten with the entry's."""
        values = invite_to_dict(entry)
        stmt = insert(referral_invites_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[referral_invites_table.c.code],
            set_={
                "claim_count": stmt.excluded.claim_count,
                "last_claim_at": stmt.excluded.last_claim_at,
            },
        )
        async with self.session() as session:
            await session.execute(stmt)
        return entry
