"""PostgreSQL implementation of JournalEntry repository."""

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert

from ritual.domain.model import JournalEntry
from ritual.domain.repository import JournalEntryRepository
from ritual.domain.value import IdentityId
from ritual.persistence.mappers import journal_entry_to_dict, row_to_journal_entry
from ritual.persistence.tables import journal_entries_table

from .base import PostgresRepository


class PostgresJournalEntryRepository(PostgresRepository, JournalEntryRepository):
    """PostgreSQL implementation of JournalEntryRepository."""

    async def find_by_identity(
        self, identity_id: IdentityId, limit: int = 500
    ) -> list[JournalEntry]:
        """List entries for an identity, newest first.

        Rows without a usable date are skipped.
        """
        stmt = (
            select(journal_entries_table)
            .where(journal_entries_table.c.user_id == identity_id)
            .order_by(journal_entries_table.c.created_at.desc())
            .limit(limit)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        entries = (row_to_journal_entry(dict(row)) for row in rows)
        return [entry for entry in entries if entry is not None]

    async def insert(self, identity_id: IdentityId, entry: JournalEntry) -> None:
        """Append an entry; replays of the same id are ignored."""
        stmt = (
            insert(journal_entries_table)
            .values(**journal_entry_to_dict(identity_id, entry))
            .on_conflict_do_nothing(index_elements=[journal_entries_table.c.id])
        )
        async with self.session() as session:
            await session.execute(stmt)

    async def delete(self, identity_id: IdentityId, entry_id: str) -> None:
        stmt = delete(journal_entries_table).where(
            and_(
                journal_entries_table.c.user_id == identity_id,
                journal_entries_table.c.id == entry_id,
            )
        )
        async with self.session() as session:
            await session.execute(stmt)
