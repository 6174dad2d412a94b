"""PostgreSQL implementation of Follow repository."""

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.postgresql import insert

from ritual.domain.repository import FollowRepository
from ritual.domain.value import IdentityId
from ritual.persistence.tables import follows_table

from .base import PostgresRepository


class PostgresFollowRepository(PostgresRepository, FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    async def find_following(self, follower_id: IdentityId) -> list[str]:
        stmt = (
            select(follows_table.c.followed_key)
            .where(follows_table.c.follower_user_id == follower_id)
            .order_by(follows_table.c.followed_key)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            return [row[0] for row in result.all()]

    async def count_followers(self, follow_key: str) -> int:
        stmt = (
            select(func.count())
            .select_from(follows_table)
            .where(follows_table.c.followed_key == follow_key)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            return result.scalar() or 0

    async def follow(self, follower_id: IdentityId, follow_key: str) -> None:
        stmt = (
            insert(follows_table)
            .values(follower_user_id=follower_id, followed_key=follow_key)
            .on_conflict_do_nothing()
        )
        async with self.session() as session:
            await session.execute(stmt)

    async def unfollow(self, follower_id: IdentityId, follow_key: str) -> None:
        stmt = delete(follows_table).where(
            and_(
                follows_table.c.follower_user_id == follower_id,
                follows_table.c.followed_key == follow_key,
            )
        )
        async with self.session() as session:
            await session.execute(stmt)
