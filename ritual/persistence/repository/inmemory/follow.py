"""In-memory follow repository."""

from ritual.domain.repository import FollowRepository
from ritual.domain.value import IdentityId

from .base import FailureInjection


class InMemoryFollowRepository(FailureInjection, FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._edges: set[tuple[IdentityId, str]] = set()

    async def find_following(self, follower_id: IdentityId) -> list[str]:
        self._check()
        return sorted(key for follower, key in self._edges if follower == follower_id)

    async def count_followers(self, follow_key: str) -> int:
        self._check()
        return sum(1 for _, key in self._edges if key == follow_key)

    async def follow(self, follower_id: IdentityId, follow_key: str) -> None:
        self._check()
        self._edges.add((follower_id, follow_key))

    async def unfollow(self, follower_id: IdentityId, follow_key: str) -> None:
        self._check()
        self._edges.discard((follower_id, follow_key))
