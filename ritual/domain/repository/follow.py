"""Remote follow graph repository interface."""

from abc import ABC, abstractmethod

from ritual.domain.value import IdentityId


class FollowRepository(ABC):
    """Directed follow edges: follower identity -> opaque follow key."""

    @abstractmethod
    async def find_following(self, follower_id: IdentityId) -> list[str]:
        """Follow keys the identity follows."""
        pass

    @abstractmethod
    async def count_followers(self, follow_key: str) -> int:
        """Number of identities following the key."""
        pass

    @abstractmethod
    async def follow(self, follower_id: IdentityId, follow_key: str) -> None:
        """Add an edge. Existing edges are left as they are."""
        pass

    @abstractmethod
    async def unfollow(self, follower_id: IdentityId, follow_key: str) -> None:
        """Remove an edge. Missing edges are ignored."""
        pass
