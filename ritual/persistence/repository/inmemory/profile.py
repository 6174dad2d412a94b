"""In-memory profile repository."""

from typing import Optional

from ritual.domain.model import ProgressState
from ritual.domain.repository import ProfileRepository
from ritual.domain.value import IdentityId

from .base import FailureInjection


class InMemoryProfileRepository(FailureInjection, ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        super().__init__()
        self._profiles: dict[IdentityId, ProgressState] = {}
        self._emails: dict[IdentityId, str] = {}

    async def find_progress(self, identity_id: IdentityId) -> Optional[ProgressState]:
        self._check()
        return self._profiles.get(identity_id)

    async def save_progress(
        self, identity_id: IdentityId, email: str, state: ProgressState
    ) -> None:
        self._check()
        self._profiles[identity_id] = state
        self._emails[identity_id] = email
