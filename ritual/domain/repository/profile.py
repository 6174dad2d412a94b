"""Remote profile repository interface."""

from abc import ABC, abstractmethod

from ritual.domain.model import ProgressState
from ritual.domain.value import IdentityId


class ProfileRepository(ABC):
    """Remote profile records holding an opaque progress blob per identity."""

    @abstractmethod
    async def find_progress(self, identity_id: IdentityId) -> ProgressState | None:
        """Load the stored progress snapshot.

        Args:
            identity_id: Profile owner

        Returns:
            Normalized progress, or None if no profile exists
        """
        pass

    @abstractmethod
    async def save_progress(
        self, identity_id: IdentityId, email: str, state: ProgressState
    ) -> None:
        """Create or replace the profile record.

        Args:
            identity_id: Profile owner
            email: Owner email, stored alongside the blob
            state: Progress snapshot to upload
        """
        pass
