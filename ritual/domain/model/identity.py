"""Authenticated identity supplied by the session provider."""

from ritual.domain.model.common import DomainModel
from ritual.domain.value import IdentityId


class Identity(DomainModel):
    """Opaque identity id plus the email it signed in with."""

    id: IdentityId
    email: str

    @property
    def normalized_email(self) -> str:
        value = self.email.strip().lower()
        return value or f"{self.id}@users.local"

    @property
    def display_name(self) -> str:
        return self.normalized_email.split("@")[0]
