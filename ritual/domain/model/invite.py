"""Referral invite registry and device guard.

The registry is shared across identities and keyed by code. The device
guard is local to one device and limits how many codes it may claim.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ritual.domain.model.common import StoredModel
from ritual.domain.value import IdentityId


class InviteRegistryEntry(StoredModel):
    """Registry record for one issued invite code.

    Business rules:
    - One code per owner
    - claim_count and last_claim_at change on every accepted claim
    """

    code: str
    owner_id: IdentityId
    owner_email: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    claim_count: int = Field(default=0, ge=0)
    last_claim_at: Optional[datetime] = None


class InviteDeviceGuard(StoredModel):
    """Per-device claim counter.

    claim_count resets when the calendar day changes; claimed_codes never
    resets, so a device can claim a given code only once.
    """

    date: str = ""
    claim_count: int = Field(default=0, ge=0)
    claimed_codes: list[str] = Field(default_factory=list)

    def for_day(self, day: str) -> "InviteDeviceGuard":
        """Guard view for the given day, with the daily counter rolled over."""
        if self.date == day:
            return self
        return self.model_copy(update={"date": day, "claim_count": 0})
