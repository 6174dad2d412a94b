"""Strongly typed identifiers.

Identity ids come from the session provider and are opaque strings.
"""

from typing import NewType

IdentityId = NewType("IdentityId", str)
