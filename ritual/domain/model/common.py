"""Base models for domain entities."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,
    )


class StoredModel(DomainModel):
    """Domain model persisted as a camelCase JSON blob.

    Stored payloads use camelCase keys; Python code uses snake_case names.
    Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Serialize to the stored JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
