"""Local key-value store interface."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Device-local persistent string store.

    Mirrors the browser-style local storage contract: synchronous, string
    values, and writes that may fail under quota pressure.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value.

        Raises:
            StorageQuotaExceededError: If the store has no room for the value
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All stored keys."""
        pass
