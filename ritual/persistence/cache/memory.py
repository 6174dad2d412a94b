"""In-memory key-value store."""

from typing import Optional

from ritual.domain.error import StorageQuotaExceededError
from ritual.domain.repository import KeyValueStore


def stored_size(key: str, value: str) -> int:
    """Bytes a key/value pair occupies against the quota."""
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store with an optional byte quota.

    The quota counts UTF-8 bytes of every key and value, so tests can force
    the degradation ladder by setting a small quota.
    """

    def __init__(self, quota_bytes: Optional[int] = None) -> None:
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = self.used_bytes() - (
                stored_size(key, self._data[key]) if key in self._data else 0
            )
            size = stored_size(key, value)
            if used + size > self.quota_bytes:
                raise StorageQuotaExceededError(key, size)
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def used_bytes(self) -> int:
        return sum(stored_size(k, v) for k, v in self._data.items())
