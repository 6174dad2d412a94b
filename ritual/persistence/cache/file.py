"""JSON file backed key-value store."""

import errno
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import logfire

from ritual.domain.error import StorageQuotaExceededError
from ritual.domain.repository import KeyValueStore

from .memory import InMemoryKeyValueStore, stored_size


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as one JSON object on disk.

    Every write rewrites the file through a temporary file and an atomic
    replace, so a crash never leaves a half-written store behind.
    """

    def __init__(self, path: Path, quota_bytes: Optional[int] = None) -> None:
        """Open or create the store.

        Args:
            path: JSON file location; parent directories are created
            quota_bytes: Optional byte budget across all keys and values
        """
        self.path = Path(path)
        self._memory = InMemoryKeyValueStore(quota_bytes=quota_bytes)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logfire.warn("Local store unreadable, starting empty", path=str(self.path), error=str(e))
            return
        if not isinstance(data, dict):
            logfire.warn("Local store malformed, starting empty", path=str(self.path))
            return
        for key, value in data.items():
            if isinstance(value, str):
                self._memory._data[key] = value

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._memory._data, handle)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._memory.get(key)

    def set(self, key: str, value: str) -> None:
        previous = self._memory.get(key)
        self._memory.set(key, value)
        try:
            self._flush()
        except OSError as e:
            if previous is None:
                self._memory.delete(key)
            else:
                self._memory._data[key] = previous
            if e.errno in (errno.ENOSPC, errno.EDQUOT):
                raise StorageQuotaExceededError(key, stored_size(key, value)) from e
            raise

    def delete(self, key: str) -> None:
        if self._memory.get(key) is None:
            return
        self._memory.delete(key)
        self._flush()

    def keys(self) -> list[str]:
        return self._memory.keys()
