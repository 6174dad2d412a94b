"""Durable local cache domain service."""

import json
from typing import Any, Callable, Sequence, TypeVar

import logfire

from ritual.config import CacheSettings
from ritual.domain.error import StorageQuotaExceededError
from ritual.domain.model import Identity, JournalEntry, ProgressState
from ritual.domain.model.normalize import normalize_entries, normalize_progress
from ritual.domain.repository import KeyValueStore

from .base import Service
from .merge_service import sort_entries

T = TypeVar("T")

PROGRESS_KEY_PREFIX = "180_progress_v2:"
LEGACY_PROGRESS_KEY_PREFIX = "180_xp_data_"
ENTRY_BACKUP_KEY_PREFIX = "180_entries_backup_v1:"


def write_with_degradation(
    store: KeyValueStore,
    key: str,
    payload: T,
    fallbacks: Sequence[Callable[[T], T]],
    serialize: Callable[[T], str] = json.dumps,
) -> bool:
    """Write a payload, shrinking it step by step under quota pressure.

    The payload is tried as-is first, then after each fallback transform in
    turn (transforms are cumulative and may have side effects such as
    clearing other keys). Only when every attempt fails is the write reported
    as failed; the failure is logged, never raised.

    Args:
        store: Target key-value store
        key: Storage key
        payload: Value to store
        fallbacks: Transforms applied in order after each failed attempt
        serialize: Payload to string conversion

    Returns:
        True if some attempt was stored
    """
    current = payload
    steps: list[Callable[[T], T]] = [lambda value: value, *fallbacks]
    for step, transform in enumerate(steps):
        current = transform(current)
        try:
            store.set(key, serialize(current))
        except (StorageQuotaExceededError, OSError) as e:
            logfire.warn("Local write attempt failed", key=key, step=step, error=str(e))
            continue
        if step:
            logfire.warn("Local write stored degraded payload", key=key, step=step)
        return True

    logfire.error("Local write failed after all fallbacks", key=key, attempts=len(steps))
    return False


class LocalCacheService(Service):
    """Per-identity progress snapshot and journal entry backup on the device.

    Journal entries are also written to a separate backup key because they
    are the highest-value data and must survive corruption of the snapshot.
    """

    def __init__(self, store: KeyValueStore, cache_settings: CacheSettings) -> None:
        """Initialize local cache service.

        Args:
            store: Device-local key-value store
            cache_settings: Backup sizes and auxiliary keys
        """
        self.store = store
        self.settings = cache_settings

    @staticmethod
    def progress_key(identity: Identity) -> str:
        return f"{PROGRESS_KEY_PREFIX}{identity.id}"

    @staticmethod
    def legacy_progress_key(identity: Identity) -> str:
        return f"{LEGACY_PROGRESS_KEY_PREFIX}{identity.email}"

    @staticmethod
    def backup_key(identity: Identity) -> str:
        return f"{ENTRY_BACKUP_KEY_PREFIX}{identity.id}"

    # Generic JSON helpers ---------------------------------------------
    def read_json(self, key: str) -> Any:
        """Read and decode a JSON value; corrupt values are deleted."""
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logfire.warn("Discarding corrupt local value", key=key)
            self.store.delete(key)
            return None

    def write_json(self, key: str, value: Any) -> bool:
        return write_with_degradation(self.store, key, value, fallbacks=())

    def read_text(self, key: str) -> str | None:
        return self.store.get(key)

    def write_text(self, key: str, value: str) -> bool:
        return write_with_degradation(self.store, key, value, fallbacks=(), serialize=str)

    def delete(self, key: str) -> None:
        self.store.delete(key)

    # Progress snapshot -------------------------------------------------
    def read(self, identity: Identity) -> ProgressState | None:
        """Read the snapshot, falling back to the legacy key.

        Returns:
            Normalized progress, or None when nothing usable is stored
        """
        with logfire.span("local_cache.read", identity_id=identity.id):
            for key in (self.progress_key(identity), self.legacy_progress_key(identity)):
                raw = self.read_json(key)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    logfire.warn("Discarding malformed progress snapshot", key=key)
                    self.store.delete(key)
                    continue
                return normalize_progress(raw)
            return None

    def read_legacy(self, identity: Identity) -> ProgressState | None:
        """Read only the legacy snapshot, if one is still stored."""
        raw = self.read_json(self.legacy_progress_key(identity))
        if not isinstance(raw, dict):
            return None
        return normalize_progress(raw)

    def write(self, identity: Identity, state: ProgressState) -> bool:
        """Persist the snapshot under the canonical key.

        Degrades by dropping inline avatar data, then by clearing auxiliary
        cache keys. A successful write migrates away the legacy key.
        """
        with logfire.span("local_cache.write", identity_id=identity.id):
            ok = write_with_degradation(
                self.store,
                self.progress_key(identity),
                state.to_payload(),
                fallbacks=(self._drop_inline_avatar, self._clear_auxiliary_keys),
            )
            if ok:
                legacy_key = self.legacy_progress_key(identity)
                if self.store.get(legacy_key) is not None:
                    self.store.delete(legacy_key)
                    logfire.info("Migrated legacy progress key", identity_id=identity.id)
            return ok

    def _drop_inline_avatar(self, payload: dict) -> dict:
        avatar = payload.get("avatarUrl") or ""
        if isinstance(avatar, str) and avatar.startswith("data:"):
            return {**payload, "avatarUrl": ""}
        return payload

    def _clear_auxiliary_keys(self, payload: dict) -> dict:
        for key in self.settings.auxiliary_keys:
            self.store.delete(key)
        return payload

    # Entry backup ------------------------------------------------------
    def write_backup(self, identity: Identity, entries: Sequence[JournalEntry]) -> bool:
        """Back up the most recent entries, shrinking the list under pressure."""
        limits = self.settings.backup_limits or [len(entries)]
        ordered = [entry.to_payload() for entry in sort_entries(entries)]
        fallbacks = [
            (lambda items, size=size: items[:size]) for size in limits[1:]
        ]
        with logfire.span("local_cache.write_backup", identity_id=identity.id, count=len(ordered)):
            return write_with_degradation(
                self.store,
                self.backup_key(identity),
                ordered[: limits[0]],
                fallbacks=fallbacks,
            )

    def read_backup(self, identity: Identity) -> list[JournalEntry]:
        key = self.backup_key(identity)
        raw = self.read_json(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logfire.warn("Discarding malformed entry backup", key=key)
            self.store.delete(key)
            return []
        return normalize_entries(raw)
