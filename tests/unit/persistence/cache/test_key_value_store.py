"""Unit tests for the local key-value stores."""

import json

import pytest

from ritual.domain.error import StorageQuotaExceededError
from ritual.persistence.cache import InMemoryKeyValueStore, JsonFileKeyValueStore


class TestInMemoryKeyValueStore:
    def test_set_get_delete(self):
        store = InMemoryKeyValueStore()

        store.set("k", "v")
        assert store.get("k") == "v"
        assert store.keys() == ["k"]

        store.delete("k")
        store.delete("missing")
        assert store.get("k") is None

    def test_quota_rejects_write_that_does_not_fit(self):
        store = InMemoryKeyValueStore(quota_bytes=10)
        store.set("k", "12345678")  # 9 bytes

        with pytest.raises(StorageQuotaExceededError) as exc_info:
            store.set("x", "12")
        assert exc_info.value.key == "x"
        assert store.get("x") is None

    def test_overwrite_only_counts_replacement(self):
        store = InMemoryKeyValueStore(quota_bytes=10)
        store.set("k", "12345678")

        store.set("k", "123456789")

        assert store.used_bytes() == 10

    def test_quota_counts_utf8_bytes(self):
        store = InMemoryKeyValueStore(quota_bytes=4)

        with pytest.raises(StorageQuotaExceededError):
            store.set("k", "çç")


class TestJsonFileKeyValueStore:
    def test_values_survive_reopening(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = JsonFileKeyValueStore(path)

        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")

        reopened = JsonFileKeyValueStore(path)
        assert reopened.get("a") is None
        assert reopened.get("b") == "2"
        assert json.loads(path.read_text()) == {"b": "2"}

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")

        store = JsonFileKeyValueStore(path)

        assert store.keys() == []
        store.set("k", "v")
        assert JsonFileKeyValueStore(path).get("k") == "v"

    def test_non_object_file_starts_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2, 3]")

        assert JsonFileKeyValueStore(path).keys() == []

    def test_non_string_values_are_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"good": "x", "bad": 3}))

        store = JsonFileKeyValueStore(path)

        assert store.keys() == ["good"]

    def test_quota_applies_and_file_is_unchanged(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileKeyValueStore(path, quota_bytes=5)
        store.set("k", "v")

        with pytest.raises(StorageQuotaExceededError):
            store.set("big", "0123456789")

        assert json.loads(path.read_text()) == {"k": "v"}
