"""Local key-value store implementations."""

from .file import JsonFileKeyValueStore
from .memory import InMemoryKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore"]
