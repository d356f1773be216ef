"""Local persistence: key-value stores and the soft-delete caches."""

from .store import KeyValueStore, InMemoryStore, JsonFileStore
from .soft_delete import SoftDeleteCache

__all__ = ["KeyValueStore", "InMemoryStore", "JsonFileStore", "SoftDeleteCache"]
