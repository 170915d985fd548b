"""
Storage Services Package

Provides the abstract key-value store interface and its implementations:
an in-memory store and a JSON file store.
"""

from budget_allocator.services.storage.interface import (
    KeyValueStore,
    StorageError,
)
from budget_allocator.services.storage.json_file import JsonFileKeyValueStore
from budget_allocator.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
