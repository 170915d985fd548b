"""Services package."""

from budget_allocator.services.persistence import (
    DEFAULT_DOCUMENT_KEY,
    BudgetPersistence,
)
from budget_allocator.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)

__all__ = [
    # Persistence
    "DEFAULT_DOCUMENT_KEY",
    "BudgetPersistence",
    # Storage services
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
]
