"""
Storage Services Package

Provides the abstract key-value interface the ledger persists through,
plus file-backed and in-memory implementations.
"""

from moneyday.services.storage.interface import (
    AuditStorageInterface,
    KeyValueStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from moneyday.services.storage.file_store import JsonFileKeyValueStorage
from moneyday.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryKeyValueStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]
