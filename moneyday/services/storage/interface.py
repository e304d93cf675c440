"""
Abstract Storage Interface

DESIGN DECISION: The ledger does not know where its bytes live.
It talks to a tiny key-value interface. This allows us to:
1. Keep expenses in a local file for the app
2. Use in-memory storage for testing
3. Swap in another backend later without touching the ledger

The interface is intentionally simple: the ledger always writes the
full collection under a single key, so load/save of raw bytes is all
it needs.
"""

from abc import ABC, abstractmethod
from typing import Optional

from moneyday.models.audit import AuditEvent


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for the ledger's persistence dependency.

    Any storage implementation (file, memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[bytes]:
        """
        Read the payload stored under a key.

        Args:
            key: Namespaced identifier (e.g. "expenses")

        Returns:
            The stored bytes, or None if nothing is stored

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, data: bytes) -> bool:
        """
        Store a payload under a key, replacing any previous payload.

        The write must be all-or-nothing: a reader never sees a
        partially written payload.

        Args:
            key: Namespaced identifier
            data: Full serialized payload

        Returns:
            True if saved successfully

        Raises:
            StorageWriteError: If the write is rejected
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove the payload stored under a key.

        Returns:
            True if something was deleted
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored payload could not be read."""
    pass


class StorageWriteError(StorageError):
    """Payload could not be written."""
    pass
