"""
In-Memory Storage Implementations

Used by tests and as the fallback backend when no file storage
is configured. Nothing survives the process.
"""

from collections import deque
from typing import Optional

from moneyday.models.audit import AuditEvent
from moneyday.services.storage.interface import (
    AuditStorageInterface,
    KeyValueStorageInterface,
)


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dict-backed key-value storage."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def load(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def save(self, key: str, data: bytes) -> bool:
        self._data[key] = bytes(data)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._data


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Bounded in-memory audit trail.

    Keeps the newest ``max_events`` events; older ones fall off.
    """

    def __init__(self, max_events: int = 1000):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
