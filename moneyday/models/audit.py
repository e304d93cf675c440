"""
Audit Models for MoneyDay

Every ledger mutation and every recovered failure is recorded as an
audit event. This provides:
1. Traceability of what happened to the expense list
2. Debugging information when storage misbehaves
3. A record of silent recoveries (the ledger never raises to the UI)

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from moneyday.models.expense import ExpenseRecord


MAX_DESCRIPTION_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clip(text: str, limit: int = 60) -> str:
    return text if len(text) <= limit else f"{text[:limit - 3]}..."


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Hydration
    LEDGER_HYDRATED = "ledger_hydrated"
    HYDRATION_RESET = "hydration_reset"

    # Mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSES_REMOVED = "expenses_removed"

    # Persistence
    SAVE_FAILED = "save_failed"

    # Change notification
    SUBSCRIBER_FAILED = "subscriber_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'ledger')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(record, item_count=3)
        event = AuditEventBuilder.save_failed(key="expenses", error="disk full")
    """

    @staticmethod
    def ledger_hydrated(key: str, item_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_HYDRATED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            description=f"Ledger hydrated from '{_clip(key)}' with {item_count} expenses",
            details={"key": key, "item_count": item_count},
        )

    @staticmethod
    def hydration_reset(key: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HYDRATION_RESET,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description=f"Stored expenses under '{_clip(key)}' could not be read; starting empty",
            details={"key": key},
            error_message=reason,
        )

    @staticmethod
    def expense_added(record: ExpenseRecord, item_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=record.id,
            description=(
                f"Expense added: {_clip(str(record.amount))} "
                f"({_clip(record.category) or 'uncategorized'})"
            ),
            details={**record.to_log_dict(), "item_count": item_count},
        )

    @staticmethod
    def expenses_removed(
        removed_ids: list[UUID],
        positions: list[int],
        item_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_REMOVED,
            entity_type="ledger",
            description=f"Removed {len(removed_ids)} expense(s)",
            details={
                "removed_ids": [str(expense_id) for expense_id in removed_ids],
                "positions": positions,
                "item_count": item_count,
            },
        )

    @staticmethod
    def save_failed(key: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Failed to persist expenses under '{_clip(key)}'; keeping in-memory state",
            details={"key": key},
            error_message=error,
        )

    @staticmethod
    def subscriber_failed(subscriber: str, error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIBER_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Change subscriber {_clip(subscriber)} raised an error",
            details={"subscriber": subscriber},
            error_message=error,
        )
