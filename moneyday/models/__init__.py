"""
Data Models Package

This package contains all Pydantic models used in MoneyDay.
"""

from moneyday.models.expense import (
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
)
from moneyday.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "ExpenseRecord",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
