"""
Expense Data Models

An expense record is a plain value: how much, on what, and when.
Records are immutable once created. Editing an expense means removing
it and adding a new one.

DESIGN DECISION: Amounts are Decimal, not float.
Summing many small float amounts accumulates rounding error
(0.1 + 0.2 != 0.3). Decimal keeps daily and monthly totals exact.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ExpenseRecord(BaseModel):
    """
    A single expense entry.

    The ledger trusts these records: validation of raw user input
    happens before a record is built (see moneyday.validation).
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique record ID, used for identity in list views"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent (currency agnostic)"
    )
    category: str = Field(
        default="",
        description="Free-form category label, may be empty"
    )
    date: datetime = Field(
        ...,
        description="When the expense happened"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "id": str(self.id),
            "amount": str(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
        }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating an add-expense form.

    When valid, ``record`` holds the ExpenseRecord ready to be
    appended to the ledger.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)
    record: Optional[ExpenseRecord] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return self.record is not None and not self.has_errors

    @property
    def error_messages(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "error"]
