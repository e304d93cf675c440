"""
Main Orchestrator for MoneyDay

This module ties the components together and defines the flows the
UI drives:
1. Add expense (form input → validate → append → persist → notify)
2. Remove expenses (selected positions → remove_at → persist → notify)
3. Browse (day and month summaries)

DESIGN DECISION: There is no process-wide ledger singleton.
create_app_components() builds ONE ledger and hands it to whoever
owns the session (the Streamlit app caches it as a resource).
"""

from datetime import date
from typing import Iterable, Optional

from moneyday.audit import AuditLogger, configure_logging, get_logger
from moneyday.config import Settings, get_settings
from moneyday.ledger import ExpenseLedger, ExpenseSnapshot, LedgerCalendar
from moneyday.models.expense import ValidationResult
from moneyday.queries import DaySummary, MonthSummary, SpendingSummaryBuilder
from moneyday.services.storage import (
    InMemoryAuditStorage,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from moneyday.validation import ExpenseFormValidator


logger = get_logger(__name__)


class ExpenseFlow:
    """
    Orchestrates what the UI can do with the ledger.

    Invalid form input stops here; the ledger only ever sees records
    that passed validation.
    """

    def __init__(
        self,
        ledger: ExpenseLedger,
        validator: Optional[ExpenseFormValidator] = None,
    ):
        self._ledger = ledger
        self._validator = validator or ExpenseFormValidator()
        self._summaries = SpendingSummaryBuilder(ledger)

    @property
    def ledger(self) -> ExpenseLedger:
        return self._ledger

    def add_expense(
        self,
        amount_text: Optional[str],
        category: Optional[str],
        when: date,
    ) -> ValidationResult:
        """
        Validate the add-expense form and append the record if valid.

        Returns the ValidationResult so the form can show issues.
        """
        result = self._validator.validate(amount_text, category, when)
        if result.is_valid:
            self._ledger.append(result.record)
        else:
            logger.info(
                "expense_rejected",
                issues=[issue.issue_type for issue in result.issues],
            )
        return result

    def remove_expenses(self, positions: Iterable[int]) -> ExpenseSnapshot:
        return self._ledger.remove_at(set(positions))

    def day_summary(self, day: date) -> DaySummary:
        return self._summaries.day_summary(day)

    def month_summary(self, day: date) -> MonthSummary:
        return self._summaries.month_summary(day)


def create_storage(settings: Settings, use_storage: bool = True) -> KeyValueStorageInterface:
    """Pick the persistence backend from settings."""
    storage_settings = settings.storage
    if not use_storage or storage_settings.backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(storage_settings.directory)


def create_app_components(
    use_storage: bool = True,
    settings: Optional[Settings] = None,
) -> tuple[ExpenseFlow, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the configured backend.
                    Set to False for a throwaway in-memory session.
        settings: Settings to use; defaults to get_settings().

    Returns:
        (expense_flow, audit_logger)
    """
    settings = settings or get_settings()
    configure_logging(settings.app.effective_log_level)

    audit_logger = AuditLogger(InMemoryAuditStorage())
    ledger = ExpenseLedger(
        create_storage(settings, use_storage),
        key=settings.storage.key,
        calendar=LedgerCalendar(settings.calendar.zone()),
        audit_logger=audit_logger,
    )
    logger.info("ledger_ready", key=ledger.key, item_count=len(ledger))

    return ExpenseFlow(ledger), audit_logger
