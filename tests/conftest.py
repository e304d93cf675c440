"""Shared fixtures for MoneyDay tests."""

from datetime import timezone

import pytest

from moneyday.audit import AuditLogger
from moneyday.ledger import ExpenseLedger, LedgerCalendar
from moneyday.services.storage import InMemoryAuditStorage, InMemoryKeyValueStorage


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def utc_calendar() -> LedgerCalendar:
    return LedgerCalendar(timezone.utc)


@pytest.fixture
def ledger_factory(storage, utc_calendar, audit_logger):
    """Build ledgers over the shared storage (so a second ledger re-hydrates)."""
    def factory(**overrides) -> ExpenseLedger:
        kwargs = dict(
            storage=storage,
            calendar=utc_calendar,
            audit_logger=audit_logger,
        )
        kwargs.update(overrides)
        return ExpenseLedger(**kwargs)
    return factory


@pytest.fixture
def ledger(ledger_factory) -> ExpenseLedger:
    return ledger_factory()
