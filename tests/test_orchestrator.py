"""Tests for component wiring and the UI-facing expense flow."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from moneyday.config import Settings, get_settings, validate_all_settings
from moneyday.ledger import ExpenseLedger
from moneyday.models.audit import AuditEventType
from moneyday.orchestrator import ExpenseFlow, create_app_components, create_storage
from moneyday.services.storage import InMemoryKeyValueStorage, JsonFileKeyValueStorage
from moneyday.validation import ExpenseFormValidator


@pytest.fixture
def file_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MONEYDAY_STORAGE_BACKEND", "file")
    monkeypatch.setenv("MONEYDAY_STORAGE_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("MONEYDAY_STORAGE_KEY", "expenses")
    monkeypatch.setenv("MONEYDAY_CALENDAR_TIMEZONE", "UTC")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MONEYDAY_STORAGE_BACKEND", "MONEYDAY_STORAGE_KEY", "MONEYDAY_CALENDAR_TIMEZONE"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()

        assert settings.storage.backend == "file"
        assert settings.storage.key == "expenses"
        assert settings.calendar.zone() is None
        assert settings.app.currency_symbol == "€"

    def test_unknown_timezone_is_reported(self, monkeypatch):
        monkeypatch.setenv("MONEYDAY_CALENDAR_TIMEZONE", "Mars/Olympus_Mons")
        get_settings.cache_clear()
        try:
            status = validate_all_settings()
        finally:
            get_settings.cache_clear()

        assert status["calendar"] is False
        assert "calendar_error" in status
        assert status["storage"] is True

    @pytest.mark.parametrize("key", [".", ".."])
    def test_relative_storage_key_is_reported(self, monkeypatch, key):
        monkeypatch.setenv("MONEYDAY_STORAGE_KEY", key)
        get_settings.cache_clear()
        try:
            status = validate_all_settings()
        finally:
            get_settings.cache_clear()

        assert status["storage"] is False
        assert "storage_error" in status

    def test_debug_mode_forces_debug_logging(self, monkeypatch):
        monkeypatch.setenv("MONEYDAY_DEBUG_MODE", "true")
        monkeypatch.setenv("MONEYDAY_LOG_LEVEL", "warning")
        app = Settings().app

        assert app.log_level == "WARNING"
        assert app.effective_log_level == "DEBUG"


class TestCreateAppComponents:

    def test_file_backed_ledger_survives_restart(self, file_env):
        flow, _ = create_app_components()
        flow.add_expense("12.50", "food", datetime(2024, 3, 1, 10))

        assert (file_env / "expenses.json").exists()

        restarted, _ = create_app_components()
        assert len(restarted.ledger.items) == 1
        assert restarted.ledger.items[0].amount == Decimal("12.50")

    def test_without_storage_uses_memory(self, file_env):
        flow, audit_logger = create_app_components(use_storage=False)
        flow.add_expense("1", "", datetime(2024, 3, 1))

        assert not (file_env / "expenses.json").exists()
        events = audit_logger.storage.get_recent_events()
        assert events[0].event_type == AuditEventType.EXPENSE_ADDED

    def test_create_storage_respects_backend(self, file_env, monkeypatch):
        assert isinstance(create_storage(Settings()), JsonFileKeyValueStorage)

        monkeypatch.setenv("MONEYDAY_STORAGE_BACKEND", "memory")
        assert isinstance(create_storage(Settings()), InMemoryKeyValueStorage)


class TestExpenseFlow:

    @pytest.fixture
    def flow(self, ledger) -> ExpenseFlow:
        return ExpenseFlow(ledger, ExpenseFormValidator(clock=lambda: datetime(2024, 3, 1, 9, 0)))

    def test_valid_input_reaches_ledger(self, flow):
        result = flow.add_expense("12,50", "food", date(2024, 3, 1))

        assert result.is_valid
        assert flow.ledger.items == (result.record,)
        assert flow.day_summary(date(2024, 3, 1)).total == Decimal("12.50")

    def test_invalid_input_never_reaches_ledger(self, flow):
        seen = []
        flow.ledger.subscribe(seen.append)

        result = flow.add_expense("abc", "food", date(2024, 3, 1))

        assert not result.is_valid
        assert flow.ledger.items == ()
        assert seen == []

    def test_remove_expenses(self, flow):
        for amount in ("1", "2", "3"):
            flow.add_expense(amount, "", date(2024, 3, 1))

        remaining = flow.remove_expenses([0, 2])

        assert [record.amount for record in remaining] == [Decimal("2")]
        assert flow.month_summary(date(2024, 3, 1)).total == Decimal("2")

    def test_ledger_is_not_a_singleton(self, storage, utc_calendar):
        assert ExpenseLedger(storage, calendar=utc_calendar) is not ExpenseLedger(storage, calendar=utc_calendar)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
