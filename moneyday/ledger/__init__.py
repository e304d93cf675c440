"""Expense ledger package."""

from moneyday.ledger.calendar import LedgerCalendar
from moneyday.ledger.codec import ExpenseDecodeError, decode_expenses, encode_expenses
from moneyday.ledger.ledger import DEFAULT_STORAGE_KEY, ExpenseLedger, ExpenseSnapshot

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "ExpenseDecodeError",
    "ExpenseLedger",
    "ExpenseSnapshot",
    "LedgerCalendar",
    "decode_expenses",
    "encode_expenses",
]
