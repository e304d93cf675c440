"""
Expense List Wire Format

The stored payload is a UTF-8 JSON array, one object per record, in
display order:

    [{"id": "<uuid>", "amount": "12.50", "category": "food",
      "date": "2024-03-01T10:00:00"}]

Amounts are written as decimal strings so they round-trip exactly.
Decoding also accepts plain JSON numbers and epoch timestamps.
"""

from typing import Sequence

from pydantic import TypeAdapter

from moneyday.models.expense import ExpenseRecord


_EXPENSE_LIST = TypeAdapter(list[ExpenseRecord])


class ExpenseDecodeError(ValueError):
    """Stored payload is not a valid expense list."""
    pass


def encode_expenses(records: Sequence[ExpenseRecord]) -> bytes:
    return _EXPENSE_LIST.dump_json(list(records))


def decode_expenses(payload: bytes) -> list[ExpenseRecord]:
    """
    Decode a stored payload.

    Raises:
        ExpenseDecodeError: If the payload is malformed or incompatible.
            Callers decide what an undecodable payload means; the
            ledger treats it as "start empty".
    """
    try:
        return _EXPENSE_LIST.validate_json(payload)
    except ValueError as e:
        raise ExpenseDecodeError(f"Invalid expense payload: {e}") from e
