"""Tests for the stored expense-list format."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from moneyday.ledger import ExpenseDecodeError, decode_expenses, encode_expenses
from moneyday.models.expense import ExpenseRecord


class TestEncode:

    def test_payload_is_json_array_in_order(self):
        first = ExpenseRecord(amount=Decimal("12.50"), category="food", date=datetime(2024, 3, 1, 10))
        second = ExpenseRecord(amount=Decimal("7.25"), category="transport", date=datetime(2024, 3, 1, 18))

        payload = json.loads(encode_expenses([first, second]))

        assert [entry["id"] for entry in payload] == [str(first.id), str(second.id)]
        assert payload[0] == {
            "id": str(first.id),
            "amount": "12.50",
            "category": "food",
            "date": "2024-03-01T10:00:00",
        }

    def test_empty_list(self):
        assert json.loads(encode_expenses([])) == []


class TestDecode:

    def test_decodes_numbers_and_strings(self):
        payload = json.dumps([
            {
                "id": "6f1c1a52-9a4e-4c43-9d6b-4a3a7f0e2b11",
                "amount": 3,
                "category": "coffee",
                "date": "2024-03-01T08:15:00+01:00",
            },
            {
                "id": "0b9ad1d4-2f55-4a64-8f0e-3e7f2cc1d6a0",
                "amount": "19.99",
                "category": "",
                "date": 1709280000,
            },
        ]).encode()

        first, second = decode_expenses(payload)

        assert first.id == UUID("6f1c1a52-9a4e-4c43-9d6b-4a3a7f0e2b11")
        assert first.amount == Decimal("3")
        assert first.date.utcoffset().total_seconds() == 3600
        assert second.amount == Decimal("19.99")
        assert second.date == datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "payload",
        [b"", b"{", b"null", b'"expenses"', b'[{"amount": "1"}]', b'[1, 2, 3]'],
    )
    def test_rejects_malformed_payloads(self, payload):
        with pytest.raises(ExpenseDecodeError):
            decode_expenses(payload)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
