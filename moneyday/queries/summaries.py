"""
Spending Summaries

DESIGN DECISION: Summaries are built ONLY from the ledger's public
queries (records_for_day, daily_total, monthly_total). They never
re-implement day bucketing, so a summary can never disagree with the
totals the calendar page shows.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from moneyday.ledger import ExpenseLedger
from moneyday.models.expense import ExpenseRecord


UNCATEGORIZED = "uncategorized"


class DaySummary(BaseModel):
    """Everything the calendar page shows for one day."""
    model_config = ConfigDict(frozen=True)

    day: date
    total: Decimal
    records: list[ExpenseRecord] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)


class MonthSummary(BaseModel):
    """Totals for one calendar month."""
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    total: Decimal
    daily_totals: dict[date, Decimal] = Field(
        default_factory=dict,
        description="Total for every day of the month, zero days included"
    )
    category_totals: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Total per category, largest first"
    )

    @property
    def busiest_day(self) -> Optional[date]:
        """Day with the highest total, or None when nothing was spent."""
        if not self.daily_totals or self.total == 0:
            return None
        return max(self.daily_totals, key=lambda day: (self.daily_totals[day], -day.toordinal()))


class SpendingSummaryBuilder:
    """Builds read-only summaries over a ledger."""

    def __init__(self, ledger: ExpenseLedger):
        self._ledger = ledger

    def day_summary(self, day: date) -> DaySummary:
        calendar_day = self._ledger.calendar.day_of(day)
        return DaySummary(
            day=calendar_day,
            total=self._ledger.daily_total(day),
            records=self._ledger.records_for_day(day),
        )

    def month_summary(self, day: date) -> MonthSummary:
        calendar = self._ledger.calendar
        days = calendar.days_in_month(day)

        daily_totals: dict[date, Decimal] = {}
        categories: dict[str, Decimal] = {}
        for current in days:
            daily_totals[current] = self._ledger.daily_total(current)
            for record in self._ledger.records_for_day(current):
                label = record.category or UNCATEGORIZED
                categories[label] = categories.get(label, Decimal("0")) + record.amount

        category_totals = dict(
            sorted(categories.items(), key=lambda item: (-item[1], item[0]))
        )

        return MonthSummary(
            year=days[0].year,
            month=days[0].month,
            total=self._ledger.monthly_total(day),
            daily_totals=daily_totals,
            category_totals=category_totals,
        )
