"""Spending summary package."""

from moneyday.queries.summaries import (
    UNCATEGORIZED,
    DaySummary,
    MonthSummary,
    SpendingSummaryBuilder,
)

__all__ = ["UNCATEGORIZED", "DaySummary", "MonthSummary", "SpendingSummaryBuilder"]
