"""
MoneyDay - Source Package

A small personal expense tracker: record expenses, browse them by
calendar day, and see daily and monthly totals.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth for expense records
2. Every mutation is persisted immediately
3. A storage hiccup never takes the UI down
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "MoneyDay Team"
