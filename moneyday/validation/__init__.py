"""Input validation package."""

from moneyday.validation.validator import MAX_CATEGORY_LENGTH, ExpenseFormValidator

__all__ = ["MAX_CATEGORY_LENGTH", "ExpenseFormValidator"]
