"""
Add-Expense Form Validation

DESIGN DECISION: The ledger performs no input validation. It trusts
its caller to hand it a well-formed ExpenseRecord. All checks on raw
user input live here, at the UI boundary, and bad input never reaches
the ledger.

Checks:
- Amount is present and parses as a decimal number
  ("12.50" and "12,50" are both accepted)
- Amount is finite, not negative, and small enough to show in cents
- Category is not absurdly long (it may be empty)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them to the user.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from moneyday.models.expense import ExpenseRecord, ValidationIssue, ValidationResult


MAX_CATEGORY_LENGTH = 100

_CENTS = Decimal("0.01")


class ExpenseFormValidator:
    """
    Turns raw form input into an ExpenseRecord, or explains why not.
    """

    def __init__(
        self,
        max_amount: Optional[Decimal] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize validator.

        Args:
            max_amount: Optional upper bound; amounts above it are rejected.
            clock: Source of "now", used to give a picked calendar day a
                   time of day.
        """
        self._max_amount = max_amount
        self._clock = clock

    def parse_amount(self, text: Optional[str]) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Parse the amount field.

        Returns: (amount_or_None, list_of_issues)
        """
        raw = (text or "").strip()
        if not raw:
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Please enter an amount",
            )]

        normalized = raw.replace(",", ".") if "." not in raw else raw
        try:
            amount = Decimal(normalized)
        except InvalidOperation:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{raw}' is not a number",
            )]

        if not amount.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"'{raw}' is not a number",
            )]

        if amount < 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
            )]

        try:
            amount.quantize(_CENTS)
        except InvalidOperation:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount is too large",
            )]

        if self._max_amount is not None and amount > self._max_amount:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Amount cannot be more than {self._max_amount}",
            )]

        return amount, []

    def resolve_date(self, when: date) -> datetime:
        """
        A picked calendar day becomes that day at the current time of day;
        a full datetime is kept as-is.
        """
        if isinstance(when, datetime):
            return when
        now = self._clock()
        return datetime.combine(when, now.time().replace(microsecond=0))

    def validate(
        self,
        amount_text: Optional[str],
        category: Optional[str],
        when: date,
    ) -> ValidationResult:
        """
        Validate the add-expense form.

        Returns a ValidationResult whose ``record`` is set only when
        there are no errors.
        """
        amount, issues = self.parse_amount(amount_text)

        label = (category or "").strip()
        if len(label) > MAX_CATEGORY_LENGTH:
            issues.append(ValidationIssue(
                field="category",
                issue_type="too_long",
                message=f"Category must be at most {MAX_CATEGORY_LENGTH} characters",
            ))

        if amount is None or any(issue.severity == "error" for issue in issues):
            return ValidationResult(issues=issues)

        record = ExpenseRecord(
            amount=amount,
            category=label,
            date=self.resolve_date(when),
        )
        return ValidationResult(issues=issues, record=record)
