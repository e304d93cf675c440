"""Display helpers shared by the list and calendar pages."""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from moneyday.config import AppSettings


_CENTS = Decimal("0.01")


def format_amount(amount: Decimal, currency_symbol: str = "€") -> str:
    """Two decimals, currency after the number: ``12.50 €``."""
    try:
        value = Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits for cents; show it as stored.
        value = Decimal(amount)
    return f"{value} {currency_symbol}".rstrip()


def format_timestamp(moment: datetime, fmt: str = "%d/%m/%Y %H:%M") -> str:
    return moment.strftime(fmt)


def format_day(day: date, fmt: str = "%d/%m/%Y") -> str:
    return day.strftime(fmt)


class ExpenseFormatter:
    """Formatting bound to the app's display settings."""

    def __init__(self, settings: AppSettings):
        self._settings = settings

    def amount(self, amount: Decimal) -> str:
        return format_amount(amount, self._settings.currency_symbol)

    def timestamp(self, moment: datetime) -> str:
        return format_timestamp(moment, self._settings.timestamp_format)

    def day(self, day: date) -> str:
        return format_day(day, self._settings.date_format)
