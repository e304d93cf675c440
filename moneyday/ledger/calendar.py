"""
Calendar-Aware Day Bucketing

DESIGN DECISION: "Same day" means same calendar date in the ledger's
timezone, never "within 24 hours". An expense at 23:59 and one at
00:01 the next morning are two minutes apart but on different days.

Naive datetimes are treated as wall-clock time in the ledger's
calendar (that is what a date picker produces). Aware datetimes are
first converted into the calendar's timezone; with no timezone
configured that is the system local timezone.
"""

from calendar import monthrange
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional


class LedgerCalendar:
    """Maps timestamps to calendar days and months."""

    def __init__(self, zone: Optional[tzinfo] = None):
        self._zone = zone

    @property
    def zone(self) -> Optional[tzinfo]:
        return self._zone

    def localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self._zone)

    def day_of(self, value: date) -> date:
        """Calendar day of a date or datetime."""
        if isinstance(value, datetime):
            return self.localize(value).date()
        return value

    def is_same_day(self, first: date, second: date) -> bool:
        return self.day_of(first) == self.day_of(second)

    def month_bounds(self, value: date) -> tuple[date, date]:
        """First and last calendar day of the month containing ``value``."""
        day = self.day_of(value)
        _, last = monthrange(day.year, day.month)
        return day.replace(day=1), day.replace(day=last)

    def days_in_month(self, value: date) -> list[date]:
        first, last = self.month_bounds(value)
        return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]
