"""Tests for calendar-aware day bucketing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from moneyday.ledger import LedgerCalendar


class TestDayOf:

    def test_naive_datetime_is_wall_clock(self):
        calendar = LedgerCalendar(timezone(timedelta(hours=-5)))
        assert calendar.day_of(datetime(2024, 3, 1, 23, 30)) == date(2024, 3, 1)

    def test_aware_datetime_is_converted(self):
        calendar = LedgerCalendar(timezone(timedelta(hours=-5)))
        # 02:00 UTC on March 2nd is still March 1st at UTC-5.
        moment = datetime(2024, 3, 2, 2, 0, tzinfo=timezone.utc)
        assert calendar.day_of(moment) == date(2024, 3, 1)

    def test_plain_date_is_returned_unchanged(self):
        calendar = LedgerCalendar(timezone.utc)
        assert calendar.day_of(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_same_day_is_not_a_24_hour_window(self):
        calendar = LedgerCalendar(timezone.utc)
        assert not calendar.is_same_day(datetime(2024, 3, 1, 23, 59), datetime(2024, 3, 2, 0, 1))
        assert calendar.is_same_day(datetime(2024, 3, 1, 0, 0), datetime(2024, 3, 1, 23, 59))


class TestMonthBounds:

    @pytest.mark.parametrize(
        "day, first, last",
        [
            (date(2024, 2, 14), date(2024, 2, 1), date(2024, 2, 29)),
            (date(2023, 2, 14), date(2023, 2, 1), date(2023, 2, 28)),
            (date(2024, 4, 30), date(2024, 4, 1), date(2024, 4, 30)),
            (date(2024, 12, 1), date(2024, 12, 1), date(2024, 12, 31)),
        ],
    )
    def test_bounds(self, day, first, last):
        assert LedgerCalendar(timezone.utc).month_bounds(day) == (first, last)

    def test_days_in_month_is_contiguous(self):
        days = LedgerCalendar(timezone.utc).days_in_month(datetime(2024, 3, 15, 12))
        assert days[0] == date(2024, 3, 1)
        assert days[-1] == date(2024, 3, 31)
        assert len(days) == 31
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
