"""Tests for calendar helpers used by billing periods."""

from datetime import UTC, datetime

from invoicing.core.dates import (
    add_months,
    add_months_on_day,
    days_between,
    months_between,
    with_day_of_month,
)


class TestAddMonths:
    def test_basic(self):
        assert add_months(datetime(2025, 1, 15), 1) == datetime(2025, 2, 15)

    def test_clamp_end_of_month(self):
        # Jan 31 + 1 month = Feb 28
        result = add_months(datetime(2025, 1, 31), 1)
        assert result == datetime(2025, 2, 28)

    def test_leap_year(self):
        result = add_months(datetime(2024, 1, 31), 1)
        assert result == datetime(2024, 2, 29)

    def test_year_rollover(self):
        result = add_months(datetime(2025, 11, 15), 3)
        assert result == datetime(2026, 2, 15)

    def test_subtract_across_year(self):
        result = add_months(datetime(2025, 1, 15), -1)
        assert result == datetime(2024, 12, 15)

    def test_preserves_time_and_timezone(self):
        result = add_months(datetime(2025, 1, 15, 10, 30, tzinfo=UTC), 1)
        assert result == datetime(2025, 2, 15, 10, 30, tzinfo=UTC)


class TestAddMonthsOnDay:
    def test_restores_anchor_after_short_month(self):
        feb = add_months_on_day(datetime(2025, 1, 31), 1, 31)
        assert feb == datetime(2025, 2, 28)
        assert add_months_on_day(feb, 1, 31) == datetime(2025, 3, 31)

    def test_negative_months(self):
        assert add_months_on_day(datetime(2025, 3, 31), -1, 31) == datetime(2025, 2, 28)

    def test_with_day_of_month_clamps(self):
        assert with_day_of_month(datetime(2025, 4, 10), 31) == datetime(2025, 4, 30)


class TestMonthsBetween:
    def test_exact_months(self):
        assert months_between(datetime(2020, 1, 1), datetime(2023, 1, 1)) == 36

    def test_partial_month_truncates(self):
        assert months_between(datetime(2020, 1, 15), datetime(2020, 3, 14)) == 1

    def test_end_of_month(self):
        assert months_between(datetime(2020, 1, 31), datetime(2020, 2, 29)) == 1

    def test_time_of_day_counts(self):
        start = datetime(2020, 1, 1, 12, 0)
        assert months_between(start, datetime(2020, 2, 1, 11, 0)) == 0
        assert months_between(start, datetime(2020, 2, 1, 12, 0)) == 1

    def test_negative(self):
        assert months_between(datetime(2020, 3, 15), datetime(2020, 1, 20)) == -1

    def test_same_instant(self):
        assert months_between(datetime(2020, 1, 1), datetime(2020, 1, 1)) == 0


class TestDaysBetween:
    def test_february_leap_year(self):
        assert days_between(datetime(2020, 2, 1), datetime(2020, 3, 1)) == 29

    def test_ignores_time_of_day(self):
        assert days_between(datetime(2020, 1, 1, 23, 0), datetime(2020, 1, 2, 1, 0)) == 1
