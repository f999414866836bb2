"""
Unit Tests for the dashboard date-range resolver.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone

import pytest

from fleetbook.services.date_range import DatePeriod, DateRange, resolve_date_range


NOW = datetime(2024, 2, 15, 14, 0)  # a Thursday


def day_start(year, month, day):
    return datetime.combine(date(year, month, day), time.min)


def day_end(year, month, day):
    return datetime.combine(date(year, month, day), time.max)


# =============================================================================
# PRESET PERIODS
# =============================================================================

class TestPresetPeriods:

    def test_current_week_starts_monday(self):
        rng = resolve_date_range(DatePeriod.CURRENT_WEEK, now=NOW)
        assert rng.start == day_start(2024, 2, 12)
        assert rng.end == day_end(2024, 2, 18)

    def test_current_week_on_a_sunday(self):
        rng = resolve_date_range("current_week", now=datetime(2024, 2, 18, 23, 0))
        assert rng.start == day_start(2024, 2, 12)

    def test_current_month_leap_february(self):
        rng = resolve_date_range("current_month", now=NOW)
        assert rng.start == day_start(2024, 2, 1)
        assert rng.end == day_end(2024, 2, 29)

    def test_current_month_december(self):
        rng = resolve_date_range("current_month", now=datetime(2023, 12, 5))
        assert rng.end == day_end(2023, 12, 31)

    def test_current_quarter(self):
        rng = resolve_date_range("current_quarter", now=NOW)
        assert rng.start == day_start(2024, 1, 1)
        assert rng.end == day_end(2024, 3, 31)

    def test_fourth_quarter(self):
        rng = resolve_date_range("current_quarter", now=datetime(2024, 11, 2))
        assert rng.start == day_start(2024, 10, 1)
        assert rng.end == day_end(2024, 12, 31)

    def test_financial_year_before_april(self):
        rng = resolve_date_range("current_financial_year", now=NOW)
        assert rng.start == day_start(2023, 4, 1)
        assert rng.end == day_end(2024, 3, 31)

    def test_financial_year_after_april(self):
        rng = resolve_date_range("current_financial_year", now=datetime(2024, 5, 15))
        assert rng.start == day_start(2024, 4, 1)
        assert rng.end == day_end(2025, 3, 31)

    def test_financial_year_on_april_first(self):
        rng = resolve_date_range("current_financial_year", now=datetime(2024, 4, 1))
        assert rng.start == day_start(2024, 4, 1)

    def test_default_is_current_month(self):
        assert resolve_date_range(now=NOW) == resolve_date_range("current_month", now=NOW)

    def test_aware_now_uses_utc(self):
        # 23:30 at UTC-2 is already April 1 in UTC
        now = datetime(2024, 3, 31, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
        rng = resolve_date_range("current_month", now=now)
        assert rng.start == day_start(2024, 4, 1)

    @pytest.mark.parametrize("period", list(DatePeriod))
    def test_start_never_after_end(self, period):
        rng = resolve_date_range(period, "2024-01-01", "2024-01-31", now=NOW)
        assert rng.start <= rng.end


# =============================================================================
# CUSTOM RANGES
# =============================================================================

class TestCustomRange:

    def test_date_only_end_covers_whole_day(self):
        rng = resolve_date_range("custom", "2024-03-01", "2024-03-10", now=NOW)
        assert rng.start == day_start(2024, 3, 1)
        assert rng.end == day_end(2024, 3, 10)

    def test_datetime_bounds_kept(self):
        rng = resolve_date_range("custom", "2024-03-01T08:00:00", "2024-03-01T18:00:00", now=NOW)
        assert rng.start == datetime(2024, 3, 1, 8)
        assert rng.end == datetime(2024, 3, 1, 18)

    def test_reversed_bounds_are_swapped(self):
        rng = resolve_date_range("custom", "2024-03-10", "2024-03-01", now=NOW)
        assert rng.start == day_start(2024, 3, 1)
        assert rng.end == day_end(2024, 3, 10)

    def test_date_objects(self):
        rng = resolve_date_range("custom", date(2024, 1, 5), date(2024, 1, 6), now=NOW)
        assert rng.start == day_start(2024, 1, 5)
        assert rng.end == day_end(2024, 1, 6)

    def test_missing_bound_falls_back_to_month(self, caplog):
        with caplog.at_level(logging.WARNING):
            rng = resolve_date_range("custom", "2024-03-01", None, now=NOW)
        assert rng == resolve_date_range("current_month", now=NOW)
        assert "Invalid custom date range" in caplog.text

    def test_unparseable_bound_falls_back_to_month(self):
        rng = resolve_date_range("custom", "yesterday", "2024-03-01", now=NOW)
        assert rng.start == day_start(2024, 2, 1)


class TestUnknownPeriod:

    def test_falls_back_to_month_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            rng = resolve_date_range("last_decade", now=NOW)
        assert rng.start == day_start(2024, 2, 1)
        assert "Unknown date period" in caplog.text


# =============================================================================
# DATE RANGE VALUE
# =============================================================================

class TestDateRange:

    def test_contains_is_inclusive(self):
        rng = DateRange(day_start(2024, 2, 1), day_end(2024, 2, 29))
        assert rng.contains(day_start(2024, 2, 1))
        assert rng.contains(day_end(2024, 2, 29))
        assert not rng.contains(day_start(2024, 3, 1))
        assert not rng.contains(None)

    def test_label_and_dict(self):
        rng = DateRange(day_start(2024, 2, 1), day_end(2024, 2, 29))
        assert rng.label == "Feb 1, 2024 - Feb 29, 2024"
        data = rng.to_dict()
        assert data["start"] == "2024-02-01T00:00:00"
        assert data["end"].startswith("2024-02-29T23:59:59")
