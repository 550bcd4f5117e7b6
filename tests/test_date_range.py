"""
Unit tests for org-local date ranges.
"""

from datetime import date

import pandas as pd
import pytest

from analytics.date_range import (
    DateRange,
    day_key,
    default_preset,
    filter_by_range,
    local_days,
    preset_range,
    utc_bounds,
)
from conftest import TZ


class TestDateRange:
    def test_days_is_inclusive(self):
        assert DateRange(date(2025, 1, 1), date(2025, 1, 1)).days == 1
        assert DateRange(date(2025, 1, 1), date(2025, 1, 31)).days == 31

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            DateRange(date(2025, 2, 1), date(2025, 1, 1))

    def test_previous_is_same_length_and_adjacent(self):
        current = DateRange(date(2025, 3, 10), date(2025, 3, 16))
        prev = current.previous()
        assert prev == DateRange(date(2025, 3, 3), date(2025, 3, 9))
        assert prev.days == current.days

    def test_iter_days(self):
        days = DateRange(date(2025, 2, 27), date(2025, 3, 1)).iter_days()
        assert days == [date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1)]


class TestPresets:
    def test_rolling_presets_end_today(self):
        today = date(2025, 6, 30)
        assert preset_range("7d", today) == DateRange(date(2025, 6, 24), today)
        assert preset_range("30d", today).days == 30
        assert preset_range("90d", today).days == 90

    def test_ytd(self):
        assert preset_range("ytd", date(2025, 6, 30)) == DateRange(date(2025, 1, 1), date(2025, 6, 30))

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            preset_range("14d", date(2025, 6, 30))

    @pytest.mark.parametrize("days,expected", [(7, "7d"), (30, "30d"), (45, "30d"), (120, "90d")])
    def test_default_preset(self, days, expected):
        assert default_preset(days) == expected


class TestUtcBounds:
    def test_winter_day(self):
        start, end = utc_bounds(DateRange(date(2026, 1, 22), date(2026, 1, 22)), TZ)
        assert start == "2026-01-22T05:00:00.000Z"
        assert end == "2026-01-23T04:59:59.999Z"

    def test_summer_day(self):
        start, end = utc_bounds(DateRange(date(2025, 7, 15), date(2025, 7, 15)), TZ)
        assert start == "2025-07-15T04:00:00.000Z"
        assert end == "2025-07-16T03:59:59.999Z"

    def test_utc_timezone(self):
        start, end = utc_bounds(DateRange(date(2025, 1, 1), date(2025, 1, 31)), "UTC")
        assert start == "2025-01-01T00:00:00.000Z"
        assert end == "2025-01-31T23:59:59.999Z"


class TestDayKey:
    def test_winter_evening_belongs_to_previous_day(self):
        assert day_key("2025-01-15T00:30:00Z", TZ) == "2025-01-14"

    def test_summer_evening_belongs_to_previous_day(self):
        assert day_key("2025-07-15T03:30:00Z", TZ) == "2025-07-14"

    def test_midday_is_same_day(self):
        assert day_key("2025-07-15T16:00:00.000Z", TZ) == "2025-07-15"

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
    def test_missing_or_bad(self, value):
        assert day_key(value, TZ) is None


class TestFilterByRange:
    def test_uses_local_days(self, transactions_df):
        out = filter_by_range(transactions_df, DateRange(date(2025, 1, 15), date(2025, 1, 15)), TZ)
        # T3 is 03:30 UTC on the 16th, i.e. still the 15th in New York
        assert out["transaction_id"].tolist() == ["T1", "T2", "T3"]

    def test_excludes_outside(self, transactions_df):
        out = filter_by_range(transactions_df, DateRange(date(2025, 1, 16), date(2025, 1, 16)), TZ)
        assert out.empty

    def test_empty_and_missing_column(self, transactions_df):
        rng = DateRange(date(2025, 1, 1), date(2025, 1, 31))
        assert filter_by_range(transactions_df.iloc[0:0], rng, TZ).empty
        assert filter_by_range(transactions_df.drop(columns=["transaction_date"]), rng, TZ).empty

    def test_local_days_are_naive_midnights(self):
        days = local_days(pd.Series(["2025-01-16T03:30:00Z"]), TZ)
        assert days.iloc[0] == pd.Timestamp("2025-01-15")
