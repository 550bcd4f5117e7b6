"""
Unit tests for trend, anomaly and forecast helpers.
"""

import pandas as pd
import pytest

from analytics.trends import (
    calculate_trend,
    calculate_trendline,
    detect_anomalies,
    forecast,
    format_delta,
    rolling_average,
)


class TestTrend:
    def test_change(self):
        t = calculate_trend(150, 100)
        assert t.change == 50
        assert t.change_percent == pytest.approx(50.0)
        assert format_delta(t) == "+50.0%"

    def test_decline(self):
        assert format_delta(calculate_trend(75, 100)) == "-25.0%"

    def test_zero_previous(self):
        t = calculate_trend(10, 0)
        assert t.change_percent == 0.0
        assert format_delta(t) is None


class TestTrendline:
    def test_perfect_line(self):
        tl = calculate_trendline([1, 2, 3, 4, 5])
        assert tl.slope == pytest.approx(1.0)
        assert tl.intercept == pytest.approx(1.0)
        assert tl.r_squared == pytest.approx(1.0)
        assert (tl.direction, tl.strength) == ("up", "strong")
        assert tl.predicted == pytest.approx([1, 2, 3, 4, 5])

    def test_down(self):
        assert calculate_trendline([10, 8, 6, 4]).direction == "down"

    def test_flat(self):
        tl = calculate_trendline([5, 5, 5, 5])
        assert tl.direction == "flat"
        assert tl.r_squared == 0.0

    @pytest.mark.parametrize("values", [[], [7]])
    def test_too_short(self, values):
        tl = calculate_trendline(values)
        assert (tl.slope, tl.direction, tl.strength) == (0.0, "flat", "weak")


class TestAnomalies:
    def test_spike_flagged(self):
        series = pd.DataFrame({"date": [f"2025-01-{d:02d}" for d in range(1, 11)], "amount": [10] * 9 + [100]})
        out = detect_anomalies(series)
        assert out["is_anomaly"].tolist() == [False] * 9 + [True]
        assert out["direction"].iloc[-1] == "high"

    def test_constant_series(self):
        out = detect_anomalies(pd.DataFrame({"amount": [3, 3, 3, 3]}))
        assert not out["is_anomaly"].any()
        assert (out["z_score"] == 0).all()

    def test_short_series_never_flagged(self):
        out = detect_anomalies(pd.DataFrame({"amount": [1, 1000]}))
        assert not out["is_anomaly"].any()


class TestRollingAndForecast:
    def test_rolling_average(self):
        assert rolling_average([2, 4, 6, 8], 2) == pytest.approx([2, 3, 5, 7])

    def test_rolling_window_validated(self):
        with pytest.raises(ValueError):
            rolling_average([1, 2], 0)

    def test_forecast_extends_line(self):
        series = pd.DataFrame({"date": ["2025-01-01", "2025-01-02", "2025-01-03"], "amount": [10, 20, 30]})
        out = forecast(series, days=2)
        assert len(out) == 5
        assert out["date"].tolist()[-2:] == ["2025-01-04", "2025-01-05"]
        assert out["forecast"].tolist()[-2:] == pytest.approx([40, 50])
        assert pd.isna(out["actual"].iloc[-1])
        # perfect fit: zero-width band
        assert out["upper"].iloc[-1] == pytest.approx(out["lower"].iloc[-1])

    def test_forecast_needs_two_points(self):
        assert forecast(pd.DataFrame({"date": ["2025-01-01"], "amount": [1]}), days=3).empty
