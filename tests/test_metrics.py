"""
Unit tests for the chart helpers: formatters and the dashboard trend chart overlays.
"""

from unittest.mock import patch

import pandas as pd

from analytics.trends import forecast, rolling_average
from components.metrics import EMPTY_VALUE, fmt_count, fmt_currency, fmt_pct, trend_chart


SERIES = pd.DataFrame(
    {
        "date": ["2025-01-01", "2025-01-02", "2025-01-03", "2025-01-04"],
        "amount": [100.0, 140.0, 120.0, 180.0],
    }
)


def test_formatters_handle_missing():
    assert fmt_currency(None) == EMPTY_VALUE
    assert fmt_count(float("nan")) == EMPTY_VALUE
    assert fmt_currency(-1234.0) == "-$1,234"
    assert fmt_pct(12.345) == "12.3%"


@patch("components.metrics.st")
def test_trend_chart_draws_rolling_and_forecast(mock_st):
    fig = trend_chart(
        SERIES,
        y="amount",
        rolling=rolling_average(SERIES["amount"].tolist(), 7),
        projection=forecast(SERIES, days=3),
    )
    names = [t.name for t in fig.data]
    assert names[0] == "Daily"
    assert "7-day average" in names
    assert "Forecast range" in names
    assert "Forecast" in names
    projected = next(t for t in fig.data if t.name == "Forecast")
    assert list(projected.x) == ["2025-01-05", "2025-01-06", "2025-01-07"]
    mock_st.plotly_chart.assert_called_once()


@patch("components.metrics.st")
def test_trend_chart_skips_empty_projection(mock_st):
    short = SERIES.head(1)
    fig = trend_chart(short, y="amount", projection=forecast(short, days=3))
    assert [t.name for t in fig.data] == ["Daily"]
