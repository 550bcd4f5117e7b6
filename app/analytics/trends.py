from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence

import pandas as pd


@dataclass(frozen=True)
class Trend:
    current: float
    previous: float
    change: float
    change_percent: float


def calculate_trend(current: float, previous: float) -> Trend:
    change = current - previous
    pct = change / previous * 100 if previous else 0.0
    return Trend(current=current, previous=previous, change=change, change_percent=pct)


def format_delta(trend: Trend) -> Optional[str]:
    """'+12.5%' / '-3.0%'; None when there is no previous period to compare to."""
    if not trend.previous:
        return None
    sign = "+" if trend.change_percent >= 0 else "-"
    return f"{sign}{abs(trend.change_percent):.1f}%"


@dataclass(frozen=True)
class Trendline:
    slope: float
    intercept: float
    r_squared: float
    direction: str  # "up" | "down" | "flat"
    strength: str  # "strong" | "moderate" | "weak"
    predicted: list[float] = field(default_factory=list)


def _fit(values: Sequence[float]) -> tuple[float, float]:
    n = len(values)
    sum_x = n * (n - 1) / 2
    sum_xx = sum(i * i for i in range(n))
    sum_y = float(sum(values))
    sum_xy = sum(i * float(y) for i, y in enumerate(values))
    denom = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denom if denom else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def calculate_trendline(values: Sequence[float]) -> Trendline:
    values = [float(v) for v in values]
    n = len(values)
    if n < 2:
        return Trendline(
            slope=0.0,
            intercept=values[0] if values else 0.0,
            r_squared=0.0,
            direction="flat",
            strength="weak",
            predicted=list(values),
        )

    slope, intercept = _fit(values)
    predicted = [slope * i + intercept for i in range(n)]
    mean = sum(values) / n
    ss_total = sum((y - mean) ** 2 for y in values)
    ss_res = sum((y - p) ** 2 for y, p in zip(values, predicted))
    r_squared = 1 - ss_res / ss_total if ss_total > 0 else 0.0

    if abs(slope) < 0.001:
        direction = "flat"
    else:
        direction = "up" if slope > 0 else "down"
    strength = "strong" if r_squared > 0.7 else "moderate" if r_squared > 0.4 else "weak"

    return Trendline(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        direction=direction,
        strength=strength,
        predicted=predicted,
    )


def detect_anomalies(series: pd.DataFrame, value_col: str = "amount", threshold: float = 2.0) -> pd.DataFrame:
    """
    Adds z_score / is_anomaly / direction columns (population std-dev).
    Fewer than three points: nothing is flagged.
    """
    out = series.copy()
    values = pd.to_numeric(out[value_col], errors="coerce").fillna(0.0) if len(out) else pd.Series(dtype=float)
    if len(out) < 3:
        out["z_score"] = 0.0
        out["is_anomaly"] = False
        out["direction"] = "normal"
        return out

    mean = values.mean()
    std = values.std(ddof=0)
    z = (values - mean) / std if std > 0 else values * 0.0
    out["z_score"] = z
    out["is_anomaly"] = z.abs() > threshold
    out["direction"] = ["high" if v > threshold else "low" if v < -threshold else "normal" for v in z]
    return out


def rolling_average(values: Sequence[float], window: int) -> list[float]:
    """Trailing mean; the first points average over what is available."""
    if window < 1:
        raise ValueError("window must be >= 1")
    return pd.Series(values, dtype=float).rolling(window, min_periods=1).mean().tolist()


def forecast(series: pd.DataFrame, days: int, value_col: str = "amount", date_col: str = "date") -> pd.DataFrame:
    """
    Linear fit over the series, extended `days` ahead, with a 95% band (±1.96σ of residuals).
    Returns columns: date, actual (None for future days), forecast, lower, upper.
    """
    columns = ["date", "actual", "forecast", "lower", "upper"]
    if len(series) < 2:
        return pd.DataFrame(columns=columns)

    values = pd.to_numeric(series[value_col], errors="coerce").fillna(0.0).tolist()
    n = len(values)
    slope, intercept = _fit(values)
    predicted = [slope * i + intercept for i in range(n)]
    std_err = math.sqrt(sum((y - p) ** 2 for y, p in zip(values, predicted)) / n)
    band = 1.96 * std_err

    rows = []
    for d, y, p in zip(series[date_col], values, predicted):
        rows.append({"date": str(d), "actual": y, "forecast": p, "lower": p - band, "upper": p + band})

    last = date.fromisoformat(str(series[date_col].iloc[-1])[:10])
    for i in range(1, days + 1):
        p = slope * (n + i - 1) + intercept
        rows.append(
            {
                "date": (last + timedelta(days=i)).isoformat(),
                "actual": None,
                "forecast": p,
                "lower": p - band,
                "upper": p + band,
            }
        )
    return pd.DataFrame(rows, columns=columns)
