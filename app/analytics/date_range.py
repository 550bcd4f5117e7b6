from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

import pandas as pd


PRESETS = {
    "7d": "Last 7 days",
    "30d": "Last 30 days",
    "90d": "Last 90 days",
    "ytd": "Year to date",
}


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def previous(self) -> "DateRange":
        """Same-length window ending the day before this one starts."""
        end = self.start - timedelta(days=1)
        return DateRange(start=end - timedelta(days=self.days - 1), end=end)

    def iter_days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.days)]

    def label(self) -> str:
        return f"{self.start:%b %d, %Y} – {self.end:%b %d, %Y}"


def preset_range(preset: str, today: Optional[date] = None) -> DateRange:
    today = today or date.today()
    if preset == "ytd":
        return DateRange(start=date(today.year, 1, 1), end=today)
    if preset in ("7d", "30d", "90d"):
        n = int(preset[:-1])
        return DateRange(start=today - timedelta(days=n - 1), end=today)
    raise ValueError(f"Unknown date preset: {preset}")


def _iso_utc(ts: pd.Timestamp) -> str:
    return ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def utc_bounds(date_range: DateRange, tz: str) -> tuple[str, str]:
    """
    Org-local midnight-to-midnight as UTC ISO strings.

    For America/New_York, 2026-01-22 covers
    2026-01-22T05:00:00.000Z .. 2026-01-23T04:59:59.999Z.
    """
    start = pd.Timestamp(date_range.start).tz_localize(tz).tz_convert("UTC")
    end_local = pd.Timestamp(date_range.end) + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)
    end = end_local.tz_localize(tz).tz_convert("UTC")
    return _iso_utc(start), _iso_utc(end)


def parse_utc(values: Any) -> Any:
    """Parse timestamps (strings or datetimes) as UTC; bad values become NaT."""
    return pd.to_datetime(values, utc=True, errors="coerce", format="ISO8601")


def day_key(value: Any, tz: str) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    ts = parse_utc(value)
    if pd.isna(ts):
        return None
    return ts.tz_convert(tz).strftime("%Y-%m-%d")


def local_days(series: pd.Series, tz: str) -> pd.Series:
    """Org-local calendar day (as a naive midnight Timestamp) for each timestamp."""
    ts = parse_utc(series)
    return ts.dt.tz_convert(tz).dt.tz_localize(None).dt.normalize()


def filter_by_range(
    df: pd.DataFrame,
    date_range: DateRange,
    tz: str,
    column: str = "transaction_date",
) -> pd.DataFrame:
    if df.empty or column not in df.columns:
        return df.iloc[0:0].copy()
    days = local_days(df[column], tz)
    mask = (days >= pd.Timestamp(date_range.start)) & (days <= pd.Timestamp(date_range.end))
    return df[mask].copy()


def local_today(tz: str) -> date:
    return pd.Timestamp.now(tz=tz).date()


def default_preset(days: int) -> str:
    """Closest rolling preset for a configured default window."""
    return min(("7d", "30d", "90d"), key=lambda p: abs(int(p[:-1]) - days))
