"""
Grouping of donation rows into display buckets.

Every helper is a single pass over an already-fetched DataFrame: group by a
key, count rows, sum revenue, sort and slice. Before any top-N slicing the
group counts add up to the number of kept rows and the group revenue adds up
to the kept rows' amounts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

import pandas as pd

from analytics.channels import acquisition_channel, channel_label, detect_channel
from analytics.date_range import DateRange, local_days, parse_utc


NOT_PROVIDED = "Not Provided"
ANONYMOUS = "Anonymous"
UNATTRIBUTED_SOURCE = "Unattributed"

DONATION_TYPES = ("donation",)
REFUND_TYPES = ("refund", "cancellation")


def _col(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series([None] * len(df), index=df.index, dtype="object")


def _clean_text(series: pd.Series) -> pd.Series:
    """Strip strings; blanks, None and NaN all become None."""
    values = [
        (v.strip() or None) if isinstance(v, str) else (None if pd.isna(v) else v)
        for v in series.astype("object")
    ]
    return pd.Series(values, index=series.index, dtype="object")


def _amount(df: pd.DataFrame, column: str = "amount") -> pd.Series:
    return pd.to_numeric(_col(df, column), errors="coerce").fillna(0.0).astype(float)


def _net_amount(df: pd.DataFrame) -> pd.Series:
    gross = pd.to_numeric(_col(df, "amount"), errors="coerce")
    net = pd.to_numeric(_col(df, "net_amount"), errors="coerce")
    return net.fillna(gross).fillna(0.0).astype(float)


def donations_only(df: pd.DataFrame) -> pd.DataFrame:
    """Rows without a transaction_type are treated as donations."""
    if "transaction_type" not in df.columns:
        return df
    kind = _clean_text(df["transaction_type"]).fillna("donation").str.lower()
    return df[kind.isin(DONATION_TYPES)]


def refunds_only(df: pd.DataFrame) -> pd.DataFrame:
    if "transaction_type" not in df.columns:
        return df.iloc[0:0]
    kind = _clean_text(df["transaction_type"]).fillna("").str.lower()
    return df[kind.isin(REFUND_TYPES)]


def group_totals(
    df: pd.DataFrame,
    key: str,
    amount_col: str = "amount",
    top_n: Optional[int] = None,
    fill: Optional[str] = None,
    exclude: Iterable[str] = (),
    sort_by: str = "revenue",
) -> pd.DataFrame:
    """
    Count rows and sum revenue per distinct value of `key`.

    Rows whose key is missing are dropped, or bucketed under `fill` when given.
    `exclude` removes buckets after grouping (e.g. the fill bucket itself).
    """
    empty = pd.DataFrame({key: pd.Series(dtype="object"), "count": pd.Series(dtype="int64"),
                          "revenue": pd.Series(dtype="float64")})
    if df.empty or key not in df.columns:
        return empty

    work = pd.DataFrame({key: _clean_text(df[key]), "_amount": _amount(df, amount_col)})
    if fill is not None:
        work[key] = work[key].fillna(fill)
    work = work[work[key].notna()]
    if work.empty:
        return empty

    out = (
        work.groupby(key, sort=False)
        .agg(count=("_amount", "size"), revenue=("_amount", "sum"))
        .reset_index()
    )
    excluded = set(exclude)
    if excluded:
        out = out[~out[key].isin(excluded)]
    out = out.sort_values([sort_by, key], ascending=[False, True], kind="mergesort")
    if top_n is not None:
        out = out.head(top_n)
    return out.reset_index(drop=True)


@dataclass
class DemographicsSummary:
    total_donors: int = 0
    total_revenue: float = 0.0
    average_donation: float = 0.0
    transaction_count: int = 0
    by_state: pd.DataFrame = field(default_factory=pd.DataFrame)
    by_city: pd.DataFrame = field(default_factory=pd.DataFrame)
    by_occupation: pd.DataFrame = field(default_factory=pd.DataFrame)
    by_employer: pd.DataFrame = field(default_factory=pd.DataFrame)
    by_channel: pd.DataFrame = field(default_factory=pd.DataFrame)
    by_attribution: pd.DataFrame = field(default_factory=pd.DataFrame)


def unique_donors(df: pd.DataFrame) -> int:
    emails = _clean_text(_col(df, "donor_email")).dropna().str.lower()
    return int(emails.nunique())


def _city_labels(df: pd.DataFrame) -> pd.Series:
    city = _clean_text(_col(df, "city"))
    state = _clean_text(_col(df, "state"))
    labels = [
        (f"{c}, {s}" if s else c) if c else None
        for c, s in zip(city, state)
    ]
    return pd.Series(labels, index=df.index, dtype="object")


def summarize_demographics(df: pd.DataFrame, top_n: int = 10) -> DemographicsSummary:
    rows = donations_only(df)
    if rows.empty:
        return DemographicsSummary(
            by_state=group_totals(rows, "state"),
            by_city=group_totals(rows, "city"),
            by_occupation=group_totals(rows, "occupation"),
            by_employer=group_totals(rows, "employer"),
            by_channel=group_totals(rows, "channel"),
            by_attribution=group_totals(rows, "attribution"),
        )

    total_donors = unique_donors(rows)
    total_revenue = float(_amount(rows).sum())
    records = rows.to_dict("records")
    work = rows.assign(
        city_label=_city_labels(rows),
        channel=[acquisition_channel(r) for r in records],
        attribution=[channel_label(detect_channel(r).channel) for r in records],
    )

    return DemographicsSummary(
        total_donors=total_donors,
        total_revenue=total_revenue,
        average_donation=total_revenue / len(rows) if total_donors > 0 else 0.0,
        transaction_count=len(rows),
        by_state=group_totals(work, "state", top_n=top_n),
        by_city=group_totals(work, "city_label", top_n=top_n).rename(columns={"city_label": "city"}),
        by_occupation=group_totals(work, "occupation", top_n=top_n, fill=NOT_PROVIDED, exclude=(NOT_PROVIDED,)),
        by_employer=group_totals(work, "employer", top_n=top_n, fill=NOT_PROVIDED, exclude=(NOT_PROVIDED,)),
        by_channel=group_totals(work, "channel"),
        by_attribution=group_totals(work, "attribution"),
    )


def _payload_number(value, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return default if pd.isna(number) else number


def _rpc_frame(rows, key: str, source_key: str, count_key: str, top_n: Optional[int]) -> pd.DataFrame:
    records = [
        {
            key: r.get(source_key),
            "count": int(_payload_number(r.get(count_key))),
            "revenue": _payload_number(r.get("revenue")),
        }
        for r in rows or []
    ]
    df = pd.DataFrame(records, columns=[key, "count", "revenue"])
    df = df[df[key].notna()]
    df = df.sort_values(["revenue", key], ascending=[False, True], kind="mergesort")
    if top_n is not None:
        df = df.head(top_n)
    return df.astype({"count": "int64", "revenue": "float64"}).reset_index(drop=True)


def demographics_from_rpc(
    payload: dict, client_side: Optional[DemographicsSummary] = None, top_n: int = 10
) -> DemographicsSummary:
    """
    get_donor_demographics_v2 payload -> the summary shape the client path builds.

    The function reports totals, states, occupation categories and acquisition
    channels. City, employer and attribution breakdowns are not part of it and
    are taken from `client_side` when given.
    """
    totals = payload.get("totals") or {}
    total_donors = int(_payload_number(totals.get("unique_donor_count")))
    total_revenue = _payload_number(totals.get("total_revenue"))
    transaction_count = int(_payload_number(totals.get("transaction_count")))
    rest = client_side or summarize_demographics(pd.DataFrame())
    return DemographicsSummary(
        total_donors=total_donors,
        total_revenue=total_revenue,
        average_donation=total_revenue / transaction_count if total_donors > 0 and transaction_count else 0.0,
        transaction_count=transaction_count,
        by_state=_rpc_frame(payload.get("state_stats"), "state", "state_abbr", "transaction_count", top_n),
        by_city=rest.by_city,
        by_occupation=_rpc_frame(payload.get("occupation_stats"), "occupation", "occupation_category", "count", top_n),
        by_employer=rest.by_employer,
        by_channel=_rpc_frame(payload.get("channel_stats"), "channel", "channel", "count", None),
        by_attribution=rest.by_attribution,
    )


@dataclass(frozen=True)
class DonationMetrics:
    total_raised: float = 0.0
    net_raised: float = 0.0
    net_revenue: float = 0.0
    total_donations: int = 0
    unique_donors: int = 0
    average_donation: float = 0.0
    recurring_count: int = 0
    recurring_revenue: float = 0.0
    one_time_count: int = 0
    one_time_revenue: float = 0.0
    refund_count: int = 0
    refund_amount: float = 0.0

    @property
    def recurring_rate(self) -> float:
        return self.recurring_count / self.total_donations * 100 if self.total_donations else 0.0

    @property
    def refund_rate(self) -> float:
        return self.refund_count / self.total_donations * 100 if self.total_donations else 0.0


def _is_recurring(df: pd.DataFrame) -> pd.Series:
    return _col(df, "is_recurring").map(lambda v: bool(v) if pd.notna(v) else False).astype(bool)


def donation_metrics(df: pd.DataFrame) -> DonationMetrics:
    """
    Gross = donation amounts; net = donation net amounts (falling back to
    gross); refunds = |net| of refund/cancellation rows; net revenue = net - refunds.
    """
    donations = donations_only(df)
    refunds = refunds_only(df)

    gross = _amount(donations)
    net = _net_amount(donations)
    refund_amount = float(_net_amount(refunds).abs().sum())
    recurring = _is_recurring(donations)

    total = len(donations)
    return DonationMetrics(
        total_raised=float(gross.sum()),
        net_raised=float(net.sum()),
        net_revenue=float(net.sum()) - refund_amount,
        total_donations=total,
        unique_donors=unique_donors(donations),
        average_donation=float(gross.sum()) / total if total else 0.0,
        recurring_count=int(recurring.sum()),
        recurring_revenue=float(gross[recurring].sum()),
        one_time_count=int((~recurring).sum()),
        one_time_revenue=float(gross[~recurring].sum()),
        refund_count=len(refunds),
        refund_amount=refund_amount,
    )


def daily_series(df: pd.DataFrame, date_range: DateRange, tz: str) -> pd.DataFrame:
    """One row per org-local day in the range; days without donations are zero."""
    index = pd.DatetimeIndex([pd.Timestamp(d) for d in date_range.iter_days()], name="day")
    donations = donations_only(df)
    if donations.empty or "transaction_date" not in donations.columns:
        out = pd.DataFrame(index=index, data={"donations": 0, "amount": 0.0, "donors": 0})
    else:
        work = pd.DataFrame(
            {
                "day": local_days(donations["transaction_date"], tz),
                "net": _net_amount(donations),
                "email": _clean_text(_col(donations, "donor_email")).str.lower(),
            }
        ).dropna(subset=["day"])
        grouped = work.groupby("day").agg(
            donations=("net", "size"),
            amount=("net", "sum"),
            donors=("email", "nunique"),
        )
        out = grouped.reindex(index, fill_value=0)
    out = out.reset_index()
    out["date"] = out["day"].dt.strftime("%Y-%m-%d")
    out["donations"] = out["donations"].astype(int)
    out["donors"] = out["donors"].astype(int)
    out["amount"] = out["amount"].astype(float)
    return out[["date", "donations", "amount", "donors"]]


def by_source(df: pd.DataFrame, top_n: int = 10) -> pd.DataFrame:
    donations = donations_only(df)
    source = (
        _clean_text(_col(donations, "refcode"))
        .fillna(_clean_text(_col(donations, "source_campaign")))
        .fillna(UNATTRIBUTED_SOURCE)
    )
    work = pd.DataFrame({"source": source, "net_amount": _net_amount(donations)})
    out = group_totals(work, "source", amount_col="net_amount", top_n=top_n)
    out = out.rename(columns={"revenue": "amount"})
    total = len(donations)
    out["percentage"] = out["count"] / total * 100 if total else 0.0
    return out


def donor_names(df: pd.DataFrame) -> pd.Series:
    """donor_name, else 'first last', else first, else Anonymous."""
    first = _clean_text(_col(df, "first_name"))
    last = _clean_text(_col(df, "last_name"))
    full = pd.Series(
        [f"{f} {l}" if f and l else None for f, l in zip(first, last)],
        index=df.index,
        dtype="object",
    )
    return _clean_text(_col(df, "donor_name")).fillna(full).fillna(first).fillna(ANONYMOUS)


def _first_named(names: pd.Series) -> str:
    return next((n for n in names if n != ANONYMOUS), ANONYMOUS)


def top_donors(df: pd.DataFrame, tz: str, top_n: int = 25) -> pd.DataFrame:
    columns = ["donor_key", "name", "email", "state", "total_amount", "donation_count", "last_donation"]
    donations = donations_only(df)
    if donations.empty:
        return pd.DataFrame(columns=columns)

    email = _clean_text(_col(donations, "donor_email"))
    key = email.str.lower().fillna(_clean_text(_col(donations, "transaction_id"))).fillna(
        pd.Series(donations.index.astype(str), index=donations.index)
    )
    days = local_days(_col(donations, "transaction_date"), tz)
    work = pd.DataFrame(
        {
            "donor_key": key,
            "name": donor_names(donations),
            "email": email,
            "state": _clean_text(_col(donations, "state")),
            "net": _net_amount(donations),
            "day": days.dt.strftime("%Y-%m-%d"),
        }
    )
    out = (
        work.groupby("donor_key", sort=False)
        .agg(
            name=("name", _first_named),
            email=("email", "first"),
            state=("state", "first"),
            total_amount=("net", "sum"),
            donation_count=("net", "size"),
            last_donation=("day", "max"),
        )
        .reset_index()
    )
    out["email"] = out["email"].fillna("")
    out = out.sort_values("total_amount", ascending=False, kind="mergesort").head(top_n)
    return out[columns].reset_index(drop=True)


def recent_donations(df: pd.DataFrame, limit: int = 50) -> pd.DataFrame:
    columns = ["date", "donor_name", "email", "state", "city", "amount", "net_amount", "is_recurring", "refcode"]
    donations = donations_only(df)
    if donations.empty:
        return pd.DataFrame(columns=columns)

    out = pd.DataFrame(
        {
            "date": parse_utc(_col(donations, "transaction_date")),
            "donor_name": donor_names(donations),
            "email": _clean_text(_col(donations, "donor_email")).fillna(""),
            "state": _clean_text(_col(donations, "state")),
            "city": _clean_text(_col(donations, "city")),
            "amount": _amount(donations),
            "net_amount": _net_amount(donations),
            "is_recurring": _is_recurring(donations),
            "refcode": _clean_text(_col(donations, "refcode")),
        }
    )
    out = out.sort_values("date", ascending=False, kind="mergesort", na_position="last").head(limit)
    return out.reset_index(drop=True)


def revenue_by_organization(df: pd.DataFrame) -> pd.DataFrame:
    """organization_id, donations, revenue (net), donors; donations only."""
    columns = ["organization_id", "donations", "revenue", "donors"]
    donations = donations_only(df)
    if donations.empty or "organization_id" not in donations.columns:
        return pd.DataFrame(columns=columns)
    work = pd.DataFrame(
        {
            "organization_id": donations["organization_id"],
            "net": _net_amount(donations),
            "email": _clean_text(_col(donations, "donor_email")).str.lower(),
        }
    )
    out = (
        work.groupby("organization_id", sort=False)
        .agg(donations=("net", "size"), revenue=("net", "sum"), donors=("email", "nunique"))
        .reset_index()
        .sort_values("revenue", ascending=False, kind="mergesort")
    )
    return out[columns].reset_index(drop=True)
