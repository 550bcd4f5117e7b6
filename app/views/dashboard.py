from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics.aggregation import by_source, daily_series, donation_metrics, donations_only, recent_donations, top_donors
from analytics.channels import CHANNEL_LABELS, CONFIDENCE_LABELS, attribution_quality
from analytics.trends import calculate_trend, calculate_trendline, detect_anomalies, forecast, format_delta, rolling_average
from components.feedback import show_result
from components.metrics import Kpi, bar_chart, donut_chart, fmt_count, fmt_currency, fmt_pct, line_chart, render_kpi_row, trend_chart
from components.narrative import render_action_hint, render_chart_annotation, render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import get_transactions


FORECAST_DAYS = 7


def _delta(current: float, previous: float) -> str | None:
    return format_delta(calculate_trend(current, previous))


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Donations")
    render_tab_intro(
        question=f"How is {state.org_name or 'the organization'} raising, and where is the money coming from?",
        context=f"{state.date_range.label()} ({cfg.org_timezone}). Deltas compare against the same-length period before it.",
    )

    current = get_transactions(cfg, state.use_mock, state.org_id, state.date_range)
    if not show_result(current):
        return
    previous = get_transactions(cfg, state.use_mock, state.org_id, state.date_range.previous())
    if not previous.ok:
        st.caption("Previous-period comparison unavailable.")

    st.caption(f"Data source: **{current.source}**")

    now = donation_metrics(current.df)
    before = donation_metrics(previous.df)

    render_kpi_row(
        [
            Kpi("Total raised", fmt_currency(now.total_raised), _delta(now.total_raised, before.total_raised)),
            Kpi("Net revenue", fmt_currency(now.net_revenue), _delta(now.net_revenue, before.net_revenue), help="Net of fees and refunds"),
            Kpi("Donations", fmt_count(now.total_donations), _delta(now.total_donations, before.total_donations)),
            Kpi("Unique donors", fmt_count(now.unique_donors), _delta(now.unique_donors, before.unique_donors)),
            Kpi("Avg donation", fmt_currency(now.average_donation, 2), _delta(now.average_donation, before.average_donation)),
        ]
    )
    render_kpi_row(
        [
            Kpi("Recurring", fmt_pct(now.recurring_rate), help=f"{fmt_currency(now.recurring_revenue)} from {fmt_count(now.recurring_count)} gifts"),
            Kpi("One-time revenue", fmt_currency(now.one_time_revenue), help=f"{fmt_count(now.one_time_count)} gifts"),
            Kpi("Refunds", fmt_currency(now.refund_amount), help=f"{fmt_count(now.refund_count)} refunds ({fmt_pct(now.refund_rate)})"),
        ]
    )

    if now.total_donations == 0:
        st.info("No donations in this date range.")
        return

    st.divider()

    # --- Daily trend ---
    st.subheader("Daily net revenue")
    series = daily_series(current.df, state.date_range, cfg.org_timezone)
    flagged = detect_anomalies(series, value_col="amount")
    fit = calculate_trendline(series["amount"].tolist())
    smoothed = rolling_average(series["amount"].tolist(), 7)
    projection = forecast(series, days=FORECAST_DAYS)
    render_chart_annotation(
        title="What to notice",
        body=(
            f"Trend is <b>{fit.direction}</b> ({fit.strength} fit, R² {fit.r_squared:.2f}). "
            f"Red markers flag days more than two standard deviations from the mean: "
            f"{int(flagged['is_anomaly'].sum())} in this range."
            f" The shaded band projects the next {FORECAST_DAYS} days."
        ),
    )
    trend_chart(series, y="amount", trendline=fit.predicted, anomalies=flagged, rolling=smoothed, projection=projection)
    with st.expander("Donors per day"):
        line_chart(series, x="date", y="donors")

    # --- Sources and attribution ---
    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Top sources")
        sources = by_source(current.df, top_n=10)
        bar_chart(sources, x="source", y="amount", horizontal=True, y_format="currency")
    with c2:
        st.subheader("Attribution")
        quality = attribution_quality(donations_only(current.df))
        by_channel = pd.DataFrame(
            [{"channel": CHANNEL_LABELS[k], "count": v["count"]} for k, v in quality.by_channel.items() if v["count"]]
        )
        donut_chart(by_channel, names="channel", values="count")
        st.caption(
            f"{fmt_pct(quality.deterministic_rate)} deterministic · average confidence {quality.average_confidence:.2f}"
        )
        with st.expander("Attribution confidence breakdown"):
            st.dataframe(
                pd.DataFrame(
                    [
                        {"confidence": CONFIDENCE_LABELS[k], "donations": v["count"], "share %": v["percentage"]}
                        for k, v in quality.by_confidence.items()
                    ]
                ),
                hide_index=True,
                use_container_width=True,
            )

    render_action_hint(
        title="Action this enables",
        body="Shift budget toward the sources with the highest net revenue, and check unusual days against sends and news moments to repeat what worked.",
    )

    # --- Donors ---
    st.subheader("Top donors")
    st.dataframe(
        top_donors(current.df, cfg.org_timezone, top_n=25).drop(columns=["donor_key"]),
        hide_index=True,
        use_container_width=True,
        column_config={"total_amount": st.column_config.NumberColumn("Total", format="$%.2f")},
    )

    st.subheader("Recent donations")
    recent = recent_donations(current.df, limit=50)
    recent["date"] = recent["date"].dt.tz_convert(cfg.org_timezone).dt.strftime("%Y-%m-%d %H:%M")
    st.dataframe(
        recent,
        hide_index=True,
        use_container_width=True,
        column_config={
            "amount": st.column_config.NumberColumn("Amount", format="$%.2f"),
            "net_amount": st.column_config.NumberColumn("Net", format="$%.2f"),
        },
    )
