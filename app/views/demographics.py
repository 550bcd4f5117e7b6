from __future__ import annotations

import streamlit as st

from analytics.aggregation import donations_only
from analytics.date_range import local_today
from analytics.export import demographics_export, export_filename, to_csv_bytes
from components.feedback import show_result
from components.metrics import Kpi, bar_chart, donut_chart, fmt_count, fmt_currency, render_kpi_row
from components.narrative import render_action_hint, render_chart_annotation, render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import get_demographics


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Donor demographics")
    render_tab_intro(
        question="Who gives, where do they live, and how did they find us?",
        context=f"{state.date_range.label()}. Refunds are excluded; locations and occupations show the top 10 by revenue.",
    )

    result = get_demographics(cfg, state.use_mock, state.org_id, state.date_range)
    if not show_result(result):
        return
    summary = result.summary
    st.caption(
        f"Data source: **{result.source}**"
        + (" · aggregated server-side" if result.server_side else "")
    )

    render_kpi_row(
        [
            Kpi("Unique donors", fmt_count(summary.total_donors)),
            Kpi("Total revenue", fmt_currency(summary.total_revenue)),
            Kpi("Avg donation", fmt_currency(summary.average_donation, 2)),
            Kpi("Donations", fmt_count(summary.transaction_count)),
        ]
    )

    if summary.transaction_count == 0:
        st.info("No donations in this date range.")
        return

    st.divider()

    st.subheader("Revenue by state")
    bar_chart(summary.by_state, x="state", y="revenue", y_format="currency")

    c1, c2 = st.columns(2)
    with c1:
        st.subheader("Occupations")
        if summary.by_occupation.empty:
            st.info("No occupation data provided by donors.")
        else:
            donut_chart(summary.by_occupation, names="occupation", values="revenue")
    with c2:
        st.subheader("Acquisition channel")
        donut_chart(summary.by_channel, names="channel", values="count")
        render_chart_annotation(
            title="How channels are assigned",
            body="Campaign: the gift carried a refcode. Express: saved-payment one-click gift. Direct: neither.",
        )

    t1, t2, t3 = st.tabs(["Top locations", "Top occupations", "Top employers"])
    money = {"revenue": st.column_config.NumberColumn("Revenue", format="$%.2f")}
    with t1:
        st.dataframe(summary.by_city, hide_index=True, use_container_width=True, column_config=money)
    with t2:
        st.dataframe(summary.by_occupation, hide_index=True, use_container_width=True, column_config=money)
    with t3:
        st.dataframe(summary.by_employer, hide_index=True, use_container_width=True, column_config=money)

    render_action_hint(
        title="Action this enables",
        body="Use the top states and occupations to build lookalike audiences and to tailor asks for the groups already giving the most.",
    )

    export = demographics_export(donations_only(result.rows))
    st.download_button(
        "Download donor CSV",
        data=to_csv_bytes(export),
        file_name=export_filename("donor-demographics", local_today(cfg.org_timezone)),
        mime="text/csv",
        disabled=export.empty,
    )
