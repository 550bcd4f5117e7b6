from __future__ import annotations

import pandas as pd
import streamlit as st

from analytics.aggregation import revenue_by_organization
from analytics.date_range import parse_utc
from components.feedback import show_result, show_write
from components.metrics import Kpi, fmt_count, fmt_currency, render_kpi_row
from components.narrative import render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import get_contact_submissions, get_organization_revenue, get_organizations, update_submission_status
from data.validation import SUBMISSION_STATUSES


SUBMISSION_COLUMNS = ["created_at", "name", "email", "organization_type", "campaign", "status", "priority"]


def _render_organizations(cfg: AppConfig, state: SidebarState) -> None:
    orgs = get_organizations(cfg, state.use_mock)
    if not show_result(orgs):
        return
    if orgs.df.empty:
        st.info("No client organizations yet.")
        return

    revenue = get_organization_revenue(cfg, state.use_mock, orgs.df["id"].astype(str).tolist(), state.date_range)
    show_result(revenue)
    totals = revenue_by_organization(revenue.df)

    overview = orgs.df[["id", "name", "is_active"]].astype({"id": str}).merge(
        totals.astype({"organization_id": str}), how="left", left_on="id", right_on="organization_id"
    )
    overview[["donations", "donors"]] = overview[["donations", "donors"]].fillna(0).astype(int)
    overview["revenue"] = overview["revenue"].fillna(0.0)

    render_kpi_row(
        [
            Kpi("Organizations", fmt_count(len(overview))),
            Kpi("Active", fmt_count(int(overview["is_active"].fillna(False).astype(bool).sum()))),
            Kpi("Net revenue (all clients)", fmt_currency(float(overview["revenue"].sum()))),
        ]
    )
    st.dataframe(
        overview[["name", "is_active", "donations", "donors", "revenue"]].sort_values("revenue", ascending=False),
        hide_index=True,
        use_container_width=True,
        column_config={"revenue": st.column_config.NumberColumn("Net revenue", format="$%.2f")},
    )


def _render_submissions(cfg: AppConfig, state: SidebarState) -> None:
    status = st.selectbox("Status", ["all"] + list(SUBMISSION_STATUSES), format_func=lambda s: s.replace("_", " ").title())
    result = get_contact_submissions(cfg, state.use_mock, None if status == "all" else status)
    if not show_result(result):
        return
    subs = result.df
    if subs.empty:
        st.info("No submissions.")
        return

    counts = subs["status"].value_counts()
    render_kpi_row([Kpi(s.replace("_", " ").title(), fmt_count(int(counts.get(s, 0)))) for s in SUBMISSION_STATUSES])

    table = subs[[c for c in SUBMISSION_COLUMNS if c in subs.columns]].copy()
    table["created_at"] = parse_utc(table["created_at"]).dt.tz_convert(cfg.org_timezone).dt.strftime("%Y-%m-%d %H:%M")
    st.dataframe(table, hide_index=True, use_container_width=True)

    st.markdown("**Update a submission**")
    labels = {str(r["id"]): f"{r['name']} <{r['email']}> ({r['status']})" for r in subs.to_dict("records")}
    c1, c2, c3 = st.columns([3, 2, 1])
    with c1:
        sub_id = st.selectbox("Submission", list(labels), format_func=labels.get)
    with c2:
        new_status = st.selectbox("New status", SUBMISSION_STATUSES, format_func=lambda s: s.replace("_", " ").title())
    with c3:
        st.write("")
        if st.button("Update", use_container_width=True):
            if show_write(update_submission_status(cfg, state.use_mock, sub_id, new_status)):
                st.rerun()

    with st.expander("Message"):
        row = subs[subs["id"].astype(str) == sub_id]
        st.write(row["message"].iloc[0] if len(row) else "")


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Admin console")
    render_tab_intro(
        question="How are our clients doing, and who is waiting on a reply?",
        context=f"Revenue covers {state.date_range.label()}.",
    )
    if not state.use_mock and not cfg.supabase_service_key:
        st.caption("SUPABASE_SERVICE_ROLE_KEY is not set; admin reads use the anon key and may be limited by row-level security.")

    t1, t2 = st.tabs(["Organizations", "Contact submissions"])
    with t1:
        _render_organizations(cfg, state)
    with t2:
        _render_submissions(cfg, state)
