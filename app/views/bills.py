from __future__ import annotations

import html

import streamlit as st

from components.feedback import show_result
from components.narrative import render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import get_bill_detail, get_bill_text, get_bills


def _render_detail(cfg: AppConfig, state: SidebarState, bill_number: str) -> None:
    detail = get_bill_detail(cfg, state.use_mock, bill_number)
    if not show_result(detail):
        return
    if detail.value is None:
        st.info(f"No bill found for {bill_number}.")
        return

    bill = detail.value
    st.subheader(f"{bill_number}: {bill.text('short_title') or bill.text('title', 'Untitled')}")
    c1, c2, c3 = st.columns(3)
    c1.markdown(
        f"**Sponsor**  \n{bill.text('sponsor_name', '—')} "
        f"({bill.text('sponsor_party', '?')}-{bill.text('sponsor_state', '?')})"
    )
    c2.markdown(f"**Status**  \n{bill.text('current_status', '—')}")
    c3.markdown(f"**Introduced**  \n{bill.text('introduced_date', '—')}")

    st.markdown("**Status history**")
    if bill.actions.empty:
        st.caption("No recorded actions.")
    else:
        st.dataframe(bill.actions.drop(columns=["id", "bill_id"], errors="ignore"), hide_index=True, use_container_width=True)

    key = f"bill_text_{bill_number}"
    if st.button("Load full text", key=f"load_{key}"):
        text = get_bill_text(cfg, state.use_mock, bill.congress, bill.text("bill_type"), bill_number)
        if show_result(text):
            st.session_state[key] = text.value.text
    if key in st.session_state:
        st.markdown(f'<div class="bill-text">{html.escape(st.session_state[key])}</div>', unsafe_allow_html=True)


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Bill tracker")
    render_tab_intro(
        question="Which bills matter to our supporters, and where do they stand?",
        context="Sorted by latest action. Pick a bill to see its history and read the full text.",
    )

    result = get_bills(cfg, state.use_mock)
    if not show_result(result):
        return
    bills = result.df
    if bills.empty:
        st.info("No bills tracked yet.")
        return

    query = st.text_input("Search", placeholder="Bill number, title or sponsor")
    shown = bills
    if query:
        q = query.strip().lower()
        hay = (
            bills["bill_number"].astype(str) + " " + bills["title"].fillna("").astype(str) + " " + bills["sponsor_name"].fillna("").astype(str)
        ).str.lower()
        shown = bills[hay.str.contains(q, regex=False)]

    st.dataframe(
        shown[["bill_number", "title", "sponsor_name", "current_status", "latest_action_date", "relevance_score"]],
        hide_index=True,
        use_container_width=True,
    )

    if shown.empty:
        st.caption("No bills match that search.")
        return

    bill_number = st.selectbox("Bill", shown["bill_number"].tolist())
    st.divider()
    _render_detail(cfg, state, bill_number)
