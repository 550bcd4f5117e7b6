from __future__ import annotations

import html

import streamlit as st

from analytics.actions import TIER_LABELS, TIERS, action_stats
from analytics.date_range import day_key
from components.feedback import show_result, show_write
from components.metrics import Kpi, fmt_count, fmt_pct, render_kpi_row
from components.narrative import render_badge, render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import dismiss_action, get_suggested_actions, mark_action_used


SMS_LIMIT = 160


def _render_action(cfg: AppConfig, state: SidebarState, action: dict) -> None:
    with st.container(border=True):
        head, badges = st.columns([3, 1])
        with head:
            st.markdown(f"**{html.escape(str(action['topic']))}**")
            suggested = day_key(action["created_at"], cfg.org_timezone)
            meta = [action["action_type"], action["target_audience"], action["estimated_impact"]]
            if suggested:
                meta.append(f"suggested {suggested}")
            st.caption(" · ".join(meta))
        with badges:
            st.markdown(
                render_badge(action["tier"], TIER_LABELS.get(action["tier"]))
                + " "
                + render_badge(action["urgency_level"], f"{action['urgency_level']} urgency"),
                unsafe_allow_html=True,
            )

        st.markdown(f'<div class="sms-preview">{html.escape(action["sms_copy"])}</div>', unsafe_allow_html=True)
        over = action["character_count"] > SMS_LIMIT
        st.caption(
            f"{action['character_count']} characters" + (f" (over the {SMS_LIMIT}-character SMS limit)" if over else "")
        )

        with st.expander("Copy text"):
            st.code(action["sms_copy"], language=None)

        b1, b2, _ = st.columns([1, 1, 4])
        with b1:
            if st.button("Mark used", key=f"use_{action['id']}", disabled=action["is_used"]):
                if show_write(mark_action_used(cfg, state.use_mock, action["id"])):
                    st.rerun()
        with b2:
            if st.button("Dismiss", key=f"dismiss_{action['id']}", type="secondary"):
                if show_write(dismiss_action(cfg, state.use_mock, action["id"])):
                    st.rerun()


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Suggested actions")
    render_tab_intro(
        question="What should we send right now?",
        context="Ready-to-send copy generated from news and legislative moments in the last 90 days, ranked by urgency and fit.",
    )

    result = get_suggested_actions(cfg, state.use_mock, state.org_id)
    if not show_result(result):
        return
    actions = result.df
    stats = action_stats(actions)

    render_kpi_row(
        [
            Kpi("Pending", fmt_count(stats.pending)),
            Kpi("High urgency", fmt_count(stats.high_urgency_count)),
            Kpi("Actionable", fmt_pct(stats.actionable_percent, 0), help="Decision score 60 or higher"),
            Kpi("Avg urgency", fmt_count(stats.avg_urgency)),
            Kpi("Used", fmt_count(stats.used)),
        ]
    )

    if stats.total == 0:
        st.info("No suggested actions yet. New suggestions appear as news and bills are scored.")
        return

    show_used = st.toggle("Show used actions", value=False)
    visible = actions if show_used else actions[~actions["is_used"]]

    tabs = st.tabs([f"{TIER_LABELS[t]} ({stats.by_tier[t]})" for t in TIERS])
    for tab, tier in zip(tabs, TIERS):
        with tab:
            subset = visible[visible["tier"] == tier].sort_values("decision_score", ascending=False)
            if subset.empty:
                st.caption("Nothing here.")
            for action in subset.to_dict("records"):
                _render_action(cfg, state, action)
