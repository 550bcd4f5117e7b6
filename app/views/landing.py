from __future__ import annotations

import streamlit as st

from components.sidebar import SidebarState
from config import AppConfig


SERVICES = [
    (
        "Digital fundraising",
        "Email, SMS and paid acquisition programs built around small-dollar donors, with every refcode tracked back to the dollars it raised.",
    ),
    (
        "Paid media",
        "Meta and programmatic campaigns with creative testing, audience building and spend pacing tied to donation data.",
    ),
    (
        "Rapid response",
        "News and legislation monitoring that turns breaking moments into ready-to-send SMS and email copy within the hour.",
    ),
    (
        "Analytics & attribution",
        "A client portal with donor demographics, channel attribution and trend alerts, so decisions rest on numbers rather than hunches.",
    ),
]

STEPS = [
    ("1) Listen", "We start with your goals, your list and your budget, then audit what is already working."),
    ("2) Build", "Programs launch across channels with tracking in place from the first send."),
    ("3) Measure & adapt", "Weekly reporting in the portal shows what raised money and where to push next."),
]


def _card(cls: str, title: str, body: str) -> None:
    st.markdown(
        f"""
<div class="{cls}">
  <div class="{cls}-title">{title}</div>
  <div class="{cls}-body">{body}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.markdown(
        """
<div class="hero">
  <div class="hero-title">Progressive campaigns, powered by data</div>
  <p class="hero-narrative">
    Molitico helps campaigns, PACs and advocacy organizations raise more, reach further and respond faster.
    Strategy and creative on the front end; attribution and analytics behind every dollar.
  </p>
</div>
        """,
        unsafe_allow_html=True,
    )

    c1, c2 = st.columns([1, 4])
    with c1:
        if st.button("Talk to our team", use_container_width=True):
            st.session_state["view"] = "contact"
            st.rerun()
    with c2:
        if st.button("Open the client portal"):
            st.session_state["view"] = "dashboard"
            st.rerun()

    st.markdown('<div class="section-title">What we do</div>', unsafe_allow_html=True)
    for col, (title, body) in zip(st.columns(len(SERVICES)), SERVICES):
        with col:
            _card("value-card", title, body)

    st.markdown('<div class="section-title">How we work</div>', unsafe_allow_html=True)
    for col, (title, body) in zip(st.columns(len(STEPS)), STEPS):
        with col:
            _card("how-step", title, body)

    st.markdown('<div class="section-title">Portal status</div>', unsafe_allow_html=True)
    s1, s2 = st.columns([1, 3])
    with s1:
        st.markdown("**Data mode**")
        st.write("Demo data" if state.use_mock else "Supabase (live)")
    with s2:
        if cfg.is_configured:
            st.write("Backend configured. Turn off demo data in the sidebar settings to read live results.")
        else:
            st.info("Live data needs `SUPABASE_URL` and `SUPABASE_ANON_KEY`. Demo data always works.")
