from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from analytics.date_range import PRESETS, DateRange, default_preset, local_today, preset_range
from config import AppConfig
from data.service import get_organizations


@dataclass(frozen=True)
class SidebarState:
    view: str
    use_mock: bool
    org_id: Optional[str]
    org_name: Optional[str]
    date_range: DateRange


NAV_GROUPS = [
    (
        "Molitico",
        [
            ("🏠 Home", "landing"),
            ("✉️ Contact", "contact"),
        ],
    ),
    (
        "Client portal",
        [
            ("📊 Donations", "dashboard"),
            ("🧭 Demographics", "demographics"),
            ("⚡ Suggested actions", "actions"),
            ("🏛️ Bill tracker", "bills"),
            ("✍️ Ad copy studio", "ad_copy"),
        ],
    ),
    (
        "Admin",
        [
            ("🛠️ Admin console", "admin"),
        ],
    ),
]

PORTAL_VIEWS = {"dashboard", "demographics", "actions", "bills", "ad_copy", "admin"}

CUSTOM_RANGE = "custom"


def _render_nav() -> str:
    current = st.session_state.get("view", "landing")
    for group, items in NAV_GROUPS:
        st.markdown(f'<div class="nav-group">{group}</div>', unsafe_allow_html=True)
        for label, view in items:
            clicked = st.button(
                label,
                key=f"nav_{view}",
                use_container_width=True,
                type="primary" if view == current else "secondary",
            )
            if clicked and view != current:
                st.session_state["view"] = view
                st.rerun()
    return current


def _render_org_selector(cfg: AppConfig, use_mock: bool) -> tuple[Optional[str], Optional[str]]:
    orgs = get_organizations(cfg, use_mock)
    if orgs.warning:
        st.caption(orgs.warning)
    if orgs.df.empty:
        return cfg.organization_id, None

    ids = orgs.df["id"].astype(str).tolist()
    names = dict(zip(ids, orgs.df["name"].astype(str)))
    selected = st.session_state.get("org_id") or cfg.organization_id
    idx = ids.index(selected) if selected in ids else 0
    org_id = st.selectbox("Organization", ids, index=idx, format_func=lambda i: names.get(i, i))
    st.session_state["org_id"] = org_id
    return org_id, names.get(org_id)


def _render_date_range(cfg: AppConfig) -> DateRange:
    options = list(PRESETS) + [CUSTOM_RANGE]
    labels = {**PRESETS, CUSTOM_RANGE: "Custom range"}
    default = st.session_state.get("date_preset", default_preset(cfg.default_range_days))
    preset = st.selectbox(
        "Date range",
        options,
        index=options.index(default) if default in options else 0,
        format_func=lambda p: labels[p],
    )
    st.session_state["date_preset"] = preset

    today = local_today(cfg.org_timezone)
    if preset != CUSTOM_RANGE:
        return preset_range(preset, today)

    fallback = preset_range(default_preset(cfg.default_range_days), today)
    picked = st.date_input("From / to", value=(fallback.start, fallback.end), max_value=today)
    if isinstance(picked, (list, tuple)) and len(picked) == 2:
        start, end = picked
        if start <= end:
            return DateRange(start=start, end=end)
    st.caption("Pick both a start and an end date.")
    return fallback


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🗳️ Molitico")
        st.caption("Client analytics portal")

        view = _render_nav()

        use_mock = st.session_state.get("use_mock", cfg.default_use_mock)
        org_id, org_name = cfg.organization_id, None
        date_range = preset_range(default_preset(cfg.default_range_days), local_today(cfg.org_timezone))

        if view in PORTAL_VIEWS:
            st.divider()
            org_id, org_name = _render_org_selector(cfg, use_mock)
            date_range = _render_date_range(cfg)
            st.caption(date_range.label())

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use demo data",
                value=use_mock,
                help="When off, the portal reads from Supabase. Failures fall back to demo data when enabled.",
                disabled=not cfg.is_configured,
            )
            st.session_state["use_mock"] = use_mock
            if not cfg.is_configured:
                st.caption("Set SUPABASE_URL and SUPABASE_ANON_KEY to use live data.")
            st.caption(f"Timezone: {cfg.org_timezone}")

    return SidebarState(view=view, use_mock=use_mock, org_id=org_id, org_name=org_name, date_range=date_range)
