"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.styles import APP_TITLE, APP_TAGLINE, apply_theme  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from components.header import render_header  # noqa: E402
from config import configure_logging, get_config  # noqa: E402

from views import actions, ad_copy, admin, bills, contact, dashboard, demographics, landing  # noqa: E402


logger = logging.getLogger(__name__)

VIEWS = {
    "landing": landing.render,
    "contact": contact.render,
    "dashboard": dashboard.render,
    "demographics": demographics.render,
    "actions": actions.render,
    "bills": bills.render,
    "ad_copy": ad_copy.render,
    "admin": admin.render,
}


def main() -> None:
    apply_theme()
    cfg = get_config()
    configure_logging(cfg)
    state = render_sidebar(cfg)

    render_header(
        app_name=APP_TITLE,
        subtitle=state.org_name or APP_TAGLINE,
        right_pill=f"Data: {'Demo' if state.use_mock else 'Supabase'}",
        mock=state.use_mock,
    )

    # Routing only
    view = VIEWS.get(state.view)
    if view is None:
        logger.warning("Unknown view requested: %s", state.view)
        st.error(f"Unknown view: {state.view}")
        return
    view(cfg, state)


if __name__ == "__main__":
    main()
