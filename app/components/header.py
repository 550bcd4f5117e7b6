from __future__ import annotations

import html
from typing import Optional

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: Optional[str] = None, mock: bool = False) -> None:
    pill = ""
    if right_pill:
        cls = "pill mock" if mock else "pill"
        pill = f'<div class="{cls}"><span class="dot"></span>{html.escape(right_pill)}</div>'

    st.markdown(
        f"""
<div class="portal-header">
  <div>
    <div class="portal-title">{html.escape(app_name)}</div>
    <div class="portal-subtitle">{html.escape(subtitle)}</div>
  </div>
  {pill}
</div>
        """,
        unsafe_allow_html=True,
    )
