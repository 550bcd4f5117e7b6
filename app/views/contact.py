from __future__ import annotations

import streamlit as st

from components.feedback import show_write
from components.narrative import render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.service import submit_contact
from data.validation import CAMPAIGN_TYPES


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Let's win together")
    render_tab_intro(
        question="Ready to maximize your campaign's impact?",
        context="Send us a message and we'll get back to you within 24 hours to talk strategy.",
    )

    left, right = st.columns([3, 2])
    with left:
        with st.form("contact_form", clear_on_submit=False):
            name = st.text_input("Name *", max_chars=100)
            email = st.text_input("Email *", max_chars=255)
            organization = st.text_input("Organization", max_chars=200)
            campaign_type = st.selectbox("Campaign type", [""] + list(CAMPAIGN_TYPES), format_func=lambda v: v or "Select one")
            message = st.text_area("Message *", max_chars=2000, height=160)
            submitted = st.form_submit_button("Send message")

        if submitted:
            result = submit_contact(
                cfg,
                state.use_mock,
                {
                    "name": name,
                    "email": email,
                    "organization": organization,
                    "campaign_type": campaign_type,
                    "message": message,
                },
            )
            if show_write(result):
                st.success(result.message)

    with right:
        st.markdown("**Email**  \nhello@molitico.com")
        st.markdown("**Office**  \nWashington, DC")
        st.markdown("**Strategy calls**  \nBook a 30-minute call and we'll walk through your program, your list and your goals.")
