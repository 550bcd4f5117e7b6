from __future__ import annotations

import streamlit as st

from components.feedback import show_result, show_write
from components.narrative import render_action_hint, render_tab_intro
from components.sidebar import SidebarState
from config import AppConfig
from data.functions_client import DEFAULT_SEGMENTS, AdCopyRequest, AudienceSegment
from data.service import generate_ad_copy, get_transcripts


PARTS = (("primary_texts", "Primary text"), ("headlines", "Headlines"), ("descriptions", "Descriptions"))


def _transcript_label(row: dict) -> str:
    issue = next((v for v in (row.get("issue_primary"), row.get("topic_primary")) if isinstance(v, str) and v), "Untitled")
    tone = row.get("tone_primary")
    created = row.get("created_at")
    created = created[:10] if isinstance(created, str) else ""
    return f"{issue} ({tone}, {created})" if isinstance(tone, str) else f"{issue} ({created})"


def _default_refcode(row: dict, transcript_id: str) -> str:
    ad_id = row.get("ad_id")
    return f"meta_{ad_id}" if isinstance(ad_id, str) and ad_id.strip() else f"meta_{transcript_id}"


def _segments(names: list[str], custom_name: str, custom_description: str) -> tuple[AudienceSegment, ...]:
    chosen = [s for s in DEFAULT_SEGMENTS if s.name in names]
    if custom_name.strip():
        slug = "_".join(custom_name.lower().split())
        chosen.append(AudienceSegment(slug, custom_name.strip(), custom_description.strip()))
    return tuple(chosen)


def render(cfg: AppConfig, state: SidebarState) -> None:
    st.title("Ad copy studio")
    render_tab_intro(
        question="What should our next ad say?",
        context="Pick an analyzed video and the audiences to reach; the generator drafts Meta primary text, headlines and descriptions for each audience.",
    )

    transcripts = get_transcripts(cfg, state.use_mock, state.org_id)
    if not show_result(transcripts):
        return
    if transcripts.df.empty:
        st.info("No analyzed videos yet. Copy is generated from a transcribed ad video.")
        return

    rows = {str(r["id"]): r for r in transcripts.df.to_dict("records")}

    with st.form("ad_copy_form"):
        transcript_id = st.selectbox("Video transcript", list(rows), format_func=lambda i: _transcript_label(rows[i]))
        names = st.multiselect(
            "Audience segments",
            [s.name for s in DEFAULT_SEGMENTS],
            default=[DEFAULT_SEGMENTS[0].name],
        )
        c1, c2 = st.columns(2)
        custom_name = c1.text_input("Custom segment (optional)")
        custom_description = c2.text_input("Custom segment description")
        c3, c4 = st.columns(2)
        form_name = c3.text_input("ActBlue form name *")
        refcode = c4.text_input("Refcode *", value=_default_refcode(rows[transcript_id], transcript_id))
        c5, c6 = st.columns(2)
        amount = c5.number_input("Amount preset ($, 0 for none)", min_value=0, value=0, step=5)
        recurring = c6.checkbox("Default to recurring")
        submitted = st.form_submit_button("Generate copy")

    if not submitted:
        return

    segments = _segments(names, custom_name, custom_description)
    problems = []
    if not segments:
        problems.append("Pick at least one audience segment")
    if not form_name.strip():
        problems.append("ActBlue form name is required")
    if not refcode.strip():
        problems.append("Refcode is required")
    if problems:
        for p in problems:
            st.error(p)
        return

    request = AdCopyRequest(
        organization_id=state.org_id or "",
        transcript_id=transcript_id,
        audience_segments=segments,
        actblue_form_name=form_name.strip(),
        refcode=refcode.strip(),
        amount_preset=int(amount) or None,
        recurring_default=recurring,
    )
    with st.spinner("Writing..."):
        result = generate_ad_copy(cfg, state.use_mock, request)
    if not show_write(result):
        return

    copy = result.payload
    if copy.tracking_url:
        st.caption(f"Tracking URL: `{copy.tracking_url}`")
    tabs = st.tabs(list(copy.segments))
    for tab, (segment, parts) in zip(tabs, copy.segments.items()):
        with tab:
            for key, title in PARTS:
                st.subheader(title)
                for i, item in enumerate(parts[key], start=1):
                    st.code(item, language=None)
                    st.caption(f"Variation {i} · {len(item)} characters")

    render_action_hint(
        title="Next step",
        body="Launch two or three variations against each other and keep the one with the lowest cost per dollar raised.",
    )
