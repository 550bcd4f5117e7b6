from __future__ import annotations

import html

import streamlit as st


def render_tab_intro(question: str, context: str | None = None) -> None:
    """The question a page answers, plus an optional line on how to read it. Both are plain text."""
    question = html.escape(question)
    context = html.escape(context) if context else None
    st.markdown(
        f"""
<div class="tab-intro">
  <div class="tab-intro-question">{question}</div>
  {f'<div class="tab-intro-context">{context}</div>' if context else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def _callout(kind: str, title: str, body: str) -> None:
    # title is plain text; body is trusted markup built by the views
    title = html.escape(title)
    st.markdown(
        f"""
<div class="callout callout-{kind}">
  <div class="callout-title">{title}</div>
  <div class="callout-body">{body}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def render_chart_annotation(title: str, body: str) -> None:
    _callout("annot", title, body)


def render_action_hint(title: str, body: str) -> None:
    _callout("action", title, body)


def render_badge(value: str, label: str | None = None) -> str:
    """HTML for a tier / urgency pill; callers embed it in their own markdown."""
    text = html.escape(label or value.replace("_", " ").title())
    return f'<span class="badge badge-{html.escape(value)}">{text}</span>'
