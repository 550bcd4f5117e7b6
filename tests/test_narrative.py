"""
Unit tests for the narrative callouts: interpolated text is escaped before it
reaches st.markdown(unsafe_allow_html=True).
"""

from unittest.mock import patch

from components.narrative import render_badge, render_chart_annotation, render_tab_intro


def _rendered(mock_st) -> str:
    return mock_st.markdown.call_args.args[0]


@patch("components.narrative.st")
def test_tab_intro_escapes_org_name(mock_st):
    render_tab_intro(question="How is <script>alert(1)</script> raising?", context="Q&A <b>")
    out = _rendered(mock_st)
    assert "<script>" not in out
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in out
    assert "Q&amp;A &lt;b&gt;" in out


@patch("components.narrative.st")
def test_tab_intro_without_context(mock_st):
    render_tab_intro(question="Who gives?")
    assert "tab-intro-context" not in _rendered(mock_st)


@patch("components.narrative.st")
def test_callout_escapes_title_only(mock_st):
    render_chart_annotation(title="<i>Note</i>", body="Trend is <b>up</b>")
    out = _rendered(mock_st)
    assert "&lt;i&gt;Note&lt;/i&gt;" in out
    assert "Trend is <b>up</b>" in out


def test_badge_escapes_label():
    assert render_badge("act_now") == '<span class="badge badge-act_now">Act Now</span>'
    assert "&lt;b&gt;" in render_badge("watch", "<b>")
