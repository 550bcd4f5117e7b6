from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "Molitico Client Portal"
APP_TAGLINE = "Digital fundraising, attribution and rapid response for progressive campaigns"


def _css() -> str:
    # THEME tokens (config.py) -> CSS variables
    css = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700;800&display=swap');

:root{
  --accent: __ACCENT__;
  --accent-hover: __ACCENT_HOVER__;
  --signal-red: __SIGNAL_RED__;
  --navy-900: __NAVY_900__;
  --navy-800: __NAVY_800__;
  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;
  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --radius: __RADIUS_PX__px;
}

#MainMenu { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  font-family: "Inter", system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif !important;
  color: var(--text-primary) !important;
}

[data-testid="stSidebar"]{
  background: var(--navy-900) !important;
}
[data-testid="stSidebar"] *{
  color: #E5E7EB !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label{
  border-radius: 8px !important;
  padding: 6px 10px !important;
  margin: 0 0 4px 0 !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label:has(input:checked){
  background: var(--navy-800) !important;
  border-left: 3px solid var(--signal-red) !important;
}
.nav-group{
  font-size: 11px;
  font-weight: 700;
  letter-spacing: 0.08em;
  text-transform: uppercase;
  opacity: 0.7;
  margin: 14px 0 6px 0;
}

.block-container{
  padding-top: 0.75rem !important;
  padding-bottom: 2rem !important;
}

.portal-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  gap: 12px;
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 10px 14px;
  margin: 0 0 14px 0;
}
.portal-title{ font-size: 20px; font-weight: 800; color: var(--navy-900); line-height: 1.1; }
.portal-subtitle{ font-size: 14px; font-weight: 500; color: var(--text-secondary); }
.pill{
  display:inline-flex;
  align-items:center;
  gap:6px;
  background: white;
  border: 1px solid var(--card-border);
  border-radius: 999px;
  padding: 6px 10px;
  font-size: 13px;
  font-weight: 600;
  color: var(--navy-800);
}
.pill .dot{ width:8px; height:8px; border-radius:999px; background: var(--accent); }
.pill.mock .dot{ background: __WARNING__; }

.hero{
  background: linear-gradient(135deg, var(--navy-900), var(--accent));
  border-radius: var(--radius);
  padding: 36px 28px;
  margin-bottom: 18px;
}
.hero-title{ font-size: 40px; font-weight: 800; color: white; line-height: 1.05; margin: 0 0 10px 0; }
.hero-narrative{ font-size: 18px; color: rgba(255,255,255,0.88); line-height: 1.5; margin: 0; }
.section-title{ font-size: 24px; font-weight: 700; color: var(--navy-900); margin: 18px 0 10px 0; }
.value-card, .how-step{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 14px 14px;
  height: 100%;
}
.value-card-title, .how-step-title{ font-size: 16px; font-weight: 700; color: var(--navy-900); margin-bottom: 6px; }
.value-card-body, .how-step-body{ font-size: 14px; color: var(--text-secondary); line-height: 1.5; }

.metric-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
}
.metric-label{ font-size: 13px; font-weight: 600; color: var(--text-secondary); margin-bottom: 6px; }
.metric-value{ font-size: 26px; font-weight: 800; color: var(--text-primary); line-height: 1.2; }
.metric-help{ font-size: 12px; color: var(--text-secondary); margin-top: 4px; }
.metric-delta{ margin-top: 6px; font-size: 13px; font-weight: 600; }
.metric-delta.positive{ color: __SUCCESS__; }
.metric-delta.negative{ color: __DANGER__; }

div.stButton > button, div.stDownloadButton > button, div.stFormSubmitButton > button{
  border-radius: 8px !important;
  font-weight: 600 !important;
  background: var(--accent) !important;
  color: white !important;
  border: 1px solid transparent !important;
}
div.stButton > button:hover, div.stDownloadButton > button:hover{
  background: var(--accent-hover) !important;
}

button[data-baseweb="tab"][aria-selected="true"]{
  color: var(--accent) !important;
}

div[data-testid="stPlotlyChart"]{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 8px 10px;
}

.tab-intro{
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 14px 14px;
  margin: 0 0 14px 0;
}
.tab-intro-question{ font-size: 18px; font-weight: 700; color: var(--navy-900); margin-bottom: 6px; }
.tab-intro-context{ font-size: 14px; color: var(--text-secondary); line-height: 1.5; }

.callout{
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 12px 14px;
  margin: 10px 0;
  background: #FFFFFF;
}
.callout-title{ font-size: 14px; font-weight: 700; color: var(--navy-900); margin-bottom: 6px; }
.callout-body{ font-size: 14px; color: var(--text-secondary); line-height: 1.5; }
.callout-annot{ border-left: 4px solid var(--navy-800); }
.callout-action{ border-left: 4px solid var(--signal-red); }

.badge{
  display:inline-block;
  border-radius: 999px;
  padding: 2px 10px;
  font-size: 12px;
  font-weight: 700;
}
.badge-act_now, .badge-high{ background: #FEE4E2; color: __DANGER__; }
.badge-consider, .badge-medium{ background: #FEF0C7; color: #B54708; }
.badge-watch, .badge-low{ background: #F2F4F7; color: #344054; }

.sms-preview{
  background: #F2F4F7;
  border-radius: 14px;
  padding: 10px 12px;
  font-size: 14px;
  white-space: pre-wrap;
}
.bill-text{
  max-height: 480px;
  overflow-y: auto;
  background: white;
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 14px;
  font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
  font-size: 13px;
  white-space: pre-wrap;
}
.subtle{ color: var(--text-secondary); font-size: 14px; }
</style>
"""
    tokens = {
        "__ACCENT__": THEME["accent_primary"],
        "__ACCENT_HOVER__": THEME["accent_secondary"],
        "__SIGNAL_RED__": THEME["signal_red"],
        "__NAVY_900__": THEME["navy_900"],
        "__NAVY_800__": THEME["navy_800"],
        "__BG_PRIMARY__": THEME["bg_primary"],
        "__BG_SECONDARY__": THEME["bg_secondary"],
        "__CARD_BG__": THEME["bg_card"],
        "__CARD_BORDER__": THEME["border_color"],
        "__TEXT_PRIMARY__": THEME["text_primary"],
        "__TEXT_SECONDARY__": THEME["text_secondary"],
        "__SHADOW__": THEME["shadow"],
        "__RADIUS_PX__": str(int(THEME["radius_px"])),
        "__SUCCESS__": THEME["success"],
        "__WARNING__": THEME["warning"],
        "__DANGER__": THEME["danger"],
    }
    for k, v in tokens.items():
        css = css.replace(k, str(v))
    return css


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="🗳️",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(_css(), unsafe_allow_html=True)
