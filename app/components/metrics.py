from __future__ import annotations

import html
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


EMPTY_VALUE = "—"


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    delta: Optional[str] = None
    help: Optional[str] = None


def _missing(x: Optional[float]) -> bool:
    return x is None or (isinstance(x, float) and math.isnan(x))


def fmt_currency(x: Optional[float], decimals: int = 0) -> str:
    if _missing(x):
        return EMPTY_VALUE
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.{decimals}f}"


def fmt_count(x: Optional[float]) -> str:
    return EMPTY_VALUE if _missing(x) else f"{int(x):,}"


def fmt_pct(x: Optional[float], decimals: int = 1) -> str:
    """x is already a percentage (12.5 -> '12.5%')."""
    return EMPTY_VALUE if _missing(x) else f"{x:.{decimals}f}%"


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            delta_html = ""
            if k.delta:
                d = str(k.delta).strip()
                cls = "positive" if d.startswith("+") else "negative" if d.startswith("-") else ""
                delta_html = f'<div class="metric-delta {cls}">{html.escape(d)} vs prior period</div>'
            help_html = f'<div class="metric-help">{html.escape(k.help)}</div>' if k.help else ""

            st.markdown(
                f"""
<div class="metric-card">
  <div class="metric-label">{html.escape(k.label)}</div>
  <div class="metric-value">{html.escape(k.value)}</div>
  {delta_html}
  {help_html}
</div>
                """,
                unsafe_allow_html=True,
            )


COLORWAY = [
    THEME["accent_primary"],
    THEME["signal_red"],
    THEME["navy_800"],
    THEME["accent_secondary"],
    "#F59E0B",
    "#10B981",
    "#6B7280",
    "#9CA3AF",
]


def apply_plotly_theme(fig: go.Figure, x_title: str = "", y_title: str = "") -> go.Figure:
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(family="Inter, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif", color=THEME["text_primary"]),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        colorway=COLORWAY,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        title_font=dict(color=THEME["navy_900"], size=16),
    )
    fig.update_xaxes(title_text=x_title, gridcolor=THEME["grid"], zeroline=False, linecolor=THEME["border_color"])
    fig.update_yaxes(title_text=y_title, gridcolor=THEME["grid"], zeroline=False, linecolor=THEME["border_color"])
    return fig


def _format_y(fig: go.Figure, y_format: Optional[str]) -> None:
    if y_format == "currency":
        fig.update_yaxes(tickprefix="$", separatethousands=True)
    elif y_format == "percent":
        fig.update_yaxes(ticksuffix="%")


def line_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    title: str = "",
    y_format: Optional[str] = None,  # "percent" | "currency" | None
) -> go.Figure:
    fig = px.line(df, x=x, y=y, color=color, title=title)
    fig = apply_plotly_theme(fig, x_title="", y_title="")
    fig.update_traces(line=dict(width=2))
    _format_y(fig, y_format)
    st.plotly_chart(fig, use_container_width=True)
    return fig


def trend_chart(
    series: pd.DataFrame,
    y: str,
    title: str = "",
    trendline: Optional[Sequence[float]] = None,
    anomalies: Optional[pd.DataFrame] = None,
    rolling: Optional[Sequence[float]] = None,
    projection: Optional[pd.DataFrame] = None,
) -> go.Figure:
    """
    Daily line with optional overlays: fitted trendline, trailing average,
    anomaly markers, and a forward projection with its lower/upper band.
    """
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=series["date"], y=series[y], mode="lines", name="Daily", line=dict(color=THEME["accent_primary"], width=2))
    )
    if trendline is not None and len(trendline) == len(series):
        fig.add_trace(
            go.Scatter(x=series["date"], y=list(trendline), mode="lines", name="Trend", line=dict(color=THEME["navy_800"], dash="dash"))
        )
    if rolling is not None and len(rolling) == len(series):
        fig.add_trace(
            go.Scatter(x=series["date"], y=list(rolling), mode="lines", name="7-day average", line=dict(color=THEME["accent_secondary"], width=1))
        )
    if projection is not None and len(projection):
        ahead = projection[projection["actual"].isna()]
        if len(ahead):
            fig.add_trace(go.Scatter(x=ahead["date"], y=ahead["upper"], mode="lines", line=dict(width=0), showlegend=False, hoverinfo="skip"))
            fig.add_trace(
                go.Scatter(
                    x=ahead["date"],
                    y=ahead["lower"],
                    mode="lines",
                    fill="tonexty",
                    name="Forecast range",
                    line=dict(width=0),
                    fillcolor="rgba(120, 130, 150, 0.2)",
                )
            )
            fig.add_trace(
                go.Scatter(x=ahead["date"], y=ahead["forecast"], mode="lines", name="Forecast", line=dict(color=THEME["accent_primary"], dash="dot"))
            )
    if anomalies is not None and len(anomalies):
        flagged = anomalies[anomalies["is_anomaly"]]
        if len(flagged):
            fig.add_trace(
                go.Scatter(
                    x=flagged["date"],
                    y=flagged[y],
                    mode="markers",
                    name="Unusual day",
                    marker=dict(color=THEME["signal_red"], size=10, symbol="diamond"),
                )
            )
    fig.update_layout(title=title)
    fig = apply_plotly_theme(fig)
    _format_y(fig, "currency")
    st.plotly_chart(fig, use_container_width=True)
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    title: str = "",
    horizontal: bool = False,
    y_format: Optional[str] = None,
) -> go.Figure:
    if horizontal:
        fig = px.bar(df, x=y, y=x, orientation="h", title=title)
        fig.update_yaxes(autorange="reversed")
    else:
        fig = px.bar(df, x=x, y=y, title=title)
    fig = apply_plotly_theme(fig)
    fig.update_traces(marker_color=THEME["accent_primary"])
    if y_format == "currency":
        if horizontal:
            fig.update_xaxes(tickprefix="$", separatethousands=True)
        else:
            fig.update_yaxes(tickprefix="$", separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)
    return fig


def donut_chart(df: pd.DataFrame, names: str, values: str, title: str = "") -> go.Figure:
    fig = px.pie(df, names=names, values=values, hole=0.55, title=title)
    fig = apply_plotly_theme(fig)
    fig.update_traces(textposition="inside", textinfo="percent")
    st.plotly_chart(fig, use_container_width=True)
    return fig
