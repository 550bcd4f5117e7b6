from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import pandas as pd


TIERS = ("act_now", "consider", "watch")
TIER_LABELS = {"act_now": "Act now", "consider": "Consider", "watch": "Watch"}

# Scores the backend may leave empty; defaults keep an unscored action out of "act_now"
DEFAULT_RISK_SCORE = 85
DEFAULT_CONFIDENCE_SCORE = 50


def _num(row: Mapping[str, Any], *keys: str, default: float = 0.0) -> float:
    for key in keys:
        value = row.get(key)
        if value is not None and pd.notna(value):
            return float(value)
    return default


def _text(row: Mapping[str, Any], *keys: str, default: str = "") -> str:
    """First non-blank string among `keys`; None and NaN count as missing."""
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return default


def _flag(row: Mapping[str, Any], key: str) -> bool:
    value = row.get(key)
    return value is not None and pd.notna(value) and bool(value)


def urgency_level(score: float) -> str:
    if score >= 70:
        return "high"
    if score >= 40:
        return "medium"
    return "low"


def action_tier(row: Mapping[str, Any]) -> str:
    decision = _num(row, "decision_score", "urgency_score")
    risk = _num(row, "risk_score", default=DEFAULT_RISK_SCORE)
    confidence = _num(row, "confidence_score", default=DEFAULT_CONFIDENCE_SCORE)

    if decision >= 65 and risk >= 50 and confidence >= 40:
        return "act_now"
    if decision >= 40 and risk >= 30:
        return "consider"
    return "watch"


def normalize_actions(df: pd.DataFrame) -> pd.DataFrame:
    """Backend rows -> the columns the actions view renders."""
    columns = [
        "id",
        "topic",
        "action_type",
        "sms_copy",
        "character_count",
        "urgency_score",
        "relevance_score",
        "decision_score",
        "target_audience",
        "estimated_impact",
        "is_used",
        "is_dismissed",
        "created_at",
        "tier",
        "urgency_level",
    ]
    if df.empty:
        return pd.DataFrame(columns=columns)

    rows = []
    for r in df.to_dict("records"):
        copy = _text(r, "suggested_copy", "sms_copy")
        urgency = _num(r, "urgency_score", "opportunity_score")
        decision = _num(r, "decision_score", "urgency_score")
        status = _text(r, "status")
        rows.append(
            {
                "id": r.get("id"),
                "topic": _text(r, "topic", "entity_name", default="Unknown"),
                "action_type": _text(r, "action_type", default="other"),
                "sms_copy": copy,
                "character_count": int(_num(r, "character_count", default=len(copy))),
                "urgency_score": urgency,
                "relevance_score": _num(r, "fit_score", "topic_relevance", "org_relevance_score"),
                "decision_score": decision,
                "target_audience": _text(r, "audience_segment", default="Active supporters"),
                "estimated_impact": _text(r, "estimated_impact", default=f"{urgency:.0f}% urgency"),
                "is_used": _flag(r, "is_used") or status == "used",
                "is_dismissed": _flag(r, "is_dismissed") or status == "dismissed",
                "created_at": r.get("created_at"),
                "tier": action_tier(r),
                "urgency_level": urgency_level(decision),
            }
        )
    return pd.DataFrame(rows, columns=columns)


@dataclass(frozen=True)
class ActionStats:
    total: int = 0
    pending: int = 0
    used: int = 0
    dismissed: int = 0
    actionable_percent: int = 0
    avg_urgency: int = 0
    avg_relevance: int = 0
    high_urgency_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_tier: dict[str, int] = field(default_factory=lambda: dict.fromkeys(TIERS, 0))


def action_stats(actions: pd.DataFrame) -> ActionStats:
    """Expects normalize_actions() output."""
    total = len(actions)
    if total == 0:
        return ActionStats()

    pending = actions[~actions["is_used"] & ~actions["is_dismissed"]]
    by_tier = dict.fromkeys(TIERS, 0)
    for tier, n in pending["tier"].value_counts().items():
        by_tier[tier] = int(n)

    return ActionStats(
        total=total,
        pending=len(pending),
        used=int(actions["is_used"].sum()),
        dismissed=int(actions["is_dismissed"].sum()),
        actionable_percent=int(round((actions["decision_score"] >= 60).sum() / total * 100)),
        avg_urgency=int(round(actions["decision_score"].mean())),
        avg_relevance=int(round(actions["relevance_score"].mean())),
        high_urgency_count=int((actions["decision_score"] >= 70).sum()),
        by_type={k: int(v) for k, v in actions["action_type"].value_counts().items()},
        by_tier=by_tier,
    )
