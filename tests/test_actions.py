"""
Unit tests for suggested action scoring.
"""

import pandas as pd
import pytest

from analytics.actions import action_stats, action_tier, normalize_actions, urgency_level


@pytest.mark.parametrize("score,level", [(95, "high"), (70, "high"), (69, "medium"), (40, "medium"), (39.9, "low"), (0, "low")])
def test_urgency_level(score, level):
    assert urgency_level(score) == level


@pytest.mark.parametrize(
    "row,tier",
    [
        ({"decision_score": 70}, "act_now"),
        ({"decision_score": 70, "risk_score": None, "confidence_score": float("nan")}, "act_now"),
        ({"urgency_score": 66}, "act_now"),
        ({"decision_score": 70, "risk_score": 40}, "consider"),
        ({"decision_score": 70, "confidence_score": 30}, "consider"),
        ({"decision_score": 50}, "consider"),
        ({"decision_score": 45, "risk_score": 20}, "watch"),
        ({"decision_score": 30}, "watch"),
        ({}, "watch"),
    ],
)
def test_action_tier(row, tier):
    assert action_tier(row) == tier


@pytest.fixture
def raw_actions():
    return pd.DataFrame([
        {"id": "a1", "topic": "Vote", "action_type": "sms", "suggested_copy": "Chip in now",
         "urgency_score": 80, "decision_score": 75, "fit_score": 90, "is_used": False, "is_dismissed": False},
        {"id": "a2", "topic": None, "action_type": "email", "suggested_copy": "Read more",
         "urgency_score": 50, "decision_score": None, "fit_score": 60, "is_used": True, "is_dismissed": False},
        {"id": "a3", "topic": "Ruling", "action_type": "sms", "suggested_copy": None,
         "urgency_score": 20, "decision_score": 10, "fit_score": 30, "is_used": None, "is_dismissed": True},
    ])


def test_normalize_actions(raw_actions):
    out = normalize_actions(raw_actions)
    assert out["topic"].tolist() == ["Vote", "Unknown", "Ruling"]
    assert out["sms_copy"].tolist() == ["Chip in now", "Read more", ""]
    assert out["character_count"].tolist() == [11, 9, 0]
    # decision score falls back to urgency
    assert out["decision_score"].tolist() == [75, 50, 10]
    assert out["tier"].tolist() == ["act_now", "consider", "watch"]
    assert out["urgency_level"].tolist() == ["high", "medium", "low"]
    assert out["is_used"].tolist() == [False, True, False]


def test_normalize_empty():
    out = normalize_actions(pd.DataFrame())
    assert out.empty
    assert "tier" in out.columns


def test_action_stats(raw_actions):
    stats = action_stats(normalize_actions(raw_actions))
    assert (stats.total, stats.pending, stats.used, stats.dismissed) == (3, 1, 1, 1)
    assert stats.actionable_percent == 33
    assert stats.high_urgency_count == 1
    assert stats.avg_urgency == 45
    assert stats.avg_relevance == 60
    assert stats.by_type == {"sms": 2, "email": 1}
    assert stats.by_tier == {"act_now": 1, "consider": 0, "watch": 0}


def test_action_stats_empty():
    stats = action_stats(normalize_actions(pd.DataFrame()))
    assert stats.total == 0
    assert stats.by_tier == {"act_now": 0, "consider": 0, "watch": 0}


def test_normalize_actions_treats_nan_text_as_missing():
    nan = float("nan")
    raw = pd.DataFrame([
        {"id": "a1", "topic": nan, "entity_name": "Water rights", "action_type": nan,
         "suggested_copy": nan, "sms_copy": nan, "audience_segment": nan, "estimated_impact": nan,
         "status": nan, "urgency_score": 42, "decision_score": 42},
    ])
    row = normalize_actions(raw).iloc[0]
    assert row["topic"] == "Water rights"
    assert row["action_type"] == "other"
    assert row["sms_copy"] == ""
    assert row["character_count"] == 0
    assert row["target_audience"] == "Active supporters"
    assert row["estimated_impact"] == "42% urgency"
    assert not row["is_used"] and not row["is_dismissed"]
