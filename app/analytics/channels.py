"""
Donation channel attribution.

Attribution waterfall, first match wins:

- Tier 1, deterministic (1.00): click id present, an explicit attribution
  method, or Meta campaign/ad/creative ids.
- Tier 2, high (0.90): source campaign names a platform, or the refcode
  starts with a known platform prefix.
- Tier 3, medium (0.70 / 0.50): contribution form hints at SMS/email, or an
  unrecognised refcode ("other").
- Tier 0: no signals ("unattributed").
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pandas as pd


CHANNELS = ("meta", "sms", "email", "other", "unattributed")
CONFIDENCE_LEVELS = ("deterministic", "high", "medium", "low", "none")

CHANNEL_LABELS = {
    "meta": "Meta Ads",
    "sms": "SMS",
    "email": "Email",
    "other": "Other",
    "unattributed": "Unattributed",
}

CONFIDENCE_LABELS = {
    "deterministic": "Deterministic (100%)",
    "high": "High Confidence (85-95%)",
    "medium": "Medium Confidence (60-80%)",
    "low": "Low Confidence (40%)",
    "none": "Unattributed",
}

# (prefix, channel); checked in order
REFCODE_PREFIXES = (
    ("jp", "meta"),
    ("th", "meta"),
    ("meta_", "meta"),
    ("fb_", "meta"),
    ("ig_", "meta"),
    ("facebook_", "meta"),
    ("instagram_", "meta"),
    ("txt", "sms"),
    ("sms", "sms"),
    ("text_", "sms"),
    ("em", "email"),
    ("email", "email"),
    ("mail_", "email"),
    ("newsletter", "email"),
)


@dataclass(frozen=True)
class Attribution:
    channel: str
    confidence_score: float
    confidence_level: str
    method: str
    tier: int


UNATTRIBUTED = Attribution("unattributed", 0.0, "none", "no_attribution_signals", 0)


def _text(row: Mapping[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    value = str(value).strip()
    return value.lower() if value else None


def detect_channel(row: Mapping[str, Any]) -> Attribution:
    # Tier 1
    if _text(row, "click_id") or _text(row, "fbclid"):
        return Attribution("meta", 1.0, "deterministic", "click_id", 1)

    method = _text(row, "attribution_method")
    if method:
        if "sms" in method:
            return Attribution("sms", 1.0, "deterministic", "attribution_method_sms", 1)
        if "meta" in method or "facebook" in method:
            return Attribution("meta", 1.0, "deterministic", "attribution_method_meta", 1)
        if "email" in method:
            return Attribution("email", 1.0, "deterministic", "attribution_method_email", 1)

    if any(_text(row, k) for k in ("attributed_campaign_id", "attributed_ad_id", "attributed_creative_id")):
        return Attribution("meta", 1.0, "deterministic", "meta_ids_present", 1)

    # Tier 2
    campaign = _text(row, "source_campaign")
    if campaign:
        if any(p in campaign for p in ("meta", "facebook", "instagram")):
            return Attribution("meta", 0.9, "high", "source_campaign_meta", 2)
        if "sms" in campaign or "text" in campaign:
            return Attribution("sms", 0.9, "high", "source_campaign_sms", 2)
        if "email" in campaign:
            return Attribution("email", 0.9, "high", "source_campaign_email", 2)

    refcode = _text(row, "refcode")
    if refcode:
        for prefix, channel in REFCODE_PREFIXES:
            if refcode.startswith(prefix):
                return Attribution(channel, 0.9, "high", f"pattern_prefix_{prefix}", 2)

    # Tier 3
    form = _text(row, "contribution_form")
    if form:
        if "sms" in form:
            return Attribution("sms", 0.7, "medium", "contribution_form_sms", 3)
        if "email" in form or "em_" in form:
            return Attribution("email", 0.7, "medium", "contribution_form_email", 3)

    if refcode:
        return Attribution("other", 0.5, "medium", "refcode_unknown_pattern", 3)

    return UNATTRIBUTED


def channel_label(channel: str) -> str:
    return CHANNEL_LABELS.get(channel, channel.title())


def acquisition_channel(row: Mapping[str, Any]) -> str:
    """Coarse bucket shown on the demographics page."""
    if _text(row, "refcode"):
        return "Campaign"
    is_express = row.get("is_express")
    if pd.notna(is_express) and bool(is_express):
        return "Express"
    return "Direct"


def count_by_channel(df: pd.DataFrame) -> dict[str, int]:
    counts = dict.fromkeys(CHANNELS, 0)
    for r in df.to_dict("records"):
        counts[detect_channel(r).channel] += 1
    return counts


def count_by_confidence(df: pd.DataFrame) -> dict[str, int]:
    counts = dict.fromkeys(CONFIDENCE_LEVELS, 0)
    for r in df.to_dict("records"):
        counts[detect_channel(r).confidence_level] += 1
    return counts


@dataclass(frozen=True)
class AttributionQuality:
    total: int
    by_confidence: dict[str, dict[str, float]]
    by_channel: dict[str, dict[str, float]]
    average_confidence: float
    deterministic_rate: float


def attribution_quality(df: pd.DataFrame) -> AttributionQuality:
    total = len(df)
    if total == 0:
        return AttributionQuality(
            total=0,
            by_confidence={k: {"count": 0, "percentage": 0.0} for k in CONFIDENCE_LEVELS},
            by_channel={k: {"count": 0, "percentage": 0.0} for k in CHANNELS},
            average_confidence=0.0,
            deterministic_rate=0.0,
        )

    results = [detect_channel(r) for r in df.to_dict("records")]

    def pct(n: int) -> float:
        return round(n / total * 100, 2)

    by_confidence = {}
    for level in CONFIDENCE_LEVELS:
        n = sum(1 for a in results if a.confidence_level == level)
        by_confidence[level] = {"count": n, "percentage": pct(n)}
    by_channel = {}
    for channel in CHANNELS:
        n = sum(1 for a in results if a.channel == channel)
        by_channel[channel] = {"count": n, "percentage": pct(n)}

    return AttributionQuality(
        total=total,
        by_confidence=by_confidence,
        by_channel=by_channel,
        average_confidence=round(sum(a.confidence_score for a in results) / total, 2),
        deterministic_rate=by_confidence["deterministic"]["percentage"],
    )
