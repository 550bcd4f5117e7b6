"""
Edge Functions Client - Supabase serverless function calls
===========================================================
Wraps the two functions the portal calls directly:

- `fetch-bill-text`: full legislative text for a bill (proxied to Congress.gov)
- `generate-ad-copy`: Meta ad copy per audience segment from an analyzed video transcript
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from config import AppConfig


logger = logging.getLogger(__name__)

FULL_TEXT_UNAVAILABLE = "Full text not available"
COPY_PARTS = ("primary_texts", "headlines", "descriptions")


class FunctionCallError(RuntimeError):
    def __init__(self, name: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{name} failed ({status_code or 'no response'}): {message}")
        self.name = name
        self.status_code = status_code


@dataclass(frozen=True)
class BillText:
    bill_number: str
    text: str

    @property
    def available(self) -> bool:
        return self.text != FULL_TEXT_UNAVAILABLE


@dataclass(frozen=True)
class AudienceSegment:
    id: str
    name: str
    description: str = ""


DEFAULT_SEGMENTS = (
    AudienceSegment("progressive_base", "Progressive base", "Reliable small-dollar donors who give on urgent moments"),
    AudienceSegment("persuadable", "Persuadable moderates", "Issue-driven supporters who respond to concrete stakes"),
    AudienceSegment("lapsed", "Lapsed donors", "Past donors with no gift in the last six months"),
)


@dataclass(frozen=True)
class AdCopyRequest:
    """Body of the generate-ad-copy function. The transcript is read server-side by id."""

    organization_id: str
    transcript_id: str
    audience_segments: Tuple[AudienceSegment, ...]
    actblue_form_name: str
    refcode: str
    amount_preset: Optional[int] = None
    recurring_default: bool = False

    def to_payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "organization_id": self.organization_id,
            "transcript_id": self.transcript_id,
            "audience_segments": [asdict(s) for s in self.audience_segments],
            "actblue_form_name": self.actblue_form_name,
            "refcode": self.refcode,
            "recurring_default": self.recurring_default,
        }
        if self.amount_preset is not None:
            body["amount_preset"] = self.amount_preset
        return body


@dataclass
class AdCopyResult:
    """Copy per audience segment, plus every variation flattened across segments."""

    segments: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    primary_texts: List[str] = field(default_factory=list)
    headlines: List[str] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)
    generation_id: Optional[str] = None
    tracking_url: Optional[str] = None
    raw: Optional[dict] = None

    @classmethod
    def from_segments(cls, segments: Dict[str, Any], **extra: Any) -> "AdCopyResult":
        parsed = {
            str(name): {part: _as_list((copy or {}).get(part)) for part in COPY_PARTS}
            for name, copy in (segments or {}).items()
        }
        return cls(
            segments=parsed,
            primary_texts=[t for copy in parsed.values() for t in copy["primary_texts"]],
            headlines=[t for copy in parsed.values() for t in copy["headlines"]],
            descriptions=[t for copy in parsed.values() for t in copy["descriptions"]],
            **extra,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.primary_texts or self.headlines or self.descriptions)


def bill_number_digits(bill_number: str) -> str:
    """'HRES876' -> '876'; the function expects the bare number."""
    return re.sub(r"[^0-9]", "", bill_number or "")


def _as_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value if v]


class FunctionsClient:
    """Supabase Edge Functions client (POST JSON, bearer auth)."""

    def __init__(self, cfg: AppConfig, timeout: int = 30):
        self.cfg = cfg
        self.timeout = timeout
        key = cfg.supabase_anon_key or ""
        self._headers = {"Authorization": f"Bearer {key}", "apikey": key} if key else {}

    def is_configured(self) -> bool:
        return bool(self.cfg.supabase_url and self.cfg.supabase_anon_key)

    def invoke(self, name: str, body: dict[str, Any]) -> dict[str, Any]:
        if not self.is_configured():
            raise FunctionCallError(name, "backend is not configured")

        url = f"{self.cfg.functions_url}/{name}"
        try:
            resp = requests.post(url, json=body, headers=self._headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Function %s unreachable: %s", name, e)
            raise FunctionCallError(name, str(e)) from e

        if resp.status_code >= 300:
            try:
                message = resp.json().get("error", resp.text)
            except (ValueError, AttributeError):
                message = resp.text
            logger.warning("Function %s returned %s: %s", name, resp.status_code, message)
            raise FunctionCallError(name, message, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("Function %s returned a non-JSON body", name)
            raise FunctionCallError(name, "invalid JSON response", resp.status_code) from e
        return data if isinstance(data, dict) else {"data": data}

    def fetch_bill_text(self, congress: int, bill_type: str, bill_number: str) -> BillText:
        data = self.invoke(
            "fetch-bill-text",
            {
                "congress": congress,
                "billType": (bill_type or "").lower(),
                "billNumber": bill_number_digits(bill_number),
            },
        )
        return BillText(bill_number=bill_number, text=data.get("fullText") or FULL_TEXT_UNAVAILABLE)

    def generate_ad_copy(self, request: AdCopyRequest) -> AdCopyResult:
        data = self.invoke("generate-ad-copy", request.to_payload())
        if not data.get("success"):
            raise FunctionCallError("generate-ad-copy", str(data.get("error") or "generation failed"), 200)
        return AdCopyResult.from_segments(
            data.get("generated_copy") or {},
            generation_id=data.get("generation_id"),
            tracking_url=data.get("tracking_url"),
            raw=data,
        )


def get_functions_client(cfg: AppConfig) -> FunctionsClient:
    """Factory function to get an Edge Functions client instance."""
    return FunctionsClient(cfg)
