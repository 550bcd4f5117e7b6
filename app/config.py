from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens (portal styling)
# - Centralized here so styles.py and the Plotly theme read the same values.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F5F6FA",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents (campaign blue + signal red)
    "accent_primary": "#1D4ED8",
    "accent_secondary": "#3B82F6",  # hover
    "navy_900": "#0B1530",
    "navy_800": "#14224A",
    "signal_red": "#DC2626",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E3E6EE",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

DEFAULT_TIMEZONE = "America/New_York"

_logging_configured = False


@dataclass(frozen=True)
class AppConfig:
    # Required for live mode (Supabase)
    supabase_url: str
    supabase_anon_key: Optional[str]

    # Admin console reads/writes go through the service role when it is set
    supabase_service_key: Optional[str]

    # Client portal scope
    organization_id: Optional[str]
    org_timezone: str

    # Defaults
    default_range_days: int
    default_use_mock: bool
    fallback_to_mock: bool
    log_level: str

    @property
    def functions_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/functions/v1"

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and (self.supabase_anon_key or self.supabase_service_key))


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getenv_bool(name: str, default: bool) -> bool:
    return (_getenv(name, "true" if default else "false") or "").lower() in ("1", "true", "yes", "on")


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Empty values count as unset
    """
    load_dotenv(override=False)

    return AppConfig(
        supabase_url=_getenv("SUPABASE_URL") or "",
        supabase_anon_key=_getenv("SUPABASE_ANON_KEY"),
        supabase_service_key=_getenv("SUPABASE_SERVICE_ROLE_KEY"),
        organization_id=_getenv("ORGANIZATION_ID"),
        org_timezone=_getenv("ORG_TIMEZONE", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE,
        default_range_days=_getenv_int("DEFAULT_RANGE_DAYS", 30),
        default_use_mock=_getenv_bool("USE_MOCK_DATA", True),
        fallback_to_mock=_getenv_bool("FALLBACK_TO_MOCK", True),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def configure_logging(cfg: AppConfig) -> None:
    """Configure the root logger once; Streamlit reruns the script on every interaction."""
    global _logging_configured
    level = getattr(logging, cfg.log_level, logging.INFO)
    if not _logging_configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _logging_configured = True
    logging.getLogger().setLevel(level)
