"""
Unit tests for environment-driven configuration.
"""

import pytest

import config


ENV_VARS = [
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "ORGANIZATION_ID",
    "ORG_TIMEZONE",
    "DEFAULT_RANGE_DAYS",
    "USE_MOCK_DATA",
    "FALLBACK_TO_MOCK",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda **kwargs: False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = config.get_config()
    assert cfg.supabase_url == ""
    assert cfg.org_timezone == "America/New_York"
    assert cfg.default_range_days == 30
    assert cfg.default_use_mock is True
    assert cfg.fallback_to_mock is True
    assert cfg.log_level == "INFO"
    assert not cfg.is_configured


def test_values_trimmed_and_parsed(clean_env):
    clean_env.setenv("SUPABASE_URL", " https://p.supabase.co/ ")
    clean_env.setenv("SUPABASE_ANON_KEY", "k")
    clean_env.setenv("USE_MOCK_DATA", "false")
    clean_env.setenv("DEFAULT_RANGE_DAYS", "90")
    clean_env.setenv("LOG_LEVEL", "debug")
    cfg = config.get_config()
    assert cfg.supabase_url == "https://p.supabase.co/"
    assert cfg.functions_url == "https://p.supabase.co/functions/v1"
    assert cfg.is_configured
    assert cfg.default_use_mock is False
    assert cfg.default_range_days == 90
    assert cfg.log_level == "DEBUG"


def test_blank_and_invalid_values_fall_back(clean_env):
    clean_env.setenv("SUPABASE_ANON_KEY", "   ")
    clean_env.setenv("DEFAULT_RANGE_DAYS", "thirty")
    clean_env.setenv("ORG_TIMEZONE", "")
    cfg = config.get_config()
    assert cfg.supabase_anon_key is None
    assert cfg.default_range_days == 30
    assert cfg.org_timezone == "America/New_York"
