"""
Shared pytest fixtures for portal tests.
"""

import pandas as pd
import pytest

from config import AppConfig


TZ = "America/New_York"


def make_config(**overrides) -> AppConfig:
    values = dict(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
        supabase_service_key=None,
        organization_id="org-1",
        org_timezone=TZ,
        default_range_days=30,
        default_use_mock=False,
        fallback_to_mock=True,
        log_level="INFO",
    )
    values.update(overrides)
    return AppConfig(**values)


@pytest.fixture
def cfg():
    """Live-mode config pointing at a fake project."""
    return make_config()


@pytest.fixture
def transactions_df():
    """Four donations over Jan 15-17 2025 (New York time) and one refund."""
    return pd.DataFrame([
        {
            "transaction_id": "T1",
            "organization_id": "org-1",
            "transaction_date": "2025-01-15T14:00:00Z",
            "transaction_type": "donation",
            "amount": 50.0,
            "net_amount": 47.5,
            "donor_email": "A@x.com",
            "donor_name": "Ann Lee",
            "first_name": "Ann",
            "last_name": "Lee",
            "state": "CA",
            "city": "Oakland",
            "occupation": "Teacher",
            "employer": "OUSD",
            "refcode": "jp_launch",
            "source_campaign": None,
            "contribution_form": None,
            "click_id": None,
            "is_recurring": True,
            "is_express": False,
        },
        {
            "transaction_id": "T2",
            "organization_id": "org-1",
            "transaction_date": "2025-01-15T20:00:00Z",
            "transaction_type": "donation",
            "amount": 25.0,
            "net_amount": 23.9,
            "donor_email": "a@x.com",
            "donor_name": "Ann Lee",
            "first_name": "Ann",
            "last_name": "Lee",
            "state": "CA",
            "city": "Oakland",
            "occupation": "Teacher",
            "employer": "OUSD",
            "refcode": None,
            "source_campaign": None,
            "contribution_form": None,
            "click_id": None,
            "is_recurring": True,
            "is_express": True,
        },
        {
            # 22:30 on Jan 15 in New York
            "transaction_id": "T3",
            "organization_id": "org-1",
            "transaction_date": "2025-01-16T03:30:00Z",
            "transaction_type": "donation",
            "amount": 100.0,
            "net_amount": 96.0,
            "donor_email": "b@y.org",
            "donor_name": "Bob Ray",
            "first_name": "Bob",
            "last_name": "Ray",
            "state": "NY",
            "city": "Albany",
            "occupation": None,
            "employer": None,
            "refcode": "txt_gotv",
            "source_campaign": None,
            "contribution_form": None,
            "click_id": None,
            "is_recurring": False,
            "is_express": False,
        },
        {
            "transaction_id": "T4",
            "organization_id": "org-1",
            "transaction_date": "2025-01-17T16:00:00Z",
            "transaction_type": "donation",
            "amount": 10.0,
            "net_amount": 9.4,
            "donor_email": "c@z.net",
            "donor_name": None,
            "first_name": "Cy",
            "last_name": "Dee",
            "state": "TX",
            "city": "Austin",
            "occupation": "Retired",
            "employer": "Retired",
            "refcode": None,
            "source_campaign": "email_jan",
            "contribution_form": None,
            "click_id": None,
            "is_recurring": False,
            "is_express": False,
        },
        {
            "transaction_id": "T5",
            "organization_id": "org-1",
            "transaction_date": "2025-01-17T18:00:00Z",
            "transaction_type": "refund",
            "amount": -50.0,
            "net_amount": -47.5,
            "donor_email": "a@x.com",
            "donor_name": "Ann Lee",
            "first_name": "Ann",
            "last_name": "Lee",
            "state": "CA",
            "city": "Oakland",
            "occupation": "Teacher",
            "employer": "OUSD",
            "refcode": "jp_launch",
            "source_campaign": None,
            "contribution_form": None,
            "click_id": None,
            "is_recurring": True,
            "is_express": False,
        },
    ])
