from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class TableQuery:
    table: str
    columns: tuple[str, ...]
    eq: dict[str, Any] = field(default_factory=dict)
    in_: dict[str, tuple[Any, ...]] = field(default_factory=dict)
    gte: dict[str, Any] = field(default_factory=dict)
    lte: dict[str, Any] = field(default_factory=dict)
    order_by: Optional[str] = None
    descending: bool = True
    limit: Optional[int] = None

    @property
    def select(self) -> str:
        return ", ".join(self.columns)


@dataclass(frozen=True)
class RpcCall:
    name: str
    params: dict[str, Any] = field(default_factory=dict)


TRANSACTION_COLUMNS = (
    "id",
    "transaction_id",
    "organization_id",
    "transaction_date",
    "transaction_type",
    "amount",
    "net_amount",
    "donor_email",
    "donor_name",
    "first_name",
    "last_name",
    "state",
    "city",
    "occupation",
    "employer",
    "refcode",
    "source_campaign",
    "contribution_form",
    "click_id",
    "fbclid",
    "is_recurring",
    "is_express",
)

SUGGESTED_ACTION_COLUMNS = (
    "id",
    "organization_id",
    "topic",
    "action_type",
    "suggested_copy",
    "urgency_score",
    "topic_relevance",
    "decision_score",
    "fit_score",
    "risk_score",
    "confidence_score",
    "estimated_impact",
    "audience_segment",
    "character_count",
    "is_used",
    "is_dismissed",
    "used_at",
    "created_at",
)

BILL_COLUMNS = (
    "id",
    "bill_number",
    "bill_type",
    "congress",
    "title",
    "short_title",
    "sponsor_name",
    "sponsor_party",
    "sponsor_state",
    "current_status",
    "introduced_date",
    "latest_action_date",
    "latest_action_text",
    "relevance_score",
)


def q_organizations() -> TableQuery:
    return TableQuery(
        table="client_organizations",
        columns=("id", "name", "slug", "is_active", "primary_contact_email", "created_at"),
        order_by="name",
        descending=False,
    )


def q_transactions(org_id: str, start_iso: str, end_iso: str, limit: int = 5000) -> TableQuery:
    # UTC bounds already derived from the org-local date range
    return TableQuery(
        table="actblue_transactions_secure",
        columns=TRANSACTION_COLUMNS,
        eq={"organization_id": org_id},
        gte={"transaction_date": start_iso},
        lte={"transaction_date": end_iso},
        order_by="transaction_date",
        limit=limit,
    )


def q_demographics_rpc(org_id: str, start_iso: str, end_iso: str) -> RpcCall:
    """
    Server-side aggregation of donor demographics (refunds excluded).
    Bounds are UTC timestamps, as for q_transactions.
    """
    return RpcCall(
        name="get_donor_demographics_v2",
        params={"_organization_id": org_id, "_start_date": start_iso, "_end_date": end_iso},
    )


def q_suggested_actions(org_id: str, since_iso: str) -> TableQuery:
    return TableQuery(
        table="suggested_actions",
        columns=SUGGESTED_ACTION_COLUMNS,
        eq={"organization_id": org_id, "is_dismissed": False},
        gte={"created_at": since_iso},
        order_by="created_at",
        limit=200,
    )


def q_bills(limit: int = 100) -> TableQuery:
    return TableQuery(table="bills", columns=BILL_COLUMNS, order_by="latest_action_date", limit=limit)


def q_bill(bill_number: str) -> TableQuery:
    return TableQuery(table="bills", columns=BILL_COLUMNS, eq={"bill_number": bill_number}, limit=1)


def q_bill_actions(bill_id: str) -> TableQuery:
    return TableQuery(
        table="bill_actions",
        columns=("id", "bill_id", "action_date", "action_text", "chamber"),
        eq={"bill_id": bill_id},
        order_by="action_date",
    )


def q_contact_submissions(status: Optional[str] = None, limit: int = 500) -> TableQuery:
    """Contact form inbox for the admin console, optionally filtered by status."""
    return TableQuery(
        table="contact_submissions",
        columns=(
            "id",
            "name",
            "email",
            "organization_type",
            "campaign",
            "message",
            "status",
            "priority",
            "created_at",
            "resolved_at",
        ),
        eq={"status": status} if status else {},
        order_by="created_at",
        limit=limit,
    )


def q_org_revenue(org_ids: list[str], start_iso: str, end_iso: str, limit: int = 20000) -> TableQuery:
    """Amounts only, across several organizations (admin overview)."""
    return TableQuery(
        table="actblue_transactions_secure",
        columns=("organization_id", "transaction_type", "amount", "net_amount", "donor_email", "transaction_date"),
        in_={"organization_id": tuple(org_ids)},
        gte={"transaction_date": start_iso},
        lte={"transaction_date": end_iso},
        order_by="transaction_date",
        limit=limit,
    )


def q_transcripts(org_id: str, limit: int = 50) -> TableQuery:
    """Analyzed ad video transcripts; ad copy is generated from one of these."""
    return TableQuery(
        table="meta_ad_transcripts",
        columns=("id", "organization_id", "ad_id", "issue_primary", "topic_primary", "tone_primary", "hook_text", "created_at"),
        eq={"organization_id": org_id},
        order_by="created_at",
        limit=limit,
    )
