from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import pandas as pd

from analytics.actions import normalize_actions
from analytics.aggregation import DemographicsSummary, demographics_from_rpc, summarize_demographics
from analytics.date_range import DateRange, filter_by_range, utc_bounds
from config import AppConfig
from data import mock_data
from data import queries
from data.connection import BackendAuthError, BackendQueryError, get_backend_client
from data.functions_client import FULL_TEXT_UNAVAILABLE, AdCopyRequest, BillText, FunctionCallError, get_functions_client
from data.validation import SUBMISSION_STATUSES, validate_contact


logger = logging.getLogger(__name__)

BACKEND_ERRORS = (BackendAuthError, BackendQueryError, FunctionCallError)

ACTIONS_LOOKBACK_DAYS = 90


@dataclass(frozen=True)
class DataResult:
    df: pd.DataFrame
    source: str  # "mock" | "supabase" | "none"
    warning: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ValueResult:
    value: Any
    source: str
    warning: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DemographicsResult:
    summary: DemographicsSummary
    rows: pd.DataFrame
    source: str
    server_side: bool = False
    warning: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class WriteResult:
    ok: bool
    message: str
    errors: list[str] = field(default_factory=list)
    payload: Any = None


@dataclass(frozen=True)
class BillDetail:
    bill: dict
    actions: pd.DataFrame

    def text(self, key: str, default: str = "") -> str:
        value = self.bill.get(key)
        return value.strip() if isinstance(value, str) and value.strip() else default

    @property
    def congress(self) -> int:
        """0 when the row has no usable congress number."""
        try:
            return int(self.bill.get("congress"))
        except (TypeError, ValueError, OverflowError):
            return 0


def _fallback(
    cfg: AppConfig,
    use_mock: bool,
    fn_live: Callable[[], Any],
    fn_mock: Callable[[], Any],
    what: str,
    empty: Callable[[], Any] = pd.DataFrame,
) -> ValueResult:
    """Demo mode -> mock. Live -> backend, then mock (with a warning) or an error."""
    if use_mock:
        return ValueResult(value=fn_mock(), source="mock")
    try:
        return ValueResult(value=fn_live(), source="supabase")
    except BACKEND_ERRORS as e:
        logger.warning("Loading %s failed: %s", what, e)
        if cfg.fallback_to_mock:
            return ValueResult(
                value=fn_mock(),
                source="mock",
                warning=f"Fell back to mock {what}: {type(e).__name__}",
            )
        return ValueResult(value=empty(), source="none", error=f"Could not load {what}: {e}")


def _frame(result: ValueResult) -> DataResult:
    return DataResult(df=result.value, source=result.source, warning=result.warning, error=result.error)


def _missing_org() -> DataResult:
    return DataResult(df=pd.DataFrame(), source="none", error="Select an organization to load its data.")


def get_organizations(cfg: AppConfig, use_mock: bool) -> DataResult:
    client = get_backend_client(cfg, admin=True)
    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_organizations()),
            fn_mock=mock_data.organizations_mock,
            what="organizations",
        )
    )


def get_transactions(cfg: AppConfig, use_mock: bool, org_id: Optional[str], date_range: DateRange) -> DataResult:
    """Donation rows whose org-local date falls inside `date_range`."""
    if not use_mock and not org_id:
        return _missing_org()

    client = get_backend_client(cfg)
    start_iso, end_iso = utc_bounds(date_range, cfg.org_timezone)
    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_transactions(org_id, start_iso, end_iso)),
            fn_mock=lambda: filter_by_range(mock_data.transactions_mock(org_id), date_range, cfg.org_timezone),
            what="transactions",
        )
    )


def get_demographics(cfg: AppConfig, use_mock: bool, org_id: Optional[str], date_range: DateRange) -> DemographicsResult:
    """
    Donor rows (for export) plus their summary. In live mode the summary comes
    from the server-side RPC when it answers; otherwise rows are aggregated here.
    """
    rows = get_transactions(cfg, use_mock, org_id, date_range)
    if not rows.ok:
        return DemographicsResult(
            summary=summarize_demographics(pd.DataFrame()), rows=rows.df, source=rows.source, error=rows.error
        )

    client_side = summarize_demographics(rows.df)
    if rows.source == "supabase":
        start_iso, end_iso = utc_bounds(date_range, cfg.org_timezone)
        call = queries.q_demographics_rpc(org_id, start_iso, end_iso)
        try:
            payload = get_backend_client(cfg).rpc(call)
        except BACKEND_ERRORS as e:
            logger.info("Demographics RPC unavailable, aggregating client-side: %s", e)
            payload = None
        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if isinstance(payload, dict) and payload:
            return DemographicsResult(
                summary=demographics_from_rpc(payload, client_side),
                rows=rows.df,
                source=rows.source,
                server_side=True,
            )

    return DemographicsResult(
        summary=client_side, rows=rows.df, source=rows.source, warning=rows.warning
    )


def get_suggested_actions(cfg: AppConfig, use_mock: bool, org_id: Optional[str]) -> DataResult:
    if not use_mock and not org_id:
        return _missing_org()

    client = get_backend_client(cfg)
    since = (datetime.now(timezone.utc) - timedelta(days=ACTIONS_LOOKBACK_DAYS)).isoformat()
    result = _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_suggested_actions(org_id, since)),
            fn_mock=lambda: mock_data.suggested_actions_mock(org_id),
            what="suggested actions",
        )
    )
    return DataResult(df=normalize_actions(result.df), source=result.source, warning=result.warning, error=result.error)


def get_bills(cfg: AppConfig, use_mock: bool, limit: int = 100) -> DataResult:
    client = get_backend_client(cfg)
    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_bills(limit)),
            fn_mock=mock_data.bills_mock,
            what="bills",
        )
    )


def _bill_detail_mock(bill_number: str) -> Optional[BillDetail]:
    bills = mock_data.bills_mock()
    match = bills[bills["bill_number"] == bill_number]
    if match.empty:
        return None
    bill = match.iloc[0].to_dict()
    return BillDetail(bill=bill, actions=mock_data.bill_actions_mock(bill["id"]))


def _bill_detail_live(cfg: AppConfig, bill_number: str) -> Optional[BillDetail]:
    client = get_backend_client(cfg)
    found = client.fetch(queries.q_bill(bill_number))
    if found.empty:
        return None
    bill = found.iloc[0].to_dict()
    return BillDetail(bill=bill, actions=client.fetch(queries.q_bill_actions(bill["id"])))


def get_bill_detail(cfg: AppConfig, use_mock: bool, bill_number: str) -> ValueResult:
    """value is a BillDetail, or None when no bill has that number."""
    return _fallback(
        cfg,
        use_mock,
        fn_live=lambda: _bill_detail_live(cfg, bill_number),
        fn_mock=lambda: _bill_detail_mock(bill_number),
        what="bill detail",
        empty=lambda: None,
    )


def get_bill_text(cfg: AppConfig, use_mock: bool, congress: int, bill_type: str, bill_number: str) -> ValueResult:
    client = get_functions_client(cfg)
    return _fallback(
        cfg,
        use_mock,
        fn_live=lambda: client.fetch_bill_text(congress, bill_type, bill_number),
        fn_mock=lambda: mock_data.bill_text_mock(bill_number),
        what="bill text",
        empty=lambda: BillText(bill_number=bill_number, text=FULL_TEXT_UNAVAILABLE),
    )


def get_contact_submissions(cfg: AppConfig, use_mock: bool, status: Optional[str] = None) -> DataResult:
    client = get_backend_client(cfg, admin=True)

    def mock() -> pd.DataFrame:
        df = mock_data.contact_submissions_mock()
        return df[df["status"] == status].reset_index(drop=True) if status else df

    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_contact_submissions(status)),
            fn_mock=mock,
            what="contact submissions",
        )
    )


def get_organization_revenue(cfg: AppConfig, use_mock: bool, org_ids: list[str], date_range: DateRange) -> DataResult:
    """Raw amount rows for several organizations; aggregate with revenue_by_organization()."""
    if not org_ids:
        return DataResult(df=pd.DataFrame(), source="mock" if use_mock else "supabase")

    client = get_backend_client(cfg, admin=True)
    start_iso, end_iso = utc_bounds(date_range, cfg.org_timezone)

    def mock() -> pd.DataFrame:
        frames = [mock_data.transactions_mock(org_id, n_rows=600) for org_id in org_ids]
        return filter_by_range(pd.concat(frames, ignore_index=True), date_range, cfg.org_timezone)

    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_org_revenue(org_ids, start_iso, end_iso)),
            fn_mock=mock,
            what="organization revenue",
        )
    )


def get_transcripts(cfg: AppConfig, use_mock: bool, org_id: Optional[str]) -> DataResult:
    """Analyzed ad video transcripts the ad copy generator can work from."""
    if not use_mock and not org_id:
        return _missing_org()

    client = get_backend_client(cfg)
    return _frame(
        _fallback(
            cfg,
            use_mock,
            fn_live=lambda: client.fetch(queries.q_transcripts(org_id)),
            fn_mock=lambda: mock_data.transcripts_mock(org_id),
            what="transcripts",
        )
    )


# ---------------------------------------------------------------------------
# Writes: no mock fallback, failures are reported to the user as-is
# ---------------------------------------------------------------------------


def _write(use_mock: bool, fn_live: Callable[[], Any], success: str, what: str) -> WriteResult:
    if use_mock:
        logger.info("Demo mode: skipped %s", what)
        return WriteResult(ok=True, message=f"{success} (demo mode, nothing was saved)")
    try:
        payload = fn_live()
    except BACKEND_ERRORS as e:
        logger.exception("Write failed: %s", what)
        return WriteResult(ok=False, message=f"Could not {what}: {e}")
    logger.info("Write succeeded: %s", what)
    return WriteResult(ok=True, message=success, payload=payload)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def mark_action_used(cfg: AppConfig, use_mock: bool, action_id: str) -> WriteResult:
    client = get_backend_client(cfg)
    return _write(
        use_mock,
        lambda: client.update("suggested_actions", {"is_used": True, "used_at": _now_iso()}, {"id": action_id}),
        success="Marked as used",
        what="mark action as used",
    )


def dismiss_action(cfg: AppConfig, use_mock: bool, action_id: str) -> WriteResult:
    client = get_backend_client(cfg)
    return _write(
        use_mock,
        lambda: client.update("suggested_actions", {"is_dismissed": True}, {"id": action_id}),
        success="Action dismissed",
        what="dismiss action",
    )


def submit_contact(cfg: AppConfig, use_mock: bool, form: dict[str, Any]) -> WriteResult:
    submission, errors = validate_contact(form)
    if submission is None:
        return WriteResult(ok=False, message="Please fix the highlighted fields.", errors=errors)

    client = get_backend_client(cfg)
    return _write(
        use_mock,
        lambda: client.insert("contact_submissions", submission.to_row()),
        success="Message received! We'll get back to you within 24 hours.",
        what="send your message",
    )


def update_submission_status(cfg: AppConfig, use_mock: bool, submission_id: str, status: str) -> WriteResult:
    if status not in SUBMISSION_STATUSES:
        return WriteResult(ok=False, message=f"Unknown status: {status}")

    values: dict[str, Any] = {"status": status, "updated_at": _now_iso()}
    if status == "resolved":
        values["resolved_at"] = _now_iso()

    client = get_backend_client(cfg, admin=True)
    return _write(
        use_mock,
        lambda: client.update("contact_submissions", values, {"id": submission_id}),
        success=f"Status updated to {status.replace('_', ' ')}",
        what="update the submission",
    )


def generate_ad_copy(cfg: AppConfig, use_mock: bool, request: AdCopyRequest) -> WriteResult:
    if use_mock:
        return WriteResult(ok=True, message="Generated sample copy (demo mode)", payload=mock_data.ad_copy_mock(request))

    client = get_functions_client(cfg)
    result = _write(use_mock, lambda: client.generate_ad_copy(request), success="Ad copy generated", what="generate ad copy")
    if result.ok and result.payload is not None and result.payload.is_empty:
        return WriteResult(ok=False, message="The generator returned no copy. Try a more specific topic.")
    return result
