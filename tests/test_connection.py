"""
Unit tests for the Supabase client wrapper.
"""

from unittest.mock import MagicMock, patch

import pytest

from conftest import make_config
from data.connection import BackendAuthError, BackendQueryError, SupabaseClient
from data.queries import RpcCall, TableQuery


def _client_with(data=None, error=None):
    """SupabaseClient whose builder chain returns `data` (or raises `error`) on execute()."""
    sb = SupabaseClient(make_config())
    fake = MagicMock()
    req = fake.table.return_value.select.return_value
    for method in ("eq", "in_", "gte", "lte", "order", "limit"):
        getattr(req, method).return_value = req
    if error is not None:
        req.execute.side_effect = error
        fake.rpc.return_value.execute.side_effect = error
    else:
        req.execute.return_value = MagicMock(data=data)
        fake.rpc.return_value.execute.return_value = MagicMock(data=data)
    sb._client = fake
    return sb, fake, req


def test_missing_credentials():
    with pytest.raises(BackendAuthError):
        SupabaseClient(make_config(supabase_anon_key=None)).client


def test_client_creation_failure_is_auth_error():
    with patch("data.connection.create_client", side_effect=Exception("Invalid URL")):
        with pytest.raises(BackendAuthError, match="Invalid URL"):
            SupabaseClient(make_config(supabase_url="example.supabase.co")).client


def test_service_role_key_used_for_admin():
    cfg = make_config(supabase_service_key="service-key")
    with patch("data.connection.create_client") as create:
        SupabaseClient(cfg, use_service_role=True).client
    create.assert_called_once_with("https://example.supabase.co", "service-key")


def test_fetch_applies_filters():
    sb, fake, req = _client_with(data=[{"id": 1, "state": "CA"}])
    q = TableQuery(
        table="t",
        columns=("id", "state"),
        eq={"organization_id": "o"},
        in_={"state": ("CA", "NY")},
        gte={"d": "a"},
        lte={"d": "b"},
        order_by="d",
        limit=10,
    )
    df = sb.fetch(q)

    fake.table.assert_called_once_with("t")
    fake.table.return_value.select.assert_called_once_with("id, state")
    req.eq.assert_called_once_with("organization_id", "o")
    req.in_.assert_called_once_with("state", ["CA", "NY"])
    req.gte.assert_called_once_with("d", "a")
    req.lte.assert_called_once_with("d", "b")
    req.order.assert_called_once_with("d", desc=True)
    req.limit.assert_called_once_with(10)
    assert df.to_dict("records") == [{"id": 1, "state": "CA"}]


def test_fetch_no_rows_keeps_columns():
    sb, _, _ = _client_with(data=[])
    df = sb.fetch(TableQuery(table="t", columns=("id", "state")))
    assert df.empty
    assert list(df.columns) == ["id", "state"]


def test_fetch_error_wrapped():
    sb, _, _ = _client_with(error=RuntimeError("permission denied"))
    with pytest.raises(BackendQueryError, match="permission denied"):
        sb.fetch(TableQuery(table="t", columns=("id",)))


def test_rpc():
    sb, fake, _ = _client_with(data={"total_donors": 3})
    assert sb.rpc(RpcCall("fn", {"a": 1})) == {"total_donors": 3}
    fake.rpc.assert_called_once_with("fn", {"a": 1})


def test_update_matches_rows():
    sb = SupabaseClient(make_config())
    fake = MagicMock()
    req = fake.table.return_value.update.return_value
    req.eq.return_value = req
    req.execute.return_value = MagicMock(data=[{"id": "x"}])
    sb._client = fake

    rows = sb.update("suggested_actions", {"is_used": True}, {"id": "x"})
    fake.table.return_value.update.assert_called_once_with({"is_used": True})
    req.eq.assert_called_once_with("id", "x")
    assert rows == [{"id": "x"}]
