"""
Unit tests for backend query descriptors.
"""

from data import queries


def test_transactions_query():
    q = queries.q_transactions("org-1", "2025-01-01T05:00:00.000Z", "2025-02-01T04:59:59.999Z")
    assert q.table == "actblue_transactions_secure"
    assert q.eq == {"organization_id": "org-1"}
    assert q.gte == {"transaction_date": "2025-01-01T05:00:00.000Z"}
    assert q.lte == {"transaction_date": "2025-02-01T04:59:59.999Z"}
    assert (q.order_by, q.descending, q.limit) == ("transaction_date", True, 5000)
    assert "refcode" in q.select.split(", ")


def test_demographics_rpc():
    call = queries.q_demographics_rpc("org-1", "2025-01-01T05:00:00.000Z", "2025-02-01T04:59:59.999Z")
    assert call.name == "get_donor_demographics_v2"
    assert call.params == {
        "_organization_id": "org-1",
        "_start_date": "2025-01-01T05:00:00.000Z",
        "_end_date": "2025-02-01T04:59:59.999Z",
    }


def test_suggested_actions_excludes_dismissed():
    q = queries.q_suggested_actions("org-1", "2025-01-01T00:00:00+00:00")
    assert q.eq["is_dismissed"] is False
    assert q.gte == {"created_at": "2025-01-01T00:00:00+00:00"}
    assert q.limit == 200


def test_organizations_sorted_by_name():
    q = queries.q_organizations()
    assert (q.order_by, q.descending) == ("name", False)


def test_bill_queries():
    assert queries.q_bill("HR1234").eq == {"bill_number": "HR1234"}
    assert queries.q_bill_actions("b1").eq == {"bill_id": "b1"}
    assert queries.q_bills(25).limit == 25


def test_contact_submissions_status_filter():
    assert queries.q_contact_submissions().eq == {}
    assert queries.q_contact_submissions("new").eq == {"status": "new"}


def test_org_revenue_uses_in_filter():
    q = queries.q_org_revenue(["a", "b"], "s", "e")
    assert q.in_ == {"organization_id": ("a", "b")}


def test_transcripts_scoped_to_org():
    q = queries.q_transcripts("org-1")
    assert q.table == "meta_ad_transcripts"
    assert q.eq == {"organization_id": "org-1"}
    assert "issue_primary" in q.columns
