"""
Unit tests for the Edge Functions client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from conftest import make_config
from data.functions_client import (
    FULL_TEXT_UNAVAILABLE,
    AdCopyRequest,
    AudienceSegment,
    FunctionCallError,
    FunctionsClient,
    bill_number_digits,
)


def _response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload if payload is not None else {}
    resp.text = text
    return resp


@pytest.mark.parametrize("raw,digits", [("HRES876", "876"), ("H.R. 1234", "1234"), ("S567", "567"), ("", "")])
def test_bill_number_digits(raw, digits):
    assert bill_number_digits(raw) == digits


def test_functions_url(cfg):
    assert cfg.functions_url == "https://example.supabase.co/functions/v1"


@patch("data.functions_client.requests.post")
def test_fetch_bill_text_request(mock_post, cfg):
    mock_post.return_value = _response(payload={"fullText": "SECTION 1."})
    text = FunctionsClient(cfg).fetch_bill_text(119, "HRES", "HRES876")

    url = mock_post.call_args.args[0]
    kwargs = mock_post.call_args.kwargs
    assert url == "https://example.supabase.co/functions/v1/fetch-bill-text"
    assert kwargs["json"] == {"congress": 119, "billType": "hres", "billNumber": "876"}
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["timeout"] == 30
    assert text.text == "SECTION 1."
    assert text.available


@patch("data.functions_client.requests.post")
def test_fetch_bill_text_missing(mock_post, cfg):
    mock_post.return_value = _response(payload={"fullText": None})
    text = FunctionsClient(cfg).fetch_bill_text(119, "hr", "HR1")
    assert text.text == FULL_TEXT_UNAVAILABLE
    assert not text.available


@patch("data.functions_client.requests.post")
def test_error_status_raises(mock_post, cfg):
    mock_post.return_value = _response(status=502, payload={"error": "upstream down"})
    with pytest.raises(FunctionCallError) as exc:
        FunctionsClient(cfg).invoke("fetch-bill-text", {})
    assert exc.value.status_code == 502
    assert "upstream down" in str(exc.value)


@patch("data.functions_client.requests.post")
def test_network_error_wrapped(mock_post, cfg):
    mock_post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(FunctionCallError):
        FunctionsClient(cfg).invoke("generate-ad-copy", {})


def test_not_configured():
    client = FunctionsClient(make_config(supabase_url="", supabase_anon_key=None))
    assert not client.is_configured()
    with pytest.raises(FunctionCallError):
        client.invoke("fetch-bill-text", {})


@patch("data.functions_client.requests.post")
def test_non_json_body_raises(mock_post, cfg):
    resp = _response(text="<html>")
    resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
    mock_post.return_value = resp
    with pytest.raises(FunctionCallError, match="invalid JSON response") as exc:
        FunctionsClient(cfg).fetch_bill_text(119, "hr", "HR1")
    assert exc.value.status_code == 200


def _ad_copy_request(**overrides):
    values = dict(
        organization_id="org-1",
        transcript_id="tr-001",
        audience_segments=(AudienceSegment("base", "Base", "Small-dollar donors"), AudienceSegment("lapsed", "Lapsed")),
        actblue_form_name="pf-main",
        refcode="meta_123",
    )
    values.update(overrides)
    return AdCopyRequest(**values)


def test_ad_copy_payload():
    body = _ad_copy_request(amount_preset=25).to_payload()
    assert body == {
        "organization_id": "org-1",
        "transcript_id": "tr-001",
        "audience_segments": [
            {"id": "base", "name": "Base", "description": "Small-dollar donors"},
            {"id": "lapsed", "name": "Lapsed", "description": ""},
        ],
        "actblue_form_name": "pf-main",
        "refcode": "meta_123",
        "recurring_default": False,
        "amount_preset": 25,
    }
    assert "amount_preset" not in _ad_copy_request().to_payload()


@patch("data.functions_client.requests.post")
def test_generate_ad_copy_flattens_segments(mock_post, cfg):
    mock_post.return_value = _response(
        payload={
            "success": True,
            "generation_id": "gen-1",
            "tracking_url": "https://secure.actblue.com/donate/pf-main?refcode=meta_123",
            "generated_copy": {
                "Base": {"primary_texts": ["a", "b"], "headlines": ["h1"], "descriptions": ["d1"]},
                "Lapsed": {"primary_texts": ["c"], "headlines": [], "descriptions": None},
            },
        }
    )
    result = FunctionsClient(cfg).generate_ad_copy(_ad_copy_request())

    assert mock_post.call_args.args[0].endswith("/functions/v1/generate-ad-copy")
    assert mock_post.call_args.kwargs["json"]["transcript_id"] == "tr-001"
    assert list(result.segments) == ["Base", "Lapsed"]
    assert result.segments["Lapsed"]["descriptions"] == []
    assert result.primary_texts == ["a", "b", "c"]
    assert result.headlines == ["h1"]
    assert result.descriptions == ["d1"]
    assert result.generation_id == "gen-1"
    assert not result.is_empty


@patch("data.functions_client.requests.post")
def test_generate_ad_copy_unsuccessful(mock_post, cfg):
    mock_post.return_value = _response(payload={"success": False, "error": "Transcript not found"})
    with pytest.raises(FunctionCallError, match="Transcript not found"):
        FunctionsClient(cfg).generate_ad_copy(_ad_copy_request())
