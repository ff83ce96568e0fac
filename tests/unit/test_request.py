"""Unit tests for request building."""

import pytest

from victoury_mcp.client.credentials import Credentials
from victoury_mcp.client.errors import RequestConstructionError
from victoury_mcp.client.operations import OPERATIONS, get_operation
from victoury_mcp.client.request import build_request, normalize_base_url

CREDS = Credentials("https://api.victoury.com/v2", "acme", "sess-1")


def test_version_prefix_not_duplicated():
    assert normalize_base_url("https://api.victoury.com/v2", True) == "https://api.victoury.com/v2"
    assert normalize_base_url("https://api.victoury.com/v2/", True) == "https://api.victoury.com/v2"


def test_version_prefix_appended_when_missing():
    assert normalize_base_url("https://api.victoury.com", True) == "https://api.victoury.com/v2"


def test_version_strip_removes_only_trailing_segment():
    assert normalize_base_url("https://api.victoury.com/v2", False) == "https://api.victoury.com"
    assert normalize_base_url("https://host/v2/api/v2", False) == "https://host/v2/api"
    assert normalize_base_url("https://api.victoury.com", False) == "https://api.victoury.com"


def test_query_payload_for_listing():
    req = build_request(OPERATIONS["list_products"], CREDS, {"page": 1, "limit": 10, "category": "tours"})
    assert req.method == "GET"
    assert req.url == "https://api.victoury.com/v2/products"
    assert req.params == {"page": 1, "limit": 10, "category": "tours"}
    assert req.json is None


def test_identity_headers():
    req = build_request(OPERATIONS["get_api_health"], CREDS, {})
    assert req.headers["Tenant"] == "acme"
    assert req.headers["Session-Id"] == "sess-1"
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["Accept"] == "application/json"
    assert "Authorization" not in req.headers


def test_monitoring_endpoints_skip_version_segment():
    assert build_request(OPERATIONS["get_api_info"], CREDS, {}).url == "https://api.victoury.com/info"
    assert build_request(OPERATIONS["get_api_health"], CREDS, {}).url == "https://api.victoury.com/health"


def test_path_params_encoded_and_removed_from_body():
    req = build_request(
        OPERATIONS["update_booking"],
        CREDS,
        {"bookingId": "a/b c", "status": "confirmed"},
    )
    assert req.method == "PATCH"
    assert req.url == "https://api.victoury.com/v2/bookings/a%2Fb%20c"
    assert req.json == {"status": "confirmed"}


def test_deal_endpoint_keeps_json_suffix():
    req = build_request(OPERATIONS["get_deal_details"], CREDS, {"dealId": "42"})
    assert req.url == "https://api.victoury.com/v2/deals/42.json"


def test_download_sends_format_as_query():
    req = build_request(OPERATIONS["download_document"], CREDS, {"documentId": "d1", "format": "pdf"})
    assert req.url.endswith("/documents/d1/download")
    assert req.params == {"format": "pdf"}


def test_search_deals_alias():
    assert get_operation("search_deals") is OPERATIONS["search_publish_deals"]


def test_relative_base_url_rejected():
    with pytest.raises(RequestConstructionError):
        build_request(OPERATIONS["list_products"], Credentials("api.victoury.com", "t", "s"), {})


def test_missing_path_param_rejected():
    with pytest.raises(RequestConstructionError):
        build_request(OPERATIONS["get_product_details"], CREDS, {})


def test_non_ascii_identity_header_rejected():
    with pytest.raises(RequestConstructionError) as exc:
        build_request(OPERATIONS["get_api_health"], Credentials(CREDS.base_url, "tenant-é€", "s"), {})
    assert "Tenant" in exc.value.message


def test_update_deal_uses_patch():
    req = build_request(OPERATIONS["update_deal"], CREDS, {"dealId": "42", "status": "closed"})
    assert req.method == "PATCH"
    assert req.url == "https://api.victoury.com/v2/deals/42.json"
    assert req.json == {"status": "closed"}
