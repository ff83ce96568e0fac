"""Unit tests for the plain HTTP interface."""

import httpx
from fastapi.testclient import TestClient

from victoury_mcp.client.api_client import VictouryClient
from victoury_mcp.client.operations import OPERATIONS
from victoury_mcp.interfaces.api import create_app
from victoury_mcp.interfaces.sse import create_sse_app
from victoury_mcp.tools.registry import ToolRegistry

DEFAULTS = {"base_url": "https://api.victoury.com/v2", "tenant": "acme", "session_id": "sess-1"}


def _handler(request):
    if request.url.path == "/v2/products/p1":
        return httpx.Response(200, json={"id": "p1", "tenant": request.headers["Tenant"]})
    return httpx.Response(404, json={"message": "not found"})


def _registry():
    client = VictouryClient(defaults=DEFAULTS, transport=httpx.MockTransport(_handler))
    return ToolRegistry.from_client(client)


def _client():
    return TestClient(create_app(_registry()))


def test_health():
    body = _client().get("/health").json()
    assert body["status"] == "healthy"
    assert body["service"] == "victoury-mcp"
    assert "timestamp" in body


def test_list_tools():
    body = _client().get("/tools").json()
    assert body["success"] is True
    assert len(body["tools"]) == len(OPERATIONS)


def test_call_tool_with_credentials():
    response = _client().post(
        "/tools/get_product_details",
        json={"arguments": {"productId": "p1"}, "credentials": {"tenant": "t2"}},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"id": "p1", "tenant": "t2"}}


def test_call_tool_validation_failure_is_envelope():
    response = _client().post("/tools/get_product_details", json={"arguments": {}})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["details"] == [{"field": "productId", "message": "is required"}]


def test_unknown_tool_is_404_envelope():
    response = _client().post("/tools/book_flight", json={})
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "unknown_operation"


def test_batch():
    response = _client().post("/batch", json={
        "operations": [
            {"tool": "get_product_details", "arguments": {"productId": "p1"}},
            {"tool": "get_deal_details", "arguments": {"dealId": "x"}},
        ],
        "parallel": True,
    })
    body = response.json()
    assert body["success"] is True
    assert [r["tool"] for r in body["results"]] == ["get_product_details", "get_deal_details"]
    assert body["results"][0]["data"]["id"] == "p1"
    assert body["results"][1]["error"]["code"] == "404"


def test_mcp_json_rpc():
    response = _client().post("/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "tools/list"})
    body = response.json()
    assert body["id"] == 7
    assert len(body["result"]["tools"]) == len(OPERATIONS)


def test_mcp_rejects_non_object():
    response = _client().post("/mcp", json=[1, 2])
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32600


def test_sse_app_health():
    body = TestClient(create_sse_app(_registry())).get("/health").json()
    assert body["status"] == "healthy"
    assert body["transport"] == "sse"


def test_mcp_tools_call_with_list_name_is_structured_rejection():
    response = _client().post("/mcp", json={"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": {"name": ["x"]}})
    assert response.status_code == 200
    assert response.json()["error"]["code"] == -32602
