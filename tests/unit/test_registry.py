"""Unit tests for the tool registry."""

import asyncio

import httpx
import pytest

from victoury_mcp.client.api_client import VictouryClient
from victoury_mcp.client.envelope import Envelope
from victoury_mcp.client.operations import OPERATIONS
from victoury_mcp.tools.registry import ToolRegistry

DEFAULTS = {"base_url": "https://api.victoury.com/v2", "tenant": "acme", "session_id": "sess-1"}


def _echo(request):
    if request.url.path.endswith("/missing"):
        return httpx.Response(404, json={"message": "not found"})
    return httpx.Response(200, json={"success": True, "data": {
        "path": request.url.path,
        "tenant": request.headers["Tenant"],
        "session": request.headers["Session-Id"],
    }})


def _registry(handler=_echo):
    client = VictouryClient(defaults=DEFAULTS, transport=httpx.MockTransport(handler))
    return ToolRegistry.from_client(client)


def test_schemas_cover_catalog_and_include_credentials():
    schemas = _registry().get_tool_schemas()
    assert {s["name"] for s in schemas} == set(OPERATIONS)
    for schema in schemas:
        assert schema["inputSchema"]["type"] == "object"
        assert "credentials" in schema["inputSchema"]["properties"]


def test_guard_timeout_above_client_timeout():
    client = VictouryClient(defaults=DEFAULTS, timeout=10.0)
    assert ToolRegistry.from_client(client).timeout == 15.0


@pytest.mark.asyncio
async def test_unknown_tool():
    envelope = await _registry().execute_tool("book_flight", {})
    assert envelope.success is False
    assert envelope.error.code == "unknown_operation"
    assert envelope.error.message == "Unknown tool: book_flight"


@pytest.mark.asyncio
async def test_alias_dispatch():
    envelope = await _registry().execute_tool("search_deals", {})
    assert envelope.data["path"] == "/v2/deals/search"


@pytest.mark.asyncio
async def test_credentials_inside_arguments():
    envelope = await _registry().execute_tool(
        "get_booking_details",
        {"bookingId": "b1", "credentials": {"tenant": "other", "sessionId": "s2"}},
    )
    assert envelope.data == {"path": "/v2/bookings/b1", "tenant": "other", "session": "s2"}


@pytest.mark.asyncio
async def test_explicit_credentials_win_over_argument_credentials():
    envelope = await _registry().execute_tool(
        "get_booking_details",
        {"bookingId": "b1", "credentials": {"tenant": "from-args", "sessionId": "s-args"}},
        {"tenant": "explicit"},
    )
    assert envelope.data["tenant"] == "explicit"
    assert envelope.data["session"] == "s-args"


@pytest.mark.asyncio
async def test_guard_timeout_returns_network_error():
    async def slow(arguments, credentials):
        await asyncio.sleep(1)
        return Envelope.ok()

    registry = ToolRegistry(timeout=0.01)
    registry.register("slow", "Never finishes in time", slow)
    envelope = await registry.execute_tool("slow", {})
    assert envelope.error.code == "network_error"


@pytest.mark.asyncio
async def test_handler_exception_becomes_internal_error():
    async def broken(arguments, credentials):
        raise RuntimeError("boom")

    registry = ToolRegistry()
    registry.register("broken", "Always fails", broken)
    envelope = await registry.execute_tool("broken", {})
    assert envelope.to_dict() == {"success": False, "error": {"code": "internal_error", "message": "boom"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("parallel", [False, True])
async def test_batch_preserves_order_with_failures(parallel):
    operations = [
        {"tool": "get_product_details", "arguments": {"productId": "p1"}},
        {"tool": "view_document", "arguments": {"documentId": "missing"}},
        {"tool": "create_booking", "arguments": {"productId": "p1"}},
        {"tool": "get_customer_details", "arguments": {"customerId": "c1"}, "credentials": {"tenant": "op-tenant"}},
    ]
    results = await _registry().execute_batch(operations, credentials={"tenant": "batch-tenant"}, parallel=parallel)
    assert [r["tool"] for r in results] == [op["tool"] for op in operations]
    assert results[0]["success"] is True
    assert results[0]["data"]["tenant"] == "batch-tenant"
    assert results[1]["error"] == {"code": "404", "message": "not found"}
    assert results[2]["error"]["code"] == "validation_error"
    assert results[3]["data"]["tenant"] == "op-tenant"
    assert results[3]["data"]["session"] == "sess-1"


@pytest.mark.asyncio
async def test_non_object_arguments_are_validation_error():
    envelope = await _registry().execute_tool("list_products", "abc")
    assert envelope.error.code == "validation_error"
    assert envelope.error.details == [{"field": "arguments", "message": "must be an object"}]


@pytest.mark.asyncio
async def test_non_string_tool_name_is_unknown_operation():
    envelope = await _registry().execute_tool(["list_products"], {})
    assert envelope.error.code == "unknown_operation"


@pytest.mark.asyncio
async def test_non_ascii_credentials_are_request_error():
    envelope = await _registry().execute_tool("get_api_health", {"credentials": {"tenant": "tenant-é€"}})
    assert envelope.error.code == "request_error"
