"""MCP adapter: expose the tool registry over MCP and answer JSON-RPC tool requests."""

from __future__ import annotations

import json
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from victoury_mcp import __version__
from victoury_mcp.client.envelope import Envelope
from victoury_mcp.tools.registry import ToolRegistry
from victoury_mcp.utils.logging import get_logger

logger = get_logger(__name__)

SERVER_NAME = "victoury-mcp"
PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INVALID_REQUEST = -32600


class ToolCallFailed(Exception):
    """Raised from the SDK call handler so the result is flagged isError; the message is the envelope JSON."""


def format_envelope(envelope: Envelope) -> str:
    return json.dumps(envelope.to_dict(), indent=2, default=str)


class MCPAdapter:
    """
    Adapter that makes the registry MCP-compatible.

    Serves two callers: the official SDK server (stdio and SSE transports)
    through build_server(), and the plain HTTP /mcp route through
    handle_mcp_request().
    """

    def __init__(self, tool_registry: ToolRegistry) -> None:
        self.registry = tool_registry

    def export_mcp_manifest(self) -> dict[str, Any]:
        """Export tools in MCP format (version, tools with name, description, inputSchema)."""
        return {"version": __version__, "tools": self.registry.get_tool_schemas()}

    def call_result(self, envelope: Envelope) -> dict[str, Any]:
        result: dict[str, Any] = {"content": [{"type": "text", "text": format_envelope(envelope)}]}
        if not envelope.success:
            result["isError"] = True
        return result

    async def handle_mcp_request(self, request: dict[str, Any]) -> dict[str, Any]:
        """
        Answer one JSON-RPC 2.0 request in-process.

        Supports initialize, ping, tools/list and tools/call. Tool failures are
        results with isError set; only protocol problems become JSON-RPC errors.
        """
        request_id = request.get("id")
        method = request.get("method", "")
        params = request.get("params") or {}
        if not isinstance(params, dict):
            return _rpc_error(request_id, INVALID_PARAMS, "params must be an object")

        if method == "initialize":
            return _rpc_result(request_id, {
                "protocolVersion": params.get("protocolVersion") or PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
            })
        if method == "ping":
            return _rpc_result(request_id, {})
        if method == "tools/list":
            return _rpc_result(request_id, {"tools": self.registry.get_tool_schemas()})
        if method != "tools/call":
            return _rpc_error(request_id, METHOD_NOT_FOUND, f"Unknown method: {method}")

        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(name, str) or not name:
            return _rpc_error(request_id, INVALID_PARAMS, "Missing tool name")
        if not isinstance(arguments, dict):
            return _rpc_error(request_id, INVALID_PARAMS, "arguments must be an object")
        envelope = await self.registry.execute_tool(name, arguments)
        return _rpc_result(request_id, self.call_result(envelope))

    def build_server(self) -> Server:
        """Build an SDK low-level Server whose tools are the registry's tools."""
        server: Server = Server(SERVER_NAME, version=__version__)

        @server.list_tools()
        async def list_tools() -> list[Tool]:
            return [
                Tool(name=s["name"], description=s["description"], inputSchema=s["inputSchema"])
                for s in self.registry.get_tool_schemas()
            ]

        # Arguments are validated by the registry so errors come back as envelopes.
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
            envelope = await self.registry.execute_tool(name, arguments or {})
            text = format_envelope(envelope)
            if not envelope.success:
                raise ToolCallFailed(text)
            return [TextContent(type="text", text=text)]

        return server


def _rpc_result(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _rpc_error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
