"""Plain HTTP interface: tool listing, single calls, batches and in-process JSON-RPC."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from victoury_mcp import __version__
from victoury_mcp.mcp.adapter import INVALID_REQUEST, SERVER_NAME, MCPAdapter
from victoury_mcp.tools.registry import ToolRegistry, build_registry
from victoury_mcp.utils.logging import get_logger

logger = get_logger(__name__)


class ToolCallRequest(BaseModel):
    arguments: dict[str, Any] = Field(default_factory=dict)
    credentials: dict[str, Any] | None = None


class BatchOperation(BaseModel):
    tool: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    credentials: dict[str, Any] | None = None


class BatchRequest(BaseModel):
    operations: list[BatchOperation]
    credentials: dict[str, Any] | None = None
    parallel: bool = False


def create_app(registry: ToolRegistry | None = None) -> FastAPI:
    """Build the FastAPI app around a registry (defaults to one built from config)."""
    registry = registry or build_registry()
    adapter = MCPAdapter(registry)
    app = FastAPI(title="Victoury MCP HTTP API", version=__version__)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": SERVER_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/tools")
    async def list_tools() -> dict[str, Any]:
        return {"success": True, "tools": registry.get_tool_schemas()}

    @app.post("/tools/{tool_name}")
    async def call_tool(tool_name: str, req: ToolCallRequest | None = None) -> JSONResponse:
        req = req or ToolCallRequest()
        envelope = await registry.execute_tool(tool_name, req.arguments, req.credentials)
        status = 200 if registry.has_tool(tool_name) else 404
        return JSONResponse(status_code=status, content=envelope.to_dict())

    @app.post("/batch")
    async def batch(req: BatchRequest) -> dict[str, Any]:
        logger.info("batch_started", operations=len(req.operations), parallel=req.parallel)
        results = await registry.execute_batch(
            [op.model_dump(exclude_none=True) for op in req.operations],
            credentials=req.credentials,
            parallel=req.parallel,
        )
        return {"success": True, "results": results}

    @app.post("/mcp")
    async def mcp(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            return JSONResponse(
                status_code=400,
                content={"jsonrpc": "2.0", "id": None, "error": {"code": INVALID_REQUEST, "message": "Invalid JSON-RPC request"}},
            )
        return JSONResponse(content=await adapter.handle_mcp_request(payload))

    return app


def run_api(host: str = "0.0.0.0", port: int = 3000, registry: ToolRegistry | None = None) -> None:
    """Run the HTTP server."""
    logger.info("http_server_starting", host=host, port=port)
    uvicorn.run(create_app(registry), host=host, port=port, log_level="info")
