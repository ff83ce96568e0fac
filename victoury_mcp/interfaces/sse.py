"""SSE transport: the MCP server over Server-Sent Events, served by FastAPI."""

from __future__ import annotations

from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from mcp.server.sse import SseServerTransport
from starlette.responses import Response

from victoury_mcp import __version__
from victoury_mcp.mcp.adapter import SERVER_NAME, MCPAdapter
from victoury_mcp.tools.registry import ToolRegistry, build_registry
from victoury_mcp.utils.logging import get_logger

logger = get_logger(__name__)

MESSAGES_PATH = "/messages/"


def create_sse_app(registry: ToolRegistry | None = None) -> FastAPI:
    """FastAPI app with GET /sse for the event stream and POST /messages/ for client messages."""
    server = MCPAdapter(registry or build_registry()).build_server()
    transport = SseServerTransport(MESSAGES_PATH)
    app = FastAPI(title="Victoury MCP SSE", version=__version__)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": SERVER_NAME,
            "transport": "sse",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/sse")
    async def sse(request: Request) -> Response:
        logger.info("sse_client_connected", client=request.client.host if request.client else None)
        async with transport.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("sse_client_disconnected")
        return Response()

    app.mount(MESSAGES_PATH, app=transport.handle_post_message)
    return app


def run_sse(host: str = "0.0.0.0", port: int = 3001, registry: ToolRegistry | None = None) -> None:
    """Run the SSE server."""
    logger.info("sse_server_starting", host=host, port=port)
    uvicorn.run(create_sse_app(registry), host=host, port=port, log_level="info")
