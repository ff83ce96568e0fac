"""stdio transport: the MCP server over standard input/output."""

from __future__ import annotations

from mcp.server.stdio import stdio_server

from victoury_mcp.mcp.adapter import MCPAdapter
from victoury_mcp.tools.registry import ToolRegistry, build_registry
from victoury_mcp.utils.logging import get_logger

logger = get_logger(__name__)


async def run_stdio(registry: ToolRegistry | None = None) -> None:
    """Serve MCP on stdin/stdout until the client disconnects. Logging must go to stderr."""
    server = MCPAdapter(registry or build_registry()).build_server()
    async with stdio_server() as (read_stream, write_stream):
        logger.info("mcp_server_started", transport="stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("mcp_server_stopped", transport="stdio")
