"""MCP protocol adapter."""

from victoury_mcp.mcp.adapter import MCPAdapter

__all__ = ["MCPAdapter"]
