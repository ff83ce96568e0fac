"""Tool registry over the Victoury operation catalog."""

from victoury_mcp.tools.registry import ToolDefinition, ToolRegistry, build_registry

__all__ = ["ToolDefinition", "ToolRegistry", "build_registry"]
