"""MCP server exposing the Victoury travel-booking API as tools."""

__version__ = "0.1.0"
