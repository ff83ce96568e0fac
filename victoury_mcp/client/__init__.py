"""Victoury API client: validation, credential routing, request building, normalization."""

from victoury_mcp.client.api_client import VictouryClient
from victoury_mcp.client.credentials import Credentials, resolve_credentials
from victoury_mcp.client.envelope import Envelope
from victoury_mcp.client.operations import OPERATIONS, TOOL_ALIASES, get_operation

__all__ = [
    "Credentials",
    "Envelope",
    "OPERATIONS",
    "TOOL_ALIASES",
    "VictouryClient",
    "get_operation",
    "resolve_credentials",
]
