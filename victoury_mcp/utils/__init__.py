"""Shared utilities."""

from victoury_mcp.utils.config import load_config
from victoury_mcp.utils.logging import setup_logging

__all__ = ["load_config", "setup_logging"]
