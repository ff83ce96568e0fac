"""Configuration loading from YAML and environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_API_URL = "https://api.victoury.com/v2"
DEFAULT_TIMEOUT_SECONDS = 30.0


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load server config from YAML file with optional env var overrides.

    Args:
        config_path: Path to server_config.yaml. Defaults to config/server_config.yaml.

    Returns:
        Nested config dict.

    Example:
        >>> cfg = load_config()
        >>> cfg["victoury"]["timeout_seconds"]
        30.0
    """
    path = get_config_path(config_path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    else:
        config = _default_config()
    victoury = config.setdefault("victoury", {})
    # Env overrides
    if api_url := os.getenv("VICTOURY_API_URL"):
        victoury["api_url"] = api_url
    if tenant := os.getenv("VICTOURY_TENANT"):
        victoury["tenant"] = tenant
    if session_id := os.getenv("VICTOURY_SESSION_ID"):
        victoury["session_id"] = session_id
    if timeout_ms := os.getenv("VICTOURY_API_TIMEOUT"):
        victoury["timeout_seconds"] = _parse_timeout_ms(timeout_ms)
    interfaces = config.setdefault("interfaces", {})
    if http_port := os.getenv("HTTP_PORT"):
        interfaces.setdefault("http", {})["port"] = int(http_port)
    if mcp_port := os.getenv("MCP_PORT"):
        interfaces.setdefault("sse", {})["port"] = int(mcp_port)
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level
    return config


def get_config_path(config_path: str | Path | None = None) -> Path:
    """Return the path to the config file used for load."""
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent.parent / "config" / "server_config.yaml"
    return Path(config_path)


def default_credentials(config: dict[str, Any]) -> dict[str, str | None]:
    """Process-wide credential defaults, keyed the way per-call credentials are."""
    victoury = config.get("victoury", {})
    return {
        "base_url": victoury.get("api_url") or None,
        "tenant": victoury.get("tenant") or None,
        "session_id": victoury.get("session_id") or None,
    }


def request_timeout(config: dict[str, Any]) -> float:
    """Outbound request timeout in seconds."""
    value = config.get("victoury", {}).get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    return float(value) if value else DEFAULT_TIMEOUT_SECONDS


def _parse_timeout_ms(raw: str) -> float:
    """VICTOURY_API_TIMEOUT is expressed in milliseconds."""
    try:
        millis = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return millis / 1000 if millis > 0 else DEFAULT_TIMEOUT_SECONDS


def _default_config() -> dict[str, Any]:
    """Default config when no file is present."""
    return {
        "victoury": {
            "api_url": DEFAULT_API_URL,
            "tenant": None,
            "session_id": None,
            "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        },
        "interfaces": {
            "http": {"host": "0.0.0.0", "port": 3000},
            "sse": {"host": "0.0.0.0", "port": 3001},
        },
        "logging": {"level": "INFO", "json": False},
    }
