"""Command-line entry point: pick a transport and serve the Victoury tools."""

from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path

from dotenv import load_dotenv

from victoury_mcp import __version__
from victoury_mcp.interfaces.stdio import run_stdio
from victoury_mcp.tools.registry import build_registry
from victoury_mcp.utils.config import load_config
from victoury_mcp.utils.logging import get_logger, setup_logging
from victoury_mcp.utils.monitoring import start_metrics_server

logger = get_logger(__name__)

TRANSPORTS = ("stdio", "sse", "http")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="victoury-mcp",
        description="Expose the Victoury travel-booking API as MCP tools.",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, default="stdio", help="Transport to serve (default: stdio)")
    parser.add_argument("--host", default=None, help="Bind address for sse/http")
    parser.add_argument("--port", type=int, default=None, help="Port for sse/http (defaults: MCP_PORT / HTTP_PORT)")
    parser.add_argument("--config", default=None, help="Path to server_config.yaml")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the victoury-mcp console script."""
    load_dotenv(Path.cwd() / ".env")
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    log_config = config.get("logging", {})
    setup_logging(
        level=args.log_level or log_config.get("level", "INFO"),
        json_logs=args.json_logs or bool(log_config.get("json", False)),
    )

    if metrics_port := os.getenv("PROMETHEUS_METRICS_PORT"):
        start_metrics_server(int(metrics_port))
        logger.info("metrics_server_started", port=int(metrics_port))

    registry = build_registry(config)
    if not config.get("victoury", {}).get("session_id"):
        logger.warning("no_default_session", hint="set VICTOURY_SESSION_ID or pass credentials per call")

    if args.transport == "stdio":
        asyncio.run(run_stdio(registry))
        return

    section = config.get("interfaces", {}).get(args.transport, {})
    host = args.host or section.get("host", "0.0.0.0")
    if args.transport == "sse":
        from victoury_mcp.interfaces.sse import run_sse

        run_sse(host=host, port=args.port or section.get("port", 3001), registry=registry)
    else:
        from victoury_mcp.interfaces.api import run_api

        run_api(host=host, port=args.port or section.get("port", 3000), registry=registry)


if __name__ == "__main__":
    main()
