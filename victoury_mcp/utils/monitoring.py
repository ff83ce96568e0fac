"""Prometheus metrics for tool calls and upstream requests."""

from __future__ import annotations

from prometheus_client import Counter, Histogram, start_http_server

# Tool executions: total by tool name and status
TOOL_EXECUTIONS = Counter(
    "victoury_mcp_tool_executions_total",
    "Total tool executions",
    ["tool_name", "status"],
)

# Upstream request duration in seconds
UPSTREAM_LATENCY = Histogram(
    "victoury_mcp_upstream_latency_seconds",
    "Victoury API request duration in seconds",
    ["operation", "outcome"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)


def start_metrics_server(port: int = 9090) -> None:
    """Start Prometheus HTTP server for scraping. Call from main when enabled."""
    start_http_server(port)


def record_tool_execution(tool_name: str, success: bool) -> None:
    status = "success" if success else "failure"
    TOOL_EXECUTIONS.labels(tool_name=tool_name, status=status).inc()


def record_upstream_latency(operation: str, outcome: str, duration_seconds: float) -> None:
    UPSTREAM_LATENCY.labels(operation=operation, outcome=outcome).observe(duration_seconds)
