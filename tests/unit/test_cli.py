"""Unit tests for command-line parsing."""

import pytest

from victoury_mcp.interfaces.cli import build_parser


def test_defaults_to_stdio():
    args = build_parser().parse_args([])
    assert args.transport == "stdio"
    assert args.port is None
    assert args.json_logs is False


def test_http_transport_options():
    args = build_parser().parse_args(["--transport", "http", "--port", "8080", "--log-level", "DEBUG"])
    assert args.transport == "http"
    assert args.port == 8080
    assert args.log_level == "DEBUG"


def test_unknown_transport_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--transport", "websocket"])
