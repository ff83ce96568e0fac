"""Build outbound HTTP requests from an operation, credentials and validated arguments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlsplit

from victoury_mcp.client.credentials import Credentials
from victoury_mcp.client.errors import RequestConstructionError
from victoury_mcp.client.operations import OperationDescriptor

DEFAULT_VERSION = "v2"
_VERSION_SUFFIX = re.compile(r"/v\d+$")
_BODY_METHODS = frozenset({"POST", "PATCH", "PUT"})


@dataclass(frozen=True)
class PreparedRequest:
    """Everything needed to send one call; local to that call."""

    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, Any] = field(default_factory=dict)
    json: dict[str, Any] | None = None


def normalize_base_url(base_url: str, use_version_prefix: bool) -> str:
    """
    Apply the version-segment convention to a base URL.

    With the prefix wanted, a trailing ``/v<digits>`` is kept as-is, otherwise
    ``/v2`` is appended. Without it (``/info``, ``/health``), exactly one
    trailing version segment is stripped. Both directions are idempotent.

    Example:
        >>> normalize_base_url("https://api.example.com/v3", False)
        'https://api.example.com'
    """
    base = base_url.rstrip("/")
    if use_version_prefix:
        if _VERSION_SUFFIX.search(base):
            return base
        return f"{base}/{DEFAULT_VERSION}"
    return _VERSION_SUFFIX.sub("", base)


def _encode_segment(name: str, value: Any) -> str:
    if value is None or (isinstance(value, str) and not value):
        raise RequestConstructionError(f"Missing path parameter: {name}")
    try:
        return quote(str(value), safe="")
    except UnicodeEncodeError as e:
        raise RequestConstructionError(f"Cannot encode path parameter {name}: {e}") from e


def build_request(
    operation: OperationDescriptor,
    credentials: Credentials,
    arguments: dict[str, Any],
) -> PreparedRequest:
    """Compose method, full URL, headers and payload for a single call."""
    parts = urlsplit(credentials.base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise RequestConstructionError(f"Base URL must be an absolute http(s) URL: {credentials.base_url}")

    path = operation.endpoint
    for name in operation.path_params:
        path = path.replace("{" + name + "}", _encode_segment(name, arguments.get(name)))

    remaining = {
        key: value
        for key, value in arguments.items()
        if key not in operation.path_params and value is not None
    }
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        **credentials.headers(),
    }
    for name, value in headers.items():
        if not value.isascii():
            raise RequestConstructionError(f"Header {name} must be ASCII")
    url = normalize_base_url(credentials.base_url, operation.uses_version_prefix) + path

    if operation.payload == "body" and operation.method in _BODY_METHODS:
        return PreparedRequest(method=operation.method, url=url, headers=headers, json=remaining)
    if operation.payload == "query":
        return PreparedRequest(method=operation.method, url=url, headers=headers, params=remaining)
    return PreparedRequest(method=operation.method, url=url, headers=headers)
