"""Uniform response envelope and the normalizer that produces it."""

from __future__ import annotations

import base64
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from victoury_mcp.client.errors import (
    NetworkError,
    RemoteHTTPError,
    RequestConstructionError,
    VictouryError,
)
from victoury_mcp.client.operations import OperationDescriptor


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: list[dict[str, Any]] | None = None


class Pagination(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: int | None = None
    limit: int | None = None
    total: int | None = None
    totalPages: int | None = None


class Envelope(BaseModel):
    """
    Structured result of every client operation.

    Attributes:
        success: Whether the call completed without error.
        data: Remote payload (operation-specific).
        error: Code and message when success is False.
        pagination: Paging info passed through from listing endpoints.
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Any = None
    error: ErrorInfo | None = None
    pagination: Pagination | None = None

    @model_validator(mode="after")
    def _error_matches_success(self) -> Envelope:
        if self.success:
            self.error = None
        elif self.error is None:
            self.error = ErrorInfo(code="remote_error", message="Remote service reported failure")
        return self

    @classmethod
    def ok(cls, data: Any = None, pagination: dict[str, Any] | None = None) -> Envelope:
        return cls(success=True, data=data, pagination=pagination)

    @classmethod
    def fail(cls, code: str, message: str, details: list[dict[str, Any]] | None = None) -> Envelope:
        return cls(success=False, error=ErrorInfo(code=code, message=message, details=details))

    @classmethod
    def from_error(cls, error: VictouryError) -> Envelope:
        return cls.fail(error.code, error.message, error.details())

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with unset top-level members dropped; nulls inside data are kept."""
        dumped = self.model_dump()
        if self.error is not None:
            dumped["error"] = self.error.model_dump(exclude_none=True)
        if self.pagination is not None:
            dumped["pagination"] = self.pagination.model_dump(exclude_none=True)
        return {key: value for key, value in dumped.items() if value is not None}


def _is_envelope(body: Any) -> bool:
    return isinstance(body, dict) and isinstance(body.get("success"), bool)


def _wrap_bare(body: Any, operation: OperationDescriptor) -> Any:
    """Put declared response fields first (null when absent), keep everything else."""
    if not operation.response_fields or not isinstance(body, dict):
        return body
    mapped = {name: body.get(name) for name in operation.response_fields}
    mapped.update({key: value for key, value in body.items() if key not in mapped})
    return mapped


def envelope_from_response(response: httpx.Response, operation: OperationDescriptor) -> Envelope:
    """Normalize a 2xx response into an Envelope."""
    if not response.content:
        return Envelope.ok()
    try:
        body = response.json()
    except ValueError:
        return Envelope.ok(_raw_content(response))
    if _is_envelope(body):
        return _coerce_envelope(body)
    return Envelope.ok(_wrap_bare(body, operation))


def _coerce_envelope(body: dict[str, Any]) -> Envelope:
    """Pass an envelope-shaped body through, tolerating loosely typed error/pagination."""
    try:
        return Envelope.model_validate(body)
    except ValidationError:
        pass
    payload = dict(body)
    error = payload.pop("error", None)
    pagination = payload.pop("pagination", None)
    if isinstance(error, str):
        error = {"code": "remote_error", "message": error}
    elif isinstance(error, dict):
        error = {
            "code": str(error.get("code", "remote_error")),
            "message": str(error.get("message", "")),
        }
    else:
        error = None
    if not isinstance(pagination, dict):
        pagination = None
    try:
        return Envelope.model_validate({**payload, "error": error, "pagination": pagination})
    except ValidationError:
        return Envelope.model_validate({**payload, "error": error, "pagination": None})


def _raw_content(response: httpx.Response) -> dict[str, Any]:
    content_type = response.headers.get("content-type", "application/octet-stream")
    if content_type.startswith("text/") or "xml" in content_type or "html" in content_type:
        return {"contentType": content_type, "encoding": "text", "content": response.text}
    return {
        "contentType": content_type,
        "encoding": "base64",
        "content": base64.b64encode(response.content).decode("ascii"),
    }


def remote_error(response: httpx.Response) -> RemoteHTTPError:
    """Build a RemoteHTTPError from a non-2xx response, preferring the remote message."""
    body: Any = None
    message = ""
    try:
        body = response.json()
    except ValueError:
        body = response.text
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(body.get("message"), str):
            message = body["message"]
        elif isinstance(error, str):
            message = error
        elif isinstance(error, dict) and isinstance(error.get("message"), str):
            message = error["message"]
    elif isinstance(body, str):
        message = body.strip()
    if not message:
        message = response.reason_phrase or f"HTTP {response.status_code}"
    return RemoteHTTPError(response.status_code, message, body)


def classify_transport_error(exc: Exception) -> VictouryError:
    """Map an httpx failure to network_error (no response) or request_error (never sent)."""
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError(f"Network error: request timed out ({exc.__class__.__name__})")
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError, httpx.ProxyError)):
        return NetworkError(f"Network error: no response received from Victoury API ({exc})")
    return RequestConstructionError(f"Request error: {exc}")
