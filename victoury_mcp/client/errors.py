"""Error taxonomy for the Victoury API client.

Every error carries the ``code`` that ends up in ``Envelope.error.code``.
The client raises these internally and converts them into failed envelopes
at its public boundary.
"""

from __future__ import annotations

from typing import Any

NETWORK_ERROR = "network_error"
REQUEST_ERROR = "request_error"
VALIDATION_ERROR = "validation_error"
MISSING_CREDENTIAL = "missing_credential"
UNKNOWN_OPERATION = "unknown_operation"
INTERNAL_ERROR = "internal_error"


class VictouryError(Exception):
    """Base class for all client-side failures."""

    code = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> list[dict[str, Any]] | None:
        return None


class ValidationFailure(VictouryError):
    """One or more arguments failed validation; raised before any network call."""

    code = VALIDATION_ERROR

    def __init__(self, issues: list[tuple[str, str]]) -> None:
        self.issues = issues
        summary = ", ".join(f"{field}: {reason}" for field, reason in issues)
        super().__init__(f"Invalid parameters: {summary}")

    @property
    def fields(self) -> list[str]:
        return [field for field, _ in self.issues]

    def details(self) -> list[dict[str, Any]]:
        return [{"field": field, "message": reason} for field, reason in self.issues]


class CredentialMissing(VictouryError):
    """A required identity field could not be resolved."""

    code = MISSING_CREDENTIAL

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing credential: {field}")


class RemoteHTTPError(VictouryError):
    """The remote service answered with a non-2xx status."""

    def __init__(self, status: int, message: str, body: Any = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message)

    @property
    def code(self) -> str:  # type: ignore[override]
        return str(self.status)


class NetworkError(VictouryError):
    """The request was sent but no response arrived (timeout, DNS, reset)."""

    code = NETWORK_ERROR


class RequestConstructionError(VictouryError):
    """The request could not be built or handed to the transport."""

    code = REQUEST_ERROR


class UnknownOperation(VictouryError):
    code = UNKNOWN_OPERATION

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")
