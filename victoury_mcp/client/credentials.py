"""Per-call credential resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from victoury_mcp.client.errors import CredentialMissing

# Accepted spellings for each field in call-supplied credentials.
_ALIASES: dict[str, tuple[str, ...]] = {
    "base_url": ("base_url", "apiUrl", "baseURL", "baseUrl", "url"),
    "tenant": ("tenant",),
    "session_id": ("session_id", "sessionId"),
}


@dataclass(frozen=True)
class Credentials:
    """Fully resolved identity for one outbound call."""

    base_url: str
    tenant: str
    session_id: str

    def headers(self) -> dict[str, str]:
        return {"Tenant": self.tenant, "Session-Id": self.session_id}


def _pick(source: Mapping[str, Any] | None, field: str) -> str | None:
    if not source:
        return None
    for key in _ALIASES[field]:
        value = source.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def resolve_credentials(
    override: Mapping[str, Any] | Credentials | None,
    defaults: Mapping[str, Any] | Credentials | None = None,
) -> Credentials:
    """
    Resolve base URL, tenant and session id field by field.

    Order per field: call-supplied value, then process default. A field that
    resolves to nothing raises CredentialMissing naming it. Neither input is
    modified; the result is a new frozen object.

    Example:
        >>> resolve_credentials({"tenant": "t2"}, {"base_url": "https://x/v2", "tenant": "t1", "session_id": "s"}).tenant
        't2'
    """
    override_map = _as_mapping(override)
    defaults_map = _as_mapping(defaults)
    resolved: dict[str, str] = {}
    for field in ("base_url", "tenant", "session_id"):
        value = _pick(override_map, field) or _pick(defaults_map, field)
        if value is None:
            raise CredentialMissing(field)
        resolved[field] = value
    return Credentials(**resolved)


def _as_mapping(value: Mapping[str, Any] | Credentials | None) -> Mapping[str, Any] | None:
    if isinstance(value, Credentials):
        return {"base_url": value.base_url, "tenant": value.tenant, "session_id": value.session_id}
    return value


def canonical_credentials(source: Mapping[str, Any] | None) -> dict[str, str]:
    """Collapse accepted spellings into base_url/tenant/session_id, dropping blanks."""
    canonical: dict[str, str] = {}
    for field in _ALIASES:
        value = _pick(source, field)
        if value is not None:
            canonical[field] = value
    return canonical
