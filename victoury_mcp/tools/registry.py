"""Tool registry: the Victoury operation catalog exposed as MCP tools, with dispatch and batching."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

from victoury_mcp.client.api_client import VictouryClient
from victoury_mcp.client.credentials import canonical_credentials
from victoury_mcp.client.envelope import Envelope
from victoury_mcp.client.errors import INTERNAL_ERROR, NETWORK_ERROR, UnknownOperation, ValidationFailure
from victoury_mcp.client.operations import OPERATIONS, TOOL_ALIASES
from victoury_mcp.client.params import input_schema
from victoury_mcp.utils.config import default_credentials, load_config, request_timeout
from victoury_mcp.utils.logging import get_logger
from victoury_mcp.utils.monitoring import record_tool_execution

logger = get_logger(__name__)

ToolHandler = Callable[[dict[str, Any], Mapping[str, Any] | None], Awaitable[Envelope]]

CREDENTIALS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "description": "Optional per-call credentials; missing fields fall back to server defaults",
    "properties": {
        "apiUrl": {"type": "string", "description": "Victoury API base URL, e.g. https://api.victoury.com/v2"},
        "tenant": {"type": "string", "description": "Tenant identifier"},
        "sessionId": {"type": "string", "description": "Session identifier"},
    },
}


@dataclass
class ToolDefinition:
    """Metadata and handler for a single tool."""

    name: str
    description: str
    handler: ToolHandler
    parameters_schema: dict[str, Any] = field(default_factory=dict)


class ToolRegistry:
    """
    Registry of Victoury tools with timeout and error handling.

    Every execution returns an Envelope; unknown tools, validation problems
    and upstream failures all come back as failed envelopes.

    Example:
        >>> registry = ToolRegistry.from_client(VictouryClient(defaults=...))
        >>> envelope = await registry.execute_tool("list_products", {"limit": 10})
    """

    def __init__(self, timeout: float = 35.0) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._aliases: dict[str, str] = {}
        self.timeout = timeout

    @classmethod
    def from_client(cls, client: VictouryClient, timeout: float | None = None) -> ToolRegistry:
        """Register every catalog operation against one client."""
        # Guard timeout sits a little above the HTTP timeout so the client classifies first.
        registry = cls(timeout=timeout if timeout is not None else client.timeout + 5.0)
        for operation in OPERATIONS.values():
            registry.register(
                name=operation.name,
                description=operation.description,
                parameters_schema=input_schema(operation.params_model),
                handler=_client_handler(client, operation.name),
            )
        for alias, target in TOOL_ALIASES.items():
            registry.add_alias(alias, target)
        return registry

    def register(
        self,
        name: str,
        description: str,
        handler: ToolHandler,
        parameters_schema: dict[str, Any] | None = None,
    ) -> None:
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            handler=handler,
            parameters_schema=parameters_schema or {"type": "object", "properties": {}},
        )

    def add_alias(self, alias: str, target: str) -> None:
        self._aliases[alias] = target

    def resolve_name(self, name: str) -> str:
        return self._aliases.get(name, name)

    def has_tool(self, name: str) -> bool:
        return self.resolve_name(name) in self._tools

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Return MCP tool definitions (name, description, inputSchema)."""
        schemas = []
        for defn in self._tools.values():
            schema = dict(defn.parameters_schema)
            schema["properties"] = {**schema.get("properties", {}), "credentials": CREDENTIALS_SCHEMA}
            schemas.append({"name": defn.name, "description": defn.description, "inputSchema": schema})
        return schemas

    async def execute_tool(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        credentials: Mapping[str, Any] | None = None,
    ) -> Envelope:
        """
        Execute a tool by name with a guard timeout and structured error handling.

        Credentials may come as the explicit argument or inside ``arguments``
        under ``credentials``; the explicit argument wins field by field.
        """
        resolved = self.resolve_name(name) if isinstance(name, str) else None
        if resolved not in self._tools:
            logger.warning("tool_not_found", tool_name=name)
            record_tool_execution(str(name), False)
            return Envelope.from_error(UnknownOperation(str(name)))
        if arguments is not None and not isinstance(arguments, Mapping):
            logger.warning("tool_invalid_arguments", tool_name=resolved, type=type(arguments).__name__)
            record_tool_execution(resolved, False)
            return Envelope.from_error(ValidationFailure([("arguments", "must be an object")]))
        args = dict(arguments or {})
        call_credentials = _merge_credentials(args.pop("credentials", None), credentials)
        start = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self._tools[resolved].handler(args, call_credentials),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("tool_timeout", tool_name=resolved, timeout=self.timeout)
            result = Envelope.fail(NETWORK_ERROR, f"Tool timed out after {self.timeout}s")
        except Exception as e:
            logger.exception("tool_error", tool_name=resolved, error=str(e))
            result = Envelope.fail(INTERNAL_ERROR, str(e))
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "tool_executed",
            tool_name=resolved,
            success=result.success,
            error_code=result.error.code if result.error else None,
            execution_time_ms=elapsed_ms,
        )
        record_tool_execution(resolved, result.success)
        return result

    async def execute_batch(
        self,
        operations: list[Mapping[str, Any]],
        credentials: Mapping[str, Any] | None = None,
        parallel: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Run several tool calls and return one result per operation, in input order.

        Each operation is ``{"tool": name, "arguments": {...}, "credentials": {...}}``;
        its own credentials override the batch-level ones field by field.
        """

        async def run_one(op: Mapping[str, Any]) -> dict[str, Any]:
            tool = str(op.get("tool") or "")
            envelope = await self.execute_tool(
                tool,
                op.get("arguments") or {},
                _merge_credentials(credentials, op.get("credentials")),
            )
            return {"tool": tool, **envelope.to_dict()}

        if parallel:
            return list(await asyncio.gather(*(run_one(op) for op in operations)))
        return [await run_one(op) for op in operations]


def _client_handler(client: VictouryClient, name: str) -> ToolHandler:
    async def handler(arguments: dict[str, Any], credentials: Mapping[str, Any] | None) -> Envelope:
        return await client.call(name, arguments, credentials)

    return handler


def _merge_credentials(
    base: Mapping[str, Any] | None,
    override: Mapping[str, Any] | None,
) -> dict[str, Any] | None:
    if not isinstance(base, Mapping):
        base = None
    if not isinstance(override, Mapping):
        override = None
    if base is None and override is None:
        return None
    return {**canonical_credentials(base), **canonical_credentials(override)}


def build_registry(config: dict[str, Any] | None = None) -> ToolRegistry:
    """Registry backed by a client whose defaults come from config and environment."""
    if config is None:
        config = load_config()
    client = VictouryClient(defaults=default_credentials(config), timeout=request_timeout(config))
    return ToolRegistry.from_client(client)
