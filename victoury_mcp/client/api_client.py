"""Async client for the Victoury travel-booking API.

Each call resolves its own credentials and builds its own request; nothing
call-specific is stored on the client, so one instance can serve concurrent
calls for different tenants.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping

import httpx

from victoury_mcp.client.credentials import Credentials, resolve_credentials
from victoury_mcp.client.envelope import (
    Envelope,
    classify_transport_error,
    envelope_from_response,
    remote_error,
)
from victoury_mcp.client.errors import RequestConstructionError, UnknownOperation, VictouryError
from victoury_mcp.client.operations import OperationDescriptor, get_operation
from victoury_mcp.client.params import validate_arguments
from victoury_mcp.client.request import PreparedRequest, build_request
from victoury_mcp.utils.logging import get_logger
from victoury_mcp.utils.monitoring import record_upstream_latency

logger = get_logger(__name__)

EventHook = Callable[[str, dict[str, Any]], None]
CredentialsInput = Mapping[str, Any] | Credentials | None


def log_event(event: str, fields: dict[str, Any]) -> None:
    """Default observability hook: debug-level structlog events."""
    logger.debug(event, **fields)


class VictouryClient:
    """
    One async method per tool; every method returns an Envelope and never raises.

    Example:
        >>> client = VictouryClient(defaults={"base_url": "https://api.victoury.com/v2", "tenant": "t", "session_id": "s"})
        >>> envelope = await client.list_products({"category": "tours"})
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | Credentials | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        event_hook: EventHook | None = None,
    ) -> None:
        # Read-only after construction.
        self._defaults = dict(defaults) if isinstance(defaults, Mapping) else defaults
        self.timeout = timeout
        self._transport = transport
        self._emit = event_hook or log_event

    async def call(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        credentials: CredentialsInput = None,
    ) -> Envelope:
        """Run any operation by tool name (aliases accepted)."""
        operation = get_operation(name)
        if operation is None:
            return Envelope.from_error(UnknownOperation(name))
        return await self._execute(operation, arguments, credentials)

    async def _execute(
        self,
        operation: OperationDescriptor,
        arguments: Mapping[str, Any] | None,
        credentials: CredentialsInput,
    ) -> Envelope:
        try:
            raw = dict(arguments) if isinstance(arguments, Mapping) else arguments
            validated = validate_arguments(operation.params_model, raw)
            resolved = resolve_credentials(credentials, self._defaults)
            request = build_request(operation, resolved, validated)
            return await self._send(operation, request)
        except VictouryError as e:
            self._emit("victoury_call_failed", {"operation": operation.name, "code": e.code, "error": e.message})
            return Envelope.from_error(e)

    async def _send(self, operation: OperationDescriptor, request: PreparedRequest) -> Envelope:
        self._emit(
            "victoury_request",
            {"operation": operation.name, "method": request.method, "url": request.url},
        )
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
                try:
                    outbound = http.build_request(
                        request.method,
                        request.url,
                        headers=request.headers,
                        params=request.params or None,
                        json=request.json,
                    )
                except (ValueError, TypeError) as e:
                    raise RequestConstructionError(f"Request error: {e}") from e
                response = await http.send(outbound)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = classify_transport_error(e)
            record_upstream_latency(operation.name, error.code, time.perf_counter() - start)
            raise error from e
        elapsed = time.perf_counter() - start
        self._emit(
            "victoury_response",
            {"operation": operation.name, "status": response.status_code, "elapsed_ms": elapsed * 1000},
        )
        if not response.is_success:
            record_upstream_latency(operation.name, str(response.status_code), elapsed)
            raise remote_error(response)
        record_upstream_latency(operation.name, "ok", elapsed)
        return envelope_from_response(response, operation)

    # --- Products ---

    async def list_products(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("list_products", arguments, credentials)

    async def get_product_details(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_product_details", arguments, credentials)

    async def get_product_starting_dates(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_product_starting_dates", arguments, credentials)

    async def get_product_starting_date_prices(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_product_starting_date_prices", arguments, credentials)

    async def get_package_price_availability(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_package_price_availability", arguments, credentials)

    # --- Customers ---

    async def search_customers(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("search_customers", arguments, credentials)

    async def get_customer_details(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_customer_details", arguments, credentials)

    # --- Bookings ---

    async def create_booking(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("create_booking", arguments, credentials)

    async def list_bookings(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("list_bookings", arguments, credentials)

    async def get_booking_details(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_booking_details", arguments, credentials)

    async def update_booking(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("update_booking", arguments, credentials)

    async def list_availability(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("list_availability", arguments, credentials)

    # --- Service monitoring ---

    async def get_api_info(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_api_info", arguments, credentials)

    async def get_api_health(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_api_health", arguments, credentials)

    # --- Deals and options ---

    async def get_deal_details(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("get_deal_details", arguments, credentials)

    async def update_deal(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("update_deal", arguments, credentials)

    async def search_publish_deals(self, arguments: Mapping[str, Any] | None = None, credentials: CredentialsInput = None) -> Envelope:
        return await self.call("search_publish_deals", arguments, credentials)

    search_deals = search_publish_deals

    async def create_option_booking(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("create_option_booking", arguments, credentials)

    async def option_to_booking(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("option_to_booking", arguments, credentials)

    # --- Documents ---

    async def view_document(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("view_document", arguments, credentials)

    async def download_document(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("download_document", arguments, credentials)

    # --- Persons, addresses, quotes, payments ---

    async def update_person(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("update_person", arguments, credentials)

    async def update_address(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("update_address", arguments, credentials)

    async def initialize_quote(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("initialize_quote", arguments, credentials)

    async def register_customer_payment(self, arguments: Mapping[str, Any], credentials: CredentialsInput = None) -> Envelope:
        return await self.call("register_customer_payment", arguments, credentials)
