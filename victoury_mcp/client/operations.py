"""Static catalog of Victoury operations exposed as tools."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from victoury_mcp.client import params as p

HttpMethod = Literal["GET", "POST", "PATCH", "PUT"]
PayloadLocation = Literal["query", "body", "none"]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class OperationDescriptor:
    """Metadata for a single operation: argument model plus how to reach it over HTTP."""

    name: str
    description: str
    params_model: type[p.OperationParams]
    method: HttpMethod
    endpoint: str
    payload: PayloadLocation = "none"
    uses_version_prefix: bool = True
    # Fields surfaced first when a bare (non-envelope) body is wrapped.
    response_fields: tuple[str, ...] = ()
    path_params: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_params", tuple(_PLACEHOLDER.findall(self.endpoint)))


OPERATIONS: dict[str, OperationDescriptor] = {
    op.name: op
    for op in (
        # Products
        OperationDescriptor(
            name="list_products",
            description="List available products/tours from the Victoury catalog",
            params_model=p.ListProductsParams,
            method="GET",
            endpoint="/products",
            payload="query",
        ),
        OperationDescriptor(
            name="get_product_details",
            description="Get detailed information about a specific product",
            params_model=p.GetProductDetailsParams,
            method="GET",
            endpoint="/products/{productId}",
        ),
        OperationDescriptor(
            name="get_product_starting_dates",
            description="Retrieve available starting dates for a product",
            params_model=p.GetProductStartingDatesParams,
            method="POST",
            endpoint="/products/{productId}/starting-dates",
            payload="body",
        ),
        OperationDescriptor(
            name="get_product_starting_date_prices",
            description="Get pricing for specific product starting date",
            params_model=p.GetProductStartingDatePricesParams,
            method="POST",
            endpoint="/products/{productId}/pricing",
            payload="body",
        ),
        OperationDescriptor(
            name="get_package_price_availability",
            description="Check package pricing and availability",
            params_model=p.GetPackagePriceAvailabilityParams,
            method="POST",
            endpoint="/products/{productId}/packages/{packageId}/availability",
            payload="body",
        ),
        # Customers
        OperationDescriptor(
            name="search_customers",
            description="Search for customers in the Victoury system",
            params_model=p.SearchCustomersParams,
            method="GET",
            endpoint="/customers",
            payload="query",
        ),
        OperationDescriptor(
            name="get_customer_details",
            description="Get details of a specific customer",
            params_model=p.GetCustomerDetailsParams,
            method="GET",
            endpoint="/customers/{customerId}",
        ),
        # Bookings
        OperationDescriptor(
            name="create_booking",
            description="Create a new booking for a product",
            params_model=p.CreateBookingParams,
            method="POST",
            endpoint="/bookings",
            payload="body",
        ),
        OperationDescriptor(
            name="list_bookings",
            description="List bookings, optionally filtered by customer, product, status or dates",
            params_model=p.ListBookingsParams,
            method="GET",
            endpoint="/bookings",
            payload="query",
        ),
        OperationDescriptor(
            name="get_booking_details",
            description="Get details of a specific booking",
            params_model=p.GetBookingDetailsParams,
            method="GET",
            endpoint="/bookings/{bookingId}",
        ),
        OperationDescriptor(
            name="update_booking",
            description="Update an existing booking",
            params_model=p.UpdateBookingParams,
            method="PATCH",
            endpoint="/bookings/{bookingId}",
            payload="body",
        ),
        OperationDescriptor(
            name="list_availability",
            description="Check availability for products within a date range",
            params_model=p.ListAvailabilityParams,
            method="GET",
            endpoint="/availability",
            payload="query",
        ),
        # Service monitoring (called without the version segment)
        OperationDescriptor(
            name="get_api_info",
            description="Retrieve API version and environment information",
            params_model=p.NoParams,
            method="GET",
            endpoint="/info",
            uses_version_prefix=False,
            response_fields=("version", "environment", "uptime", "timestamp"),
        ),
        OperationDescriptor(
            name="get_api_health",
            description="Check API health status and service availability",
            params_model=p.NoParams,
            method="GET",
            endpoint="/health",
            uses_version_prefix=False,
            response_fields=("status", "services", "timestamp"),
        ),
        # Deals and options
        OperationDescriptor(
            name="get_deal_details",
            description="Retrieve details of a specific deal",
            params_model=p.GetDealDetailsParams,
            method="GET",
            endpoint="/deals/{dealId}.json",
        ),
        OperationDescriptor(
            name="update_deal",
            description="Update deal information",
            params_model=p.UpdateDealParams,
            method="PATCH",
            endpoint="/deals/{dealId}.json",
            payload="body",
        ),
        OperationDescriptor(
            name="search_publish_deals",
            description="Search for published deals with filters",
            params_model=p.SearchPublishDealsParams,
            method="POST",
            endpoint="/deals/search",
            payload="body",
        ),
        OperationDescriptor(
            name="create_option_booking",
            description="Create an option/hold on a deal before final booking",
            params_model=p.CreateOptionBookingParams,
            method="POST",
            endpoint="/options",
            payload="body",
        ),
        OperationDescriptor(
            name="option_to_booking",
            description="Convert an option/hold into a confirmed booking",
            params_model=p.OptionToBookingParams,
            method="POST",
            endpoint="/options/{optionId}/convert",
            payload="body",
        ),
        # Documents
        OperationDescriptor(
            name="view_document",
            description="View document details (invoice, ticket, voucher, contract)",
            params_model=p.ViewDocumentParams,
            method="GET",
            endpoint="/documents/{documentId}",
        ),
        OperationDescriptor(
            name="download_document",
            description="Download a document in specified format",
            params_model=p.DownloadDocumentParams,
            method="GET",
            endpoint="/documents/{documentId}/download",
            payload="query",
        ),
        # Persons, addresses, quotes, payments
        OperationDescriptor(
            name="update_person",
            description="Update person/traveler information",
            params_model=p.UpdatePersonParams,
            method="PATCH",
            endpoint="/persons/{personId}",
            payload="body",
        ),
        OperationDescriptor(
            name="update_address",
            description="Update address information",
            params_model=p.UpdateAddressParams,
            method="PATCH",
            endpoint="/addresses/{addressId}",
            payload="body",
        ),
        OperationDescriptor(
            name="initialize_quote",
            description="Initialize a new quote with pricing components",
            params_model=p.InitializeQuoteParams,
            method="POST",
            endpoint="/quotes/initialize",
            payload="body",
        ),
        OperationDescriptor(
            name="register_customer_payment",
            description="Register a customer payment for a booking",
            params_model=p.RegisterCustomerPaymentParams,
            method="POST",
            endpoint="/payments",
            payload="body",
        ),
    )
}

TOOL_ALIASES: dict[str, str] = {
    "search_deals": "search_publish_deals",
}


def get_operation(name: str) -> OperationDescriptor | None:
    """Look up an operation by tool name or alias."""
    return OPERATIONS.get(TOOL_ALIASES.get(name, name))
