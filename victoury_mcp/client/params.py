"""Argument models for every Victoury operation, plus the validator that applies them.

The same models produce the MCP ``inputSchema`` of each tool, so the
advertised schema and the enforced one cannot drift apart.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError
from pydantic.alias_generators import to_camel

from victoury_mcp.client.errors import ValidationFailure

BookingStatus = Literal["confirmed", "pending", "cancelled"]
DocumentFormat = Literal["pdf", "html"]
SearchOperator = Literal["AND", "OR"]
SearchQualifier = Literal["=", ">", "<", ">=", "<=", "LIKE", "IN", "NOT IN"]
OptionAction = Literal["O", "B"]


class OperationParams(BaseModel):
    """Base for argument models: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )


class PaginationParams(OperationParams):
    page: int = Field(default=1, ge=1, strict=True, description="Page number for pagination")
    limit: int = Field(default=20, ge=1, strict=True, description="Number of items per page")


# --- Products ---

class ListProductsParams(PaginationParams):
    category: str | None = Field(default=None, description="Filter by product category")
    destination: str | None = Field(default=None, description="Filter by destination")
    start_date: str | None = Field(default=None, description="Filter by start date (ISO 8601)")
    end_date: str | None = Field(default=None, description="Filter by end date (ISO 8601)")


class GetProductDetailsParams(OperationParams):
    product_id: str = Field(description="Unique identifier of the product")


class GetProductStartingDatesParams(OperationParams):
    product_id: str = Field(description="Product ID")
    start_date: str | None = Field(default=None, description="Filter from date (ISO 8601)")
    end_date: str | None = Field(default=None, description="Filter to date (ISO 8601)")


class GetProductStartingDatePricesParams(OperationParams):
    product_id: str = Field(description="Product ID")
    starting_date: str = Field(description="Starting date to check prices for (ISO 8601)")
    participants: int | None = Field(default=None, ge=1, strict=True, description="Number of participants for pricing")


class GetPackagePriceAvailabilityParams(OperationParams):
    product_id: str = Field(description="Product ID")
    package_id: str = Field(description="Package ID")
    start_date: str = Field(description="Start date (ISO 8601)")
    participants: int = Field(ge=1, strict=True, description="Number of participants")


# --- Customers ---

class SearchCustomersParams(PaginationParams):
    query: str | None = Field(default=None, description="Search query (name, email, phone)")
    email: EmailStr | None = Field(default=None, description="Filter by exact email address")
    phone: str | None = Field(default=None, description="Filter by phone number")


class GetCustomerDetailsParams(OperationParams):
    customer_id: str = Field(description="Unique identifier of the customer")


# --- Bookings ---

class CreateBookingParams(OperationParams):
    product_id: str = Field(description="Product ID to book")
    customer_id: str = Field(description="Customer ID making the booking")
    start_date: str = Field(description="Start date of the booking (ISO 8601)")
    end_date: str | None = Field(default=None, description="End date of the booking (ISO 8601)")
    participants: int = Field(ge=1, strict=True, description="Number of participants")
    notes: str | None = Field(default=None, description="Additional booking notes")


class ListBookingsParams(PaginationParams):
    customer_id: str | None = Field(default=None, description="Filter by customer")
    product_id: str | None = Field(default=None, description="Filter by product")
    status: BookingStatus | None = Field(default=None, description="Filter by booking status")
    start_date: str | None = Field(default=None, description="Filter from date (ISO 8601)")
    end_date: str | None = Field(default=None, description="Filter to date (ISO 8601)")


class GetBookingDetailsParams(OperationParams):
    booking_id: str = Field(description="Unique identifier of the booking")


class UpdateBookingParams(OperationParams):
    booking_id: str = Field(description="Booking ID to update")
    status: BookingStatus | None = Field(default=None, description="New booking status")
    participants: int | None = Field(default=None, ge=1, strict=True, description="Updated number of participants")
    notes: str | None = Field(default=None, description="Updated booking notes")


class ListAvailabilityParams(OperationParams):
    product_id: str = Field(description="Product ID to check availability for")
    start_date: str = Field(description="Start date for availability check (ISO 8601)")
    end_date: str = Field(description="End date for availability check (ISO 8601)")
    participants: int | None = Field(default=None, ge=1, strict=True, description="Number of participants to check availability for")


# --- Service monitoring ---

class NoParams(OperationParams):
    pass


# --- Deals and options ---

class GetDealDetailsParams(OperationParams):
    deal_id: str = Field(description="Unique identifier of the deal")


class UpdateDealParams(OperationParams):
    deal_id: str = Field(description="Unique identifier of the deal")
    status: str | None = Field(default=None, description="New status for the deal")
    notes: str | None = Field(default=None, description="Additional notes or comments")


class SearchCriterion(OperationParams):
    field: str = Field(description="Field to search (e.g., id, uuid, destination, startDate)")
    value: str = Field(description="Value to search for")
    qualifier: SearchQualifier = Field(default="=", description="Comparison operator")


class SearchPublishDealsParams(PaginationParams):
    operator: SearchOperator = Field(default="AND", description="How criteria are combined")
    criterias: list[SearchCriterion] = Field(default_factory=list, description="Search criteria")


class CreateOptionBookingParams(OperationParams):
    action: OptionAction = Field(description="Action type: O for option, B for booking")
    deal_id: str = Field(description="Deal to create option for")
    customer_id: str = Field(description="Customer ID")
    participants: int = Field(ge=1, strict=True, description="Number of participants")
    profit_center: str = Field(description="Code of deal brand")
    currency: str | None = Field(default=None, description="Currency code")
    arrangement_type: str | None = Field(default=None, description="Type of arrangement")
    language: str | None = Field(default=None, description="The code of deal language")
    notes: str | None = Field(default=None, description="Optional notes")


class OptionToBookingParams(OperationParams):
    option_id: str = Field(description="Option ID to convert")
    payment_method: str | None = Field(default=None, description="Payment method to use")


# --- Documents ---

class ViewDocumentParams(OperationParams):
    document_id: str = Field(description="Document ID to view")


class DownloadDocumentParams(OperationParams):
    document_id: str = Field(description="Document ID to download")
    format: DocumentFormat = Field(default="pdf", description="Download format")


# --- Persons, addresses, quotes, payments ---

class UpdatePersonParams(OperationParams):
    person_id: str = Field(description="Person ID to update")
    first_name: str | None = Field(default=None, description="First name")
    last_name: str | None = Field(default=None, description="Last name")
    email: EmailStr | None = Field(default=None, description="Email address")
    phone: str | None = Field(default=None, description="Phone number")
    date_of_birth: str | None = Field(default=None, description="Date of birth (ISO 8601)")


class UpdateAddressParams(OperationParams):
    address_id: str = Field(description="Address ID to update")
    street: str | None = Field(default=None, description="Street address")
    city: str | None = Field(default=None, description="City")
    state: str | None = Field(default=None, description="State/Province")
    country: str | None = Field(default=None, description="Country")
    postal_code: str | None = Field(default=None, description="Postal/ZIP code")


class PriceComponent(OperationParams):
    type: str = Field(description="Component type")
    amount: float = Field(description="Amount")


class InitializeQuoteParams(OperationParams):
    product_id: str = Field(description="Product ID for the quote")
    start_date: str = Field(description="Start date (ISO 8601)")
    participants: int = Field(ge=1, strict=True, description="Number of participants")
    price_components: list[PriceComponent] | None = Field(default=None, description="Optional custom price components")


class RegisterCustomerPaymentParams(OperationParams):
    booking_id: str = Field(description="Booking ID")
    amount: float = Field(description="Payment amount")
    currency: str = Field(description="Currency code (e.g., EUR, USD)")
    payment_method: str = Field(description="Payment method used")
    transaction_id: str | None = Field(default=None, description="Optional external transaction ID")


def _reason(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a short, caller-facing reason."""
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return "is required"
    if kind == "greater_than_equal":
        return f"must be ≥ {ctx.get('ge')}"
    if kind == "greater_than":
        return f"must be > {ctx.get('gt')}"
    if kind == "literal_error":
        return f"must be one of {ctx.get('expected')}"
    return str(error.get("msg", "is invalid"))


def validate_arguments(model: type[OperationParams], raw: Any) -> dict[str, Any]:
    """
    Validate raw tool arguments against an operation's model.

    Returns the normalized arguments keyed by wire (camelCase) name, with
    declared defaults applied and unset optionals dropped. Every failing
    field is reported at once in a single ValidationFailure.

    Example:
        >>> validate_arguments(ListProductsParams, {"category": "tours"})
        {'page': 1, 'limit': 20, 'category': 'tours'}
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationFailure([("arguments", "must be an object")])
    try:
        parsed = model.model_validate(raw)
    except ValidationError as e:
        issues = []
        for error in e.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
            issues.append((field, _reason(error)))
        raise ValidationFailure(issues) from e
    return parsed.model_dump(by_alias=True, exclude_none=True, mode="json")


def input_schema(model: type[OperationParams]) -> dict[str, Any]:
    """JSON schema for a model, in the shape MCP expects for ``inputSchema``."""
    schema = model.model_json_schema(by_alias=True)
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return schema
