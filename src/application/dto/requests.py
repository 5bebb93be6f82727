"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Money values are Decimal. Amount and quantity rules (non-negative prices,
positive quantities) are enforced by the use cases, not here, so that a bad
quote is rejected with a field-level ValidationError before anything is
written.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field

from src.core.entities.quote import QuoteStatus, ShippingMethod

# Categories


class CreateCategoryRequest(BaseModel):
    """Request to create a part category."""

    name: str = Field(..., description="Unique, non-empty category name", examples=["Brakes"])
    description: str | None = Field(default=None, description="Optional description")
    display_order: int | None = Field(
        default=None,
        ge=1,
        description="Explicit position; next free position when omitted",
    )


class UpdateCategoryRequest(BaseModel):
    """Partial category update. Omitted fields are left unchanged."""

    name: str | None = None
    description: str | None = None
    display_order: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class ReorderCategoriesRequest(BaseModel):
    """Full ordered list of category ids; position i gets display_order i + 1."""

    category_ids: list[int] = Field(..., min_length=1, examples=[[3, 1, 2]])


class MergeCategoriesRequest(BaseModel):
    """Move every part of source into target, then deactivate source."""

    source_category_id: int
    target_category_id: int
    confirm: bool = Field(
        default=False,
        description="Must be true; the merge cannot be undone",
    )


class BulkReassignPartsRequest(BaseModel):
    """Move an explicit set of parts into a category."""

    part_ids: list[int] = Field(..., min_length=1)
    target_category_id: int


# Parts


class CreatePartRequest(BaseModel):
    """Request to add a catalog part."""

    part_number: str = Field(..., min_length=1, examples=["BRK-1042"])
    name: str = Field(..., min_length=1)
    description: str | None = None
    category_id: int | None = None
    specifications: dict[str, Any] = Field(default_factory=dict)
    current_stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    internal_markup: float | None = Field(default=None, ge=0)
    wholesale_markup: float | None = Field(default=None, ge=0)
    trade_markup: float | None = Field(default=None, ge=0)
    retail_markup: float | None = Field(default=None, ge=0)


class RecordPriceRequest(BaseModel):
    """Append a purchase price to a part's history."""

    unit_price: Decimal = Field(..., ge=0)
    supplier_name: str | None = None
    quantity: int = Field(default=0, ge=0)
    effective_date: date | None = None


# Customers and suppliers


class CreateCustomerRequest(BaseModel):
    name: str = Field(..., min_length=1)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class CreateSupplierRequest(BaseModel):
    name: str = Field(..., min_length=1)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float = Field(default=0.0, ge=0, le=5)
    delivery_time: int = Field(default=0, ge=0, description="Typical delivery time in days")
    payment_terms: str | None = None
    notes: str | None = None
    is_active: bool = True


# Quotes


class QuoteLineItemRequest(BaseModel):
    """
    One quote row.

    Catalog items set part_id; custom items set is_custom_part and
    custom_part_name instead.
    """

    is_custom_part: bool = False
    part_id: int | None = None
    custom_part_name: str | None = None
    custom_part_description: str | None = None
    quantity: int = Field(..., examples=[2])
    unit_price: Decimal = Field(..., examples=["100.00"])


class ShippingCostsRequest(BaseModel):
    sea: Decimal = Decimal("0")
    air: Decimal = Decimal("0")
    selected: ShippingMethod = ShippingMethod.SEA


class CreateQuoteRequest(BaseModel):
    """Request to create a quote."""

    customer_id: int
    line_items: list[QuoteLineItemRequest] = Field(default_factory=list)
    shipping_costs: ShippingCostsRequest = Field(default_factory=ShippingCostsRequest)
    agent_fees: Decimal = Decimal("0")
    local_shipping_fees: Decimal = Decimal("0")
    quote_date: date | None = Field(default=None, description="Defaults to today")
    expiry_date: date | None = Field(
        default=None,
        description="Defaults to quote_date plus the configured validity period",
    )
    notes: str | None = None
    created_by: str | None = Field(default=None, description="Opaque id of the acting user")
    send: bool = Field(default=False, description="Create directly in 'sent' status")


class UpdateQuoteRequest(BaseModel):
    """Replace a quote's line items and fee inputs; totals are recomputed."""

    quote_id: int = 0  # set from the path
    customer_id: int | None = None
    line_items: list[QuoteLineItemRequest] = Field(default_factory=list)
    shipping_costs: ShippingCostsRequest = Field(default_factory=ShippingCostsRequest)
    agent_fees: Decimal = Decimal("0")
    local_shipping_fees: Decimal = Decimal("0")
    expiry_date: date | None = None
    notes: str | None = None


class UpdateQuoteStatusRequest(BaseModel):
    """Change quote status; converted_to_order triggers conversion."""

    quote_id: int = 0  # set from the path
    status: QuoteStatus
    notes: str | None = Field(
        default=None,
        description="Replaces the quote notes when non-blank",
    )
    acting_user: str | None = None


class ListQuotesRequest(BaseModel):
    """Explicit list-query state."""

    status: QuoteStatus | Literal["all"] = "all"
    search_term: str = ""
    sort_by: Literal["date", "amount", "customer"] = "date"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1)


class SaveQuotePreferencesRequest(BaseModel):
    """Remembered quote list state for one user."""

    status: QuoteStatus | Literal["all"] = "all"
    sort_by: Literal["date", "amount", "customer"] = "date"
    sort_order: Literal["asc", "desc"] = "desc"
    page_size: int = Field(default=25, ge=1)


# Exchange rates


class RefreshExchangeRatesRequest(BaseModel):
    """Targets to refresh; configured targets when omitted."""

    currencies: list[str] | None = Field(default=None, examples=[["JPY", "USD"]])
