"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.

Money fields are Decimal and serialize as exact decimal strings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

# Categories


class CategoryResponse(BaseModel):
    """Category with its part rollup."""

    id: int
    name: str
    description: str | None = None
    display_order: int
    is_active: bool
    part_count: int = 0
    total_inventory_value: Decimal = Decimal("0")
    average_stock_level: float = 0.0
    low_stock_count: int = 0
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    total: int


class CategoryShareResponse(BaseModel):
    category_name: str
    part_count: int
    percentage: float


class CategoryStatisticsResponse(BaseModel):
    """Overview across all categories."""

    total_categories: int
    active_categories: int
    total_parts_categorized: int
    distribution: list[CategoryShareResponse] = Field(default_factory=list)


class MergeCategoriesResponse(BaseModel):
    source_category_id: int
    target_category_id: int
    parts_moved: int


class BulkReassignPartsResponse(BaseModel):
    target_category_id: int
    parts_updated: int


# Parts


class PartResponse(BaseModel):
    id: int
    part_number: str
    name: str
    description: str | None = None
    category_id: int | None = None
    specifications: dict[str, Any] = Field(default_factory=dict)
    current_stock: int
    min_stock: int
    is_low_stock: bool
    is_archived: bool
    internal_markup: float | None = None
    wholesale_markup: float | None = None
    trade_markup: float | None = None
    retail_markup: float | None = None


class PartListResponse(BaseModel):
    parts: list[PartResponse]
    total: int
    limit: int
    offset: int


class PriceRecordResponse(BaseModel):
    id: int
    part_id: int
    unit_price: Decimal
    supplier_name: str | None = None
    quantity: int
    effective_date: date


class PartPricingResponse(BaseModel):
    """Tier prices derived from the latest unit price."""

    part_id: int
    latest_unit_price: Decimal
    prices: dict[str, Decimal] = Field(..., description="Tier name → price incl. loading")
    markups: dict[str, float] = Field(..., description="Tier name → markup percent used")


# Customers, suppliers


class CustomerResponse(BaseModel):
    id: int
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class SupplierResponse(BaseModel):
    id: int
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float
    delivery_time: int
    payment_terms: str | None = None
    notes: str | None = None
    is_active: bool


# Quotes


class QuoteLineItemResponse(BaseModel):
    id: int | None = None
    is_custom_part: bool
    part_id: int | None = None
    part_number: str | None = None
    part_name: str | None = None
    custom_part_name: str | None = None
    custom_part_description: str | None = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class ShippingCostsResponse(BaseModel):
    sea: Decimal
    air: Decimal
    selected: str


class QuoteResponse(BaseModel):
    """Quote with line items, rollups and derived expiry flag."""

    id: int
    quote_number: str
    customer_id: int
    customer: CustomerResponse | None = None
    status: str
    is_expired: bool
    line_items: list[QuoteLineItemResponse]
    shipping_costs: ShippingCostsResponse
    agent_fees: Decimal
    local_shipping_fees: Decimal
    total_bid_items_cost: Decimal
    subtotal_amount: Decimal
    gst_amount: Decimal
    grand_total_amount: Decimal
    quote_date: date
    expiry_date: date
    notes: str | None = None
    created_by: str | None = None
    converted_to_order_id: int | None = None
    converted_to_order_number: str | None = None
    created_at: datetime
    updated_at: datetime


class QuoteListResponse(BaseModel):
    quotes: list[QuoteResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class QuoteStatusCountsResponse(BaseModel):
    counts: dict[str, int] = Field(..., description="Count per status plus 'all'")


class QuotePreferencesResponse(BaseModel):
    user_id: str
    status: str
    sort_by: str
    sort_order: str
    page_size: int


# Orders


class OrderLineItemResponse(BaseModel):
    id: int | None = None
    part_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderResponse(BaseModel):
    id: int
    order_number: str
    supplier_id: int | None = None
    quote_id: int | None = None
    status: str
    priority: str
    total_amount: Decimal
    order_date: date
    expected_delivery: date | None = None
    notes: str | None = None
    shipping_data: dict[str, Any] = Field(default_factory=dict)
    line_items: list[OrderLineItemResponse] = Field(default_factory=list)


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class OrderStatusCountsResponse(BaseModel):
    counts: dict[str, int] = Field(..., description="Count per status plus 'all'")


class QuoteStatusUpdateResponse(BaseModel):
    """Result of a status change; order is set when the quote was converted."""

    quote: QuoteResponse
    order: OrderResponse | None = None


# Exchange rates


class ExchangeRateResponse(BaseModel):
    base_currency: str
    target_currency: str
    rate: Decimal
    source_api: str
    fetched_at: datetime


class ExchangeRateHistoryResponse(BaseModel):
    base_currency: str
    target_currency: str
    rates: list[ExchangeRateResponse]


# Shared


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. QUOTE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    details: dict[str, Any] = Field(default_factory=dict, description="Structured context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
