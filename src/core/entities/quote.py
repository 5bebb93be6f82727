"""Quote domain entities."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator

from src.core.entities.customer import Customer

ZERO = Decimal("0")


class QuoteStatus(str, Enum):
    """Quote lifecycle states. CONVERTED_TO_ORDER is terminal."""

    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"
    CONVERTED_TO_ORDER = "converted_to_order"


class ShippingMethod(str, Enum):
    """Freight option selected on a quote."""

    SEA = "sea"
    AIR = "air"


class ShippingCosts(BaseModel):
    """Both freight candidates plus the selector."""

    sea: Decimal = Field(default=ZERO, ge=0)
    air: Decimal = Field(default=ZERO, ge=0)
    selected: ShippingMethod = ShippingMethod.SEA


class QuoteLineItem(BaseModel):
    """
    One priced row of a quote.

    Either a catalog part (part_id set, custom fields empty) or a free-text
    custom item (custom_part_name set, part_id empty). Never both.
    """

    model_config = {"validate_assignment": True}

    id: int | None = None
    quote_id: int | None = None
    is_custom_part: bool = False
    part_id: int | None = None  # FK → parts.id
    part_number: str | None = None  # denormalized for display
    part_name: str | None = None
    custom_part_name: str | None = None
    custom_part_description: str | None = None
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> Decimal:
        """unit_price * quantity; derived so it can never drift."""
        return self.unit_price * self.quantity

    @model_validator(mode="after")
    def check_shape(self) -> "QuoteLineItem":
        """Enforce the catalog-xor-custom shape."""
        if self.is_custom_part:
            if self.part_id is not None:
                raise ValueError("Custom line item must not reference a catalog part")
            if not self.custom_part_name or self.custom_part_description is None:
                raise ValueError("Custom line item requires a name and description")
        else:
            if self.part_id is None:
                raise ValueError("Catalog line item requires part_id")
            if self.custom_part_name is not None or self.custom_part_description is not None:
                raise ValueError("Catalog line item must not carry custom fields")
        return self

    @property
    def display_name(self) -> str:
        if self.is_custom_part:
            return self.custom_part_name or ""
        return self.part_name or self.part_number or f"Part {self.part_id}"


class QuoteTotals(BaseModel):
    """Monetary rollups of a quote, rounded for persistence."""

    total_bid_items_cost: Decimal
    selected_shipping_cost: Decimal
    subtotal_amount: Decimal
    gst_amount: Decimal
    grand_total_amount: Decimal


class Quote(BaseModel):
    """A priced, non-binding offer to a customer."""

    id: int | None = None
    quote_number: str
    customer_id: int  # FK → customers.id
    customer: Customer | None = None
    status: QuoteStatus = QuoteStatus.DRAFT
    line_items: list[QuoteLineItem] = Field(default_factory=list)

    shipping_costs: ShippingCosts = Field(default_factory=ShippingCosts)
    agent_fees: Decimal = Field(default=ZERO, ge=0)
    local_shipping_fees: Decimal = Field(default=ZERO, ge=0)

    total_bid_items_cost: Decimal = ZERO
    subtotal_amount: Decimal = ZERO
    gst_amount: Decimal = ZERO
    grand_total_amount: Decimal = ZERO

    quote_date: date = Field(default_factory=date.today)
    expiry_date: date
    notes: str | None = None
    created_by: str | None = None

    converted_to_order_id: int | None = None
    converted_to_order_number: str | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_converted(self) -> bool:
        return self.status == QuoteStatus.CONVERTED_TO_ORDER

    @property
    def catalog_line_items(self) -> list[QuoteLineItem]:
        """Line items referencing catalog parts; the only ones an order keeps."""
        return [i for i in self.line_items if not i.is_custom_part and i.part_id is not None]

    @property
    def selected_shipping_cost(self) -> Decimal:
        if self.shipping_costs.selected == ShippingMethod.SEA:
            return self.shipping_costs.sea
        return self.shipping_costs.air

    def is_expired(self, today: date | None = None) -> bool:
        """Past its expiry date and not accepted or converted. Evaluate at read time."""
        today = today or date.today()
        if self.status in (QuoteStatus.ACCEPTED, QuoteStatus.CONVERTED_TO_ORDER):
            return False
        return self.expiry_date < today

    def apply_totals(self, totals: QuoteTotals) -> None:
        """Overwrite all stored rollups at once."""
        self.total_bid_items_cost = totals.total_bid_items_cost
        self.subtotal_amount = totals.subtotal_amount
        self.gst_amount = totals.gst_amount
        self.grand_total_amount = totals.grand_total_amount


class QuoteListFilters(BaseModel):
    """Explicit list-query state; the caller owns loading and saving it."""

    status: QuoteStatus | None = None  # None means all
    search_term: str = ""
    sort_by: str = Field(default="date", pattern="^(date|amount|customer)$")
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, ge=1)


class QuotePage(BaseModel):
    """One page of quotes."""

    quotes: list[Quote] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


class QuoteListPreferences(BaseModel):
    """Remembered list state for one user."""

    user_id: str
    status: QuoteStatus | None = None
    sort_by: str = Field(default="date", pattern="^(date|amount|customer)$")
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")
    page_size: int = Field(default=25, ge=1)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
