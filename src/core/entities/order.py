"""Order and supplier domain entities."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field


class OrderStatus(str, Enum):
    """Purchase order lifecycle."""

    DRAFT = "draft"
    SUPPLIER_QUOTING = "supplier_quoting"
    PENDING_CUSTOMER_APPROVAL = "pending_customer_approval"
    APPROVED = "approved"
    ORDERED = "ordered"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Supplier(BaseModel):
    """A parts supplier."""

    id: int | None = None
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float = 0.0
    delivery_time: int = 0  # days
    payment_terms: str | None = None
    notes: str | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def placeholder(cls) -> "Supplier":
        """Supplier used when a quote is converted and none is active."""
        return cls(
            name="Quote Conversion Supplier",
            contact_person="To Be Assigned",
            email="supplier@company.com",
            phone="+1 000 000 0000",
            address="To Be Updated",
            rating=5.0,
            delivery_time=7,
            payment_terms="Net 30",
            notes="Auto-created for quote conversion",
        )


class OrderLineItem(BaseModel):
    """One catalog part on an order."""

    id: int | None = None
    order_id: int | None = None
    part_id: int  # FK → parts.id
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """A purchase order, possibly created from a quote."""

    id: int | None = None
    order_number: str
    supplier_id: int | None = None  # FK → suppliers.id
    quote_id: int | None = None  # FK → quotes.id when converted
    status: OrderStatus = OrderStatus.DRAFT
    priority: OrderPriority = OrderPriority.MEDIUM
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    order_date: date = Field(default_factory=date.today)
    expected_delivery: date | None = None
    notes: str | None = None
    shipping_data: dict[str, Any] = Field(default_factory=dict)
    line_items: list[OrderLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class OrderListFilters(BaseModel):
    status: OrderStatus | None = None  # None means all
    search_term: str = ""
    sort_by: str = Field(default="date", pattern="^(date|amount)$")
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=25, ge=1)


class OrderPage(BaseModel):
    """One page of orders."""

    orders: list[Order] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25

    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size
