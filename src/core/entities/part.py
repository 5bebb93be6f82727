"""Catalog part and price history entities."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class PricingTier(str, Enum):
    """Customer price tiers derived from a part's latest cost."""

    INTERNAL = "internal"
    WHOLESALE = "wholesale"
    TRADE = "trade"
    RETAIL = "retail"


class Part(BaseModel):
    """A catalog part."""

    id: int | None = None
    part_number: str
    name: str
    description: str | None = None
    category_id: int | None = None  # FK → part_categories.id
    specifications: dict[str, Any] = Field(default_factory=dict)
    current_stock: int = 0
    min_stock: int = 0
    is_archived: bool = False

    # Tier markups in percent; None falls back to configured defaults
    internal_markup: float | None = None
    wholesale_markup: float | None = None
    trade_markup: float | None = None
    retail_markup: float | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    def markup_for(self, tier: PricingTier) -> float | None:
        """Stored markup for a tier, if any."""
        return {
            PricingTier.INTERNAL: self.internal_markup,
            PricingTier.WHOLESALE: self.wholesale_markup,
            PricingTier.TRADE: self.trade_markup,
            PricingTier.RETAIL: self.retail_markup,
        }[tier]


class PriceRecord(BaseModel):
    """One historical purchase price for a part."""

    id: int | None = None
    part_id: int
    unit_price: Decimal = Field(ge=0)
    supplier_name: str | None = None
    quantity: int = 0
    effective_date: date = Field(default_factory=date.today)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PartPricing(BaseModel):
    """Tier prices for a part, computed from its latest unit price."""

    latest_unit_price: Decimal = Decimal("0")
    prices: dict[PricingTier, Decimal] = Field(default_factory=dict)
    markups: dict[PricingTier, float] = Field(default_factory=dict)
