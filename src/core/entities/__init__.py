"""Core domain entities."""

from src.core.entities.category import (
    Category,
    CategoryShare,
    CategoryStatistics,
    CategoryStats,
    CategoryWithStats,
)
from src.core.entities.customer import Customer
from src.core.entities.exchange_rate import (
    ExchangeRate,
    RateRefreshResult,
    RefreshedRate,
)
from src.core.entities.order import (
    Order,
    OrderLineItem,
    OrderListFilters,
    OrderPage,
    OrderPriority,
    OrderStatus,
    Supplier,
)
from src.core.entities.part import (
    Part,
    PartPricing,
    PriceRecord,
    PricingTier,
)
from src.core.entities.quote import (
    Quote,
    QuoteLineItem,
    QuoteListFilters,
    QuoteListPreferences,
    QuotePage,
    QuoteStatus,
    QuoteTotals,
    ShippingCosts,
    ShippingMethod,
)

__all__ = [
    # Category entities
    "Category",
    "CategoryStats",
    "CategoryWithStats",
    "CategoryShare",
    "CategoryStatistics",
    # Part entities
    "Part",
    "PartPricing",
    "PriceRecord",
    "PricingTier",
    # Quote entities
    "Quote",
    "QuoteLineItem",
    "QuoteListFilters",
    "QuoteListPreferences",
    "QuotePage",
    "QuoteStatus",
    "QuoteTotals",
    "ShippingCosts",
    "ShippingMethod",
    # Order entities
    "Order",
    "OrderLineItem",
    "OrderListFilters",
    "OrderPage",
    "OrderPriority",
    "OrderStatus",
    "Supplier",
    "Customer",
    # Exchange rates
    "ExchangeRate",
    "RateRefreshResult",
    "RefreshedRate",
]
