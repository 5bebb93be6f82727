"""Tests for tier pricing, document numbering and category statistics."""

import re
from datetime import date
from decimal import Decimal

from src.core.entities.category import CategoryStats, CategoryWithStats
from src.core.entities.part import Part, PricingTier
from src.core.services.category_statistics import summarize_categories
from src.core.services.numbering import generate_order_number, generate_quote_number
from src.core.services.pricing import price_part, tier_price

DEFAULTS = {
    PricingTier.INTERNAL: 10.0,
    PricingTier.WHOLESALE: 20.0,
    PricingTier.TRADE: 30.0,
    PricingTier.RETAIL: 50.0,
}


class TestTierPrice:
    def test_markup_then_loading(self):
        # 100 * 1.20 * 1.1
        assert tier_price(Decimal("100"), 20) == Decimal("132.00")

    def test_zero_markup_still_loaded(self):
        assert tier_price(Decimal("10"), 0) == Decimal("11.00")

    def test_rounds_to_cents(self):
        assert tier_price(Decimal("9.99"), 12.5) == Decimal("12.36")


class TestPricePart:
    def test_stored_markup_wins_over_default(self):
        part = Part(part_number="A-1", name="Filter", retail_markup=100.0)

        pricing = price_part(part, Decimal("50"), DEFAULTS)

        assert pricing.markups[PricingTier.RETAIL] == 100.0
        assert pricing.prices[PricingTier.RETAIL] == Decimal("110.00")
        assert pricing.markups[PricingTier.INTERNAL] == 10.0
        assert pricing.prices[PricingTier.INTERNAL] == Decimal("60.50")

    def test_missing_price_is_zero(self):
        pricing = price_part(Part(part_number="A-1", name="Filter"), None, DEFAULTS)

        assert pricing.latest_unit_price == Decimal("0")
        assert set(pricing.prices.values()) == {Decimal("0.00")}


class TestNumbering:
    def test_quote_number_format(self):
        assert generate_quote_number(date(2026, 5, 4), 1_712_345_678_901) == "QTE-2026-678901"

    def test_order_number_pads(self):
        assert generate_order_number(date(2026, 1, 1), 42) == "ORD-2026-000042"

    def test_defaults_to_now(self):
        assert re.fullmatch(r"QTE-\d{4}-\d{6}", generate_quote_number())


class TestSummarizeCategories:
    def test_distribution(self):
        categories = [
            CategoryWithStats(id=1, name="Brakes", stats=CategoryStats(part_count=3)),
            CategoryWithStats(id=2, name="Filters", stats=CategoryStats(part_count=1)),
            CategoryWithStats(id=3, name="Legacy", is_active=False),
        ]

        stats = summarize_categories(categories)

        assert stats.total_categories == 3
        assert stats.active_categories == 2
        assert stats.total_parts_categorized == 4
        assert [s.percentage for s in stats.distribution] == [75.0, 25.0, 0.0]

    def test_no_parts(self):
        stats = summarize_categories([CategoryWithStats(id=1, name="Empty")])

        assert stats.total_parts_categorized == 0
        assert stats.distribution[0].percentage == 0.0
