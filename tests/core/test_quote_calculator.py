"""Tests for quote cost rollups."""

from decimal import Decimal

import pytest

from src.core.entities.quote import QuoteLineItem, ShippingCosts, ShippingMethod
from src.core.services.quote_calculator import (
    QuoteCostCalculator,
    calculate_quote_totals,
    round_money,
)


def _item(unit_price: str, quantity: int) -> QuoteLineItem:
    return QuoteLineItem(part_id=1, quantity=quantity, unit_price=Decimal(unit_price))


@pytest.fixture
def items() -> list[QuoteLineItem]:
    return [_item("100.00", 2)]


class TestQuoteCostCalculator:
    def test_sea_freight_scenario(self, items):
        shipping = ShippingCosts(sea=Decimal("50"), air=Decimal("80"), selected=ShippingMethod.SEA)

        totals = calculate_quote_totals(items, shipping, Decimal("10"), Decimal("5"))

        assert totals.total_bid_items_cost == Decimal("200.00")
        assert totals.selected_shipping_cost == Decimal("50.00")
        assert totals.subtotal_amount == Decimal("265.00")
        assert totals.gst_amount == Decimal("26.50")
        assert totals.grand_total_amount == Decimal("291.50")

    def test_switching_to_air_freight(self, items):
        shipping = ShippingCosts(sea=Decimal("50"), air=Decimal("80"), selected=ShippingMethod.AIR)

        totals = calculate_quote_totals(items, shipping, Decimal("10"), Decimal("5"))

        assert totals.total_bid_items_cost == Decimal("200.00")
        assert totals.subtotal_amount == Decimal("295.00")
        assert totals.gst_amount == Decimal("29.50")
        assert totals.grand_total_amount == Decimal("324.50")

    def test_recalculation_is_idempotent(self, items):
        shipping = ShippingCosts(sea=Decimal("12.345"), air=Decimal("0"))
        calc = QuoteCostCalculator(items, shipping, Decimal("3.333"), Decimal("0.005"))

        assert calc.totals() == calc.totals()
        assert calc.totals() == calculate_quote_totals(items, shipping, Decimal("3.333"), Decimal("0.005"))

    @pytest.mark.parametrize(
        "prices",
        [
            [("19.99", 3), ("0.01", 7)],
            [("1234.567", 1), ("0.333", 3)],
            [("0.00", 5)],
        ],
    )
    def test_grand_total_is_rounded_subtotal_plus_gst(self, prices):
        rows = [_item(price, qty) for price, qty in prices]
        shipping = ShippingCosts(sea=Decimal("7.775"), air=Decimal("1"))

        totals = calculate_quote_totals(rows, shipping, Decimal("2.5"), Decimal("0.125"))

        assert totals.grand_total_amount == round_money(totals.subtotal_amount * Decimal("1.10"))
        assert totals.grand_total_amount == totals.subtotal_amount + totals.gst_amount
        assert totals.subtotal_amount == (
            totals.total_bid_items_cost
            + totals.selected_shipping_cost
            + round_money(Decimal("2.5"))
            + round_money(Decimal("0.125"))
        )

    def test_bid_items_total_sums_line_totals(self):
        rows = [_item("10.50", 2), _item("3.25", 4)]
        calc = QuoteCostCalculator(rows, ShippingCosts())

        assert calc.bid_items_total() == sum(r.total_price for r in rows)
        assert calc.bid_items_total() == Decimal("34.00")

    def test_empty_quote_is_fees_only(self):
        totals = calculate_quote_totals([], ShippingCosts(), Decimal("10"))

        assert totals.total_bid_items_cost == Decimal("0.00")
        assert totals.grand_total_amount == Decimal("11.00")


def test_round_money_half_up():
    assert round_money(Decimal("2.005")) == Decimal("2.01")
    assert round_money(Decimal("2.004")) == Decimal("2.00")
