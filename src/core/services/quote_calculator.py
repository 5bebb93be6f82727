"""
Quote cost calculator.

Pure, deterministic rollups over Decimal money values. No validation is
performed here; callers reject negative amounts and non-positive quantities
before building a calculator.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from src.core.entities.quote import (
    QuoteLineItem,
    QuoteTotals,
    ShippingCosts,
    ShippingMethod,
)

GST_RATE = Decimal("0.10")
CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half-up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class QuoteCostCalculator:
    """
    Derives every monetary rollup of a quote from its inputs.

    All values are recomputed from scratch on every call, so repeated
    calculations over the same inputs always agree.
    """

    def __init__(
        self,
        line_items: Iterable[QuoteLineItem],
        shipping_costs: ShippingCosts,
        agent_fees: Decimal = Decimal("0"),
        local_shipping_fees: Decimal = Decimal("0"),
    ):
        self._line_items = list(line_items)
        self._shipping = shipping_costs
        self._agent_fees = Decimal(agent_fees)
        self._local_fees = Decimal(local_shipping_fees)

    def bid_items_total(self) -> Decimal:
        return sum(
            (item.unit_price * item.quantity for item in self._line_items),
            Decimal("0"),
        )

    def selected_shipping_cost(self) -> Decimal:
        if self._shipping.selected == ShippingMethod.SEA:
            return self._shipping.sea
        return self._shipping.air

    def subtotal(self) -> Decimal:
        return (
            self.bid_items_total()
            + self.selected_shipping_cost()
            + self._agent_fees
            + self._local_fees
        )

    def gst(self) -> Decimal:
        return self.subtotal() * GST_RATE

    def grand_total(self) -> Decimal:
        return self.subtotal() + self.gst()

    def totals(self) -> QuoteTotals:
        """
        Rounded rollups for persistence.

        Each component is rounded to cents before it is summed, so the stored
        subtotal equals the sum of the stored bid total, selected shipping and
        fees. GST is taken from that subtotal and the grand total is the sum
        of the two, so grand == round2(subtotal * 1.10) also holds.
        """
        bid_items = round_money(self.bid_items_total())
        shipping = round_money(self.selected_shipping_cost())
        subtotal = (
            bid_items
            + shipping
            + round_money(self._agent_fees)
            + round_money(self._local_fees)
        )
        gst = round_money(subtotal * GST_RATE)
        return QuoteTotals(
            total_bid_items_cost=bid_items,
            selected_shipping_cost=shipping,
            subtotal_amount=subtotal,
            gst_amount=gst,
            grand_total_amount=subtotal + gst,
        )


def calculate_quote_totals(
    line_items: Iterable[QuoteLineItem],
    shipping_costs: ShippingCosts,
    agent_fees: Decimal = Decimal("0"),
    local_shipping_fees: Decimal = Decimal("0"),
) -> QuoteTotals:
    """Shorthand for QuoteCostCalculator(...).totals()."""
    return QuoteCostCalculator(
        line_items, shipping_costs, agent_fees, local_shipping_fees
    ).totals()
