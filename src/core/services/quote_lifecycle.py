"""
Quote status machine and quote-to-order drafting.

Any non-terminal status may move to any other status. CONVERTED_TO_ORDER is
terminal and is only reached through conversion, which needs an order built
from the quote; that order is drafted here and persisted by the order store
in a single transaction.
"""

from datetime import date, timedelta
from typing import Any

from src.core.entities.order import (
    Order,
    OrderLineItem,
    OrderPriority,
    OrderStatus,
)
from src.core.entities.quote import Quote, QuoteStatus
from src.core.exceptions import (
    InvalidQuoteTransitionError,
    QuoteAlreadyConvertedError,
)


class QuoteStatusMachine:
    """Guards status changes on a quote."""

    TERMINAL = frozenset({QuoteStatus.CONVERTED_TO_ORDER})

    @classmethod
    def ensure_mutable(cls, quote: Quote) -> None:
        """Raise if the quote can no longer change."""
        if quote.status in cls.TERMINAL:
            raise QuoteAlreadyConvertedError(
                quote.id or 0, quote.converted_to_order_number
            )

    @classmethod
    def check_transition(cls, quote: Quote, requested: QuoteStatus | str) -> bool:
        """
        Validate a requested status change.

        Returns True when the change is a conversion and needs the
        convert-to-order side effects, False for a plain status update.
        """
        cls.ensure_mutable(quote)
        try:
            requested = QuoteStatus(requested)
        except ValueError:
            raise InvalidQuoteTransitionError(
                quote.id or 0, quote.status.value, str(requested)
            ) from None
        return requested == QuoteStatus.CONVERTED_TO_ORDER


def build_order_from_quote(
    quote: Quote,
    order_number: str,
    delivery_days: int = 14,
    today: date | None = None,
    created_by: str | None = None,
) -> Order:
    """
    Draft the order a quote converts into.

    Carries the quote grand total and a shipping/fee snapshot. Only catalog
    line items become order lines; custom items are dropped.
    """
    today = today or date.today()
    customer_name = quote.customer.name if quote.customer else f"#{quote.customer_id}"

    shipping_data: dict[str, Any] = {
        "converted_from_quote": True,
        "original_quote_id": quote.id,
        "original_quote_number": quote.quote_number,
        "customer_info": (
            quote.customer.model_dump(mode="json", exclude={"created_at", "updated_at"})
            if quote.customer
            else {"id": quote.customer_id}
        ),
        "shipping_method": quote.shipping_costs.selected.value,
        "shipping_cost": str(quote.selected_shipping_cost),
        "agent_fees": str(quote.agent_fees),
        "local_shipping_fees": str(quote.local_shipping_fees),
    }
    if created_by:
        shipping_data["created_by"] = created_by

    return Order(
        order_number=order_number,
        quote_id=quote.id,
        status=OrderStatus.APPROVED,
        priority=OrderPriority.MEDIUM,
        total_amount=quote.grand_total_amount,
        order_date=today,
        expected_delivery=today + timedelta(days=delivery_days),
        notes=f"Converted from quote {quote.quote_number}. Customer: {customer_name}",
        shipping_data=shipping_data,
        line_items=[
            OrderLineItem(
                part_id=item.part_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in quote.catalog_line_items
        ],
    )
