"""Validation shared by quote create and edit."""

from decimal import Decimal

from src.application.dto.requests import QuoteLineItemRequest, ShippingCostsRequest
from src.core.entities.quote import QuoteLineItem, ShippingCosts
from src.core.exceptions import PartNotFoundError, ValidationError
from src.core.interfaces.part_store import IPartStore
from src.core.services.quote_calculator import round_money


def check_amount(field: str, value: Decimal) -> Decimal:
    """Reject negative amounts and return the value rounded to cents."""
    if value < 0:
        raise ValidationError(field, "must not be negative", value)
    return round_money(value)


def build_shipping_costs(request: ShippingCostsRequest) -> ShippingCosts:
    return ShippingCosts(
        sea=check_amount("shipping_costs.sea", request.sea),
        air=check_amount("shipping_costs.air", request.air),
        selected=request.selected,
    )


async def build_line_items(
    requests: list[QuoteLineItemRequest],
    part_store: IPartStore,
) -> list[QuoteLineItem]:
    """
    Validate requested rows and turn them into line items.

    Every check runs before any write: at least one row, positive
    quantities, non-negative prices, the catalog/custom shape, and that
    every referenced part exists.
    """
    if not requests:
        raise ValidationError("line_items", "a quote needs at least one line item")

    for index, row in enumerate(requests):
        field = f"line_items[{index}]"
        if row.quantity <= 0:
            raise ValidationError(f"{field}.quantity", "must be greater than 0", row.quantity)
        check_amount(f"{field}.unit_price", row.unit_price)
        if row.is_custom_part:
            if row.part_id is not None:
                raise ValidationError(
                    f"{field}.part_id", "custom items must not reference a part", row.part_id
                )
            if not (row.custom_part_name or "").strip():
                raise ValidationError(f"{field}.custom_part_name", "required for custom items")
        elif row.part_id is None:
            raise ValidationError(f"{field}.part_id", "required for catalog items")

    part_ids = sorted({row.part_id for row in requests if not row.is_custom_part})
    parts = await part_store.get_many(part_ids) if part_ids else {}
    missing = [pid for pid in part_ids if pid not in parts]
    if missing:
        raise PartNotFoundError(missing[0])

    items = []
    for row in requests:
        if row.is_custom_part:
            items.append(
                QuoteLineItem(
                    is_custom_part=True,
                    custom_part_name=row.custom_part_name.strip(),  # type: ignore[union-attr]
                    custom_part_description=row.custom_part_description or "",
                    quantity=row.quantity,
                    unit_price=row.unit_price,
                )
            )
        else:
            part = parts[row.part_id]  # type: ignore[index]
            items.append(
                QuoteLineItem(
                    part_id=part.id,
                    part_number=part.part_number,
                    part_name=part.name,
                    quantity=row.quantity,
                    unit_price=row.unit_price,
                )
            )
    return items
