"""Entity → response DTO conversions shared by use cases and routes."""

from datetime import date

from src.application.dto.responses import (
    CategoryResponse,
    CustomerResponse,
    ExchangeRateResponse,
    OrderLineItemResponse,
    OrderResponse,
    PartResponse,
    PriceRecordResponse,
    QuoteLineItemResponse,
    QuoteResponse,
    ShippingCostsResponse,
    SupplierResponse,
)
from src.core.entities import (
    Category,
    CategoryWithStats,
    Customer,
    ExchangeRate,
    Order,
    Part,
    PriceRecord,
    Quote,
    Supplier,
)
from src.core.services.quote_calculator import round_money


def category_to_response(category: Category | CategoryWithStats) -> CategoryResponse:
    response = CategoryResponse(
        id=category.id,  # type: ignore[arg-type]
        name=category.name,
        description=category.description,
        display_order=category.display_order,
        is_active=category.is_active,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )
    if isinstance(category, CategoryWithStats):
        stats = category.stats
        response.part_count = stats.part_count
        response.total_inventory_value = round_money(stats.total_inventory_value)
        response.average_stock_level = round(stats.average_stock_level, 2)
        response.low_stock_count = stats.low_stock_count
    return response


def part_to_response(part: Part) -> PartResponse:
    return PartResponse(
        id=part.id,  # type: ignore[arg-type]
        part_number=part.part_number,
        name=part.name,
        description=part.description,
        category_id=part.category_id,
        specifications=part.specifications,
        current_stock=part.current_stock,
        min_stock=part.min_stock,
        is_low_stock=part.is_low_stock,
        is_archived=part.is_archived,
        internal_markup=part.internal_markup,
        wholesale_markup=part.wholesale_markup,
        trade_markup=part.trade_markup,
        retail_markup=part.retail_markup,
    )


def price_record_to_response(record: PriceRecord) -> PriceRecordResponse:
    return PriceRecordResponse(
        id=record.id,  # type: ignore[arg-type]
        part_id=record.part_id,
        unit_price=record.unit_price,
        supplier_name=record.supplier_name,
        quantity=record.quantity,
        effective_date=record.effective_date,
    )


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,  # type: ignore[arg-type]
        name=customer.name,
        contact_person=customer.contact_person,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
    )


def supplier_to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,  # type: ignore[arg-type]
        name=supplier.name,
        contact_person=supplier.contact_person,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        rating=supplier.rating,
        delivery_time=supplier.delivery_time,
        payment_terms=supplier.payment_terms,
        notes=supplier.notes,
        is_active=supplier.is_active,
    )


def quote_to_response(quote: Quote, today: date | None = None) -> QuoteResponse:
    """Build the quote payload; is_expired is evaluated now, never stored."""
    return QuoteResponse(
        id=quote.id,  # type: ignore[arg-type]
        quote_number=quote.quote_number,
        customer_id=quote.customer_id,
        customer=customer_to_response(quote.customer) if quote.customer else None,
        status=quote.status.value,
        is_expired=quote.is_expired(today),
        line_items=[
            QuoteLineItemResponse(
                id=item.id,
                is_custom_part=item.is_custom_part,
                part_id=item.part_id,
                part_number=item.part_number,
                part_name=item.part_name,
                custom_part_name=item.custom_part_name,
                custom_part_description=item.custom_part_description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in quote.line_items
        ],
        shipping_costs=ShippingCostsResponse(
            sea=quote.shipping_costs.sea,
            air=quote.shipping_costs.air,
            selected=quote.shipping_costs.selected.value,
        ),
        agent_fees=quote.agent_fees,
        local_shipping_fees=quote.local_shipping_fees,
        total_bid_items_cost=quote.total_bid_items_cost,
        subtotal_amount=quote.subtotal_amount,
        gst_amount=quote.gst_amount,
        grand_total_amount=quote.grand_total_amount,
        quote_date=quote.quote_date,
        expiry_date=quote.expiry_date,
        notes=quote.notes,
        created_by=quote.created_by,
        converted_to_order_id=quote.converted_to_order_id,
        converted_to_order_number=quote.converted_to_order_number,
        created_at=quote.created_at,
        updated_at=quote.updated_at,
    )


def order_to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        supplier_id=order.supplier_id,
        quote_id=order.quote_id,
        status=order.status.value,
        priority=order.priority.value,
        total_amount=order.total_amount,
        order_date=order.order_date,
        expected_delivery=order.expected_delivery,
        notes=order.notes,
        shipping_data=order.shipping_data,
        line_items=[
            OrderLineItemResponse(
                id=item.id,
                part_id=item.part_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in order.line_items
        ],
    )


def exchange_rate_to_response(rate: ExchangeRate) -> ExchangeRateResponse:
    return ExchangeRateResponse(
        base_currency=rate.base_currency,
        target_currency=rate.target_currency,
        rate=rate.rate,
        source_api=rate.source_api,
        fetched_at=rate.fetched_at,
    )
