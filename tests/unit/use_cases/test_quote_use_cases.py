"""Unit tests for quote use cases with mocked stores."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import (
    CreateQuoteRequest,
    ListQuotesRequest,
    QuoteLineItemRequest,
    SaveQuotePreferencesRequest,
    ShippingCostsRequest,
    UpdateQuoteRequest,
    UpdateQuoteStatusRequest,
)
from src.application.use_cases.convert_quote_to_order import ConvertQuoteToOrderUseCase
from src.application.use_cases.create_quote import CreateQuoteUseCase
from src.application.use_cases.document_numbers import NUMBER_ATTEMPTS
from src.application.use_cases.list_quotes import ListQuotesUseCase
from src.application.use_cases.quote_preferences import QuotePreferencesUseCase
from src.application.use_cases.update_quote import UpdateQuoteUseCase
from src.application.use_cases.update_quote_status import UpdateQuoteStatusUseCase
from src.core.entities import (
    OrderStatus,
    QuoteListPreferences,
    QuotePage,
    QuoteStatus,
    ShippingMethod,
)
from src.core.exceptions import (
    CustomerNotFoundError,
    DocumentNumberTakenError,
    PartNotFoundError,
    QuoteAlreadyConvertedError,
    QuoteNotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_quote_store(sample_quote):
    store = AsyncMock()
    store.create.side_effect = lambda q: q.model_copy(update={"id": 7})
    store.replace.side_effect = lambda q: q
    store.get.return_value = sample_quote
    return store


@pytest.fixture
def mock_part_store(sample_part):
    store = AsyncMock()
    store.get_many.return_value = {sample_part.id: sample_part}
    return store


@pytest.fixture
def mock_customer_store(sample_customer):
    store = AsyncMock()
    store.get.return_value = sample_customer
    return store


@pytest.fixture
def mock_order_store():
    store = AsyncMock()

    async def convert(quote, order, placeholder):
        order.id = 3
        order.supplier_id = 1
        return order

    store.convert_quote.side_effect = convert
    return store


def _quote_request(**overrides) -> CreateQuoteRequest:
    data = {
        "customer_id": 1,
        "line_items": [QuoteLineItemRequest(part_id=10, quantity=2, unit_price=Decimal("100.00"))],
        "shipping_costs": ShippingCostsRequest(sea=Decimal("50"), air=Decimal("80")),
        "agent_fees": Decimal("10"),
        "local_shipping_fees": Decimal("5"),
        "quote_date": date(2026, 4, 1),
    }
    data.update(overrides)
    return CreateQuoteRequest(**data)


class TestCreateQuoteUseCase:
    @pytest.fixture
    def use_case(self, mock_quote_store, mock_part_store, mock_customer_store):
        return CreateQuoteUseCase(
            quote_store=mock_quote_store,
            part_store=mock_part_store,
            customer_store=mock_customer_store,
            validity_days=30,
        )

    async def test_totals_computed(self, use_case, mock_quote_store):
        result = await use_case.execute(_quote_request())

        quote = result.quote
        assert quote.id == 7
        assert quote.status == QuoteStatus.DRAFT
        assert quote.grand_total_amount == Decimal("291.50")
        assert quote.line_items[0].part_number == "BRK-1042"
        assert quote.quote_number.startswith("QTE-2026-")
        assert quote.expiry_date == date(2026, 5, 1)
        mock_quote_store.create.assert_awaited_once()

    async def test_fees_and_shipping_kept_in_cents(self, use_case):
        result = await use_case.execute(
            _quote_request(
                shipping_costs=ShippingCostsRequest(sea=Decimal("50.005"), air=Decimal("80")),
                agent_fees=Decimal("0.005"),
                local_shipping_fees=Decimal("4.994"),
            )
        )

        quote = result.quote
        assert quote.shipping_costs.sea == Decimal("50.01")
        assert quote.agent_fees == Decimal("0.01")
        assert quote.local_shipping_fees == Decimal("4.99")
        # 200.00 + 50.01 + 0.01 + 4.99
        assert quote.subtotal_amount == Decimal("255.01")

    async def test_send_creates_sent_quote(self, use_case):
        result = await use_case.execute(_quote_request(send=True))
        assert result.quote.status == QuoteStatus.SENT

    async def test_custom_item_defaults_description(self, use_case, mock_part_store):
        request = _quote_request(
            line_items=[
                QuoteLineItemRequest(
                    is_custom_part=True,
                    custom_part_name=" Freight crate ",
                    quantity=1,
                    unit_price=Decimal("40"),
                )
            ]
        )

        result = await use_case.execute(request)

        item = result.quote.line_items[0]
        assert item.custom_part_name == "Freight crate"
        assert item.custom_part_description == ""
        mock_part_store.get_many.assert_not_awaited()

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"line_items": []}, "line_items"),
            (
                {"line_items": [QuoteLineItemRequest(part_id=10, quantity=0, unit_price=Decimal("1"))]},
                "line_items[0].quantity",
            ),
            (
                {"line_items": [QuoteLineItemRequest(part_id=10, quantity=1, unit_price=Decimal("-1"))]},
                "line_items[0].unit_price",
            ),
            (
                {"line_items": [QuoteLineItemRequest(quantity=1, unit_price=Decimal("1"))]},
                "line_items[0].part_id",
            ),
            (
                {
                    "line_items": [
                        QuoteLineItemRequest(is_custom_part=True, quantity=1, unit_price=Decimal("1"))
                    ]
                },
                "line_items[0].custom_part_name",
            ),
            ({"agent_fees": Decimal("-0.01")}, "agent_fees"),
            ({"shipping_costs": ShippingCostsRequest(air=Decimal("-5"))}, "shipping_costs.air"),
            ({"expiry_date": date(2026, 3, 1)}, "expiry_date"),
        ],
    )
    async def test_invalid_input_writes_nothing(self, use_case, mock_quote_store, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_quote_request(**overrides))

        assert exc_info.value.details["field"] == field
        mock_quote_store.create.assert_not_awaited()

    async def test_unknown_customer(self, use_case, mock_customer_store):
        mock_customer_store.get.return_value = None

        with pytest.raises(CustomerNotFoundError):
            await use_case.execute(_quote_request())

    async def test_unknown_part(self, use_case, mock_part_store):
        mock_part_store.get_many.return_value = {}

        with pytest.raises(PartNotFoundError):
            await use_case.execute(_quote_request())

    async def test_taken_number_is_regenerated(self, use_case, mock_quote_store):
        tried = []

        async def create(quote):
            tried.append(quote.quote_number)
            if len(tried) == 1:
                raise DocumentNumberTakenError("quote", quote.quote_number)
            return quote.model_copy(update={"id": 7})

        mock_quote_store.create.side_effect = create

        result = await use_case.execute(_quote_request())

        assert len(tried) == 2
        assert tried[0] != tried[1]
        assert result.quote.quote_number == tried[1]

    async def test_number_collisions_give_up(self, use_case, mock_quote_store):
        mock_quote_store.create.side_effect = DocumentNumberTakenError("quote", "QTE-2026-000001")

        with pytest.raises(DocumentNumberTakenError):
            await use_case.execute(_quote_request())

        assert mock_quote_store.create.await_count == NUMBER_ATTEMPTS


class TestUpdateQuoteUseCase:
    @pytest.fixture
    def use_case(self, mock_quote_store, mock_part_store, mock_customer_store):
        return UpdateQuoteUseCase(
            quote_store=mock_quote_store,
            part_store=mock_part_store,
            customer_store=mock_customer_store,
        )

    async def test_switching_freight_recomputes_totals(self, use_case, mock_quote_store):
        request = UpdateQuoteRequest(
            quote_id=7,
            line_items=[QuoteLineItemRequest(part_id=10, quantity=2, unit_price=Decimal("100.00"))],
            shipping_costs=ShippingCostsRequest(
                sea=Decimal("50"), air=Decimal("80"), selected=ShippingMethod.AIR
            ),
            agent_fees=Decimal("10"),
            local_shipping_fees=Decimal("5"),
        )

        result = await use_case.execute(request)

        assert result.previous_grand_total == "291.50"
        assert result.quote.total_bid_items_cost == Decimal("200.00")
        assert result.quote.subtotal_amount == Decimal("295.00")
        assert result.quote.grand_total_amount == Decimal("324.50")
        mock_quote_store.replace.assert_awaited_once()

    async def test_converted_quote_is_read_only(self, use_case, sample_quote, mock_quote_store):
        sample_quote.status = QuoteStatus.CONVERTED_TO_ORDER

        with pytest.raises(QuoteAlreadyConvertedError):
            await use_case.execute(UpdateQuoteRequest(quote_id=7))
        mock_quote_store.replace.assert_not_awaited()

    async def test_missing_quote(self, use_case, mock_quote_store):
        mock_quote_store.get.return_value = None

        with pytest.raises(QuoteNotFoundError):
            await use_case.execute(UpdateQuoteRequest(quote_id=99))


class TestUpdateQuoteStatusUseCase:
    @pytest.fixture
    def use_case(self, mock_quote_store, mock_order_store):
        converter = ConvertQuoteToOrderUseCase(
            quote_store=mock_quote_store,
            order_store=mock_order_store,
            delivery_days=14,
        )
        return UpdateQuoteStatusUseCase(
            quote_store=mock_quote_store,
            order_store=mock_order_store,
            converter=converter,
        )

    async def test_plain_status_change(self, use_case, sample_quote, mock_quote_store, mock_order_store):
        mock_quote_store.update_status.return_value = sample_quote.model_copy(
            update={"status": QuoteStatus.SENT}
        )

        result = await use_case.execute(
            UpdateQuoteStatusRequest(quote_id=7, status=QuoteStatus.SENT, notes="Emailed")
        )

        assert result.previous_status == "draft"
        assert result.quote.status == QuoteStatus.SENT
        assert result.order is None
        mock_quote_store.update_status.assert_awaited_once_with(7, QuoteStatus.SENT, "Emailed")
        mock_order_store.convert_quote.assert_not_awaited()

    async def test_conversion_creates_order(self, use_case, sample_quote, mock_quote_store, mock_order_store):
        converted = sample_quote.model_copy(
            update={
                "status": QuoteStatus.CONVERTED_TO_ORDER,
                "converted_to_order_id": 3,
            }
        )
        mock_quote_store.get.side_effect = [sample_quote, converted]

        result = await use_case.execute(
            UpdateQuoteStatusRequest(
                quote_id=7, status=QuoteStatus.CONVERTED_TO_ORDER, acting_user="u-9"
            )
        )

        assert result.quote.status == QuoteStatus.CONVERTED_TO_ORDER
        assert result.order.id == 3
        assert result.order.status == OrderStatus.APPROVED
        assert result.order.total_amount == sample_quote.grand_total_amount
        assert len(result.order.line_items) == 1
        assert result.order.shipping_data["created_by"] == "u-9"
        mock_quote_store.update_status.assert_not_awaited()

        response = use_case.to_response(result)
        assert response.order.order_number.startswith("ORD-")

    async def test_converted_quote_rejects_changes(self, use_case, sample_quote):
        sample_quote.status = QuoteStatus.CONVERTED_TO_ORDER

        with pytest.raises(QuoteAlreadyConvertedError):
            await use_case.execute(UpdateQuoteStatusRequest(quote_id=7, status=QuoteStatus.DRAFT))


class TestConvertQuoteToOrderUseCase:
    async def test_reports_dropped_custom_items(self, mock_quote_store, mock_order_store, sample_quote):
        use_case = ConvertQuoteToOrderUseCase(
            quote_store=mock_quote_store, order_store=mock_order_store, delivery_days=7
        )

        result = await use_case.execute(7)

        assert result.dropped_custom_items == 1
        assert result.order.expected_delivery == date.today() + timedelta(days=7)
        placeholder = mock_order_store.convert_quote.await_args.args[2]
        assert placeholder.name == "Quote Conversion Supplier"

    async def test_taken_order_number_is_regenerated(
        self, mock_quote_store, mock_order_store, sample_quote
    ):
        tried = []

        async def convert(quote, order, placeholder):
            tried.append(order.order_number)
            if len(tried) == 1:
                raise DocumentNumberTakenError("order", order.order_number)
            order.id = 3
            return order

        mock_order_store.convert_quote.side_effect = convert
        use_case = ConvertQuoteToOrderUseCase(
            quote_store=mock_quote_store, order_store=mock_order_store, delivery_days=7
        )

        result = await use_case.execute(7)

        assert len(tried) == 2
        assert tried[0] != tried[1]
        assert result.order.order_number == tried[1]


class TestListQuotesUseCase:
    async def test_filters_are_explicit(self):
        store = AsyncMock()
        store.list.return_value = QuotePage(total=0, page=1, page_size=100)
        use_case = ListQuotesUseCase(quote_store=store, default_page_size=25, max_page_size=100)

        result = await use_case.execute(
            ListQuotesRequest(status="all", search_term="  apex ", page_size=500)
        )

        filters = store.list.await_args.args[0]
        assert filters.status is None
        assert filters.search_term == "apex"
        assert filters.page_size == 100
        assert result.filters == filters

    def test_default_page_size(self):
        use_case = ListQuotesUseCase(quote_store=AsyncMock(), default_page_size=25, max_page_size=100)

        filters = use_case.build_filters(ListQuotesRequest(status=QuoteStatus.SENT))

        assert filters.status == QuoteStatus.SENT
        assert filters.page_size == 25


class TestQuotePreferencesUseCase:
    async def test_defaults_when_nothing_saved(self):
        store = AsyncMock()
        store.load.return_value = None
        use_case = QuotePreferencesUseCase(preference_store=store)

        response = use_case.to_response(await use_case.load("u-1"))

        assert response.status == "all"
        assert response.sort_by == "date"
        assert response.sort_order == "desc"

    async def test_save_clamps_page_size(self):
        store = AsyncMock()
        store.save.side_effect = lambda prefs: prefs
        use_case = QuotePreferencesUseCase(preference_store=store)

        prefs = await use_case.save(
            "u-1", SaveQuotePreferencesRequest(status="sent", page_size=1000)
        )

        assert isinstance(prefs, QuoteListPreferences)
        assert prefs.status == QuoteStatus.SENT
        assert prefs.page_size == 100
