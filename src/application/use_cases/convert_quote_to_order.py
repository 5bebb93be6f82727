"""Convert Quote Use Case: turn a quote into an approved order."""

from dataclasses import dataclass

from src.application.dto.responses import QuoteStatusUpdateResponse
from src.application.mappers import order_to_response, quote_to_response
from src.application.use_cases.document_numbers import retry_on_taken_number
from src.config import get_logger, get_settings
from src.core.entities.order import Order, Supplier
from src.core.entities.quote import Quote
from src.core.exceptions import QuoteNotFoundError
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.quote_store import IQuoteStore
from src.core.services.numbering import generate_order_number
from src.core.services.quote_lifecycle import QuoteStatusMachine, build_order_from_quote

logger = get_logger(__name__)


@dataclass
class ConvertQuoteResult:
    """Result of a quote conversion."""

    quote: Quote
    order: Order

    @property
    def dropped_custom_items(self) -> int:
        return len(self.quote.line_items) - len(self.order.line_items)


class ConvertQuoteToOrderUseCase:
    """
    Convert a quote into an order.

    The order is drafted from the quote, then the order store writes the
    supplier (if one must be created), the order, its line items and the
    quote link in a single transaction.
    """

    def __init__(
        self,
        quote_store: IQuoteStore | None = None,
        order_store: IOrderStore | None = None,
        delivery_days: int | None = None,
    ):
        self._quote_store = quote_store
        self._order_store = order_store
        self._delivery_days = delivery_days

    async def _get_quote_store(self) -> IQuoteStore:
        if self._quote_store is None:
            from src.infrastructure.storage.sqlite import get_quote_store

            self._quote_store = await get_quote_store()
        return self._quote_store

    async def _get_order_store(self) -> IOrderStore:
        if self._order_store is None:
            from src.infrastructure.storage.sqlite import get_order_store

            self._order_store = await get_order_store()
        return self._order_store

    async def execute(
        self,
        quote_id: int,
        acting_user: str | None = None,
        quote: Quote | None = None,
    ) -> ConvertQuoteResult:
        """Execute convert use case. A preloaded quote skips the lookup."""
        logger.info("convert_quote_started", quote_id=quote_id)

        quote_store = await self._get_quote_store()
        if quote is None:
            quote = await quote_store.get(quote_id)
            if quote is None:
                raise QuoteNotFoundError(quote_id)
        QuoteStatusMachine.ensure_mutable(quote)

        delivery_days = self._delivery_days
        if delivery_days is None:
            delivery_days = get_settings().quotes.order_delivery_days

        order = build_order_from_quote(
            quote,
            order_number=generate_order_number(),
            delivery_days=delivery_days,
            created_by=acting_user,
        )
        order_store = await self._get_order_store()

        async def convert(source: Quote, draft: Order) -> Order:
            draft.order_number = generate_order_number()
            return await order_store.convert_quote(source, draft, Supplier.placeholder())

        order = await retry_on_taken_number()(convert)(quote, order)

        converted = await quote_store.get(quote_id)
        if converted is None:
            raise QuoteNotFoundError(quote_id)

        result = ConvertQuoteResult(quote=converted, order=order)
        logger.info(
            "convert_quote_complete",
            quote_id=quote_id,
            order_number=order.order_number,
            total_amount=str(order.total_amount),
            dropped_custom_items=result.dropped_custom_items,
        )
        return result

    def to_response(self, result: ConvertQuoteResult) -> QuoteStatusUpdateResponse:
        """Convert result to API response."""
        return QuoteStatusUpdateResponse(
            quote=quote_to_response(result.quote),
            order=order_to_response(result.order),
        )
