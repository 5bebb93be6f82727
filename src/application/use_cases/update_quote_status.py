"""Update Quote Status Use Case."""

from dataclasses import dataclass

from src.application.dto.requests import UpdateQuoteStatusRequest
from src.application.dto.responses import QuoteStatusUpdateResponse
from src.application.mappers import order_to_response, quote_to_response
from src.application.use_cases.convert_quote_to_order import ConvertQuoteToOrderUseCase
from src.config import get_logger
from src.core.entities.order import Order
from src.core.entities.quote import Quote
from src.core.exceptions import QuoteNotFoundError
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.quote_store import IQuoteStore
from src.core.services.quote_lifecycle import QuoteStatusMachine

logger = get_logger(__name__)


@dataclass
class UpdateQuoteStatusResult:
    """Result of a status change."""

    quote: Quote
    previous_status: str
    order: Order | None = None  # set when the change was a conversion


class UpdateQuoteStatusUseCase:
    """Move a quote between statuses; converted_to_order delegates to conversion."""

    def __init__(
        self,
        quote_store: IQuoteStore | None = None,
        order_store: IOrderStore | None = None,
        converter: ConvertQuoteToOrderUseCase | None = None,
    ):
        self._quote_store = quote_store
        self._order_store = order_store
        self._converter = converter

    async def _get_quote_store(self) -> IQuoteStore:
        if self._quote_store is None:
            from src.infrastructure.storage.sqlite import get_quote_store

            self._quote_store = await get_quote_store()
        return self._quote_store

    def _get_converter(self) -> ConvertQuoteToOrderUseCase:
        if self._converter is None:
            self._converter = ConvertQuoteToOrderUseCase(
                quote_store=self._quote_store,
                order_store=self._order_store,
            )
        return self._converter

    async def execute(self, request: UpdateQuoteStatusRequest) -> UpdateQuoteStatusResult:
        """Execute update status use case."""
        logger.info(
            "update_quote_status_started",
            quote_id=request.quote_id,
            status=request.status.value,
        )

        quote_store = await self._get_quote_store()
        quote = await quote_store.get(request.quote_id)
        if quote is None:
            raise QuoteNotFoundError(request.quote_id)
        previous = quote.status.value

        if QuoteStatusMachine.check_transition(quote, request.status):
            converted = await self._get_converter().execute(
                request.quote_id, acting_user=request.acting_user, quote=quote
            )
            return UpdateQuoteStatusResult(
                quote=converted.quote,
                previous_status=previous,
                order=converted.order,
            )

        updated = await quote_store.update_status(
            request.quote_id, request.status, request.notes
        )
        logger.info(
            "update_quote_status_complete",
            quote_id=request.quote_id,
            previous_status=previous,
            status=updated.status.value,
        )
        return UpdateQuoteStatusResult(quote=updated, previous_status=previous)

    def to_response(self, result: UpdateQuoteStatusResult) -> QuoteStatusUpdateResponse:
        """Convert result to API response."""
        return QuoteStatusUpdateResponse(
            quote=quote_to_response(result.quote),
            order=order_to_response(result.order) if result.order else None,
        )
