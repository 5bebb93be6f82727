"""Update Quote Use Case: replace line items and fee inputs, re-run totals."""

from dataclasses import dataclass

from src.application.dto.requests import UpdateQuoteRequest
from src.application.dto.responses import QuoteResponse
from src.application.mappers import quote_to_response
from src.application.use_cases.quote_inputs import (
    build_line_items,
    build_shipping_costs,
    check_amount,
)
from src.config import get_logger
from src.core.entities.quote import Quote
from src.core.exceptions import (
    CustomerNotFoundError,
    QuoteNotFoundError,
    ValidationError,
)
from src.core.interfaces.order_store import ICustomerStore
from src.core.interfaces.part_store import IPartStore
from src.core.interfaces.quote_store import IQuoteStore
from src.core.services.quote_calculator import calculate_quote_totals
from src.core.services.quote_lifecycle import QuoteStatusMachine

logger = get_logger(__name__)


@dataclass
class UpdateQuoteResult:
    """Result of editing a quote."""

    quote: Quote
    previous_grand_total: str


class UpdateQuoteUseCase:
    """Edit a non-converted quote; line items are swapped in one transaction."""

    def __init__(
        self,
        quote_store: IQuoteStore | None = None,
        part_store: IPartStore | None = None,
        customer_store: ICustomerStore | None = None,
    ):
        self._quote_store = quote_store
        self._part_store = part_store
        self._customer_store = customer_store

    async def _get_quote_store(self) -> IQuoteStore:
        if self._quote_store is None:
            from src.infrastructure.storage.sqlite import get_quote_store

            self._quote_store = await get_quote_store()
        return self._quote_store

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from src.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def _get_customer_store(self) -> ICustomerStore:
        if self._customer_store is None:
            from src.infrastructure.storage.sqlite import get_customer_store

            self._customer_store = await get_customer_store()
        return self._customer_store

    async def execute(self, request: UpdateQuoteRequest) -> UpdateQuoteResult:
        """Execute update quote use case."""
        logger.info("update_quote_started", quote_id=request.quote_id)

        quote_store = await self._get_quote_store()
        quote = await quote_store.get(request.quote_id)
        if quote is None:
            raise QuoteNotFoundError(request.quote_id)
        QuoteStatusMachine.ensure_mutable(quote)

        if request.customer_id is not None and request.customer_id != quote.customer_id:
            customer = await (await self._get_customer_store()).get(request.customer_id)
            if customer is None:
                raise CustomerNotFoundError(request.customer_id)
            quote.customer_id = request.customer_id
            quote.customer = customer

        line_items = await build_line_items(request.line_items, await self._get_part_store())
        shipping = build_shipping_costs(request.shipping_costs)
        agent_fees = check_amount("agent_fees", request.agent_fees)
        local_fees = check_amount("local_shipping_fees", request.local_shipping_fees)

        expiry_date = request.expiry_date or quote.expiry_date
        if expiry_date < quote.quote_date:
            raise ValidationError("expiry_date", "must not be before the quote date", expiry_date)

        previous = str(quote.grand_total_amount)
        quote.line_items = line_items
        quote.shipping_costs = shipping
        quote.agent_fees = agent_fees
        quote.local_shipping_fees = local_fees
        quote.expiry_date = expiry_date
        if request.notes is not None:
            quote.notes = request.notes
        quote.apply_totals(
            calculate_quote_totals(line_items, shipping, agent_fees, local_fees)
        )

        quote = await quote_store.replace(quote)

        logger.info(
            "update_quote_complete",
            quote_id=quote.id,
            previous_grand_total=previous,
            grand_total=str(quote.grand_total_amount),
        )
        return UpdateQuoteResult(quote=quote, previous_grand_total=previous)

    def to_response(self, result: UpdateQuoteResult) -> QuoteResponse:
        """Convert result to API response."""
        return quote_to_response(result.quote)
