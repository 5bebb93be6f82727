"""Create Quote Use Case: validate, price and persist a new quote."""

from dataclasses import dataclass
from datetime import date, timedelta

from src.application.dto.requests import CreateQuoteRequest
from src.application.dto.responses import QuoteResponse
from src.application.mappers import quote_to_response
from src.application.use_cases.document_numbers import retry_on_taken_number
from src.application.use_cases.quote_inputs import (
    build_line_items,
    build_shipping_costs,
    check_amount,
)
from src.config import get_logger, get_settings
from src.core.entities.quote import Quote, QuoteStatus
from src.core.exceptions import CustomerNotFoundError, ValidationError
from src.core.interfaces.order_store import ICustomerStore
from src.core.interfaces.part_store import IPartStore
from src.core.interfaces.quote_store import IQuoteStore
from src.core.services.numbering import generate_quote_number
from src.core.services.quote_calculator import calculate_quote_totals

logger = get_logger(__name__)


@dataclass
class CreateQuoteResult:
    """Result of creating a quote."""

    quote: Quote


class CreateQuoteUseCase:
    """Create a quote in draft (or sent) status with computed totals."""

    def __init__(
        self,
        quote_store: IQuoteStore | None = None,
        part_store: IPartStore | None = None,
        customer_store: ICustomerStore | None = None,
        validity_days: int | None = None,
    ):
        self._quote_store = quote_store
        self._part_store = part_store
        self._customer_store = customer_store
        self._validity_days = validity_days

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

    def _default_validity(self) -> int:
        if self._validity_days is None:
            self._validity_days = get_settings().quotes.default_validity_days
        return self._validity_days

    async def execute(self, request: CreateQuoteRequest) -> CreateQuoteResult:
        """Execute create quote use case."""
        logger.info(
            "create_quote_started",
            customer_id=request.customer_id,
            line_items=len(request.line_items),
        )

        customer = await (await self._get_customer_store()).get(request.customer_id)
        if customer is None:
            raise CustomerNotFoundError(request.customer_id)

        line_items = await build_line_items(request.line_items, await self._get_part_store())
        shipping = build_shipping_costs(request.shipping_costs)
        agent_fees = check_amount("agent_fees", request.agent_fees)
        local_fees = check_amount("local_shipping_fees", request.local_shipping_fees)

        quote_date = request.quote_date or date.today()
        expiry_date = request.expiry_date or quote_date + timedelta(days=self._default_validity())
        if expiry_date < quote_date:
            raise ValidationError("expiry_date", "must not be before the quote date", expiry_date)

        quote = Quote(
            quote_number=generate_quote_number(quote_date),
            customer_id=customer.id,  # type: ignore[arg-type]
            customer=customer,
            status=QuoteStatus.SENT if request.send else QuoteStatus.DRAFT,
            line_items=line_items,
            shipping_costs=shipping,
            agent_fees=agent_fees,
            local_shipping_fees=local_fees,
            quote_date=quote_date,
            expiry_date=expiry_date,
            notes=request.notes,
            created_by=request.created_by,
        )
        quote.apply_totals(
            calculate_quote_totals(line_items, shipping, agent_fees, local_fees)
        )

        store = await self._get_quote_store()

        async def insert(draft: Quote) -> Quote:
            draft.quote_number = generate_quote_number(quote_date)
            return await store.create(draft)

        quote = await retry_on_taken_number()(insert)(quote)
        quote.customer = customer

        logger.info(
            "create_quote_complete",
            quote_id=quote.id,
            quote_number=quote.quote_number,
            grand_total=str(quote.grand_total_amount),
        )
        return CreateQuoteResult(quote=quote)

    def to_response(self, result: CreateQuoteResult) -> QuoteResponse:
        """Convert result to API response."""
        return quote_to_response(result.quote)
