"""List Quotes Use Case: filtered, sorted, paginated quote listing."""

from dataclasses import dataclass

from src.application.dto.requests import ListQuotesRequest
from src.application.dto.responses import QuoteListResponse
from src.application.mappers import quote_to_response
from src.config import get_logger, get_settings
from src.core.entities.quote import QuoteListFilters, QuotePage
from src.core.interfaces.quote_store import IQuoteStore

logger = get_logger(__name__)


@dataclass
class ListQuotesResult:
    page: QuotePage
    filters: QuoteListFilters


class ListQuotesUseCase:
    """
    List quotes for explicit filter state.

    Saved preferences are never consulted here; callers load them and pass
    the resulting filters in.
    """

    def __init__(
        self,
        quote_store: IQuoteStore | None = None,
        default_page_size: int | None = None,
        max_page_size: int | None = None,
    ):
        self._quote_store = quote_store
        settings = get_settings().quotes
        self._default_page_size = default_page_size or settings.default_page_size
        self._max_page_size = max_page_size or settings.max_page_size

    async def _get_quote_store(self) -> IQuoteStore:
        if self._quote_store is None:
            from src.infrastructure.storage.sqlite import get_quote_store

            self._quote_store = await get_quote_store()
        return self._quote_store

    def build_filters(self, request: ListQuotesRequest) -> QuoteListFilters:
        page_size = min(request.page_size or self._default_page_size, self._max_page_size)
        return QuoteListFilters(
            status=None if request.status == "all" else request.status,
            search_term=request.search_term.strip(),
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            page=request.page,
            page_size=page_size,
        )

    async def execute(self, request: ListQuotesRequest) -> ListQuotesResult:
        """Execute list quotes use case."""
        filters = self.build_filters(request)
        page = await (await self._get_quote_store()).list(filters)
        logger.debug(
            "quotes_listed",
            status=filters.status.value if filters.status else "all",
            search=filters.search_term or None,
            total=page.total,
            page=page.page,
        )
        return ListQuotesResult(page=page, filters=filters)

    def to_response(self, result: ListQuotesResult) -> QuoteListResponse:
        """Convert result to API response."""
        page = result.page
        return QuoteListResponse(
            quotes=[quote_to_response(q) for q in page.quotes],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
