"""Quote endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_create_quote_use_case,
    get_list_quotes_use_case,
    get_qt_store,
    get_quote_preferences_use_case,
    get_update_quote_status_use_case,
    get_update_quote_use_case,
)
from src.application.dto.requests import (
    CreateQuoteRequest,
    ListQuotesRequest,
    SaveQuotePreferencesRequest,
    UpdateQuoteRequest,
    UpdateQuoteStatusRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    QuoteListResponse,
    QuotePreferencesResponse,
    QuoteResponse,
    QuoteStatusCountsResponse,
    QuoteStatusUpdateResponse,
)
from src.application.mappers import quote_to_response
from src.application.use_cases.create_quote import CreateQuoteUseCase
from src.application.use_cases.list_quotes import ListQuotesUseCase
from src.application.use_cases.quote_preferences import QuotePreferencesUseCase
from src.application.use_cases.update_quote import UpdateQuoteUseCase
from src.application.use_cases.update_quote_status import UpdateQuoteStatusUseCase
from src.core.entities.quote import QuoteStatus
from src.core.exceptions import QuoteNotFoundError
from src.infrastructure.storage.sqlite import SQLiteQuoteStore

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


@router.get("", response_model=QuoteListResponse)
async def list_quotes(
    status_filter: QuoteStatus | Literal["all"] = Query(default="all", alias="status"),
    search: str = Query(default="", description="Quote number, customer name or contact"),
    sort_by: Literal["date", "amount", "customer"] = "date",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    use_case: ListQuotesUseCase = Depends(get_list_quotes_use_case),
) -> QuoteListResponse:
    result = await use_case.execute(
        ListQuotesRequest(
            status=status_filter,
            search_term=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            page_size=page_size,
        )
    )
    return use_case.to_response(result)


@router.post(
    "",
    response_model=QuoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_quote(
    request: CreateQuoteRequest,
    use_case: CreateQuoteUseCase = Depends(get_create_quote_use_case),
) -> QuoteResponse:
    """Create a quote; totals are computed server-side."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/status-counts", response_model=QuoteStatusCountsResponse)
async def status_counts(
    store: SQLiteQuoteStore = Depends(get_qt_store),
) -> QuoteStatusCountsResponse:
    return QuoteStatusCountsResponse(counts=await store.status_counts())


@router.get("/preferences/{user_id}", response_model=QuotePreferencesResponse)
async def load_preferences(
    user_id: str,
    use_case: QuotePreferencesUseCase = Depends(get_quote_preferences_use_case),
) -> QuotePreferencesResponse:
    return use_case.to_response(await use_case.load(user_id))


@router.put("/preferences/{user_id}", response_model=QuotePreferencesResponse)
async def save_preferences(
    user_id: str,
    request: SaveQuotePreferencesRequest,
    use_case: QuotePreferencesUseCase = Depends(get_quote_preferences_use_case),
) -> QuotePreferencesResponse:
    return use_case.to_response(await use_case.save(user_id, request))


@router.get(
    "/{quote_id}",
    response_model=QuoteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_quote(
    quote_id: int,
    store: SQLiteQuoteStore = Depends(get_qt_store),
) -> QuoteResponse:
    quote = await store.get(quote_id)
    if quote is None:
        raise QuoteNotFoundError(quote_id)
    return quote_to_response(quote)


@router.put(
    "/{quote_id}",
    response_model=QuoteResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_quote(
    quote_id: int,
    request: UpdateQuoteRequest,
    use_case: UpdateQuoteUseCase = Depends(get_update_quote_use_case),
) -> QuoteResponse:
    """Replace line items and fee inputs of a quote that is not yet converted."""
    request.quote_id = quote_id
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.put(
    "/{quote_id}/status",
    response_model=QuoteStatusUpdateResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_quote_status(
    quote_id: int,
    request: UpdateQuoteStatusRequest,
    use_case: UpdateQuoteStatusUseCase = Depends(get_update_quote_status_use_case),
) -> QuoteStatusUpdateResponse:
    """Change status. converted_to_order also creates the order and returns it."""
    request.quote_id = quote_id
    result = await use_case.execute(request)
    return use_case.to_response(result)
