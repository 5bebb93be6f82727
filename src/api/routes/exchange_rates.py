"""Exchange rate endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from src.api.dependencies import get_rate_query_use_case, get_refresh_rates_use_case
from src.application.dto.requests import RefreshExchangeRatesRequest
from src.application.dto.responses import (
    ErrorResponse,
    ExchangeRateHistoryResponse,
    ExchangeRateResponse,
)
from src.application.use_cases.exchange_rates import (
    ExchangeRateQueryUseCase,
    RefreshExchangeRatesUseCase,
)

router = APIRouter(prefix="/api/exchange-rates", tags=["exchange-rates"])


@router.post("/refresh", responses={500: {"description": "Every currency failed"}})
async def refresh_rates(
    request: RefreshExchangeRatesRequest | None = Body(default=None),
    use_case: RefreshExchangeRatesUseCase = Depends(get_refresh_rates_use_case),
) -> JSONResponse:
    """
    Fetch the latest rate for each target currency and store it.

    Returns {success, rates, timestamp}; 500 with {success: false, error}
    when no currency could be fetched from any provider.
    """
    result = await use_case.execute(request.currencies if request else None)
    body: dict[str, Any] = result.to_envelope()
    return JSONResponse(status_code=200 if result.success else 500, content=body)


@router.get(
    "/{target}/latest",
    response_model=ExchangeRateResponse,
    responses={404: {"model": ErrorResponse}},
)
async def latest_rate(
    target: str,
    base: str | None = None,
    use_case: ExchangeRateQueryUseCase = Depends(get_rate_query_use_case),
) -> ExchangeRateResponse:
    return use_case.to_response(await use_case.latest(target, base=base))


@router.get("/{target}/history", response_model=ExchangeRateHistoryResponse)
async def rate_history(
    target: str,
    limit: int = Query(default=7, ge=1, le=365),
    base: str | None = None,
    use_case: ExchangeRateQueryUseCase = Depends(get_rate_query_use_case),
) -> ExchangeRateHistoryResponse:
    return await use_case.history(target, limit=limit, base=base)
