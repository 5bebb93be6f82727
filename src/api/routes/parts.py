"""Parts catalog endpoints."""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_part_pricing_use_case, get_prt_store
from src.application.dto.requests import CreatePartRequest, RecordPriceRequest
from src.application.dto.responses import (
    ErrorResponse,
    PartListResponse,
    PartPricingResponse,
    PartResponse,
    PriceRecordResponse,
)
from src.application.mappers import part_to_response, price_record_to_response
from src.application.use_cases.get_part_pricing import GetPartPricingUseCase
from src.core.entities.part import Part, PriceRecord
from src.core.exceptions import PartNotFoundError
from src.infrastructure.storage.sqlite import SQLitePartStore

router = APIRouter(prefix="/api/parts", tags=["parts"])


@router.get("", response_model=PartListResponse)
async def search_parts(
    q: str = Query(default="", description="Matches part number or name"),
    category_id: int | None = None,
    include_archived: bool = False,
    sort_by: Literal["name", "part_number", "current_stock"] = "name",
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLitePartStore = Depends(get_prt_store),
) -> PartListResponse:
    parts, total = await store.search(
        term=q,
        category_id=category_id,
        include_archived=include_archived,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )
    return PartListResponse(
        parts=[part_to_response(p) for p in parts],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post(
    "",
    response_model=PartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_part(
    request: CreatePartRequest,
    store: SQLitePartStore = Depends(get_prt_store),
) -> PartResponse:
    part = await store.create(Part(**request.model_dump()))
    return part_to_response(part)


@router.get(
    "/{part_id}",
    response_model=PartResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_part(
    part_id: int,
    store: SQLitePartStore = Depends(get_prt_store),
) -> PartResponse:
    part = await store.get(part_id)
    if part is None:
        raise PartNotFoundError(part_id)
    return part_to_response(part)


@router.get(
    "/{part_id}/pricing",
    response_model=PartPricingResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_part_pricing(
    part_id: int,
    use_case: GetPartPricingUseCase = Depends(get_part_pricing_use_case),
) -> PartPricingResponse:
    """Internal, wholesale, trade and retail prices from the latest unit price."""
    pricing = await use_case.execute(part_id)
    return use_case.to_response(part_id, pricing)


@router.get(
    "/{part_id}/prices",
    response_model=list[PriceRecordResponse],
    responses={404: {"model": ErrorResponse}},
)
async def price_history(
    part_id: int,
    limit: int = Query(default=50, ge=1, le=500),
    store: SQLitePartStore = Depends(get_prt_store),
) -> list[PriceRecordResponse]:
    if await store.get(part_id) is None:
        raise PartNotFoundError(part_id)
    records = await store.price_history(part_id, limit=limit)
    return [price_record_to_response(r) for r in records]


@router.post(
    "/{part_id}/prices",
    response_model=PriceRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def record_price(
    part_id: int,
    request: RecordPriceRequest,
    store: SQLitePartStore = Depends(get_prt_store),
) -> PriceRecordResponse:
    record = await store.add_price(
        PriceRecord(
            part_id=part_id,
            unit_price=request.unit_price,
            supplier_name=request.supplier_name,
            quantity=request.quantity,
            effective_date=request.effective_date or date.today(),
        )
    )
    return price_record_to_response(record)
