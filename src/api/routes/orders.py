"""Order endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_ord_store
from src.application.dto.responses import (
    ErrorResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusCountsResponse,
)
from src.application.mappers import order_to_response
from src.core.entities.order import OrderListFilters, OrderStatus
from src.core.exceptions import OrderNotFoundError
from src.infrastructure.storage.sqlite import SQLiteOrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: OrderStatus | Literal["all"] = Query(default="all", alias="status"),
    search: str = Query(
        default="", description="Order number, notes, supplier, or line item part"
    ),
    sort_by: Literal["date", "amount"] = "date",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=25, ge=1, le=200),
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderListResponse:
    result = await store.list(
        OrderListFilters(
            status=None if status_filter == "all" else status_filter,
            search_term=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            page_size=page_size,
        )
    )
    return OrderListResponse(
        orders=[order_to_response(o) for o in result.orders],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/status-counts", response_model=OrderStatusCountsResponse)
async def status_counts(
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderStatusCountsResponse:
    return OrderStatusCountsResponse(counts=await store.status_counts())


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    store: SQLiteOrderStore = Depends(get_ord_store),
) -> OrderResponse:
    order = await store.get(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return order_to_response(order)
