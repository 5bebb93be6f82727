"""Part category endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_bulk_reassign_use_case,
    get_cat_store,
    get_create_category_use_case,
    get_merge_categories_use_case,
    get_reorder_categories_use_case,
    get_update_category_use_case,
)
from src.application.dto.requests import (
    BulkReassignPartsRequest,
    CreateCategoryRequest,
    MergeCategoriesRequest,
    ReorderCategoriesRequest,
    UpdateCategoryRequest,
)
from src.application.dto.responses import (
    BulkReassignPartsResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryShareResponse,
    CategoryStatisticsResponse,
    ErrorResponse,
    MergeCategoriesResponse,
    PartResponse,
)
from src.application.mappers import category_to_response, part_to_response
from src.application.use_cases.create_category import CreateCategoryUseCase
from src.application.use_cases.merge_categories import (
    BulkReassignPartsUseCase,
    MergeCategoriesUseCase,
)
from src.application.use_cases.reorder_categories import ReorderCategoriesUseCase
from src.application.use_cases.update_category import UpdateCategoryUseCase
from src.core.exceptions import CategoryNotFoundError
from src.core.services.category_statistics import summarize_categories
from src.infrastructure.storage.sqlite import SQLiteCategoryStore

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    include_inactive: bool = False,
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> CategoryListResponse:
    """Categories by display order, each with its part rollup."""
    categories = await store.list_with_stats(include_inactive=include_inactive)
    return CategoryListResponse(
        categories=[category_to_response(c) for c in categories],
        total=len(categories),
    )


@router.get("/statistics", response_model=CategoryStatisticsResponse)
async def category_statistics(
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> CategoryStatisticsResponse:
    """Totals and part distribution across all categories."""
    stats = summarize_categories(await store.list_with_stats(include_inactive=True))
    return CategoryStatisticsResponse(
        total_categories=stats.total_categories,
        active_categories=stats.active_categories,
        total_parts_categorized=stats.total_parts_categorized,
        distribution=[
            CategoryShareResponse(
                category_name=s.category_name,
                part_count=s.part_count,
                percentage=s.percentage,
            )
            for s in stats.distribution
        ],
    )


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_category(
    request: CreateCategoryRequest,
    use_case: CreateCategoryUseCase = Depends(get_create_category_use_case),
) -> CategoryResponse:
    category = await use_case.execute(request)
    return use_case.to_response(category)


@router.put(
    "/reorder",
    response_model=list[CategoryResponse],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def reorder_categories(
    request: ReorderCategoriesRequest,
    use_case: ReorderCategoriesUseCase = Depends(get_reorder_categories_use_case),
) -> list[CategoryResponse]:
    """Persist a full display order. On failure details.current_order holds the stored one."""
    categories = await use_case.execute(request)
    return [category_to_response(c) for c in categories]


@router.post(
    "/merge",
    response_model=MergeCategoriesResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def merge_categories(
    request: MergeCategoriesRequest,
    use_case: MergeCategoriesUseCase = Depends(get_merge_categories_use_case),
) -> MergeCategoriesResponse:
    """Move all parts of source into target and deactivate source. Needs confirm=true."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/reassign-parts",
    response_model=BulkReassignPartsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def bulk_reassign_parts(
    request: BulkReassignPartsRequest,
    use_case: BulkReassignPartsUseCase = Depends(get_bulk_reassign_use_case),
) -> BulkReassignPartsResponse:
    return await use_case.execute(request)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_category(
    category_id: int,
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> CategoryResponse:
    category = await store.get_with_stats(category_id)
    if category is None:
        raise CategoryNotFoundError(category_id)
    return category_to_response(category)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_category(
    category_id: int,
    request: UpdateCategoryRequest,
    use_case: UpdateCategoryUseCase = Depends(get_update_category_use_case),
) -> CategoryResponse:
    category = await use_case.execute(category_id, request)
    return use_case.to_response(category)


@router.post(
    "/{category_id}/deactivate",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def deactivate_category(
    category_id: int,
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> CategoryResponse:
    """Hide a category; its parts keep their association."""
    return category_to_response(await store.set_active(category_id, False))


@router.post(
    "/{category_id}/reactivate",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def reactivate_category(
    category_id: int,
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> CategoryResponse:
    return category_to_response(await store.set_active(category_id, True))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_category(
    category_id: int,
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> None:
    """Hard-delete a category that has no parts."""
    await store.delete(category_id)


@router.get(
    "/{category_id}/parts",
    response_model=list[PartResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_category_parts(
    category_id: int,
    limit: int = Query(default=500, ge=1, le=5000),
    store: SQLiteCategoryStore = Depends(get_cat_store),
) -> list[PartResponse]:
    parts = await store.list_parts(category_id)
    return [part_to_response(p) for p in parts[:limit]]
