"""API tests for category endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import (
    get_cat_store,
    get_merge_categories_use_case,
    get_reorder_categories_use_case,
)
from src.api.main import app
from src.application.use_cases.merge_categories import MergeCategoriesUseCase
from src.application.use_cases.reorder_categories import ReorderCategoriesUseCase
from src.core.entities import CategoryStats, CategoryWithStats
from src.core.exceptions import CategoryInUseError, CategoryNotFoundError


@pytest.fixture
def mock_category_store():
    store = AsyncMock()
    store.list_with_stats.return_value = [
        CategoryWithStats(
            id=1, name="Brakes", display_order=1, stats=CategoryStats(part_count=3)
        ),
        CategoryWithStats(
            id=2,
            name="Filters",
            display_order=2,
            is_active=False,
            stats=CategoryStats(part_count=1),
        ),
    ]
    return store


@pytest.fixture
async def categories_client(mock_category_store):
    app.dependency_overrides[get_cat_store] = lambda: mock_category_store
    app.dependency_overrides[get_reorder_categories_use_case] = lambda: ReorderCategoriesUseCase(
        category_store=mock_category_store
    )
    app.dependency_overrides[get_merge_categories_use_case] = lambda: MergeCategoriesUseCase(
        category_store=mock_category_store
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dep in (get_cat_store, get_reorder_categories_use_case, get_merge_categories_use_case):
        app.dependency_overrides.pop(dep, None)


class TestCategoriesAPI:
    async def test_statistics(self, categories_client: AsyncClient):
        resp = await categories_client.get("/api/categories/statistics")

        assert resp.status_code == 200
        data = resp.json()
        assert data["total_categories"] == 2
        assert data["active_categories"] == 1
        assert data["total_parts_categorized"] == 4
        assert [d["percentage"] for d in data["distribution"]] == [75.0, 25.0]

    async def test_reorder_failure_reports_current_order(
        self, categories_client: AsyncClient, mock_category_store
    ):
        mock_category_store.reorder.side_effect = CategoryNotFoundError(1)
        mock_category_store.current_order.return_value = [1, 2]

        resp = await categories_client.put(
            "/api/categories/reorder", json={"category_ids": [2, 1]}
        )

        assert resp.status_code == 409
        assert resp.json()["details"]["current_order"] == [1, 2]

    async def test_reorder_partial_list_is_400(
        self, categories_client: AsyncClient, mock_category_store
    ):
        mock_category_store.current_order.return_value = [1, 2, 3]

        resp = await categories_client.put("/api/categories/reorder", json={"category_ids": [3]})

        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "category_ids"
        mock_category_store.reorder.assert_not_awaited()

    async def test_merge_without_confirm_is_400(self, categories_client: AsyncClient):
        resp = await categories_client.post(
            "/api/categories/merge",
            json={"source_category_id": 1, "target_category_id": 2},
        )

        assert resp.status_code == 400
        assert resp.json()["error_code"] == "VALIDATION_ERROR"

    async def test_delete_in_use_is_409(self, categories_client: AsyncClient, mock_category_store):
        mock_category_store.delete.side_effect = CategoryInUseError(1, 3)

        resp = await categories_client.delete("/api/categories/1")

        assert resp.status_code == 409
        assert resp.json()["error_code"] == "CATEGORY_IN_USE"

    async def test_delete_empty_category(self, categories_client: AsyncClient, mock_category_store):
        resp = await categories_client.delete("/api/categories/3")

        assert resp.status_code == 204
        mock_category_store.delete.assert_awaited_once_with(3)

    async def test_get_missing_is_404(self, categories_client: AsyncClient, mock_category_store):
        mock_category_store.get_with_stats.return_value = None

        resp = await categories_client.get("/api/categories/42")

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "CATEGORY_NOT_FOUND"
