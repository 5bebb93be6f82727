"""Unit tests for category use cases with a mocked category store."""

from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import (
    BulkReassignPartsRequest,
    CreateCategoryRequest,
    MergeCategoriesRequest,
    ReorderCategoriesRequest,
    UpdateCategoryRequest,
)
from src.application.use_cases.create_category import CreateCategoryUseCase
from src.application.use_cases.merge_categories import (
    BulkReassignPartsUseCase,
    MergeCategoriesUseCase,
)
from src.application.use_cases.reorder_categories import ReorderCategoriesUseCase
from src.application.use_cases.update_category import UpdateCategoryUseCase
from src.core.entities import Category
from src.core.exceptions import (
    CategoryNotFoundError,
    CategoryReorderError,
    DuplicateCategoryError,
    ValidationError,
)


@pytest.fixture
def mock_category_store():
    store = AsyncMock()
    store.get_by_name.return_value = None
    store.next_display_order.return_value = 4
    store.create.side_effect = lambda c: c.model_copy(update={"id": 11})
    store.update.side_effect = lambda c: c
    store.get.return_value = Category(id=2, name="Filters", description="Oil and air", display_order=2)
    return store


class TestCreateCategoryUseCase:
    async def test_appends_to_display_order(self, mock_category_store):
        use_case = CreateCategoryUseCase(category_store=mock_category_store)

        category = await use_case.execute(CreateCategoryRequest(name="  Cooling "))

        assert category.id == 11
        assert category.name == "Cooling"
        assert category.display_order == 4
        mock_category_store.get_by_name.assert_awaited_once_with("Cooling")

    async def test_duplicate_name(self, mock_category_store):
        mock_category_store.get_by_name.return_value = Category(id=1, name="Brakes")
        use_case = CreateCategoryUseCase(category_store=mock_category_store)

        with pytest.raises(DuplicateCategoryError):
            await use_case.execute(CreateCategoryRequest(name="Brakes"))
        mock_category_store.create.assert_not_awaited()

    async def test_blank_name(self, mock_category_store):
        use_case = CreateCategoryUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError):
            await use_case.execute(CreateCategoryRequest(name="   "))


class TestUpdateCategoryUseCase:
    async def test_partial_update_keeps_other_fields(self, mock_category_store):
        use_case = UpdateCategoryUseCase(category_store=mock_category_store)

        category = await use_case.execute(2, UpdateCategoryRequest(is_active=False))

        assert not category.is_active
        assert category.name == "Filters"
        assert category.description == "Oil and air"
        mock_category_store.get_by_name.assert_not_awaited()

    async def test_explicit_null_clears_description(self, mock_category_store):
        use_case = UpdateCategoryUseCase(category_store=mock_category_store)

        category = await use_case.execute(2, UpdateCategoryRequest(description=None))

        assert category.description is None

    async def test_rename_to_own_name_allowed(self, mock_category_store):
        mock_category_store.get_by_name.return_value = Category(id=2, name="Filters")
        use_case = UpdateCategoryUseCase(category_store=mock_category_store)

        category = await use_case.execute(2, UpdateCategoryRequest(name="Filters"))

        assert category.name == "Filters"

    async def test_rename_clash(self, mock_category_store):
        mock_category_store.get_by_name.return_value = Category(id=1, name="Brakes")
        use_case = UpdateCategoryUseCase(category_store=mock_category_store)

        with pytest.raises(DuplicateCategoryError):
            await use_case.execute(2, UpdateCategoryRequest(name="Brakes"))

    async def test_missing_category(self, mock_category_store):
        mock_category_store.get.return_value = None
        use_case = UpdateCategoryUseCase(category_store=mock_category_store)

        with pytest.raises(CategoryNotFoundError):
            await use_case.execute(99, UpdateCategoryRequest(name="X"))


class TestReorderCategoriesUseCase:
    async def test_success(self, mock_category_store):
        mock_category_store.reorder.return_value = []
        mock_category_store.current_order.return_value = [1, 2, 3]
        use_case = ReorderCategoriesUseCase(category_store=mock_category_store)

        await use_case.execute(ReorderCategoriesRequest(category_ids=[3, 1, 2]))

        mock_category_store.reorder.assert_awaited_once_with([3, 1, 2])

    async def test_failure_returns_reloaded_order(self, mock_category_store):
        mock_category_store.reorder.side_effect = CategoryNotFoundError(2)
        mock_category_store.current_order.return_value = [1, 2, 3]
        use_case = ReorderCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(CategoryReorderError) as exc_info:
            await use_case.execute(ReorderCategoriesRequest(category_ids=[3, 2, 1]))

        assert exc_info.value.details["current_order"] == [1, 2, 3]
        mock_category_store.current_order.assert_awaited_with()

    async def test_partial_list_rejected(self, mock_category_store):
        mock_category_store.current_order.return_value = [1, 2, 3]
        use_case = ReorderCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(ReorderCategoriesRequest(category_ids=[3]))

        assert exc_info.value.details["field"] == "category_ids"
        assert "missing [1, 2]" in exc_info.value.message
        mock_category_store.current_order.assert_awaited_once_with(active_only=True)
        mock_category_store.reorder.assert_not_awaited()

    async def test_unknown_id_rejected(self, mock_category_store):
        mock_category_store.current_order.return_value = [1, 2]
        use_case = ReorderCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError):
            await use_case.execute(ReorderCategoriesRequest(category_ids=[2, 1, 9]))
        mock_category_store.reorder.assert_not_awaited()

    async def test_duplicate_ids_rejected(self, mock_category_store):
        use_case = ReorderCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError):
            await use_case.execute(ReorderCategoriesRequest(category_ids=[1, 1, 2]))
        mock_category_store.reorder.assert_not_awaited()


class TestMergeCategoriesUseCase:
    async def test_requires_confirmation(self, mock_category_store):
        use_case = MergeCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                MergeCategoriesRequest(source_category_id=1, target_category_id=2)
            )
        assert exc_info.value.details["field"] == "confirm"
        mock_category_store.merge.assert_not_awaited()

    async def test_source_and_target_must_differ(self, mock_category_store):
        use_case = MergeCategoriesUseCase(category_store=mock_category_store)

        with pytest.raises(ValidationError):
            await use_case.execute(
                MergeCategoriesRequest(source_category_id=2, target_category_id=2, confirm=True)
            )

    async def test_merge(self, mock_category_store):
        mock_category_store.merge.return_value = 5
        use_case = MergeCategoriesUseCase(category_store=mock_category_store)

        result = await use_case.execute(
            MergeCategoriesRequest(source_category_id=1, target_category_id=2, confirm=True)
        )

        assert result.parts_moved == 5
        assert use_case.to_response(result).parts_moved == 5
        mock_category_store.merge.assert_awaited_once_with(1, 2)


class TestBulkReassignPartsUseCase:
    async def test_dedupes_part_ids(self, mock_category_store):
        mock_category_store.bulk_reassign.return_value = 2
        use_case = BulkReassignPartsUseCase(category_store=mock_category_store)

        response = await use_case.execute(
            BulkReassignPartsRequest(part_ids=[5, 6, 5], target_category_id=3)
        )

        assert response.parts_updated == 2
        mock_category_store.bulk_reassign.assert_awaited_once_with([5, 6], 3)
