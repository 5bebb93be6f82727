"""Update Category Use Case: partial update with name uniqueness."""

from src.application.dto.requests import UpdateCategoryRequest
from src.application.dto.responses import CategoryResponse
from src.application.mappers import category_to_response
from src.config import get_logger
from src.core.entities.category import Category
from src.core.exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    ValidationError,
)
from src.core.interfaces.category_store import ICategoryStore

logger = get_logger(__name__)


class UpdateCategoryUseCase:
    """Apply the fields present on the request; leave the rest alone."""

    def __init__(self, category_store: ICategoryStore | None = None):
        self._category_store = category_store

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from src.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def execute(self, category_id: int, request: UpdateCategoryRequest) -> Category:
        store = await self._get_category_store()
        category = await store.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)

        changes = request.model_dump(exclude_unset=True)

        if "name" in changes:
            name = (request.name or "").strip()
            if not name:
                raise ValidationError("name", "Category name is required")
            clash = await store.get_by_name(name)
            if clash is not None and clash.id != category_id:
                raise DuplicateCategoryError(name)
            category.name = name
        if "description" in changes:
            category.description = request.description
        if request.display_order is not None:
            category.display_order = request.display_order
        if request.is_active is not None:
            category.is_active = request.is_active

        category = await store.update(category)
        logger.info("category_update_complete", category_id=category_id, fields=sorted(changes))
        return category

    def to_response(self, category: Category) -> CategoryResponse:
        return category_to_response(category)
