"""Create Category Use Case."""

from src.application.dto.requests import CreateCategoryRequest
from src.application.dto.responses import CategoryResponse
from src.application.mappers import category_to_response
from src.config import get_logger
from src.core.entities.category import Category
from src.core.exceptions import DuplicateCategoryError, ValidationError
from src.core.interfaces.category_store import ICategoryStore

logger = get_logger(__name__)


class CreateCategoryUseCase:
    """Create a category at the end of the display order unless told otherwise."""

    def __init__(self, category_store: ICategoryStore | None = None):
        self._category_store = category_store

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from src.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def execute(self, request: CreateCategoryRequest) -> Category:
        name = request.name.strip()
        if not name:
            raise ValidationError("name", "Category name is required")

        store = await self._get_category_store()
        if await store.get_by_name(name) is not None:
            raise DuplicateCategoryError(name)

        display_order = request.display_order or await store.next_display_order()
        category = await store.create(
            Category(
                name=name,
                description=request.description,
                display_order=display_order,
            )
        )
        logger.info(
            "category_created",
            category_id=category.id,
            name=category.name,
            display_order=category.display_order,
        )
        return category

    def to_response(self, category: Category) -> CategoryResponse:
        return category_to_response(category)
