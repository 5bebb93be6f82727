"""Reorder Categories Use Case."""

from src.application.dto.requests import ReorderCategoriesRequest
from src.config import get_logger
from src.core.entities.category import Category
from src.core.exceptions import CategoryReorderError, GoPartsError, ValidationError
from src.core.interfaces.category_store import ICategoryStore

logger = get_logger(__name__)


class ReorderCategoriesUseCase:
    """
    Persist a new display order for a set of categories.

    The request must name every active category exactly once; position i
    becomes display_order i + 1 and inactive categories follow. The batch
    is written in one transaction; if it fails, the stored order is
    reloaded and returned inside the error so callers can drop their
    optimistic local order.
    """

    def __init__(self, category_store: ICategoryStore | None = None):
        self._category_store = category_store

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from src.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def execute(self, request: ReorderCategoriesRequest) -> list[Category]:
        ids = request.category_ids
        if len(set(ids)) != len(ids):
            raise ValidationError("category_ids", "ids must be unique", ids)

        store = await self._get_category_store()
        active = await store.current_order(active_only=True)
        if set(ids) != set(active):
            missing = sorted(set(active) - set(ids))
            unexpected = sorted(set(ids) - set(active))
            raise ValidationError(
                "category_ids",
                f"must list every active category exactly once "
                f"(missing {missing}, unexpected {unexpected})",
                ids,
            )

        try:
            categories = await store.reorder(ids)
        except GoPartsError as e:
            current = await store.current_order()
            logger.warning(
                "category_reorder_failed",
                requested=ids,
                current_order=current,
                error=e.message,
            )
            raise CategoryReorderError(e.message, current) from e

        logger.info("category_reorder_complete", order=ids)
        return categories
