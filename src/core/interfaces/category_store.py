"""Abstract interface for part category storage."""

from abc import ABC, abstractmethod

from src.core.entities.category import Category, CategoryWithStats
from src.core.entities.part import Part


class ICategoryStore(ABC):
    """Interface for category persistence and part reassignment."""

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Insert a category. Raises DuplicateCategoryError on a name clash."""
        pass

    @abstractmethod
    async def get(self, category_id: int) -> Category | None:
        """Get category by ID."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Category | None:
        """Get category by exact name."""
        pass

    @abstractmethod
    async def get_with_stats(self, category_id: int) -> CategoryWithStats | None:
        """Get category with its rollup over non-archived parts."""
        pass

    @abstractmethod
    async def list_with_stats(self, include_inactive: bool = False) -> list[CategoryWithStats]:
        """List categories ordered by display_order, each with its rollup."""
        pass

    @abstractmethod
    async def next_display_order(self) -> int:
        """Max existing display_order + 1, or 1 when empty."""
        pass

    @abstractmethod
    async def update(self, category: Category) -> Category:
        """Persist name, description, display_order and is_active."""
        pass

    @abstractmethod
    async def set_active(self, category_id: int, is_active: bool) -> Category:
        """Toggle the active flag without touching part associations."""
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> None:
        """
        Hard-delete an empty category.

        Raises CategoryInUseError when non-archived parts still reference it.
        """
        pass

    @abstractmethod
    async def reorder(self, ordered_ids: list[int]) -> list[Category]:
        """
        Set display_order = index + 1 for each id in one transaction.

        Categories not in ordered_ids are renumbered after them, so display
        orders stay unique and gap-free.
        """
        pass

    @abstractmethod
    async def current_order(self, active_only: bool = False) -> list[int]:
        """Category ids as currently ordered by display_order."""
        pass

    @abstractmethod
    async def merge(self, source_id: int, target_id: int) -> int:
        """Move every part from source to target and deactivate source. Returns parts moved."""
        pass

    @abstractmethod
    async def bulk_reassign(self, part_ids: list[int], target_id: int) -> int:
        """Point the given parts at target. Returns parts updated."""
        pass

    @abstractmethod
    async def list_parts(self, category_id: int) -> list[Part]:
        """Non-archived parts of a category ordered by part number."""
        pass
