"""Abstract interface for parts catalog storage."""

from abc import ABC, abstractmethod
from decimal import Decimal

from src.core.entities.part import Part, PriceRecord


class IPartStore(ABC):
    """Interface for parts and their price history."""

    @abstractmethod
    async def create(self, part: Part) -> Part:
        """Insert a part."""
        pass

    @abstractmethod
    async def get(self, part_id: int) -> Part | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def get_many(self, part_ids: list[int]) -> dict[int, Part]:
        """Fetch several parts at once, keyed by ID. Missing IDs are absent."""
        pass

    @abstractmethod
    async def search(
        self,
        term: str = "",
        category_id: int | None = None,
        include_archived: bool = False,
        sort_by: str = "name",
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Part], int]:
        """Search parts by number or name. Returns (page, total)."""
        pass

    @abstractmethod
    async def add_price(self, record: PriceRecord) -> PriceRecord:
        """Append a price history record."""
        pass

    @abstractmethod
    async def latest_price(self, part_id: int) -> Decimal | None:
        """Most recent unit price, or None when the part has no history."""
        pass

    @abstractmethod
    async def price_history(self, part_id: int, limit: int = 50) -> list[PriceRecord]:
        """Price records newest first."""
        pass
