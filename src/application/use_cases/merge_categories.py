"""Merge Categories and Bulk Reassign Use Cases."""

from dataclasses import dataclass

from src.application.dto.requests import BulkReassignPartsRequest, MergeCategoriesRequest
from src.application.dto.responses import BulkReassignPartsResponse, MergeCategoriesResponse
from src.config import get_logger
from src.core.exceptions import ValidationError
from src.core.interfaces.category_store import ICategoryStore

logger = get_logger(__name__)


@dataclass
class MergeCategoriesResult:
    source_category_id: int
    target_category_id: int
    parts_moved: int


class MergeCategoriesUseCase:
    """Move every part of source into target, then deactivate source."""

    def __init__(self, category_store: ICategoryStore | None = None):
        self._category_store = category_store

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from src.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def execute(self, request: MergeCategoriesRequest) -> MergeCategoriesResult:
        if not request.confirm:
            raise ValidationError(
                "confirm", "merge cannot be undone and must be confirmed", request.confirm
            )
        if request.source_category_id == request.target_category_id:
            raise ValidationError(
                "target_category_id",
                "source and target must differ",
                request.target_category_id,
            )

        logger.info(
            "category_merge_started",
            source_id=request.source_category_id,
            target_id=request.target_category_id,
        )
        store = await self._get_category_store()
        parts_moved = await store.merge(
            request.source_category_id, request.target_category_id
        )
        return MergeCategoriesResult(
            source_category_id=request.source_category_id,
            target_category_id=request.target_category_id,
            parts_moved=parts_moved,
        )

    def to_response(self, result: MergeCategoriesResult) -> MergeCategoriesResponse:
        return MergeCategoriesResponse(
            source_category_id=result.source_category_id,
            target_category_id=result.target_category_id,
            parts_moved=result.parts_moved,
        )


class BulkReassignPartsUseCase:
    """Point an explicit set of parts at one category."""

    def __init__(self, category_store: ICategoryStore | None = None):
        self._category_store = category_store

    async def _get_category_store(self) -> ICategoryStore:
        if self._category_store is None:
            from src.infrastructure.storage.sqlite import get_category_store

            self._category_store = await get_category_store()
        return self._category_store

    async def execute(self, request: BulkReassignPartsRequest) -> BulkReassignPartsResponse:
        part_ids = list(dict.fromkeys(request.part_ids))
        store = await self._get_category_store()
        updated = await store.bulk_reassign(part_ids, request.target_category_id)
        if updated < len(part_ids):
            logger.warning(
                "bulk_reassign_partial",
                requested=len(part_ids),
                parts_updated=updated,
            )
        return BulkReassignPartsResponse(
            target_category_id=request.target_category_id,
            parts_updated=updated,
        )
