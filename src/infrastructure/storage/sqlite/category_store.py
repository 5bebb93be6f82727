"""SQLite implementation of category storage."""

from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

from src.config import get_logger
from src.core.entities.category import Category, CategoryStats, CategoryWithStats
from src.core.entities.part import Part
from src.core.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
)
from src.core.interfaces.category_store import ICategoryStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.part_store import row_to_part
from src.infrastructure.storage.sqlite.row_utils import datetime_in, money_in, placeholders

logger = get_logger(__name__)

# Non-archived parts with their latest historical unit price
_PART_ROLLUP_SQL = """
    SELECT p.category_id, p.current_stock, p.min_stock,
        (
            SELECT h.unit_price FROM part_price_history h
            WHERE h.part_id = p.id
            ORDER BY h.effective_date DESC, h.id DESC
            LIMIT 1
        ) AS latest_price
    FROM parts p
    WHERE p.is_archived = 0 AND p.category_id IS NOT NULL
"""


class SQLiteCategoryStore(ICategoryStore):
    """SQLite implementation of category storage."""

    async def create(self, category: Category) -> Category:
        now = datetime.now(UTC)
        category.created_at = now
        category.updated_at = now
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO part_categories (
                        name, description, display_order, is_active, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        category.name,
                        category.description,
                        category.display_order,
                        int(category.is_active),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
                category.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            raise DuplicateCategoryError(category.name) from e

        logger.info(
            "category_created",
            category_id=category.id,
            name=category.name,
            display_order=category.display_order,
        )
        return category

    async def get(self, category_id: int) -> Category | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM part_categories WHERE id = ?", (category_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_category(row) if row else None

    async def get_by_name(self, name: str) -> Category | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM part_categories WHERE name = ?", (name.strip(),)
            )
            row = await cursor.fetchone()
            return self._row_to_category(row) if row else None

    async def get_with_stats(self, category_id: int) -> CategoryWithStats | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM part_categories WHERE id = ?", (category_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            cursor = await conn.execute(
                _PART_ROLLUP_SQL + " AND p.category_id = ?", (category_id,)
            )
            stats = self._rollup(await cursor.fetchall())

        category = self._row_to_category(row)
        return CategoryWithStats(
            **category.model_dump(),
            stats=stats.get(category_id, CategoryStats()),
        )

    async def list_with_stats(self, include_inactive: bool = False) -> list[CategoryWithStats]:
        query = "SELECT * FROM part_categories"
        if not include_inactive:
            query += " WHERE is_active = 1"
        query += " ORDER BY display_order, id"

        async with get_connection() as conn:
            cursor = await conn.execute(query)
            rows = await cursor.fetchall()
            cursor = await conn.execute(_PART_ROLLUP_SQL)
            stats = self._rollup(await cursor.fetchall())

        return [
            CategoryWithStats(
                **self._row_to_category(row).model_dump(),
                stats=stats.get(row["id"], CategoryStats()),
            )
            for row in rows
        ]

    async def next_display_order(self) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COALESCE(MAX(display_order), 0) FROM part_categories"
            )
            row = await cursor.fetchone()
            return int(row[0]) + 1

    async def update(self, category: Category) -> Category:
        category.updated_at = datetime.now(UTC)
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE part_categories SET
                        name = ?,
                        description = ?,
                        display_order = ?,
                        is_active = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        category.name,
                        category.description,
                        category.display_order,
                        int(category.is_active),
                        category.updated_at.isoformat(),
                        category.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise CategoryNotFoundError(category.id)
        except aiosqlite.IntegrityError as e:
            raise DuplicateCategoryError(category.name) from e

        logger.info("category_updated", category_id=category.id)
        return category

    async def set_active(self, category_id: int, is_active: bool) -> Category:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE part_categories SET is_active = ?, updated_at = ? WHERE id = ?",
                (int(is_active), datetime.now(UTC).isoformat(), category_id),
            )
            if cursor.rowcount == 0:
                raise CategoryNotFoundError(category_id)
            cursor = await conn.execute(
                "SELECT * FROM part_categories WHERE id = ?", (category_id,)
            )
            row = await cursor.fetchone()

        logger.info("category_active_changed", category_id=category_id, is_active=is_active)
        return self._row_to_category(row)

    async def delete(self, category_id: int) -> None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM part_categories WHERE id = ?", (category_id,)
            )
            if await cursor.fetchone() is None:
                raise CategoryNotFoundError(category_id)

            cursor = await conn.execute(
                "SELECT COUNT(*) FROM parts WHERE category_id = ? AND is_archived = 0",
                (category_id,),
            )
            part_count = (await cursor.fetchone())[0]
            if part_count > 0:
                raise CategoryInUseError(category_id, part_count)

            await conn.execute("DELETE FROM part_categories WHERE id = ?", (category_id,))

        logger.info("category_deleted", category_id=category_id)

    async def reorder(self, ordered_ids: list[int]) -> list[Category]:
        if not ordered_ids:
            return []
        async with get_transaction() as conn:
            for index, category_id in enumerate(ordered_ids):
                cursor = await conn.execute(
                    "UPDATE part_categories SET display_order = ? WHERE id = ?",
                    (index + 1, category_id),
                )
                if cursor.rowcount == 0:
                    raise CategoryNotFoundError(category_id)

            # Unlisted (inactive) categories follow, keeping their relative order.
            cursor = await conn.execute(
                f"SELECT id FROM part_categories WHERE id NOT IN ({placeholders(len(ordered_ids))}) "
                "ORDER BY display_order, id",
                ordered_ids,
            )
            rest = [row[0] for row in await cursor.fetchall()]
            for position, category_id in enumerate(rest, start=len(ordered_ids) + 1):
                await conn.execute(
                    "UPDATE part_categories SET display_order = ? WHERE id = ?",
                    (position, category_id),
                )

            cursor = await conn.execute(
                f"SELECT * FROM part_categories WHERE id IN ({placeholders(len(ordered_ids))}) "
                "ORDER BY display_order",
                ordered_ids,
            )
            rows = await cursor.fetchall()

        logger.info("categories_reordered", count=len(ordered_ids))
        return [self._row_to_category(row) for row in rows]

    async def current_order(self, active_only: bool = False) -> list[int]:
        where = "WHERE is_active = 1 " if active_only else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT id FROM part_categories {where}ORDER BY display_order, id"
            )
            return [row[0] for row in await cursor.fetchall()]

    async def merge(self, source_id: int, target_id: int) -> int:
        async with get_transaction() as conn:
            for category_id in (source_id, target_id):
                cursor = await conn.execute(
                    "SELECT 1 FROM part_categories WHERE id = ?", (category_id,)
                )
                if await cursor.fetchone() is None:
                    raise CategoryNotFoundError(category_id)

            now = datetime.now(UTC).isoformat()
            cursor = await conn.execute(
                "UPDATE parts SET category_id = ?, updated_at = ? WHERE category_id = ?",
                (target_id, now, source_id),
            )
            parts_moved = cursor.rowcount

            await conn.execute(
                "UPDATE part_categories SET is_active = 0, updated_at = ? WHERE id = ?",
                (now, source_id),
            )

        logger.info(
            "category_merge_complete",
            source_id=source_id,
            target_id=target_id,
            parts_moved=parts_moved,
        )
        return parts_moved

    async def bulk_reassign(self, part_ids: list[int], target_id: int) -> int:
        if not part_ids:
            return 0
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM part_categories WHERE id = ?", (target_id,)
            )
            if await cursor.fetchone() is None:
                raise CategoryNotFoundError(target_id)

            cursor = await conn.execute(
                f"UPDATE parts SET category_id = ?, updated_at = ? "
                f"WHERE id IN ({placeholders(len(part_ids))})",
                (target_id, datetime.now(UTC).isoformat(), *part_ids),
            )
            parts_updated = cursor.rowcount

        logger.info(
            "parts_bulk_reassigned",
            target_id=target_id,
            requested=len(part_ids),
            parts_updated=parts_updated,
        )
        return parts_updated

    async def list_parts(self, category_id: int) -> list[Part]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM part_categories WHERE id = ?", (category_id,)
            )
            if await cursor.fetchone() is None:
                raise CategoryNotFoundError(category_id)
            cursor = await conn.execute(
                """
                SELECT * FROM parts
                WHERE category_id = ? AND is_archived = 0
                ORDER BY part_number
                """,
                (category_id,),
            )
            rows = await cursor.fetchall()

        return [row_to_part(row) for row in rows]

    @staticmethod
    def _rollup(rows) -> dict[int, CategoryStats]:
        """Aggregate part rows into per-category stats."""
        acc: dict[int, dict] = {}
        for row in rows:
            bucket = acc.setdefault(
                row["category_id"],
                {"count": 0, "value": Decimal("0"), "stock": 0, "low": 0},
            )
            stock = row["current_stock"]
            bucket["count"] += 1
            bucket["value"] += money_in(row["latest_price"]) * stock
            bucket["stock"] += stock
            if stock <= row["min_stock"]:
                bucket["low"] += 1

        return {
            category_id: CategoryStats(
                part_count=b["count"],
                total_inventory_value=b["value"],
                average_stock_level=b["stock"] / b["count"] if b["count"] else 0.0,
                low_stock_count=b["low"],
            )
            for category_id, b in acc.items()
        }

    @staticmethod
    def _row_to_category(row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            display_order=row["display_order"],
            is_active=bool(row["is_active"]),
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )
