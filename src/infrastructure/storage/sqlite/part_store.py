"""SQLite implementation of parts catalog storage."""

import json
from datetime import UTC, datetime
from decimal import Decimal

from src.config import get_logger
from src.core.entities.part import Part, PriceRecord
from src.core.exceptions import PartNotFoundError, ValidationError
from src.core.interfaces.part_store import IPartStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.row_utils import (
    date_in,
    datetime_in,
    money_in,
    money_out,
    placeholders,
)

logger = get_logger(__name__)

_SORT_COLUMNS = {
    "name": "name",
    "part_number": "part_number",
    "current_stock": "current_stock",
}


def row_to_part(row) -> Part:
    return Part(
        id=row["id"],
        part_number=row["part_number"],
        name=row["name"],
        description=row["description"],
        category_id=row["category_id"],
        specifications=json.loads(row["specifications"] or "{}"),
        current_stock=row["current_stock"],
        min_stock=row["min_stock"],
        is_archived=bool(row["is_archived"]),
        internal_markup=row["internal_markup"],
        wholesale_markup=row["wholesale_markup"],
        trade_markup=row["trade_markup"],
        retail_markup=row["retail_markup"],
        created_at=datetime_in(row["created_at"]),
        updated_at=datetime_in(row["updated_at"]),
    )


class SQLitePartStore(IPartStore):
    """SQLite implementation of parts and price history."""

    async def create(self, part: Part) -> Part:
        now = datetime.now(UTC)
        part.created_at = now
        part.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM parts WHERE part_number = ?", (part.part_number,)
            )
            if await cursor.fetchone():
                raise ValidationError(
                    "part_number", "A part with this number already exists", part.part_number
                )
            cursor = await conn.execute(
                """
                INSERT INTO parts (
                    part_number, name, description, category_id, specifications,
                    current_stock, min_stock, is_archived,
                    internal_markup, wholesale_markup, trade_markup, retail_markup,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    part.part_number,
                    part.name,
                    part.description,
                    part.category_id,
                    json.dumps(part.specifications),
                    part.current_stock,
                    part.min_stock,
                    int(part.is_archived),
                    part.internal_markup,
                    part.wholesale_markup,
                    part.trade_markup,
                    part.retail_markup,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            part.id = cursor.lastrowid

        logger.info("part_created", part_id=part.id, part_number=part.part_number)
        return part

    async def get(self, part_id: int) -> Part | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM parts WHERE id = ?", (part_id,))
            row = await cursor.fetchone()
            return row_to_part(row) if row else None

    async def get_many(self, part_ids: list[int]) -> dict[int, Part]:
        ids = sorted(set(part_ids))
        if not ids:
            return {}
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM parts WHERE id IN ({placeholders(len(ids))})", ids
            )
            rows = await cursor.fetchall()
        return {row["id"]: row_to_part(row) for row in rows}

    async def search(
        self,
        term: str = "",
        category_id: int | None = None,
        include_archived: bool = False,
        sort_by: str = "name",
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Part], int]:
        clauses: list[str] = []
        params: list = []
        if term:
            clauses.append("(part_number LIKE ? OR name LIKE ?)")
            like = f"%{term}%"
            params.extend([like, like])
        if category_id is not None:
            clauses.append("category_id = ?")
            params.append(category_id)
        if not include_archived:
            clauses.append("is_archived = 0")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        order = _SORT_COLUMNS.get(sort_by, "name")

        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM parts {where}", params)
            total = (await cursor.fetchone())[0]
            cursor = await conn.execute(
                f"SELECT * FROM parts {where} ORDER BY {order}, id LIMIT ? OFFSET ?",
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()

        return [row_to_part(row) for row in rows], total

    async def add_price(self, record: PriceRecord) -> PriceRecord:
        record.created_at = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute("SELECT 1 FROM parts WHERE id = ?", (record.part_id,))
            if await cursor.fetchone() is None:
                raise PartNotFoundError(record.part_id)
            cursor = await conn.execute(
                """
                INSERT INTO part_price_history (
                    part_id, unit_price, supplier_name, quantity, effective_date, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record.part_id,
                    money_out(record.unit_price),
                    record.supplier_name,
                    record.quantity,
                    record.effective_date.isoformat(),
                    record.created_at.isoformat(),
                ),
            )
            record.id = cursor.lastrowid

        logger.info(
            "part_price_recorded",
            part_id=record.part_id,
            unit_price=str(record.unit_price),
        )
        return record

    async def latest_price(self, part_id: int) -> Decimal | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT unit_price FROM part_price_history
                WHERE part_id = ?
                ORDER BY effective_date DESC, id DESC
                LIMIT 1
                """,
                (part_id,),
            )
            row = await cursor.fetchone()
            return money_in(row[0]) if row else None

    async def price_history(self, part_id: int, limit: int = 50) -> list[PriceRecord]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM part_price_history
                WHERE part_id = ?
                ORDER BY effective_date DESC, id DESC
                LIMIT ?
                """,
                (part_id, limit),
            )
            rows = await cursor.fetchall()
        return [
            PriceRecord(
                id=row["id"],
                part_id=row["part_id"],
                unit_price=money_in(row["unit_price"]),
                supplier_name=row["supplier_name"],
                quantity=row["quantity"],
                effective_date=date_in(row["effective_date"]),
                created_at=datetime_in(row["created_at"]),
            )
            for row in rows
        ]
