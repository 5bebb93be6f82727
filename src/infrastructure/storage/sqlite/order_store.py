"""SQLite implementation of order storage, including quote conversion."""

import json
from datetime import UTC, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.order import (
    Order,
    OrderLineItem,
    OrderListFilters,
    OrderPage,
    OrderPriority,
    OrderStatus,
    Supplier,
)
from src.core.entities.quote import Quote, QuoteStatus
from src.core.exceptions import (
    DocumentNumberTakenError,
    QuoteAlreadyConvertedError,
    QuoteNotFoundError,
)
from src.core.interfaces.order_store import IOrderStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.party_store import insert_supplier
from src.infrastructure.storage.sqlite.row_utils import (
    date_in,
    datetime_in,
    is_unique_violation,
    money_in,
    money_out,
    placeholders,
)

logger = get_logger(__name__)

_SORT_EXPRESSIONS = {
    "date": "o.order_date {dir}, o.id {dir}",
    "amount": "CAST(o.total_amount AS REAL) {dir}, o.id {dir}",
}


class SQLiteOrderStore(IOrderStore):
    """SQLite implementation of order and order line item storage."""

    async def get(self, order_id: int) -> Order | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_line_items(conn, [order_id])
        return self._row_to_order(row, items.get(order_id, []))

    async def convert_quote(self, quote: Quote, order: Order, placeholder: Supplier) -> Order:
        now = datetime.now(UTC)
        order.created_at = now
        order.updated_at = now

        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT status, converted_to_order_number FROM quotes WHERE id = ?",
                (quote.id,),
            )
            row = await cursor.fetchone()
            if row is None:
                raise QuoteNotFoundError(quote.id)
            if row["status"] == QuoteStatus.CONVERTED_TO_ORDER.value:
                raise QuoteAlreadyConvertedError(quote.id, row["converted_to_order_number"])

            # Step 1: supplier
            cursor = await conn.execute(
                "SELECT id FROM suppliers WHERE is_active = 1 ORDER BY id LIMIT 1"
            )
            supplier_row = await cursor.fetchone()
            if supplier_row:
                order.supplier_id = supplier_row["id"]
            else:
                await insert_supplier(conn, placeholder)
                order.supplier_id = placeholder.id
                logger.info("placeholder_supplier_created", supplier_id=placeholder.id)

            # Step 2: order
            try:
                order.id = await self._insert_order(conn, order)
            except aiosqlite.IntegrityError as e:
                if is_unique_violation(e, "orders.order_number"):
                    raise DocumentNumberTakenError("order", order.order_number) from e
                raise

            # Step 3: catalog line items only
            for item in order.line_items:
                cursor = await conn.execute(
                    """
                    INSERT INTO order_line_items (
                        order_id, part_id, quantity, unit_price, total_price
                    ) VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        item.part_id,
                        item.quantity,
                        str(item.unit_price),
                        str(item.total_price),
                    ),
                )
                item.id = cursor.lastrowid
                item.order_id = order.id

            # Step 4: link the quote
            await conn.execute(
                """
                UPDATE quotes SET
                    status = ?,
                    converted_to_order_id = ?,
                    converted_to_order_number = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    QuoteStatus.CONVERTED_TO_ORDER.value,
                    order.id,
                    order.order_number,
                    now.isoformat(),
                    quote.id,
                ),
            )

        logger.info(
            "quote_converted_to_order",
            quote_id=quote.id,
            order_id=order.id,
            order_number=order.order_number,
            supplier_id=order.supplier_id,
            line_items=len(order.line_items),
            dropped_custom_items=len(quote.line_items) - len(order.line_items),
        )
        return order

    @staticmethod
    async def _insert_order(conn: aiosqlite.Connection, order: Order) -> int:
        cursor = await conn.execute(
            """
            INSERT INTO orders (
                order_number, supplier_id, quote_id, status, priority,
                total_amount, order_date, expected_delivery, notes,
                shipping_data, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                order.order_number,
                order.supplier_id,
                order.quote_id,
                order.status.value,
                order.priority.value,
                money_out(order.total_amount),
                order.order_date.isoformat(),
                order.expected_delivery.isoformat() if order.expected_delivery else None,
                order.notes,
                json.dumps(order.shipping_data),
                order.created_at.isoformat(),
                order.updated_at.isoformat(),
            ),
        )
        return cursor.lastrowid

    @staticmethod
    async def _load_line_items(
        conn: aiosqlite.Connection, order_ids: list[int]
    ) -> dict[int, list[OrderLineItem]]:
        if not order_ids:
            return {}
        cursor = await conn.execute(
            f"""
            SELECT * FROM order_line_items
            WHERE order_id IN ({placeholders(len(order_ids))})
            ORDER BY order_id, id
            """,
            order_ids,
        )
        grouped: dict[int, list[OrderLineItem]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["order_id"], []).append(
                OrderLineItem(
                    id=row["id"],
                    order_id=row["order_id"],
                    part_id=row["part_id"],
                    quantity=row["quantity"],
                    unit_price=money_in(row["unit_price"]),
                )
            )
        return grouped

    @staticmethod
    def _row_to_order(row, line_items: list[OrderLineItem]) -> Order:
        return Order(
            id=row["id"],
            order_number=row["order_number"],
            supplier_id=row["supplier_id"],
            quote_id=row["quote_id"],
            status=OrderStatus(row["status"]),
            priority=OrderPriority(row["priority"]),
            total_amount=money_in(row["total_amount"]),
            order_date=date_in(row["order_date"]),
            expected_delivery=date_in(row["expected_delivery"]),
            notes=row["notes"],
            shipping_data=json.loads(row["shipping_data"] or "{}"),
            line_items=line_items,
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )

    async def list(self, filters: OrderListFilters | None = None) -> OrderPage:
        filters = filters or OrderListFilters()
        clauses: list[str] = []
        params: list = []
        if filters.status is not None:
            clauses.append("o.status = ?")
            params.append(filters.status.value)
        term = filters.search_term.strip()
        if term:
            clauses.append(
                """(
                    o.order_number LIKE ? OR o.notes LIKE ?
                    OR s.name LIKE ? OR s.contact_person LIKE ?
                    OR EXISTS (
                        SELECT 1 FROM order_line_items li
                        JOIN parts p ON p.id = li.part_id
                        WHERE li.order_id = o.id
                            AND (p.part_number LIKE ? OR p.name LIKE ?)
                    )
                )"""
            )
            params.extend([f"%{term}%"] * 6)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        direction = "ASC" if filters.sort_order == "asc" else "DESC"
        order_by = _SORT_EXPRESSIONS[filters.sort_by].format(dir=direction)
        offset = (filters.page - 1) * filters.page_size
        source = "FROM orders o LEFT JOIN suppliers s ON s.id = o.supplier_id"

        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) {source} {where}", params)
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"SELECT o.* {source} {where} ORDER BY {order_by} LIMIT ? OFFSET ?",
                [*params, filters.page_size, offset],
            )
            rows = await cursor.fetchall()
            items = await self._load_line_items(conn, [row["id"] for row in rows])

        return OrderPage(
            orders=[self._row_to_order(row, items.get(row["id"], [])) for row in rows],
            total=total,
            page=filters.page,
            page_size=filters.page_size,
        )

    async def status_counts(self) -> dict[str, int]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT status, COUNT(*) FROM orders GROUP BY status")
            rows = await cursor.fetchall()

        counts = {status.value: 0 for status in OrderStatus}
        for row in rows:
            counts[row[0]] = row[1]
        counts["all"] = sum(row[1] for row in rows)
        return counts
