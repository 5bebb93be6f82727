"""SQLite implementation of quote storage."""

from datetime import UTC, datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.quote import (
    Quote,
    QuoteLineItem,
    QuoteListFilters,
    QuotePage,
    QuoteStatus,
    ShippingCosts,
    ShippingMethod,
)
from src.core.exceptions import (
    DocumentNumberTakenError,
    QuoteAlreadyConvertedError,
    QuoteNotFoundError,
)
from src.core.interfaces.quote_store import IQuoteStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.party_store import row_to_customer
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
    "date": "q.quote_date {dir}, q.id {dir}",
    "amount": "CAST(q.grand_total_amount AS REAL) {dir}, q.id {dir}",
    "customer": "c.name COLLATE NOCASE {dir}, q.id {dir}",
}


class SQLiteQuoteStore(IQuoteStore):
    """SQLite implementation of quote and quote line item storage."""

    async def create(self, quote: Quote) -> Quote:
        now = datetime.now(UTC)
        quote.created_at = now
        quote.updated_at = now
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO quotes (
                        quote_number, customer_id, status,
                        shipping_sea, shipping_air, shipping_selected,
                        agent_fees, local_shipping_fees,
                        total_bid_items_cost, subtotal_amount, gst_amount, grand_total_amount,
                        quote_date, expiry_date, notes, created_by, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        quote.quote_number,
                        quote.customer_id,
                        quote.status.value,
                        *self._money_params(quote),
                        quote.quote_date.isoformat(),
                        quote.expiry_date.isoformat(),
                        quote.notes,
                        quote.created_by,
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
                quote.id = cursor.lastrowid
                await self._insert_line_items(conn, quote.id, quote.line_items)
        except aiosqlite.IntegrityError as e:
            if is_unique_violation(e, "quotes.quote_number"):
                raise DocumentNumberTakenError("quote", quote.quote_number) from e
            raise

        logger.info(
            "quote_created",
            quote_id=quote.id,
            quote_number=quote.quote_number,
            line_items=len(quote.line_items),
            grand_total=str(quote.grand_total_amount),
        )
        return quote

    async def get(self, quote_id: int) -> Quote | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM quotes WHERE id = ?", (quote_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            cursor = await conn.execute(
                "SELECT * FROM customers WHERE id = ?", (row["customer_id"],)
            )
            customer_row = await cursor.fetchone()
            items = await self._load_line_items(conn, [quote_id])

        quote = self._row_to_quote(row, items.get(quote_id, []))
        if customer_row:
            quote.customer = row_to_customer(customer_row)
        return quote

    async def replace(self, quote: Quote) -> Quote:
        quote.updated_at = datetime.now(UTC)
        async with get_transaction() as conn:
            await self._ensure_not_converted(conn, quote.id)
            await conn.execute(
                """
                UPDATE quotes SET
                    customer_id = ?,
                    shipping_sea = ?, shipping_air = ?, shipping_selected = ?,
                    agent_fees = ?, local_shipping_fees = ?,
                    total_bid_items_cost = ?, subtotal_amount = ?,
                    gst_amount = ?, grand_total_amount = ?,
                    quote_date = ?, expiry_date = ?, notes = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    quote.customer_id,
                    *self._money_params(quote),
                    quote.quote_date.isoformat(),
                    quote.expiry_date.isoformat(),
                    quote.notes,
                    quote.updated_at.isoformat(),
                    quote.id,
                ),
            )
            await conn.execute("DELETE FROM quote_line_items WHERE quote_id = ?", (quote.id,))
            await self._insert_line_items(conn, quote.id, quote.line_items)

        logger.info(
            "quote_replaced",
            quote_id=quote.id,
            line_items=len(quote.line_items),
            grand_total=str(quote.grand_total_amount),
        )
        return quote

    async def update_status(
        self, quote_id: int, status: QuoteStatus, notes: str | None = None
    ) -> Quote:
        now = datetime.now(UTC).isoformat()
        async with get_transaction() as conn:
            await self._ensure_not_converted(conn, quote_id)
            if notes:
                await conn.execute(
                    "UPDATE quotes SET status = ?, notes = ?, updated_at = ? WHERE id = ?",
                    (status.value, notes, now, quote_id),
                )
            else:
                await conn.execute(
                    "UPDATE quotes SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, now, quote_id),
                )

        logger.info("quote_status_updated", quote_id=quote_id, status=status.value)
        return await self.get(quote_id)

    async def status_counts(self) -> dict[str, int]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT status, COUNT(*) FROM quotes GROUP BY status"
            )
            rows = await cursor.fetchall()

        counts = {status.value: 0 for status in QuoteStatus}
        for row in rows:
            counts[row[0]] = row[1]
        counts["all"] = sum(row[1] for row in rows)
        return counts

    @staticmethod
    async def _ensure_not_converted(conn: aiosqlite.Connection, quote_id: int) -> None:
        cursor = await conn.execute(
            "SELECT status, converted_to_order_number FROM quotes WHERE id = ?", (quote_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise QuoteNotFoundError(quote_id)
        if row["status"] == QuoteStatus.CONVERTED_TO_ORDER.value:
            raise QuoteAlreadyConvertedError(quote_id, row["converted_to_order_number"])

    @staticmethod
    def _money_params(quote: Quote) -> tuple:
        return (
            money_out(quote.shipping_costs.sea),
            money_out(quote.shipping_costs.air),
            quote.shipping_costs.selected.value,
            money_out(quote.agent_fees),
            money_out(quote.local_shipping_fees),
            money_out(quote.total_bid_items_cost),
            money_out(quote.subtotal_amount),
            money_out(quote.gst_amount),
            money_out(quote.grand_total_amount),
        )

    @staticmethod
    async def _insert_line_items(
        conn: aiosqlite.Connection, quote_id: int, items: list[QuoteLineItem]
    ) -> None:
        for position, item in enumerate(items):
            cursor = await conn.execute(
                """
                INSERT INTO quote_line_items (
                    quote_id, position, is_custom_part, part_id,
                    custom_part_name, custom_part_description,
                    quantity, unit_price, total_price
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    quote_id,
                    position,
                    int(item.is_custom_part),
                    item.part_id,
                    item.custom_part_name,
                    item.custom_part_description,
                    item.quantity,
                    str(item.unit_price),
                    str(item.total_price),
                ),
            )
            item.id = cursor.lastrowid
            item.quote_id = quote_id

    @staticmethod
    async def _load_line_items(
        conn: aiosqlite.Connection, quote_ids: list[int]
    ) -> dict[int, list[QuoteLineItem]]:
        if not quote_ids:
            return {}
        cursor = await conn.execute(
            f"""
            SELECT li.*, p.part_number AS part_number, p.name AS part_name
            FROM quote_line_items li
            LEFT JOIN parts p ON p.id = li.part_id
            WHERE li.quote_id IN ({placeholders(len(quote_ids))})
            ORDER BY li.quote_id, li.position, li.id
            """,
            quote_ids,
        )
        grouped: dict[int, list[QuoteLineItem]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["quote_id"], []).append(
                QuoteLineItem(
                    id=row["id"],
                    quote_id=row["quote_id"],
                    is_custom_part=bool(row["is_custom_part"]),
                    part_id=row["part_id"],
                    part_number=row["part_number"],
                    part_name=row["part_name"],
                    custom_part_name=row["custom_part_name"],
                    custom_part_description=row["custom_part_description"],
                    quantity=row["quantity"],
                    unit_price=money_in(row["unit_price"]),
                )
            )
        return grouped

    @staticmethod
    def _row_to_quote(row, line_items: list[QuoteLineItem]) -> Quote:
        return Quote(
            id=row["id"],
            quote_number=row["quote_number"],
            customer_id=row["customer_id"],
            status=QuoteStatus(row["status"]),
            line_items=line_items,
            shipping_costs=ShippingCosts(
                sea=money_in(row["shipping_sea"]),
                air=money_in(row["shipping_air"]),
                selected=ShippingMethod(row["shipping_selected"]),
            ),
            agent_fees=money_in(row["agent_fees"]),
            local_shipping_fees=money_in(row["local_shipping_fees"]),
            total_bid_items_cost=money_in(row["total_bid_items_cost"]),
            subtotal_amount=money_in(row["subtotal_amount"]),
            gst_amount=money_in(row["gst_amount"]),
            grand_total_amount=money_in(row["grand_total_amount"]),
            quote_date=date_in(row["quote_date"]),
            expiry_date=date_in(row["expiry_date"]),
            notes=row["notes"],
            created_by=row["created_by"],
            converted_to_order_id=row["converted_to_order_id"],
            converted_to_order_number=row["converted_to_order_number"],
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )

    async def list(self, filters: QuoteListFilters) -> QuotePage:
        clauses: list[str] = []
        params: list = []
        if filters.status is not None:
            clauses.append("q.status = ?")
            params.append(filters.status.value)
        term = filters.search_term.strip()
        if term:
            clauses.append(
                "(q.quote_number LIKE ? OR c.name LIKE ? OR c.contact_person LIKE ?)"
            )
            like = f"%{term}%"
            params.extend([like, like, like])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        direction = "ASC" if filters.sort_order == "asc" else "DESC"
        order_by = _SORT_EXPRESSIONS[filters.sort_by].format(dir=direction)
        offset = (filters.page - 1) * filters.page_size

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM quotes q JOIN customers c ON c.id = q.customer_id {where}",
                params,
            )
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"""
                SELECT q.*,
                    c.id AS c_id, c.name AS c_name, c.contact_person AS c_contact_person,
                    c.email AS c_email, c.phone AS c_phone, c.address AS c_address,
                    c.created_at AS c_created_at, c.updated_at AS c_updated_at
                FROM quotes q
                JOIN customers c ON c.id = q.customer_id
                {where}
                ORDER BY {order_by}
                LIMIT ? OFFSET ?
                """,
                [*params, filters.page_size, offset],
            )
            rows = await cursor.fetchall()
            items = await self._load_line_items(conn, [row["id"] for row in rows])

        quotes = []
        for row in rows:
            quote = self._row_to_quote(row, items.get(row["id"], []))
            quote.customer = row_to_customer({
                key[2:]: row[key]
                for key in row.keys()
                if key.startswith("c_")
            })
            quotes.append(quote)

        return QuotePage(
            quotes=quotes,
            total=total,
            page=filters.page,
            page_size=filters.page_size,
        )

