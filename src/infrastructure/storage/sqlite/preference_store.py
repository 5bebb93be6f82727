"""SQLite implementation of per-user quote list preferences."""

from datetime import UTC, datetime

from src.config import get_logger
from src.core.entities.quote import QuoteListPreferences, QuoteStatus
from src.core.interfaces.quote_store import IPreferenceStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.row_utils import datetime_in

logger = get_logger(__name__)


class SQLitePreferenceStore(IPreferenceStore):
    """Stores one row of list preferences per user."""

    async def load(self, user_id: str) -> QuoteListPreferences | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM user_preferences WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return QuoteListPreferences(
            user_id=row["user_id"],
            status=QuoteStatus(row["quote_status_filter"]) if row["quote_status_filter"] else None,
            sort_by=row["quote_sort_by"],
            sort_order=row["quote_sort_order"],
            page_size=row["quote_page_size"],
            updated_at=datetime_in(row["updated_at"]),
        )

    async def save(self, prefs: QuoteListPreferences) -> QuoteListPreferences:
        prefs.updated_at = datetime.now(UTC)
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO user_preferences (
                    user_id, quote_status_filter, quote_sort_by,
                    quote_sort_order, quote_page_size, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id) DO UPDATE SET
                    quote_status_filter = excluded.quote_status_filter,
                    quote_sort_by = excluded.quote_sort_by,
                    quote_sort_order = excluded.quote_sort_order,
                    quote_page_size = excluded.quote_page_size,
                    updated_at = excluded.updated_at
                """,
                (
                    prefs.user_id,
                    prefs.status.value if prefs.status else None,
                    prefs.sort_by,
                    prefs.sort_order,
                    prefs.page_size,
                    prefs.updated_at.isoformat(),
                ),
            )
        logger.info("quote_preferences_saved", user_id=prefs.user_id)
        return prefs
