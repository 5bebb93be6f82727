"""SQLite implementation of exchange-rate storage."""

from decimal import Decimal

from src.config import get_logger
from src.core.entities.exchange_rate import ExchangeRate
from src.core.interfaces.exchange_rate import IExchangeRateStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.row_utils import datetime_in

logger = get_logger(__name__)


class SQLiteExchangeRateStore(IExchangeRateStore):
    """Append-only history of fetched rates."""

    async def add(self, rate: ExchangeRate) -> ExchangeRate:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO exchange_rates (
                    base_currency, target_currency, rate, source_api, fetched_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    rate.base_currency,
                    rate.target_currency,
                    str(rate.rate),
                    rate.source_api,
                    rate.fetched_at.isoformat(),
                ),
            )
            rate.id = cursor.lastrowid
        logger.info(
            "exchange_rate_stored",
            base=rate.base_currency,
            target=rate.target_currency,
            rate=str(rate.rate),
            source=rate.source_api,
        )
        return rate

    async def latest(self, base: str, target: str) -> ExchangeRate | None:
        rates = await self.history(base, target, limit=1)
        return rates[0] if rates else None

    async def history(self, base: str, target: str, limit: int = 7) -> list[ExchangeRate]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM exchange_rates
                WHERE base_currency = ? AND target_currency = ?
                ORDER BY fetched_at DESC, id DESC
                LIMIT ?
                """,
                (base, target, limit),
            )
            rows = await cursor.fetchall()
        return [self._row_to_rate(row) for row in rows]

    @staticmethod
    def _row_to_rate(row) -> ExchangeRate:
        return ExchangeRate(
            id=row["id"],
            base_currency=row["base_currency"],
            target_currency=row["target_currency"],
            rate=Decimal(row["rate"]),
            source_api=row["source_api"],
            fetched_at=datetime_in(row["fetched_at"]),
        )
