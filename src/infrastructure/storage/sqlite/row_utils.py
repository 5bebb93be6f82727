"""Column encoding helpers shared by the SQLite stores."""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from src.core.services.quote_calculator import round_money


def money_out(value: Decimal) -> str:
    """Decimal → TEXT column, rounded to cents."""
    return str(round_money(value))


def money_in(value: Any) -> Decimal:
    """TEXT column → Decimal; NULL reads as zero."""
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def date_in(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def datetime_in(value: str | None) -> datetime:
    if not value:
        return datetime.now(UTC)
    return datetime.fromisoformat(value)


def placeholders(count: int) -> str:
    """'?, ?, ?' for IN clauses."""
    return ", ".join("?" for _ in range(count))


def is_unique_violation(error: Exception, column: str) -> bool:
    """True when SQLite rejected a duplicate value in table.column."""
    return f"UNIQUE constraint failed: {column}" in str(error)
