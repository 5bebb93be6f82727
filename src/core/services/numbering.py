"""Human-readable document numbers."""

import time
from datetime import date


def _number(prefix: str, today: date | None, millis: int | None) -> str:
    today = today or date.today()
    millis = millis if millis is not None else int(time.time() * 1000)
    return f"{prefix}-{today.year:04d}-{millis % 1_000_000:06d}"


def generate_quote_number(today: date | None = None, millis: int | None = None) -> str:
    """QTE-<year>-<last 6 digits of a millisecond timestamp>."""
    return _number("QTE", today, millis)


def generate_order_number(today: date | None = None, millis: int | None = None) -> str:
    """ORD-<year>-<last 6 digits of a millisecond timestamp>."""
    return _number("ORD", today, millis)
