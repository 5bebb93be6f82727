"""Infrastructure layer implementations."""

from src.infrastructure import exchange_rates, storage

__all__ = ["storage", "exchange_rates"]
