"""Abstract interfaces for exchange-rate providers and storage."""

from abc import ABC, abstractmethod
from decimal import Decimal

from src.core.entities.exchange_rate import ExchangeRate


class IRateProvider(ABC):
    """A remote service quoting currency rates."""

    name: str = "provider"

    @abstractmethod
    async def fetch_rate(self, base: str, target: str) -> Decimal:
        """
        Fetch one rate.

        Raises ExchangeRateFetchError on any failure, including a non-2xx
        status or a missing or non-numeric rate.
        """
        pass


class IExchangeRateStore(ABC):
    """Interface for exchange-rate persistence."""

    @abstractmethod
    async def add(self, rate: ExchangeRate) -> ExchangeRate:
        """Store a fetched rate."""
        pass

    @abstractmethod
    async def latest(self, base: str, target: str) -> ExchangeRate | None:
        """Most recent rate for a pair."""
        pass

    @abstractmethod
    async def history(self, base: str, target: str, limit: int = 7) -> list[ExchangeRate]:
        """Most recent rates for a pair, newest first."""
        pass
