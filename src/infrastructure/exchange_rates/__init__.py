"""Remote exchange-rate providers."""

from src.infrastructure.exchange_rates.base import BaseRateProvider
from src.infrastructure.exchange_rates.providers import (
    ExchangeRateApiProvider,
    FrankfurterProvider,
    get_rate_providers,
)

__all__ = [
    "BaseRateProvider",
    "FrankfurterProvider",
    "ExchangeRateApiProvider",
    "get_rate_providers",
]
