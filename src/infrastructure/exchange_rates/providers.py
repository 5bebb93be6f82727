"""Concrete exchange-rate providers."""

from typing import Any

import httpx

from src.infrastructure.exchange_rates.base import BaseRateProvider


class FrankfurterProvider(BaseRateProvider):
    """Primary source: GET /latest?from=AUD&to=JPY → rates[JPY]."""

    name = "frankfurter"

    @staticmethod
    def _default_url(settings: Any) -> str:
        return settings.primary_url

    def _request(self, base: str, target: str) -> tuple[str, dict[str, str]]:
        return f"{self.base_url}/latest", {"from": base, "to": target}


class ExchangeRateApiProvider(BaseRateProvider):
    """Fallback source: GET /v4/latest/AUD → rates[JPY]."""

    name = "exchangerate-api"

    @staticmethod
    def _default_url(settings: Any) -> str:
        return settings.fallback_url

    def _request(self, base: str, target: str) -> tuple[str, dict[str, str]]:
        return f"{self.base_url}/v4/latest/{base}", {}


def get_rate_providers(
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[BaseRateProvider]:
    """Providers in fallback order."""
    return [
        FrankfurterProvider(transport=transport),
        ExchangeRateApiProvider(transport=transport),
    ]
