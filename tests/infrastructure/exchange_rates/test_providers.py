"""Tests for remote exchange-rate providers against a mocked transport."""

from decimal import Decimal

import httpx
import pytest

from src.core.exceptions import ExchangeRateFetchError
from src.infrastructure.exchange_rates import (
    ExchangeRateApiProvider,
    FrankfurterProvider,
    get_rate_providers,
)


def _provider(cls, handler, max_attempts: int = 2):
    return cls(
        base_url="https://rates.test",
        timeout=1.0,
        max_attempts=max_attempts,
        retry_delay=0,
        transport=httpx.MockTransport(handler),
    )


class TestFrankfurterProvider:
    async def test_parses_rate(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json={"base": "AUD", "rates": {"JPY": 97.45}})

        rate = await _provider(FrankfurterProvider, handler).fetch_rate("AUD", "JPY")

        assert rate == Decimal("97.45")
        assert seen[0].path == "/latest"
        assert seen[0].params["from"] == "AUD"
        assert seen[0].params["to"] == "JPY"

    async def test_non_2xx_fails_without_retry(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(ExchangeRateFetchError) as exc_info:
            await _provider(FrankfurterProvider, handler).fetch_rate("AUD", "JPY")

        assert exc_info.value.details["reason"] == "HTTP 503"
        assert len(calls) == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"rates": {"JPY": "abc"}},
            {"rates": {"JPY": None}},
            {"rates": {"JPY": True}},
            {"rates": {"JPY": 0}},
            {"rates": {"USD": 0.66}},
            {"error": "unsupported"},
        ],
    )
    async def test_unusable_payload(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with pytest.raises(ExchangeRateFetchError):
            await _provider(FrankfurterProvider, handler).fetch_rate("AUD", "JPY")

    async def test_transport_error_is_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"rates": {"JPY": 98}})

        rate = await _provider(FrankfurterProvider, handler).fetch_rate("AUD", "JPY")

        assert rate == Decimal("98")
        assert len(calls) == 2

    async def test_retries_exhausted(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ExchangeRateFetchError) as exc_info:
            await _provider(FrankfurterProvider, handler, max_attempts=3).fetch_rate("AUD", "JPY")

        assert "ReadTimeout" in exc_info.value.details["reason"]


class TestExchangeRateApiProvider:
    async def test_reads_rate_from_base_table(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v4/latest/AUD"
            return httpx.Response(200, json={"base": "AUD", "rates": {"JPY": 96.1, "USD": 0.65}})

        provider = _provider(ExchangeRateApiProvider, handler)

        assert provider.name == "exchangerate-api"
        assert await provider.fetch_rate("AUD", "USD") == Decimal("0.65")


def test_providers_in_fallback_order():
    assert [p.name for p in get_rate_providers()] == ["frankfurter", "exchangerate-api"]
