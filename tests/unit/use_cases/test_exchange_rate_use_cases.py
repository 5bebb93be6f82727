"""Unit tests for exchange-rate refresh and queries, plus part pricing."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.use_cases.exchange_rates import (
    ExchangeRateQueryUseCase,
    LatestRateCache,
    RefreshExchangeRatesUseCase,
)
from src.application.use_cases.get_part_pricing import GetPartPricingUseCase
from src.config.settings import reset_settings
from src.core.entities import ExchangeRate, PricingTier
from src.core.exceptions import (
    ConfigurationError,
    ExchangeRateFetchError,
    ExchangeRateNotFoundError,
    PartNotFoundError,
    ValidationError,
)


def _provider(name: str, rates: dict[str, str] | None = None, reason: str = "HTTP 503"):
    """Provider stub returning fixed rates; missing targets fail."""
    provider = MagicMock()
    provider.name = name

    async def fetch_rate(base, target):
        if rates and target in rates:
            return Decimal(rates[target])
        raise ExchangeRateFetchError(name, reason)

    provider.fetch_rate = AsyncMock(side_effect=fetch_rate)
    return provider


@pytest.fixture
def mock_rate_store():
    store = AsyncMock()
    store.add.side_effect = lambda rate: rate
    return store


@pytest.fixture
def cache():
    return LatestRateCache(ttl=3600)


class TestRefreshExchangeRatesUseCase:
    async def test_primary_success(self, mock_rate_store, cache):
        primary = _provider("frankfurter", {"JPY": "97.5", "USD": "0.66"})
        fallback = _provider("exchangerate-api", {"JPY": "1", "USD": "1"})
        use_case = RefreshExchangeRatesUseCase([primary, fallback], mock_rate_store, cache)

        result = await use_case.execute(["jpy", "USD"])

        envelope = result.to_envelope()
        assert envelope["success"] is True
        assert envelope["rates"] == [
            {"targetCurrency": "JPY", "rate": 97.5, "source": "frankfurter"},
            {"targetCurrency": "USD", "rate": 0.66, "source": "frankfurter"},
        ]
        assert "timestamp" in envelope
        fallback.fetch_rate.assert_not_awaited()
        stored = [call.args[0] for call in mock_rate_store.add.await_args_list]
        assert [(r.base_currency, r.target_currency, r.source_api) for r in stored] == [
            ("AUD", "JPY", "frankfurter"),
            ("AUD", "USD", "frankfurter"),
        ]

    async def test_falls_back_per_currency(self, mock_rate_store, cache):
        primary = _provider("frankfurter", {"USD": "0.66"})
        fallback = _provider("exchangerate-api", {"JPY": "96.9"})
        use_case = RefreshExchangeRatesUseCase([primary, fallback], mock_rate_store, cache)

        result = await use_case.execute(["JPY", "USD"])

        assert [(r.target_currency, r.source) for r in result.rates] == [
            ("JPY", "exchangerate-api"),
            ("USD", "frankfurter"),
        ]

    async def test_partial_failure_still_succeeds(self, mock_rate_store, cache):
        primary = _provider("frankfurter", {"JPY": "97.5"})
        fallback = _provider("exchangerate-api", reason="no numeric rate for USD")
        use_case = RefreshExchangeRatesUseCase([primary, fallback], mock_rate_store, cache)

        result = await use_case.execute(["JPY", "USD"])

        assert result.success
        assert list(result.failures) == ["USD"]
        assert "no numeric rate" in result.failures["USD"]
        assert mock_rate_store.add.await_count == 1

    async def test_all_providers_fail(self, mock_rate_store, cache):
        use_case = RefreshExchangeRatesUseCase(
            [_provider("frankfurter"), _provider("exchangerate-api")], mock_rate_store, cache
        )

        result = await use_case.execute(["JPY"])

        assert result.to_envelope() == {
            "success": False,
            "error": "Failed to fetch exchange rates from all providers",
        }
        mock_rate_store.add.assert_not_awaited()

    async def test_defaults_to_configured_targets(self, mock_rate_store, cache):
        primary = _provider("frankfurter", {"JPY": "97.5", "USD": "0.66"})
        use_case = RefreshExchangeRatesUseCase([primary], mock_rate_store, cache)

        result = await use_case.execute()

        assert [r.target_currency for r in result.rates] == ["JPY", "USD"]

    async def test_no_targets_configured(self, mock_rate_store, cache, monkeypatch):
        monkeypatch.setenv("FX_TARGET_CURRENCIES", "[]")
        reset_settings()
        use_case = RefreshExchangeRatesUseCase([_provider("frankfurter")], mock_rate_store, cache)

        with pytest.raises(ConfigurationError):
            await use_case.execute()

    async def test_rejects_bad_currency_code(self, mock_rate_store, cache):
        use_case = RefreshExchangeRatesUseCase([_provider("frankfurter")], mock_rate_store, cache)

        with pytest.raises(ValidationError):
            await use_case.execute(["YEN1"])

    async def test_refresh_invalidates_cache(self, mock_rate_store, cache):
        cache.put(ExchangeRate(target_currency="JPY", rate=Decimal("90"), source_api="old"))
        use_case = RefreshExchangeRatesUseCase(
            [_provider("frankfurter", {"JPY": "97.5"})], mock_rate_store, cache
        )

        await use_case.execute(["JPY"])

        assert cache.get("AUD", "JPY") is None


class TestExchangeRateQueryUseCase:
    async def test_latest_is_cached(self, mock_rate_store, cache):
        mock_rate_store.latest.return_value = ExchangeRate(
            target_currency="JPY", rate=Decimal("97.5"), source_api="frankfurter"
        )
        use_case = ExchangeRateQueryUseCase(mock_rate_store, cache)

        first = await use_case.latest("jpy")
        second = await use_case.latest("JPY")

        assert first.rate == second.rate == Decimal("97.5")
        mock_rate_store.latest.assert_awaited_once_with("AUD", "JPY")

    async def test_latest_missing(self, mock_rate_store, cache):
        mock_rate_store.latest.return_value = None
        use_case = ExchangeRateQueryUseCase(mock_rate_store, cache)

        with pytest.raises(ExchangeRateNotFoundError):
            await use_case.latest("EUR")

    async def test_history(self, mock_rate_store, cache):
        mock_rate_store.history.return_value = [
            ExchangeRate(target_currency="USD", rate=Decimal("0.66"), source_api="frankfurter")
        ]
        use_case = ExchangeRateQueryUseCase(mock_rate_store, cache)

        response = await use_case.history("usd", limit=3)

        assert response.target_currency == "USD"
        assert len(response.rates) == 1
        mock_rate_store.history.assert_awaited_once_with("AUD", "USD", limit=3)

    def test_cache_expires(self):
        cache = LatestRateCache(ttl=0)
        cache.put(ExchangeRate(target_currency="JPY", rate=Decimal("1"), source_api="x"))

        assert cache.get("AUD", "JPY") is None


class TestGetPartPricingUseCase:
    async def test_uses_latest_price_and_default_markups(self, sample_part):
        store = AsyncMock()
        store.get.return_value = sample_part
        store.latest_price.return_value = Decimal("40.00")
        use_case = GetPartPricingUseCase(part_store=store)

        pricing = await use_case.execute(sample_part.id)
        response = use_case.to_response(sample_part.id, pricing)

        # 40 * 1.5 * 1.1 with the default retail markup of 50%
        assert pricing.prices[PricingTier.RETAIL] == Decimal("66.00")
        assert response.prices["internal"] == Decimal("48.40")
        assert response.markups["wholesale"] == 20.0

    async def test_missing_part(self):
        store = AsyncMock()
        store.get.return_value = None

        with pytest.raises(PartNotFoundError):
            await GetPartPricingUseCase(part_store=store).execute(5)
