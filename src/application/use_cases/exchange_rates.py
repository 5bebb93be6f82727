"""Exchange rate use cases: refresh job, latest rate, history."""

import time
from dataclasses import dataclass, field

from src.application.dto.responses import ExchangeRateHistoryResponse, ExchangeRateResponse
from src.application.mappers import exchange_rate_to_response
from src.config import get_logger, get_settings
from src.core.entities.exchange_rate import ExchangeRate, RateRefreshResult, RefreshedRate
from src.core.exceptions import (
    ConfigurationError,
    ExchangeRateFetchError,
    ExchangeRateNotFoundError,
    ValidationError,
)
from src.core.interfaces.exchange_rate import IExchangeRateStore, IRateProvider

logger = get_logger(__name__)


@dataclass
class _CachedRate:
    rate: ExchangeRate
    stored_at: float


@dataclass
class LatestRateCache:
    """In-process cache of latest rates per currency pair."""

    ttl: float
    _entries: dict[tuple[str, str], _CachedRate] = field(default_factory=dict)

    def get(self, base: str, target: str) -> ExchangeRate | None:
        entry = self._entries.get((base, target))
        if entry and (time.time() - entry.stored_at) < self.ttl:
            return entry.rate
        return None

    def put(self, rate: ExchangeRate) -> None:
        self._entries[(rate.base_currency, rate.target_currency)] = _CachedRate(
            rate=rate, stored_at=time.time()
        )

    def invalidate(self) -> None:
        self._entries.clear()


_cache: LatestRateCache | None = None


def get_rate_cache() -> LatestRateCache:
    global _cache
    if _cache is None:
        _cache = LatestRateCache(ttl=get_settings().exchange_rate.cache_ttl_seconds)
    return _cache


def _normalize(currency: str) -> str:
    code = currency.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError("currency", "expected a 3-letter currency code", currency)
    return code


class RefreshExchangeRatesUseCase:
    """
    Fetch and store the latest rate for each target currency.

    Providers are tried in order per currency; the first usable rate wins.
    A currency for which every provider fails is logged and skipped. The
    batch succeeds if at least one currency was stored.
    """

    def __init__(
        self,
        providers: list[IRateProvider] | None = None,
        rate_store: IExchangeRateStore | None = None,
        cache: LatestRateCache | None = None,
    ):
        self._providers = providers
        self._rate_store = rate_store
        self._cache = cache

    def _get_providers(self) -> list[IRateProvider]:
        if self._providers is None:
            from src.infrastructure.exchange_rates import get_rate_providers

            self._providers = list(get_rate_providers())
        return self._providers

    async def _get_rate_store(self) -> IExchangeRateStore:
        if self._rate_store is None:
            from src.infrastructure.storage.sqlite import get_exchange_rate_store

            self._rate_store = await get_exchange_rate_store()
        return self._rate_store

    async def _fetch_one(self, base: str, target: str) -> RefreshedRate:
        reasons = []
        for provider in self._get_providers():
            try:
                rate = await provider.fetch_rate(base, target)
            except ExchangeRateFetchError as e:
                logger.warning(
                    "exchange_rate_provider_failed",
                    provider=provider.name,
                    target=target,
                    reason=e.details.get("reason"),
                )
                reasons.append(f"{provider.name}: {e.details.get('reason')}")
                continue
            return RefreshedRate(target_currency=target, rate=rate, source=provider.name)
        raise ExchangeRateFetchError("all", "; ".join(reasons) or "no providers configured")

    async def execute(self, currencies: list[str] | None = None) -> RateRefreshResult:
        settings = get_settings().exchange_rate
        base = settings.base_currency
        targets = [_normalize(c) for c in (currencies or settings.target_currencies)]
        if not targets:
            raise ConfigurationError("No target currencies configured", code="NO_TARGET_CURRENCIES")
        logger.info("exchange_rate_refresh_started", base=base, targets=targets)

        store = await self._get_rate_store()
        result = RateRefreshResult()
        for target in targets:
            try:
                refreshed = await self._fetch_one(base, target)
            except ExchangeRateFetchError as e:
                logger.error("exchange_rate_currency_failed", target=target, reason=e.message)
                result.failures[target] = e.details.get("reason", e.message)
                continue
            await store.add(
                ExchangeRate(
                    base_currency=base,
                    target_currency=target,
                    rate=refreshed.rate,
                    source_api=refreshed.source,
                    fetched_at=result.timestamp,
                )
            )
            result.rates.append(refreshed)

        (self._cache or get_rate_cache()).invalidate()
        logger.info(
            "exchange_rate_refresh_complete",
            success=result.success,
            stored=[r.target_currency for r in result.rates],
            failed=sorted(result.failures),
        )
        return result


class ExchangeRateQueryUseCase:
    """Latest-rate and history reads."""

    def __init__(
        self,
        rate_store: IExchangeRateStore | None = None,
        cache: LatestRateCache | None = None,
    ):
        self._rate_store = rate_store
        self._cache = cache

    async def _get_rate_store(self) -> IExchangeRateStore:
        if self._rate_store is None:
            from src.infrastructure.storage.sqlite import get_exchange_rate_store

            self._rate_store = await get_exchange_rate_store()
        return self._rate_store

    def _get_cache(self) -> LatestRateCache:
        if self._cache is None:
            self._cache = get_rate_cache()
        return self._cache

    async def latest(self, target: str, base: str | None = None) -> ExchangeRate:
        base = _normalize(base or get_settings().exchange_rate.base_currency)
        target = _normalize(target)

        cached = self._get_cache().get(base, target)
        if cached is not None:
            return cached

        rate = await (await self._get_rate_store()).latest(base, target)
        if rate is None:
            raise ExchangeRateNotFoundError(base, target)
        self._get_cache().put(rate)
        return rate

    async def history(
        self, target: str, limit: int = 7, base: str | None = None
    ) -> ExchangeRateHistoryResponse:
        base = _normalize(base or get_settings().exchange_rate.base_currency)
        target = _normalize(target)
        rates = await (await self._get_rate_store()).history(base, target, limit=limit)
        return ExchangeRateHistoryResponse(
            base_currency=base,
            target_currency=target,
            rates=[exchange_rate_to_response(r) for r in rates],
        )

    def to_response(self, rate: ExchangeRate) -> ExchangeRateResponse:
        return exchange_rate_to_response(rate)
