"""
Base exchange-rate provider with retry on transport errors.

A provider is one remote JSON API. Transport failures (connect errors,
timeouts) are retried with exponential backoff; a bad status code or an
unusable payload fails immediately.
"""

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger, get_settings
from src.core.exceptions import ExchangeRateFetchError
from src.core.interfaces.exchange_rate import IRateProvider

logger = get_logger(__name__)


class BaseRateProvider(IRateProvider, ABC):
    """Shared HTTP, retry and payload validation for rate providers."""

    name = "base"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings().exchange_rate
        self.base_url = (base_url or self._default_url(settings)).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.max_attempts = max(1, max_attempts if max_attempts is not None else settings.max_attempts)
        self.retry_delay = retry_delay if retry_delay is not None else settings.retry_delay
        self._transport = transport

    @staticmethod
    @abstractmethod
    def _default_url(settings: Any) -> str:
        """Base URL from ExchangeRateSettings."""

    @abstractmethod
    def _request(self, base: str, target: str) -> tuple[str, dict[str, str]]:
        """URL and query params for one lookup."""

    def _get_retry_decorator(self) -> Any:
        return retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                min=self.retry_delay,
                max=self.retry_delay * 8,
            ),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "exchange_rate_retry",
            provider=self.name,
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _get_json(self, url: str, params: dict[str, str]) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, params=params)

        if response.status_code < 200 or response.status_code >= 300:
            raise ExchangeRateFetchError(self.name, f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise ExchangeRateFetchError(self.name, "response is not JSON") from e
        if not isinstance(data, dict):
            raise ExchangeRateFetchError(self.name, "unexpected payload shape")
        return data

    async def fetch_rate(self, base: str, target: str) -> Decimal:
        url, params = self._request(base, target)
        try:
            data = await self._get_retry_decorator()(self._get_json)(url, params)
        except httpx.HTTPError as e:
            raise ExchangeRateFetchError(self.name, f"{type(e).__name__}: {e}") from e

        rate = self._parse_rate(data, target)
        logger.debug("exchange_rate_fetched", provider=self.name, base=base, target=target, rate=str(rate))
        return rate

    def _parse_rate(self, data: dict, target: str) -> Decimal:
        rates = data.get("rates")
        value = rates.get(target) if isinstance(rates, dict) else None
        if isinstance(value, bool) or not isinstance(value, int | float | str):
            raise ExchangeRateFetchError(self.name, f"no numeric rate for {target}")
        try:
            rate = Decimal(str(value))
        except InvalidOperation as e:
            raise ExchangeRateFetchError(self.name, f"no numeric rate for {target}") from e
        if not rate.is_finite() or rate <= 0:
            raise ExchangeRateFetchError(self.name, f"invalid rate for {target}: {value}")
        return rate
