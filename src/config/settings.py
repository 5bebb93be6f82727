"""
Environment-driven settings for the GoParts service.

Each concern reads its own prefixed variables (``STORAGE_*``, ``API_*``,
``QUOTE_*``, ``PRICING_*``, ``FX_*``); top-level values and a ``.env`` file
are read by ``Settings``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "goparts.db"
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class QuoteSettings(BaseSettings):
    """Quote validity, paging limits and the delivery offset for converted orders."""

    model_config = SettingsConfigDict(env_prefix="QUOTE_")

    default_validity_days: int = 30
    default_page_size: int = 25
    max_page_size: int = 100
    order_delivery_days: int = 14


class PricingSettings(BaseSettings):
    """Tier markups, in percent, used when a part has none of its own."""

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    internal_markup: float = 10.0
    wholesale_markup: float = 20.0
    trade_markup: float = 30.0
    retail_markup: float = 50.0


class ExchangeRateSettings(BaseSettings):
    """
    Rate providers and refresh behaviour.

    ``max_attempts`` counts tries per provider on transport errors, so 1
    disables retry. ``cache_ttl_seconds`` bounds how long latest-rate reads
    are served from memory.
    """

    model_config = SettingsConfigDict(env_prefix="FX_")

    base_currency: str = "AUD"
    target_currencies: list[str] = ["JPY", "USD"]
    primary_url: str = "https://api.frankfurter.app"
    fallback_url: str = "https://api.exchangerate-api.com"
    timeout: float = 10.0
    max_attempts: int = 2
    retry_delay: float = 0.5
    cache_ttl_seconds: int = 3600


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "GoParts Procurement"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    quotes: QuoteSettings = Field(default_factory=QuoteSettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    exchange_rate: ExchangeRateSettings = Field(default_factory=ExchangeRateSettings)

    @model_validator(mode="after")
    def _create_data_dir(self) -> "Settings":
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, built from the environment on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
