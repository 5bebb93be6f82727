"""Exchange rate entities."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class ExchangeRate(BaseModel):
    """A fetched currency rate, stored with its source label."""

    id: int | None = None
    base_currency: str = "AUD"
    target_currency: str
    rate: Decimal = Field(gt=0)
    source_api: str
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RefreshedRate(BaseModel):
    target_currency: str
    rate: Decimal
    source: str


class RateRefreshResult(BaseModel):
    """Outcome of one refresh batch across all target currencies."""

    rates: list[RefreshedRate] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def success(self) -> bool:
        return bool(self.rates)

    def to_envelope(self) -> dict[str, Any]:
        """JSON envelope returned to callers of the refresh job."""
        if not self.success:
            return {
                "success": False,
                "error": "Failed to fetch exchange rates from all providers",
            }
        return {
            "success": True,
            "rates": [
                {
                    "targetCurrency": r.target_currency,
                    "rate": float(r.rate),
                    "source": r.source,
                }
                for r in self.rates
            ],
            "timestamp": self.timestamp.isoformat(),
        }
