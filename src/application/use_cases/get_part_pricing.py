"""Get Part Pricing Use Case: tier prices from the latest unit price."""

from src.application.dto.responses import PartPricingResponse
from src.config import get_settings
from src.core.entities.part import PartPricing, PricingTier
from src.core.exceptions import PartNotFoundError
from src.core.interfaces.part_store import IPartStore
from src.core.services.pricing import price_part


def default_markups() -> dict[PricingTier, float]:
    pricing = get_settings().pricing
    return {
        PricingTier.INTERNAL: pricing.internal_markup,
        PricingTier.WHOLESALE: pricing.wholesale_markup,
        PricingTier.TRADE: pricing.trade_markup,
        PricingTier.RETAIL: pricing.retail_markup,
    }


class GetPartPricingUseCase:
    def __init__(
        self,
        part_store: IPartStore | None = None,
        markups: dict[PricingTier, float] | None = None,
    ):
        self._part_store = part_store
        self._markups = markups

    async def _get_part_store(self) -> IPartStore:
        if self._part_store is None:
            from src.infrastructure.storage.sqlite import get_part_store

            self._part_store = await get_part_store()
        return self._part_store

    async def execute(self, part_id: int) -> PartPricing:
        store = await self._get_part_store()
        part = await store.get(part_id)
        if part is None:
            raise PartNotFoundError(part_id)
        latest = await store.latest_price(part_id)
        return price_part(part, latest, self._markups or default_markups())

    def to_response(self, part_id: int, pricing: PartPricing) -> PartPricingResponse:
        return PartPricingResponse(
            part_id=part_id,
            latest_unit_price=pricing.latest_unit_price,
            prices={tier.value: price for tier, price in pricing.prices.items()},
            markups={tier.value: markup for tier, markup in pricing.markups.items()},
        )
