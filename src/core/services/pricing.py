"""Part tier pricing."""

from decimal import Decimal

from src.core.entities.part import Part, PartPricing, PricingTier
from src.core.services.quote_calculator import round_money

# Fixed loading applied on top of every tier markup. Business intent unconfirmed.
TIER_LOADING = Decimal("1.1")


def tier_price(unit_price: Decimal, markup_percent: float) -> Decimal:
    """P * (1 + m/100) * 1.1, rounded to cents."""
    markup = Decimal(str(markup_percent)) / Decimal("100")
    return round_money(Decimal(unit_price) * (Decimal("1") + markup) * TIER_LOADING)


def price_part(
    part: Part,
    latest_unit_price: Decimal | None,
    default_markups: dict[PricingTier, float],
) -> PartPricing:
    """
    Compute all four tier prices for a part.

    A missing latest price is treated as zero; a missing stored markup falls
    back to the configured default for that tier.
    """
    base = latest_unit_price if latest_unit_price is not None else Decimal("0")
    markups: dict[PricingTier, float] = {}
    prices: dict[PricingTier, Decimal] = {}
    for tier in PricingTier:
        stored = part.markup_for(tier)
        markup = stored if stored is not None else default_markups.get(tier, 0.0)
        markups[tier] = markup
        prices[tier] = tier_price(base, markup)
    return PartPricing(latest_unit_price=base, prices=prices, markups=markups)
