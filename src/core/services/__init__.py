"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/exceptions.py

NO infrastructure imports.
"""

from src.core.services.category_statistics import summarize_categories
from src.core.services.numbering import generate_order_number, generate_quote_number
from src.core.services.pricing import TIER_LOADING, price_part, tier_price
from src.core.services.quote_calculator import (
    GST_RATE,
    QuoteCostCalculator,
    calculate_quote_totals,
    round_money,
)
from src.core.services.quote_lifecycle import QuoteStatusMachine, build_order_from_quote

__all__ = [
    # Quote calculator
    "QuoteCostCalculator",
    "calculate_quote_totals",
    "round_money",
    "GST_RATE",
    # Quote lifecycle
    "QuoteStatusMachine",
    "build_order_from_quote",
    # Pricing
    "tier_price",
    "price_part",
    "TIER_LOADING",
    # Numbering
    "generate_quote_number",
    "generate_order_number",
    # Categories
    "summarize_categories",
]
