"""Application use cases."""

from src.application.use_cases.convert_quote_to_order import (
    ConvertQuoteResult,
    ConvertQuoteToOrderUseCase,
)
from src.application.use_cases.create_category import CreateCategoryUseCase
from src.application.use_cases.create_quote import CreateQuoteResult, CreateQuoteUseCase
from src.application.use_cases.exchange_rates import (
    ExchangeRateQueryUseCase,
    LatestRateCache,
    RefreshExchangeRatesUseCase,
    get_rate_cache,
)
from src.application.use_cases.get_part_pricing import GetPartPricingUseCase
from src.application.use_cases.list_quotes import ListQuotesResult, ListQuotesUseCase
from src.application.use_cases.merge_categories import (
    BulkReassignPartsUseCase,
    MergeCategoriesResult,
    MergeCategoriesUseCase,
)
from src.application.use_cases.quote_preferences import QuotePreferencesUseCase
from src.application.use_cases.reorder_categories import ReorderCategoriesUseCase
from src.application.use_cases.update_category import UpdateCategoryUseCase
from src.application.use_cases.update_quote import UpdateQuoteResult, UpdateQuoteUseCase
from src.application.use_cases.update_quote_status import (
    UpdateQuoteStatusResult,
    UpdateQuoteStatusUseCase,
)

__all__ = [
    # Quotes
    "CreateQuoteUseCase",
    "CreateQuoteResult",
    "UpdateQuoteUseCase",
    "UpdateQuoteResult",
    "UpdateQuoteStatusUseCase",
    "UpdateQuoteStatusResult",
    "ConvertQuoteToOrderUseCase",
    "ConvertQuoteResult",
    "ListQuotesUseCase",
    "ListQuotesResult",
    "QuotePreferencesUseCase",
    # Categories
    "CreateCategoryUseCase",
    "UpdateCategoryUseCase",
    "ReorderCategoriesUseCase",
    "MergeCategoriesUseCase",
    "MergeCategoriesResult",
    "BulkReassignPartsUseCase",
    # Parts
    "GetPartPricingUseCase",
    # Exchange rates
    "RefreshExchangeRatesUseCase",
    "ExchangeRateQueryUseCase",
    "LatestRateCache",
    "get_rate_cache",
]
