"""
Dependency injection container for FastAPI.

Provides use cases and stores to route handlers.
"""

from functools import lru_cache

from src.application.use_cases import (
    BulkReassignPartsUseCase,
    ConvertQuoteToOrderUseCase,
    CreateCategoryUseCase,
    CreateQuoteUseCase,
    ExchangeRateQueryUseCase,
    GetPartPricingUseCase,
    ListQuotesUseCase,
    MergeCategoriesUseCase,
    QuotePreferencesUseCase,
    RefreshExchangeRatesUseCase,
    ReorderCategoriesUseCase,
    UpdateCategoryUseCase,
    UpdateQuoteStatusUseCase,
    UpdateQuoteUseCase,
)
from src.config import Settings, get_settings
from src.infrastructure.storage.sqlite import (
    SQLiteCategoryStore,
    SQLiteCustomerStore,
    SQLiteOrderStore,
    SQLitePartStore,
    SQLiteQuoteStore,
    SQLiteSupplierStore,
    get_category_store,
    get_customer_store,
    get_order_store,
    get_part_store,
    get_quote_store,
    get_supplier_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_cat_store() -> SQLiteCategoryStore:
    """Get category store."""
    return await get_category_store()


async def get_prt_store() -> SQLitePartStore:
    """Get part store."""
    return await get_part_store()


async def get_cust_store() -> SQLiteCustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_supp_store() -> SQLiteSupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_qt_store() -> SQLiteQuoteStore:
    """Get quote store."""
    return await get_quote_store()


async def get_ord_store() -> SQLiteOrderStore:
    """Get order store."""
    return await get_order_store()


# Quote use cases
def get_create_quote_use_case() -> CreateQuoteUseCase:
    return CreateQuoteUseCase()


def get_update_quote_use_case() -> UpdateQuoteUseCase:
    return UpdateQuoteUseCase()


def get_update_quote_status_use_case() -> UpdateQuoteStatusUseCase:
    return UpdateQuoteStatusUseCase()


def get_convert_quote_use_case() -> ConvertQuoteToOrderUseCase:
    return ConvertQuoteToOrderUseCase()


def get_list_quotes_use_case() -> ListQuotesUseCase:
    return ListQuotesUseCase()


def get_quote_preferences_use_case() -> QuotePreferencesUseCase:
    return QuotePreferencesUseCase()


# Category use cases
def get_create_category_use_case() -> CreateCategoryUseCase:
    return CreateCategoryUseCase()


def get_update_category_use_case() -> UpdateCategoryUseCase:
    return UpdateCategoryUseCase()


def get_reorder_categories_use_case() -> ReorderCategoriesUseCase:
    return ReorderCategoriesUseCase()


def get_merge_categories_use_case() -> MergeCategoriesUseCase:
    return MergeCategoriesUseCase()


def get_bulk_reassign_use_case() -> BulkReassignPartsUseCase:
    return BulkReassignPartsUseCase()


# Parts
def get_part_pricing_use_case() -> GetPartPricingUseCase:
    return GetPartPricingUseCase()


# Exchange rates
def get_refresh_rates_use_case() -> RefreshExchangeRatesUseCase:
    """Get exchange-rate refresh job."""
    return RefreshExchangeRatesUseCase()


def get_rate_query_use_case() -> ExchangeRateQueryUseCase:
    return ExchangeRateQueryUseCase()
