"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.category_store import SQLiteCategoryStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)
from src.infrastructure.storage.sqlite.exchange_rate_store import SQLiteExchangeRateStore
from src.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from src.infrastructure.storage.sqlite.part_store import SQLitePartStore
from src.infrastructure.storage.sqlite.party_store import (
    SQLiteCustomerStore,
    SQLiteSupplierStore,
)
from src.infrastructure.storage.sqlite.preference_store import SQLitePreferenceStore
from src.infrastructure.storage.sqlite.quote_store import SQLiteQuoteStore

# Singleton instances
_category_store: SQLiteCategoryStore | None = None
_part_store: SQLitePartStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_quote_store: SQLiteQuoteStore | None = None
_order_store: SQLiteOrderStore | None = None
_preference_store: SQLitePreferenceStore | None = None
_exchange_rate_store: SQLiteExchangeRateStore | None = None


async def get_category_store() -> SQLiteCategoryStore:
    """Get singleton category store instance."""
    global _category_store
    if _category_store is None:
        _category_store = SQLiteCategoryStore()
    return _category_store


async def get_part_store() -> SQLitePartStore:
    """Get singleton part store instance."""
    global _part_store
    if _part_store is None:
        _part_store = SQLitePartStore()
    return _part_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_quote_store() -> SQLiteQuoteStore:
    """Get singleton quote store instance."""
    global _quote_store
    if _quote_store is None:
        _quote_store = SQLiteQuoteStore()
    return _quote_store


async def get_order_store() -> SQLiteOrderStore:
    """Get singleton order store instance."""
    global _order_store
    if _order_store is None:
        _order_store = SQLiteOrderStore()
    return _order_store


async def get_preference_store() -> SQLitePreferenceStore:
    """Get singleton preference store instance."""
    global _preference_store
    if _preference_store is None:
        _preference_store = SQLitePreferenceStore()
    return _preference_store


async def get_exchange_rate_store() -> SQLiteExchangeRateStore:
    """Get singleton exchange rate store instance."""
    global _exchange_rate_store
    if _exchange_rate_store is None:
        _exchange_rate_store = SQLiteExchangeRateStore()
    return _exchange_rate_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "open_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCategoryStore",
    "SQLitePartStore",
    "SQLiteCustomerStore",
    "SQLiteSupplierStore",
    "SQLiteQuoteStore",
    "SQLiteOrderStore",
    "SQLitePreferenceStore",
    "SQLiteExchangeRateStore",
    # Factory functions
    "get_category_store",
    "get_part_store",
    "get_customer_store",
    "get_supplier_store",
    "get_quote_store",
    "get_order_store",
    "get_preference_store",
    "get_exchange_rate_store",
]
