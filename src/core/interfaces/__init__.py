"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.category_store import ICategoryStore
from src.core.interfaces.exchange_rate import IExchangeRateStore, IRateProvider
from src.core.interfaces.order_store import ICustomerStore, IOrderStore, ISupplierStore
from src.core.interfaces.part_store import IPartStore
from src.core.interfaces.quote_store import IPreferenceStore, IQuoteStore

__all__ = [
    "ICategoryStore",
    "IPartStore",
    "IQuoteStore",
    "IPreferenceStore",
    "IOrderStore",
    "ISupplierStore",
    "ICustomerStore",
    "IRateProvider",
    "IExchangeRateStore",
]
