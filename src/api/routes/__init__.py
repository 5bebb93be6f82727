"""API route modules."""

from src.api.routes.categories import router as categories_router
from src.api.routes.exchange_rates import router as exchange_rates_router
from src.api.routes.health import router as health_router
from src.api.routes.orders import router as orders_router
from src.api.routes.parties import customers_router, suppliers_router
from src.api.routes.parts import router as parts_router
from src.api.routes.quotes import router as quotes_router

__all__ = [
    "health_router",
    "categories_router",
    "parts_router",
    "customers_router",
    "suppliers_router",
    "quotes_router",
    "orders_router",
    "exchange_rates_router",
]
