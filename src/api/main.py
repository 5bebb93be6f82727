"""
ASGI entry point.

``create_app`` wires middleware, error handlers and every router;
``app`` is the instance uvicorn serves (``uvicorn src.api.main:app``).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    categories_router,
    customers_router,
    exchange_rates_router,
    health_router,
    orders_router,
    parts_router,
    quotes_router,
    suppliers_router,
)
from src.config import configure_logging, get_logger, get_settings
from src.infrastructure.storage.sqlite import close_pool, get_pool
from src.infrastructure.storage.sqlite.migrations import run_migrations

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    categories_router,
    parts_router,
    customers_router,
    suppliers_router,
    quotes_router,
    orders_router,
    exchange_rates_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the pool before serving; close the pool afterwards."""
    settings = get_settings()
    logger.info(
        "goparts_starting",
        environment=settings.environment,
        db_path=str(settings.storage.db_path),
    )
    try:
        results = await run_migrations()
        await get_pool()
    except Exception as e:
        logger.error("startup_failed", error=str(e))
        raise
    logger.info("goparts_ready", migrations_applied=len(results))

    yield

    await close_pool()
    logger.info("goparts_stopped")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    With ``use_lifespan=False`` nothing touches the database at startup,
    which suits tests that override stores or open their own pool.
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Parts procurement: catalog, quotes, orders and exchange rates",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url=None,
        lifespan=lifespan if use_lifespan else None,
    )

    # Added later wraps earlier: failures are logged, then converted to JSON.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    setup_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"name": settings.app_name, "version": settings.app_version}

    return app


app = create_app()
