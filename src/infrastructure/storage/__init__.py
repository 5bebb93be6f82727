"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)

__all__ = [
    "get_pool",
    "open_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
