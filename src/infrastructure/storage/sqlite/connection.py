"""
Shared aiosqlite connections for the stores.

Stores read through ``get_connection()`` and write through
``get_transaction()``. A transaction starts with BEGIN IMMEDIATE, so quote
conversion, category merge and reorder take the write lock up front and
either commit every step or roll all of them back.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings
from src.core.exceptions import DatabaseError

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """Fixed set of connections handed out one caller at a time."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = Path(db_path)
        self.pool_size = max(1, pool_size)
        self.busy_timeout = busy_timeout
        self._connections: list[aiosqlite.Connection] = []
        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._open_lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return bool(self._connections)

    async def initialize(self) -> None:
        """Open every connection; a no-op when already open."""
        async with self._open_lock:
            if self.is_open:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await aiosqlite.connect(self.db_path)
                for pragma in (*_PRAGMAS, f"PRAGMA busy_timeout={self.busy_timeout}"):
                    await conn.execute(pragma)
                conn.row_factory = aiosqlite.Row
                self._connections.append(conn)
                self._idle.put_nowait(conn)
        logger.info("sqlite_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        if not self.is_open:
            await self.initialize()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Commit when the block exits cleanly, roll back and re-raise otherwise.

        SQLite failures other than constraint violations surface as
        DatabaseError.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except Exception as e:
                await conn.rollback()
                logger.warning("sqlite_transaction_rolled_back", error=str(e))
                # Constraint violations stay raw; stores translate them.
                if isinstance(e, aiosqlite.Error) and not isinstance(e, aiosqlite.IntegrityError):
                    raise DatabaseError("transaction", str(e)) from e
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._open_lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue()
        logger.info("sqlite_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool, opened on the settings database on first use."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(storage.db_path, storage.pool_size, storage.busy_timeout)
        await _pool.initialize()
    return _pool


async def open_pool(db_path: Path, pool_size: int = 2) -> ConnectionPool:
    """Point the process-wide pool at db_path, closing any previous one."""
    global _pool
    await close_pool()
    _pool = ConnectionPool(db_path, pool_size)
    await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    async with (await get_pool()).acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    async with (await get_pool()).transaction() as conn:
        yield conn
