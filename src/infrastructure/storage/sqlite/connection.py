"""
Async SQLite connection pool with aiosqlite.

Provides connection management with proper async context handling. Every
mutating ledger operation runs inside ``get_transaction()``: one connection,
one ``BEGIN IMMEDIATE`` ... ``COMMIT``, rolled back as a whole on any error.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings
from src.core.exceptions import DatabaseError, LedgerError

logger = get_logger(__name__)

_RETRYABLE_MARKERS = ("database is locked", "database is busy", "database table is locked")


def to_database_error(operation: str, error: aiosqlite.Error) -> DatabaseError:
    """Wrap a driver error, flagging lock contention as retryable."""
    message = str(error)
    retryable = any(marker in message.lower() for marker in _RETRYABLE_MARKERS)
    return DatabaseError(operation, message, retryable=retryable)


class ConnectionPool:
    """
    Async SQLite connection pool.

    Manages a pool of connections with configurable size.
    """

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the connection pool."""
        async with self._lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            for _ in range(self.pool_size):
                conn = await self._create_connection()
                self._connections.append(conn)
                await self._pool.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _create_connection(self) -> aiosqlite.Connection:
        """Create a new database connection with ledger settings."""
        conn = await aiosqlite.connect(self.db_path)

        # WAL lets readers proceed while one writer holds the lock
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        await conn.execute("PRAGMA foreign_keys=ON")

        conn.row_factory = aiosqlite.Row

        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection from the pool.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        finally:
            await self._pool.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Acquire a connection inside an immediate write transaction.

        Commits on success, rolls back on any exception, including task
        cancellation. Domain errors are re-raised unchanged, driver errors as
        ``DatabaseError``.
        """
        async with self.acquire() as conn:
            try:
                await conn.execute("BEGIN IMMEDIATE")
                yield conn
                await conn.commit()
            except LedgerError:
                await conn.rollback()
                raise
            except aiosqlite.Error as e:
                await conn.rollback()
                logger.error("transaction_rolled_back", error=str(e))
                raise to_database_error("transaction", e) from e
            except Exception:
                await conn.rollback()
                raise
            except BaseException:
                # Cancelled mid-transaction; the connection goes back to the pool clean
                if conn.in_transaction:
                    await asyncio.shield(conn.rollback())
                    logger.warning("transaction_cancelled_rolled_back")
                raise

    async def close(self) -> None:
        """Close all connections in the pool."""
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._pool = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info("connection_pool_closed")


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool."""
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = ConnectionPool(
            db_path=settings.storage.db_path,
            pool_size=settings.storage.pool_size,
            busy_timeout=settings.storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection from the global pool.

    Convenience wrapper for read-only usage.
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    """
    Get a connection with transaction context.

    Convenience wrapper for transactional operations.
    """
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn


@asynccontextmanager
async def use_connection(
    conn: aiosqlite.Connection | None = None,
) -> AsyncIterator[aiosqlite.Connection]:
    """Reuse the caller's connection (and transaction) or borrow one from the pool."""
    if conn is not None:
        yield conn
        return
    async with get_connection() as acquired:
        yield acquired
