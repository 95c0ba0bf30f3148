"""Unit tests for SQLite connection pool and transaction scope."""

import asyncio
from pathlib import Path
from unittest.mock import MagicMock, patch

import aiosqlite
import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.core.exceptions import DatabaseError, NotFoundError
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
    get_transaction,
    to_database_error,
    use_connection,
)


@pytest.fixture
async def pool(tmp_path: Path):
    pool = ConnectionPool(tmp_path / "pool.db", pool_size=2, busy_timeout=0)
    await pool.initialize()
    async with pool.transaction() as conn:
        await conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT NOT NULL)")
    yield pool
    await pool.close()


async def _count(pool: ConnectionPool) -> int:
    async with pool.acquire() as conn:
        cursor = await conn.execute("SELECT COUNT(*) FROM t")
        return (await cursor.fetchone())[0]


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, tmp_path: Path):
        pool = ConnectionPool(tmp_path / "x.db")
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False
        assert pool._connections == []

    async def test_initialize_creates_directory_and_connections(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "x.db"
        pool = ConnectionPool(db_path, pool_size=3)
        await pool.initialize()
        try:
            assert db_path.parent.exists()
            assert len(pool._connections) == 3
            assert pool._pool.qsize() == 3
        finally:
            await pool.close()
        assert pool._initialized is False

    async def test_connections_enforce_foreign_keys(self, pool: ConnectionPool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
            assert conn.row_factory is aiosqlite.Row


class TestTransaction:
    async def test_commits_on_success(self, pool: ConnectionPool):
        async with pool.transaction() as conn:
            await conn.execute("INSERT INTO t (v) VALUES ('a')")
        assert await _count(pool) == 1

    async def test_rolls_back_on_domain_error(self, pool: ConnectionPool):
        with pytest.raises(NotFoundError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                raise NotFoundError("item", 1)
        assert await _count(pool) == 0

    async def test_rolls_back_on_other_error(self, pool: ConnectionPool):
        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                raise RuntimeError("boom")
        assert await _count(pool) == 0

    async def test_driver_error_becomes_database_error(self, pool: ConnectionPool):
        with pytest.raises(DatabaseError) as exc_info:
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                await conn.execute("INSERT INTO t (v) VALUES (NULL)")
        assert exc_info.value.retryable is False
        assert await _count(pool) == 0

    async def test_locked_database_is_retryable(self, pool: ConnectionPool):
        other = ConnectionPool(pool.db_path, pool_size=1, busy_timeout=0)
        await other.initialize()
        try:
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                with pytest.raises(DatabaseError) as exc_info:
                    async with other.transaction():
                        pass
            assert exc_info.value.retryable is True
            assert await _count(pool) == 1
        finally:
            await other.close()

    async def test_cancelled_task_rolls_back(self, pool: ConnectionPool):
        inside = asyncio.Event()

        async def hold_transaction():
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                inside.set()
                await asyncio.Event().wait()

        task = asyncio.create_task(hold_transaction())
        await inside.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert all(not conn.in_transaction for conn in pool._connections)
        assert pool._pool.qsize() == pool.pool_size
        assert await _count(pool) == 0

        # Both connections can open a write transaction again
        for value in ("b", "c"):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES (?)", (value,))
        assert await _count(pool) == 2


class TestToDatabaseError:
    def test_lock_messages_are_retryable(self):
        error = to_database_error("transaction", aiosqlite.OperationalError("database is locked"))
        assert error.retryable is True
        assert error.details["operation"] == "transaction"

    def test_other_errors_are_not(self):
        error = to_database_error("insert", aiosqlite.IntegrityError("CHECK constraint failed"))
        assert error.retryable is False


class TestGlobalPool:
    async def test_get_pool_uses_settings(self, tmp_path: Path):
        conn_module._pool = None
        mock_settings = MagicMock()
        mock_settings.storage.db_path = tmp_path / "global.db"
        mock_settings.storage.pool_size = 1
        mock_settings.storage.busy_timeout = 5000

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                pool = await get_pool()
                assert pool is await get_pool()
                assert pool.db_path == tmp_path / "global.db"
                async with get_transaction() as conn:
                    await conn.execute("CREATE TABLE g (id INTEGER)")
            finally:
                await close_pool()
        assert conn_module._pool is None

    async def test_use_connection_reuses_callers_connection(self, ledger_db: Path):
        async with get_transaction() as conn:
            async with use_connection(conn) as inner:
                assert inner is conn
