"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

import src.infrastructure.storage.sqlite.connection as conn_module
from src.api.dependencies import get_app_settings
from src.config import reset_settings
from src.core.entities import Account, Customer, Item, Supplier
from src.infrastructure.storage.sqlite import ConnectionPool, SQLiteCatalogStore
from src.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Every test starts from default settings."""
    monkeypatch.delenv("LEDGER_ALLOW_NEGATIVE_STOCK", raising=False)
    reset_settings()
    get_app_settings.cache_clear()
    yield
    reset_settings()
    get_app_settings.cache_clear()


@pytest.fixture
async def ledger_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database installed as the global connection pool."""
    db_path = tmp_path / "ledger.db"
    results = await initialize_database(db_path, create_backup_before=False)
    assert results and all(r.success for r in results)

    conn_module._pool = ConnectionPool(db_path, pool_size=2, busy_timeout=5000)
    await conn_module._pool.initialize()
    try:
        yield db_path
    finally:
        await conn_module.close_pool()


@pytest.fixture
def catalog(ledger_db: Path) -> SQLiteCatalogStore:
    return SQLiteCatalogStore()


@pytest.fixture
async def supplier(catalog: SQLiteCatalogStore) -> Supplier:
    return await catalog.create_supplier(Supplier(name="Acme Wholesale", phone="555-0100"))


@pytest.fixture
async def customer(catalog: SQLiteCatalogStore) -> Customer:
    return await catalog.create_customer(Customer(name="Corner Shop", address="1 High St"))


@pytest.fixture
async def item(catalog: SQLiteCatalogStore) -> Item:
    """Item with no stock on hand."""
    return await catalog.create_item(
        Item(name="Widget", unit="pcs", base_price=5.0, selling_price=8.0)
    )


@pytest.fixture
async def other_item(catalog: SQLiteCatalogStore) -> Item:
    return await catalog.create_item(
        Item(name="Gadget", unit="box", base_price=2.0, selling_price=3.5, opening_stock=50)
    )


@pytest.fixture
async def account(catalog: SQLiteCatalogStore) -> Account:
    return await catalog.create_account(
        Account(
            bank_name="First Bank",
            account_number="0012345",
            account_holder="Shop Owner",
            opening_balance=1000.0,
        )
    )


@pytest.fixture
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
async def client(ledger_db: Path) -> AsyncGenerator[AsyncClient, None]:
    """Async client against the app, backed by the temporary database."""
    from src.api.main import create_app

    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
