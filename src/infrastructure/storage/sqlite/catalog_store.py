"""SQLite storage of suppliers, customers, items and bank accounts."""

from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.account import Account
from src.core.entities.inventory import Item
from src.core.entities.party import Customer, Party, Supplier
from src.core.interfaces.storage import ICatalogStore
from src.infrastructure.storage.sqlite.connection import get_transaction, use_connection
from src.infrastructure.storage.sqlite.rows import parse_datetime

logger = get_logger(__name__)

# Columns writable after creation; never the stock or balance columns.
ITEM_COLUMNS = {"name", "description", "unit", "base_price", "selling_price"}
ACCOUNT_COLUMNS = {"bank_name", "account_number", "account_holder"}


class SQLiteCatalogStore(ICatalogStore):
    """SQLite implementation of the reference data the ledgers point at."""

    # Parties

    async def _create_party(self, table: str, party: Party) -> Party:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO {table} (name, phone, address) VALUES (?, ?, ?)",
                (party.name, party.phone, party.address),
            )
            party.id = cursor.lastrowid
        logger.info(f"{table[:-1]}_created", id=party.id, name=party.name)
        return party

    async def _get_party(
        self, table: str, model: type, party_id: int, conn: aiosqlite.Connection | None
    ):
        async with use_connection(conn) as c:
            cursor = await c.execute(f"SELECT * FROM {table} WHERE id = ?", (party_id,))
            row = await cursor.fetchone()
        return self._row_to_party(model, row) if row else None

    async def _list_parties(self, table: str, model: type, limit: int, offset: int):
        async with use_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {table} ORDER BY name, id LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
        return [self._row_to_party(model, row) for row in rows]

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        return await self._create_party("suppliers", supplier)

    async def get_supplier(
        self, supplier_id: int, conn: aiosqlite.Connection | None = None
    ) -> Supplier | None:
        return await self._get_party("suppliers", Supplier, supplier_id, conn)

    async def list_suppliers(self, limit: int = 100, offset: int = 0) -> list[Supplier]:
        return await self._list_parties("suppliers", Supplier, limit, offset)

    async def create_customer(self, customer: Customer) -> Customer:
        return await self._create_party("customers", customer)

    async def get_customer(
        self, customer_id: int, conn: aiosqlite.Connection | None = None
    ) -> Customer | None:
        return await self._get_party("customers", Customer, customer_id, conn)

    async def list_customers(self, limit: int = 100, offset: int = 0) -> list[Customer]:
        return await self._list_parties("customers", Customer, limit, offset)

    # Items

    async def create_item(self, item: Item) -> Item:
        """Create an item; its stock starts at the opening stock."""
        item.current_stock = item.opening_stock
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO items (
                    name, description, unit, base_price, selling_price,
                    opening_stock, current_stock
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.name,
                    item.description,
                    item.unit,
                    item.base_price,
                    item.selling_price,
                    item.opening_stock,
                    item.current_stock,
                ),
            )
            item.id = cursor.lastrowid
        logger.info("item_created", item_id=item.id, name=item.name, stock=item.current_stock)
        return item

    async def get_item(
        self, item_id: int, conn: aiosqlite.Connection | None = None
    ) -> Item | None:
        async with use_connection(conn) as c:
            cursor = await c.execute("SELECT * FROM items WHERE id = ?", (item_id,))
            row = await cursor.fetchone()
        return self._row_to_item(row) if row else None

    async def list_items(self, limit: int = 100, offset: int = 0) -> list[Item]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM items ORDER BY name, id LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def update_item(self, item_id: int, fields: dict[str, Any]) -> Item | None:
        async with get_transaction() as conn:
            if not await self._update_columns(conn, "items", ITEM_COLUMNS, item_id, fields):
                return None
            item = await self.get_item(item_id, conn=conn)
        logger.info("item_updated", item_id=item_id, fields=sorted(fields))
        return item

    async def find_missing_items(
        self, item_ids: list[int], conn: aiosqlite.Connection | None = None
    ) -> list[int]:
        wanted = sorted(set(item_ids))
        if not wanted:
            return []
        placeholders = ", ".join("?" for _ in wanted)
        async with use_connection(conn) as c:
            cursor = await c.execute(
                f"SELECT id FROM items WHERE id IN ({placeholders})", wanted
            )
            found = {row[0] for row in await cursor.fetchall()}
        return [item_id for item_id in wanted if item_id not in found]

    async def list_low_stock(self, threshold: float) -> list[Item]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM items
                WHERE current_stock <= ?
                ORDER BY current_stock, name, id
                """,
                (threshold,),
            )
            rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    # Accounts

    async def create_account(self, account: Account) -> Account:
        """Create an account; its balance starts at the opening balance."""
        account.balance = account.opening_balance
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO accounts (
                    bank_name, account_number, account_holder, opening_balance, balance
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    account.bank_name,
                    account.account_number,
                    account.account_holder,
                    account.opening_balance,
                    account.balance,
                ),
            )
            account.id = cursor.lastrowid
        logger.info("account_created", account_id=account.id, balance=account.balance)
        return account

    async def get_account(
        self, account_id: int, conn: aiosqlite.Connection | None = None
    ) -> Account | None:
        async with use_connection(conn) as c:
            cursor = await c.execute("SELECT * FROM accounts WHERE id = ?", (account_id,))
            row = await cursor.fetchone()
        return self._row_to_account(row) if row else None

    async def list_accounts(self, limit: int = 100, offset: int = 0) -> list[Account]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM accounts ORDER BY bank_name, id LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
        return [self._row_to_account(row) for row in rows]

    async def update_account(
        self, account_id: int, fields: dict[str, Any]
    ) -> Account | None:
        async with get_transaction() as conn:
            if not await self._update_columns(
                conn, "accounts", ACCOUNT_COLUMNS, account_id, fields
            ):
                return None
            account = await self.get_account(account_id, conn=conn)
        logger.info("account_updated", account_id=account_id, fields=sorted(fields))
        return account

    @staticmethod
    async def _update_columns(
        conn: aiosqlite.Connection,
        table: str,
        allowed: set[str],
        row_id: int,
        fields: dict[str, Any],
    ) -> bool:
        """Update whitelisted columns; False when the row does not exist."""
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Not updatable on {table}: {sorted(unknown)}")

        if not fields:
            cursor = await conn.execute(f"SELECT 1 FROM {table} WHERE id = ?", (row_id,))
            return await cursor.fetchone() is not None

        assignments = ", ".join(f"{column} = ?" for column in fields)
        cursor = await conn.execute(
            f"UPDATE {table} SET {assignments}, updated_at = datetime('now') WHERE id = ?",
            (*fields.values(), row_id),
        )
        return bool(cursor.rowcount)

    @staticmethod
    def _row_to_party(model: type, row: aiosqlite.Row):
        return model(
            id=row["id"],
            name=row["name"],
            phone=row["phone"],
            address=row["address"],
            created_at=parse_datetime(row["created_at"]),
        )

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        return Item(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            unit=row["unit"],
            base_price=float(row["base_price"]),
            selling_price=float(row["selling_price"]),
            opening_stock=float(row["opening_stock"]),
            current_stock=float(row["current_stock"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )

    @staticmethod
    def _row_to_account(row: aiosqlite.Row) -> Account:
        return Account(
            id=row["id"],
            bank_name=row["bank_name"],
            account_number=row["account_number"],
            account_holder=row["account_holder"],
            opening_balance=float(row["opening_balance"]),
            balance=float(row["balance"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
