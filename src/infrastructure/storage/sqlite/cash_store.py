"""SQLite storage of payments (to suppliers) and receipts (from customers)."""

from __future__ import annotations

from datetime import date
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.account import Payment, PaymentMethod, Receipt
from src.core.interfaces.storage import ICashStore, MovementT
from src.infrastructure.storage.sqlite.connection import use_connection
from src.infrastructure.storage.sqlite.rows import build_filters, parse_date, parse_datetime

logger = get_logger(__name__)

_MUTABLE_COLUMNS = {"date", "note"}


class SQLiteCashStore(ICashStore[MovementT]):
    """Shared SQL for payments and receipts."""

    entity: str
    table: str
    party_column: str
    party_table: str
    party_name_field: str
    model: type

    def _select(self) -> str:
        return f"""
            SELECT m.*, p.name AS party_name,
                   a.bank_name AS bank_name, a.account_number AS account_number
            FROM {self.table} m
            LEFT JOIN {self.party_table} p ON p.id = m.{self.party_column}
            LEFT JOIN accounts a ON a.id = m.account_id
        """

    async def insert(self, conn: aiosqlite.Connection, movement: MovementT) -> MovementT:
        cursor = await conn.execute(
            f"""
            INSERT INTO {self.table} (
                {self.party_column}, amount, method, account_id, date, note
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                getattr(movement, self.party_column),
                movement.amount,
                movement.method.value,
                movement.account_id,
                movement.date.isoformat(),
                movement.note,
            ),
        )
        movement.id = cursor.lastrowid
        logger.debug(f"{self.entity}_inserted", id=movement.id, amount=movement.amount)
        return movement

    async def get(
        self, movement_id: int, conn: aiosqlite.Connection | None = None
    ) -> MovementT | None:
        async with use_connection(conn) as c:
            cursor = await c.execute(f"{self._select()} WHERE m.id = ?", (movement_id,))
            row = await cursor.fetchone()
        return self._row_to_movement(row) if row else None

    async def update_fields(
        self, conn: aiosqlite.Connection, movement_id: int, fields: dict[str, Any]
    ) -> None:
        """Rewrite date and/or note; money columns are immutable."""
        unknown = set(fields) - _MUTABLE_COLUMNS
        if unknown:
            raise ValueError(f"Not updatable on {self.table}: {sorted(unknown)}")
        if not fields:
            return

        assignments = ", ".join(f"{column} = ?" for column in fields)
        values = [
            value.isoformat() if isinstance(value, date) else value
            for value in fields.values()
        ]
        await conn.execute(
            f"""
            UPDATE {self.table}
            SET {assignments}, updated_at = datetime('now')
            WHERE id = ?
            """,
            (*values, movement_id),
        )

    async def delete(self, conn: aiosqlite.Connection, movement_id: int) -> int:
        cursor = await conn.execute(
            f"DELETE FROM {self.table} WHERE id = ?", (movement_id,)
        )
        return cursor.rowcount

    def _row_to_movement(self, row: aiosqlite.Row):
        return self.model(
            id=row["id"],
            amount=float(row["amount"]),
            method=PaymentMethod(row["method"]),
            account_id=row["account_id"],
            date=parse_date(row["date"]),
            note=row["note"],
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
            bank_name=row["bank_name"],
            account_number=row["account_number"],
            **{
                self.party_column: row[self.party_column],
                self.party_name_field: row["party_name"],
            },
        )

    async def list(
        self,
        party_id: int | None = None,
        account_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[MovementT], int]:
        """Filtered page ordered by date desc, plus the unpaged total."""
        where, params = build_filters([
            (f"m.{self.party_column} = ?", party_id),
            ("m.account_id = ?", account_id),
            ("m.date >= ?", start_date),
            ("m.date <= ?", end_date),
        ])

        async with use_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM {self.table} m {where}", params
            )
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"{self._select()} {where} ORDER BY m.date DESC, m.id DESC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            )
            rows = await cursor.fetchall()

        return [self._row_to_movement(row) for row in rows], total

    async def list_in_period(
        self,
        party_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[MovementT]:
        """Unpaged movements in a date range, oldest first."""
        where, params = build_filters([
            (f"m.{self.party_column} = ?", party_id),
            ("m.date >= ?", start_date),
            ("m.date <= ?", end_date),
        ])
        async with use_connection() as conn:
            cursor = await conn.execute(
                f"{self._select()} {where} ORDER BY m.date, m.id", params
            )
            rows = await cursor.fetchall()
        return [self._row_to_movement(row) for row in rows]


class SQLitePaymentStore(SQLiteCashStore[Payment]):
    entity = "payment"
    table = "payments"
    party_column = "supplier_id"
    party_table = "suppliers"
    party_name_field = "supplier_name"
    model = Payment


class SQLiteReceiptStore(SQLiteCashStore[Receipt]):
    entity = "receipt"
    table = "receipts"
    party_column = "customer_id"
    party_table = "customers"
    party_name_field = "customer_name"
    model = Receipt
