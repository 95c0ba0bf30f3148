"""SQLite storage of purchases and sales with their line items."""

from __future__ import annotations

from datetime import date
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.trade import (
    Purchase,
    PurchaseItem,
    Sale,
    SaleItem,
    TradeLine,
    TransactionStatus,
)
from src.core.interfaces.storage import DocT, ITradeStore
from src.infrastructure.storage.sqlite.connection import use_connection
from src.infrastructure.storage.sqlite.rows import build_filters, parse_date, parse_datetime

logger = get_logger(__name__)


class SQLiteTradeStore(ITradeStore[DocT]):
    """
    Shared SQL for purchase-like documents.

    Subclasses name the header table, the line table and the columns that
    differ between purchases and sales.
    """

    entity: str
    table: str
    lines_table: str
    line_fk: str
    party_column: str
    party_table: str
    party_name_field: str
    settled_column: str
    doc_model: type
    line_model: type

    @property
    def _header_columns(self) -> set[str]:
        return {"total_amount", self.settled_column, "status"}

    async def insert(self, conn: aiosqlite.Connection, doc: DocT) -> DocT:
        """Insert the header row and every line."""
        cursor = await conn.execute(
            f"""
            INSERT INTO {self.table} (
                {self.party_column}, date, total_amount, {self.settled_column}, status
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (
                getattr(doc, self.party_column),
                doc.date.isoformat(),
                doc.total_amount,
                getattr(doc, self.settled_column),
                doc.status.value,
            ),
        )
        doc.id = cursor.lastrowid

        for line in doc.items:
            setattr(line, self.line_fk, doc.id)
            line_cursor = await conn.execute(
                f"""
                INSERT INTO {self.lines_table} (
                    {self.line_fk}, item_id, quantity, unit_price, total_price
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (doc.id, line.item_id, line.quantity, line.unit_price, line.total_price),
            )
            line.id = line_cursor.lastrowid

        logger.debug(f"{self.entity}_inserted", id=doc.id, lines=len(doc.items))
        return doc

    async def get(
        self, doc_id: int, conn: aiosqlite.Connection | None = None
    ) -> DocT | None:
        """Document with party name and item names, or None."""
        async with use_connection(conn) as c:
            cursor = await c.execute(
                f"""
                SELECT h.*, p.name AS party_name
                FROM {self.table} h
                LEFT JOIN {self.party_table} p ON p.id = h.{self.party_column}
                WHERE h.id = ?
                """,
                (doc_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            lines = await self._load_lines(c, doc_id)
        return self._row_to_doc(row, lines)

    async def find_line(
        self, conn: aiosqlite.Connection, doc_id: int, item_id: int
    ) -> TradeLine | None:
        cursor = await conn.execute(
            f"""
            SELECT l.*, i.name AS item_name, i.unit AS item_unit
            FROM {self.lines_table} l
            LEFT JOIN items i ON i.id = l.item_id
            WHERE l.{self.line_fk} = ? AND l.item_id = ?
            ORDER BY l.id
            LIMIT 1
            """,
            (doc_id, item_id),
        )
        row = await cursor.fetchone()
        return self._row_to_line(row) if row else None

    async def update_line_quantity(
        self,
        conn: aiosqlite.Connection,
        line_id: int,
        quantity: float,
        unit_price: float,
    ) -> None:
        await conn.execute(
            f"UPDATE {self.lines_table} SET quantity = ?, total_price = ? WHERE id = ?",
            (quantity, quantity * unit_price, line_id),
        )

    async def update_header(
        self, conn: aiosqlite.Connection, doc_id: int, fields: dict[str, Any]
    ) -> None:
        unknown = set(fields) - self._header_columns
        if unknown:
            raise ValueError(f"Not updatable on {self.table}: {sorted(unknown)}")
        if not fields:
            return

        assignments = ", ".join(f"{column} = ?" for column in fields)
        values = [
            value.value if isinstance(value, TransactionStatus) else value
            for value in fields.values()
        ]
        await conn.execute(
            f"""
            UPDATE {self.table}
            SET {assignments}, updated_at = datetime('now')
            WHERE id = ?
            """,
            (*values, doc_id),
        )

    async def delete_lines(self, conn: aiosqlite.Connection, doc_id: int) -> int:
        cursor = await conn.execute(
            f"DELETE FROM {self.lines_table} WHERE {self.line_fk} = ?", (doc_id,)
        )
        return cursor.rowcount

    async def delete(self, conn: aiosqlite.Connection, doc_id: int) -> int:
        cursor = await conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (doc_id,))
        return cursor.rowcount

    async def _load_lines(self, conn: aiosqlite.Connection, doc_id: int) -> list:
        cursor = await conn.execute(
            f"""
            SELECT l.*, i.name AS item_name, i.unit AS item_unit
            FROM {self.lines_table} l
            LEFT JOIN items i ON i.id = l.item_id
            WHERE l.{self.line_fk} = ?
            ORDER BY l.id
            """,
            (doc_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_line(row) for row in rows]

    def _row_to_line(self, row: aiosqlite.Row):
        return self.line_model(
            id=row["id"],
            item_id=row["item_id"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
            item_name=row["item_name"],
            item_unit=row["item_unit"],
            **{self.line_fk: row[self.line_fk]},
        )

    def _row_to_doc(self, row: aiosqlite.Row, lines: list):
        return self.doc_model(
            id=row["id"],
            date=parse_date(row["date"]),
            total_amount=float(row["total_amount"]),
            status=TransactionStatus(row["status"]),
            items=lines,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
            **{
                self.party_column: row[self.party_column],
                self.settled_column: float(row[self.settled_column]),
                self.party_name_field: row["party_name"],
            },
        )

    async def list(
        self,
        party_id: int | None = None,
        status: TransactionStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[DocT], int]:
        """Filtered page ordered by date desc, plus the unpaged total."""
        where, params = build_filters([
            (f"h.{self.party_column} = ?", party_id),
            ("h.status = ?", status.value if status else None),
            ("h.date >= ?", start_date),
            ("h.date <= ?", end_date),
        ])

        async with use_connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM {self.table} h {where}", params
            )
            total = (await cursor.fetchone())[0]

            cursor = await conn.execute(
                f"""
                SELECT h.*, p.name AS party_name
                FROM {self.table} h
                LEFT JOIN {self.party_table} p ON p.id = h.{self.party_column}
                {where}
                ORDER BY h.date DESC, h.id DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            )
            docs = await self._docs_from_rows(conn, await cursor.fetchall())

        return docs, total

    async def list_in_period(
        self,
        party_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        newest_first: bool = False,
    ) -> list[DocT]:
        """Unpaged documents in a date range, lines included."""
        where, params = build_filters([
            (f"h.{self.party_column} = ?", party_id),
            ("h.date >= ?", start_date),
            ("h.date <= ?", end_date),
        ])
        order = "DESC" if newest_first else "ASC"

        async with use_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT h.*, p.name AS party_name
                FROM {self.table} h
                LEFT JOIN {self.party_table} p ON p.id = h.{self.party_column}
                {where}
                ORDER BY h.date {order}, h.id {order}
                """,
                params,
            )
            return await self._docs_from_rows(conn, await cursor.fetchall())

    async def _docs_from_rows(
        self, conn: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[DocT]:
        docs = []
        for row in rows:
            lines = await self._load_lines(conn, row["id"])
            docs.append(self._row_to_doc(row, lines))
        return docs


class SQLitePurchaseStore(SQLiteTradeStore[Purchase]):
    """Purchases from suppliers; lines in purchase_items."""

    entity = "purchase"
    table = "purchases"
    lines_table = "purchase_items"
    line_fk = "purchase_id"
    party_column = "supplier_id"
    party_table = "suppliers"
    party_name_field = "supplier_name"
    settled_column = "paid_amount"
    doc_model = Purchase
    line_model = PurchaseItem


class SQLiteSaleStore(SQLiteTradeStore[Sale]):
    """Sales to customers; lines in sale_items."""

    entity = "sale"
    table = "sales"
    lines_table = "sale_items"
    line_fk = "sale_id"
    party_column = "customer_id"
    party_table = "customers"
    party_name_field = "customer_name"
    settled_column = "received_amount"
    doc_model = Sale
    line_model = SaleItem
