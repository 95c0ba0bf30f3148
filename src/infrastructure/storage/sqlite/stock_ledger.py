"""
SQLite stock ledger.

Every change to ``items.current_stock`` goes through here, in the same
transaction as the ``stock_transactions`` row that explains it. Stock is
moved with single ``UPDATE ... SET current_stock = current_stock + ?``
statements; decrements carry a ``current_stock >= ?`` guard unless the
caller allows negative stock. Stock and movement quantities are rounded to
``QUANTITY_DECIMALS`` on every write, so fractional units compare exactly.
"""

from datetime import date

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import (
    QUANTITY_DECIMALS,
    StockTransaction,
    StockTransactionType,
    round_quantity,
)
from src.core.exceptions import InsufficientStockError, NotFoundError
from src.core.interfaces.ledger import IStockLedger
from src.infrastructure.storage.sqlite.connection import use_connection
from src.infrastructure.storage.sqlite.rows import parse_date, parse_datetime

logger = get_logger(__name__)


class SQLiteStockLedger(IStockLedger):
    """Stock aggregate plus movement log on SQLite."""

    async def _shift_stock(
        self,
        conn: aiosqlite.Connection,
        item_id: int,
        delta: float,
        allow_negative: bool,
    ) -> None:
        """Atomically add ``delta`` to an item's stock."""
        delta = round_quantity(delta)
        if delta < 0 and not allow_negative:
            cursor = await conn.execute(
                """
                UPDATE items
                SET current_stock = ROUND(current_stock + ?, ?), updated_at = datetime('now')
                WHERE id = ? AND ROUND(current_stock, ?) >= ?
                """,
                (delta, QUANTITY_DECIMALS, item_id, QUANTITY_DECIMALS, -delta),
            )
        else:
            cursor = await conn.execute(
                """
                UPDATE items
                SET current_stock = ROUND(current_stock + ?, ?), updated_at = datetime('now')
                WHERE id = ?
                """,
                (delta, QUANTITY_DECIMALS, item_id),
            )

        if cursor.rowcount:
            return

        # Nothing updated: the item is missing or the guard refused
        cursor = await conn.execute(
            "SELECT name, current_stock FROM items WHERE id = ?", (item_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise NotFoundError("item", item_id)

        logger.warning(
            "stock_shortfall",
            item_id=item_id,
            requested=-delta,
            available=row["current_stock"],
        )
        raise InsufficientStockError(
            item_id=item_id,
            requested=-delta,
            available=float(row["current_stock"]),
            item_name=row["name"],
        )

    async def record(
        self,
        conn: aiosqlite.Connection,
        item_id: int,
        quantity: float,
        related_id: int,
        tx_type: StockTransactionType,
        movement_date: date,
        allow_negative: bool = False,
    ) -> StockTransaction:
        """Apply a signed quantity to stock and append the movement row."""
        quantity = round_quantity(quantity)
        await self._shift_stock(conn, item_id, quantity, allow_negative)

        cursor = await conn.execute(
            """
            INSERT INTO stock_transactions (item_id, type, quantity, related_id, date)
            VALUES (?, ?, ?, ?, ?)
            """,
            (item_id, tx_type.value, quantity, related_id, movement_date.isoformat()),
        )
        movement = StockTransaction(
            id=cursor.lastrowid,
            item_id=item_id,
            type=tx_type,
            quantity=quantity,
            related_id=related_id,
            date=movement_date,
        )
        logger.debug(
            "stock_recorded",
            item_id=item_id,
            type=tx_type.value,
            quantity=quantity,
            related_id=related_id,
        )
        return movement

    async def reverse(
        self,
        conn: aiosqlite.Connection,
        related_id: int,
        tx_type: StockTransactionType,
        item_id: int,
        allow_negative: bool = False,
    ) -> float:
        """Undo the logged movements of one item for one purchase or sale."""
        cursor = await conn.execute(
            """
            SELECT ROUND(COALESCE(SUM(quantity), 0), ?) AS total, COUNT(*) AS n
            FROM stock_transactions
            WHERE related_id = ? AND type = ? AND item_id = ?
            """,
            (QUANTITY_DECIMALS, related_id, tx_type.value, item_id),
        )
        row = await cursor.fetchone()
        if not row["n"]:
            logger.warning(
                "stock_reverse_without_movements",
                related_id=related_id,
                type=tx_type.value,
                item_id=item_id,
            )
            return 0.0

        total = float(row["total"])
        await self._shift_stock(conn, item_id, -total, allow_negative)
        await conn.execute(
            """
            DELETE FROM stock_transactions
            WHERE related_id = ? AND type = ? AND item_id = ?
            """,
            (related_id, tx_type.value, item_id),
        )
        logger.debug(
            "stock_reversed",
            item_id=item_id,
            type=tx_type.value,
            related_id=related_id,
            quantity=total,
        )
        return total

    async def adjust(
        self,
        conn: aiosqlite.Connection,
        related_id: int,
        tx_type: StockTransactionType,
        item_id: int,
        delta: float,
        movement_date: date,
        allow_negative: bool = False,
    ) -> None:
        """Shift stock by ``delta`` and fold it into the logged movement."""
        delta = round_quantity(delta)
        if delta == 0:
            return

        await self._shift_stock(conn, item_id, delta, allow_negative)

        cursor = await conn.execute(
            """
            UPDATE stock_transactions SET quantity = ROUND(quantity + ?, ?)
            WHERE id = (
                SELECT MIN(id) FROM stock_transactions
                WHERE related_id = ? AND type = ? AND item_id = ?
            )
            """,
            (delta, QUANTITY_DECIMALS, related_id, tx_type.value, item_id),
        )
        if not cursor.rowcount:
            await conn.execute(
                """
                INSERT INTO stock_transactions (item_id, type, quantity, related_id, date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (item_id, tx_type.value, delta, related_id, movement_date.isoformat()),
            )
        logger.debug(
            "stock_adjusted",
            item_id=item_id,
            type=tx_type.value,
            related_id=related_id,
            delta=delta,
        )

    async def list_movements(
        self,
        item_id: int,
        limit: int = 100,
        conn: aiosqlite.Connection | None = None,
    ) -> list[StockTransaction]:
        """Movements of an item, newest first."""
        async with use_connection(conn) as c:
            cursor = await c.execute(
                """
                SELECT * FROM stock_transactions
                WHERE item_id = ?
                ORDER BY date DESC, id DESC
                LIMIT ?
                """,
                (item_id, limit),
            )
            rows = await cursor.fetchall()
        return [self._row_to_movement(row) for row in rows]

    async def net_movement(
        self, item_id: int, conn: aiosqlite.Connection | None = None
    ) -> float:
        """Sum of every logged movement of an item."""
        async with use_connection(conn) as c:
            cursor = await c.execute(
                """
                SELECT ROUND(COALESCE(SUM(quantity), 0), ?)
                FROM stock_transactions WHERE item_id = ?
                """,
                (QUANTITY_DECIMALS, item_id),
            )
            row = await cursor.fetchone()
        return float(row[0])

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> StockTransaction:
        return StockTransaction(
            id=row["id"],
            item_id=row["item_id"],
            type=StockTransactionType(row["type"]),
            quantity=float(row["quantity"]),
            related_id=row["related_id"],
            date=parse_date(row["date"]),
            created_at=parse_datetime(row["created_at"]),
        )
