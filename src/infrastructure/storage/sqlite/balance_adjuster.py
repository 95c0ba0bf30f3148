"""SQLite balance adjuster: the only writer of ``accounts.balance`` after creation."""

import aiosqlite

from src.config import get_logger
from src.core.exceptions import NotFoundError
from src.core.interfaces.ledger import IBalanceAdjuster

logger = get_logger(__name__)


class SQLiteBalanceAdjuster(IBalanceAdjuster):
    """Applies signed deltas to account balances inside the caller's transaction."""

    async def apply(
        self, conn: aiosqlite.Connection, account_id: int, delta: float
    ) -> float:
        cursor = await conn.execute(
            """
            UPDATE accounts
            SET balance = balance + ?, updated_at = datetime('now')
            WHERE id = ?
            """,
            (delta, account_id),
        )
        if not cursor.rowcount:
            raise NotFoundError("account", account_id)

        cursor = await conn.execute("SELECT balance FROM accounts WHERE id = ?", (account_id,))
        row = await cursor.fetchone()
        balance = float(row["balance"])
        logger.debug("balance_adjusted", account_id=account_id, delta=delta, balance=balance)
        return balance
