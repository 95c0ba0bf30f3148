"""Aggregate queries behind the credit, balance and stock reports."""

from datetime import date

from src.core.entities.account import PaymentMethod
from src.core.entities.inventory import round_quantity
from src.core.interfaces.storage import IReportStore
from src.infrastructure.storage.sqlite.connection import use_connection
from src.infrastructure.storage.sqlite.rows import build_filters


class SQLiteReportStore(IReportStore):
    """Read-only sums over the ledger tables; nothing is cached."""

    async def _scalar(self, sql: str, params: tuple) -> float:
        async with use_connection() as conn:
            cursor = await conn.execute(sql, params)
            row = await cursor.fetchone()
        return float(row[0])

    async def customer_totals(self, customer_id: int) -> tuple[float, float]:
        sales = await self._scalar(
            "SELECT COALESCE(SUM(total_amount), 0) FROM sales WHERE customer_id = ?",
            (customer_id,),
        )
        receipts = await self._scalar(
            "SELECT COALESCE(SUM(amount), 0) FROM receipts WHERE customer_id = ?",
            (customer_id,),
        )
        return sales, receipts

    async def supplier_totals(self, supplier_id: int) -> tuple[float, float]:
        purchases = await self._scalar(
            "SELECT COALESCE(SUM(total_amount), 0) FROM purchases WHERE supplier_id = ?",
            (supplier_id,),
        )
        payments = await self._scalar(
            "SELECT COALESCE(SUM(amount), 0) FROM payments WHERE supplier_id = ?",
            (supplier_id,),
        )
        return purchases, payments

    async def account_activity(self, account_id: int) -> dict[str, float]:
        activity: dict[str, float] = {}
        async with use_connection() as conn:
            for table in ("payments", "receipts"):
                cursor = await conn.execute(
                    f"""
                    SELECT COUNT(*), COALESCE(SUM(amount), 0) FROM {table}
                    WHERE account_id = ? AND method = ?
                    """,
                    (account_id, PaymentMethod.ACCOUNT.value),
                )
                count, total = await cursor.fetchone()
                singular = table[:-1]
                activity[f"{singular}_count"] = int(count)
                activity[f"{table}_total"] = float(total)
        return activity

    async def stock_movement_totals(self, item_id: int) -> tuple[float, int]:
        async with use_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT COALESCE(SUM(quantity), 0), COUNT(*)
                FROM stock_transactions WHERE item_id = ?
                """,
                (item_id,),
            )
            total, count = await cursor.fetchone()
        return round_quantity(float(total)), int(count)

    async def daily_totals(self, day: date) -> dict[str, float]:
        return await self.period_totals(day, day)

    async def period_totals(
        self, start_date: date | None, end_date: date | None
    ) -> dict[str, float]:
        where, params = build_filters([
            ("date >= ?", start_date),
            ("date <= ?", end_date),
        ])
        sums = {
            "purchases": ("purchases", "total_amount"),
            "sales": ("sales", "total_amount"),
            "payments": ("payments", "amount"),
            "receipts": ("receipts", "amount"),
        }
        return {
            name: await self._scalar(
                f"SELECT COALESCE(SUM({column}), 0) FROM {table} {where}", tuple(params)
            )
            for name, (table, column) in sums.items()
        }

    async def record_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        async with use_connection() as conn:
            for table in ("customers", "suppliers", "items", "accounts"):
                cursor = await conn.execute(f"SELECT COUNT(*) FROM {table}")
                counts[table] = (await cursor.fetchone())[0]
        return counts
