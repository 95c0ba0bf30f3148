"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteBalanceAdjuster,
    SQLiteCatalogStore,
    SQLitePaymentStore,
    SQLitePurchaseStore,
    SQLiteReceiptStore,
    SQLiteReportStore,
    SQLiteSaleStore,
    SQLiteStockLedger,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # Ledgers
    "SQLiteStockLedger",
    "SQLiteBalanceAdjuster",
    # SQLite stores
    "SQLitePurchaseStore",
    "SQLiteSaleStore",
    "SQLitePaymentStore",
    "SQLiteReceiptStore",
    "SQLiteCatalogStore",
    "SQLiteReportStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
