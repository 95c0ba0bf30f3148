"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.balance_adjuster import SQLiteBalanceAdjuster
from src.infrastructure.storage.sqlite.cash_store import (
    SQLiteCashStore,
    SQLitePaymentStore,
    SQLiteReceiptStore,
)
from src.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    use_connection,
)
from src.infrastructure.storage.sqlite.report_store import SQLiteReportStore
from src.infrastructure.storage.sqlite.stock_ledger import SQLiteStockLedger
from src.infrastructure.storage.sqlite.trade_store import (
    SQLitePurchaseStore,
    SQLiteSaleStore,
    SQLiteTradeStore,
)

# Singleton instances
_stock_ledger: SQLiteStockLedger | None = None
_balance_adjuster: SQLiteBalanceAdjuster | None = None
_purchase_store: SQLitePurchaseStore | None = None
_sale_store: SQLiteSaleStore | None = None
_payment_store: SQLitePaymentStore | None = None
_receipt_store: SQLiteReceiptStore | None = None
_catalog_store: SQLiteCatalogStore | None = None
_report_store: SQLiteReportStore | None = None


async def get_stock_ledger() -> SQLiteStockLedger:
    """Get singleton stock ledger instance."""
    global _stock_ledger
    if _stock_ledger is None:
        _stock_ledger = SQLiteStockLedger()
    return _stock_ledger


async def get_balance_adjuster() -> SQLiteBalanceAdjuster:
    """Get singleton balance adjuster instance."""
    global _balance_adjuster
    if _balance_adjuster is None:
        _balance_adjuster = SQLiteBalanceAdjuster()
    return _balance_adjuster


async def get_purchase_store() -> SQLitePurchaseStore:
    """Get singleton purchase store instance."""
    global _purchase_store
    if _purchase_store is None:
        _purchase_store = SQLitePurchaseStore()
    return _purchase_store


async def get_sale_store() -> SQLiteSaleStore:
    """Get singleton sale store instance."""
    global _sale_store
    if _sale_store is None:
        _sale_store = SQLiteSaleStore()
    return _sale_store


async def get_payment_store() -> SQLitePaymentStore:
    """Get singleton payment store instance."""
    global _payment_store
    if _payment_store is None:
        _payment_store = SQLitePaymentStore()
    return _payment_store


async def get_receipt_store() -> SQLiteReceiptStore:
    """Get singleton receipt store instance."""
    global _receipt_store
    if _receipt_store is None:
        _receipt_store = SQLiteReceiptStore()
    return _receipt_store


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_report_store() -> SQLiteReportStore:
    """Get singleton report store instance."""
    global _report_store
    if _report_store is None:
        _report_store = SQLiteReportStore()
    return _report_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "use_connection",
    # Ledgers
    "SQLiteStockLedger",
    "SQLiteBalanceAdjuster",
    # Store classes
    "SQLiteTradeStore",
    "SQLitePurchaseStore",
    "SQLiteSaleStore",
    "SQLiteCashStore",
    "SQLitePaymentStore",
    "SQLiteReceiptStore",
    "SQLiteCatalogStore",
    "SQLiteReportStore",
    # Factory functions
    "get_stock_ledger",
    "get_balance_adjuster",
    "get_purchase_store",
    "get_sale_store",
    "get_payment_store",
    "get_receipt_store",
    "get_catalog_store",
    "get_report_store",
]
