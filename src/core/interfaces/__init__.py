"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.ledger import Connection, IBalanceAdjuster, IStockLedger
from src.core.interfaces.storage import (
    ICashStore,
    ICatalogStore,
    IReportStore,
    ITradeStore,
)

__all__ = [
    # Ledgers
    "Connection",
    "IStockLedger",
    "IBalanceAdjuster",
    # Storage interfaces
    "ITradeStore",
    "ICashStore",
    "ICatalogStore",
    "IReportStore",
]
