"""Core domain entities."""

from src.core.entities.account import (
    Account,
    CashMovement,
    Payment,
    PaymentMethod,
    Receipt,
)
from src.core.entities.inventory import (
    Item,
    StockTransaction,
    StockTransactionType,
)
from src.core.entities.party import Customer, Party, Supplier
from src.core.entities.report import (
    AccountSummary,
    CustomerCredit,
    CustomerStatement,
    DailySummary,
    DashboardSummary,
    LowStockReport,
    Period,
    PurchaseReport,
    SalesReport,
    SettlementStatus,
    StockReconciliation,
    SupplierBalance,
    SupplierStatement,
    TradeTotals,
)
from src.core.entities.trade import (
    Purchase,
    PurchaseItem,
    Sale,
    SaleItem,
    TradeLine,
    TransactionStatus,
)

__all__ = [
    # Parties
    "Party",
    "Supplier",
    "Customer",
    # Inventory
    "Item",
    "StockTransaction",
    "StockTransactionType",
    # Trade
    "TransactionStatus",
    "TradeLine",
    "Purchase",
    "PurchaseItem",
    "Sale",
    "SaleItem",
    # Accounts
    "Account",
    "PaymentMethod",
    "CashMovement",
    "Payment",
    "Receipt",
    # Reports
    "SettlementStatus",
    "CustomerCredit",
    "SupplierBalance",
    "AccountSummary",
    "StockReconciliation",
    "DailySummary",
    "Period",
    "TradeTotals",
    "SalesReport",
    "PurchaseReport",
    "CustomerStatement",
    "SupplierStatement",
    "LowStockReport",
    "DashboardSummary",
]
