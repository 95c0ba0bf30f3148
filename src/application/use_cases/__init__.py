"""Application use cases."""

from src.application.use_cases.cash_transactions import (
    CashTransactionManager,
    PaymentTransactionManager,
    ReceiptTransactionManager,
)
from src.application.use_cases.credit_report import CreditReporter
from src.application.use_cases.purchase_transactions import PurchaseTransactionManager
from src.application.use_cases.sale_transactions import SaleTransactionManager
from src.application.use_cases.trade_transactions import TradeTransactionManager

__all__ = [
    "TradeTransactionManager",
    "PurchaseTransactionManager",
    "SaleTransactionManager",
    "CashTransactionManager",
    "PaymentTransactionManager",
    "ReceiptTransactionManager",
    "CreditReporter",
]
