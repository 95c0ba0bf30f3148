"""
Application layer - Use cases and DTOs.

This layer orchestrates the ledger by:
1. Defining request/response DTOs for API contracts
2. Implementing transaction managers that keep stock and balances in step
   with the records that move them
3. Computing read-only credit and balance reports

Use cases are the only entry point for API handlers that change data.
"""

from src.application.use_cases import (
    CreditReporter,
    PaymentTransactionManager,
    PurchaseTransactionManager,
    ReceiptTransactionManager,
    SaleTransactionManager,
)

__all__ = [
    "PurchaseTransactionManager",
    "SaleTransactionManager",
    "PaymentTransactionManager",
    "ReceiptTransactionManager",
    "CreditReporter",
]
