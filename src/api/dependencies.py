"""
Dependency injection container for FastAPI.

Provides use case and store instances to route handlers. Tests swap any of
these through ``app.dependency_overrides``.
"""

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Query

from src.application.use_cases import (
    CreditReporter,
    PaymentTransactionManager,
    PurchaseTransactionManager,
    ReceiptTransactionManager,
    SaleTransactionManager,
)
from src.config import Settings, get_settings
from src.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteStockLedger,
    get_catalog_store,
    get_stock_ledger,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Use case dependencies
def get_purchase_manager() -> PurchaseTransactionManager:
    """Get purchase transaction manager."""
    return PurchaseTransactionManager()


def get_sale_manager() -> SaleTransactionManager:
    """Get sale transaction manager."""
    return SaleTransactionManager()


def get_payment_manager() -> PaymentTransactionManager:
    """Get payment transaction manager."""
    return PaymentTransactionManager()


def get_receipt_manager() -> ReceiptTransactionManager:
    """Get receipt transaction manager."""
    return ReceiptTransactionManager()


def get_credit_reporter() -> CreditReporter:
    """Get credit/balance reporter."""
    return CreditReporter()


# Store dependencies
async def get_catalog() -> SQLiteCatalogStore:
    """Get catalog store (suppliers, customers, items, accounts)."""
    return await get_catalog_store()


async def get_ledger() -> SQLiteStockLedger:
    """Get stock ledger for movement listings."""
    return await get_stock_ledger()


# Pagination
@dataclass
class PageParams:
    """1-based page window clamped to the configured maximum page size."""

    page: int
    limit: int

    def envelope(self, total: int) -> dict[str, int | bool]:
        """Fields of a PaginatedResponse for ``total`` matching rows."""
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "has_more": self.page * self.limit < total,
        }


def get_page_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int | None = Query(None, ge=1, description="Page size"),
) -> PageParams:
    """Resolve page/limit query parameters."""
    settings = get_app_settings()
    size = min(limit or settings.api.default_page_size, settings.api.max_page_size)
    return PageParams(page=page, limit=size)
