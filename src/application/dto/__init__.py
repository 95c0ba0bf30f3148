"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CamelModel,
    CreateAccountRequest,
    CreateItemRequest,
    CreatePartyRequest,
    CreatePaymentRequest,
    CreatePurchaseRequest,
    CreateReceiptRequest,
    CreateSaleRequest,
    LineQuantityUpdate,
    TradeLineRequest,
    UpdateAccountRequest,
    UpdateCashMovementRequest,
    UpdateItemRequest,
    UpdatePurchaseRequest,
    UpdateSaleRequest,
)
from src.application.dto.responses import (
    AccountResponse,
    AccountSummaryResponse,
    CustomerCreditResponse,
    CustomerStatementResponse,
    DailySummaryResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    HealthResponse,
    ItemResponse,
    LowStockResponse,
    PaginatedResponse,
    PartyResponse,
    PaymentListResponse,
    PaymentResponse,
    PeriodResponse,
    PurchaseListResponse,
    PurchaseReportResponse,
    PurchaseResponse,
    ReceiptListResponse,
    ReceiptResponse,
    SaleListResponse,
    SaleResponse,
    SalesReportResponse,
    StockMovementResponse,
    StockReconciliationResponse,
    SupplierBalanceResponse,
    SupplierStatementResponse,
    TradeLineResponse,
    TradeTotalsResponse,
)

__all__ = [
    # Requests
    "CamelModel",
    "TradeLineRequest",
    "LineQuantityUpdate",
    "CreatePurchaseRequest",
    "UpdatePurchaseRequest",
    "CreateSaleRequest",
    "UpdateSaleRequest",
    "CreatePaymentRequest",
    "CreateReceiptRequest",
    "UpdateCashMovementRequest",
    "CreatePartyRequest",
    "CreateItemRequest",
    "UpdateItemRequest",
    "CreateAccountRequest",
    "UpdateAccountRequest",
    # Responses
    "PaginatedResponse",
    "TradeLineResponse",
    "PurchaseResponse",
    "PurchaseListResponse",
    "SaleResponse",
    "SaleListResponse",
    "PaymentResponse",
    "PaymentListResponse",
    "ReceiptResponse",
    "ReceiptListResponse",
    "PartyResponse",
    "ItemResponse",
    "AccountResponse",
    "StockMovementResponse",
    "CustomerCreditResponse",
    "SupplierBalanceResponse",
    "AccountSummaryResponse",
    "StockReconciliationResponse",
    "DailySummaryResponse",
    "PeriodResponse",
    "DashboardSummaryResponse",
    "TradeTotalsResponse",
    "SalesReportResponse",
    "PurchaseReportResponse",
    "CustomerStatementResponse",
    "SupplierStatementResponse",
    "LowStockResponse",
    "HealthResponse",
    "ErrorResponse",
]
