"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. FastAPI serializes by
alias, so payloads go out in camelCase. Most models are filled straight
from the domain entities with ``model_validate(entity)``.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.account import PaymentMethod
from src.core.entities.inventory import StockTransactionType
from src.core.entities.report import SettlementStatus
from src.core.entities.trade import TransactionStatus


class CamelResponse(BaseModel):
    """Base for camelCase responses built from entities."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginatedResponse(CamelResponse):
    """Base for paginated responses."""

    total: int
    page: int
    limit: int
    has_more: bool


# --- Purchases / Sales ---


class TradeLineResponse(CamelResponse):
    """Line item of a purchase or sale."""

    id: int
    item_id: int
    item_name: str | None = None
    item_unit: str | None = None
    quantity: float
    unit_price: float
    total_price: float = Field(..., description="quantity * unit_price")


class PurchaseResponse(CamelResponse):
    """Purchase read back with supplier and item names."""

    id: int
    supplier_id: int
    supplier_name: str | None = None
    date: dt.date
    total_amount: float
    paid_amount: float
    status: TransactionStatus
    items: list[TradeLineResponse]
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class PurchaseListResponse(PaginatedResponse):
    purchases: list[PurchaseResponse]


class SaleResponse(CamelResponse):
    """Sale read back with customer and item names."""

    id: int
    customer_id: int
    customer_name: str | None = None
    date: dt.date
    total_amount: float
    received_amount: float
    status: TransactionStatus
    items: list[TradeLineResponse]
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class SaleListResponse(PaginatedResponse):
    sales: list[SaleResponse]


# --- Payments / Receipts ---


class CashMovementResponse(CamelResponse):
    """Fields shared by payment and receipt responses."""

    id: int
    amount: float
    method: PaymentMethod
    account_id: int | None = None
    bank_name: str | None = None
    account_number: str | None = None
    date: dt.date
    note: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class PaymentResponse(CashMovementResponse):
    supplier_id: int
    supplier_name: str | None = None


class PaymentListResponse(PaginatedResponse):
    payments: list[PaymentResponse]


class ReceiptResponse(CashMovementResponse):
    customer_id: int
    customer_name: str | None = None


class ReceiptListResponse(PaginatedResponse):
    receipts: list[ReceiptResponse]


# --- Catalog ---


class PartyResponse(CamelResponse):
    """Supplier or customer."""

    id: int
    name: str
    phone: str | None = None
    address: str | None = None
    created_at: dt.datetime | None = None


class ItemResponse(CamelResponse):
    id: int
    name: str
    description: str | None = None
    unit: str
    base_price: float
    selling_price: float
    opening_stock: float
    current_stock: float
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class AccountResponse(CamelResponse):
    id: int
    bank_name: str
    account_number: str
    account_holder: str
    opening_balance: float
    balance: float
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class StockMovementResponse(CamelResponse):
    """One logged stock movement (signed quantity)."""

    id: int
    item_id: int
    type: StockTransactionType
    quantity: float
    related_id: int
    date: dt.date
    created_at: dt.datetime | None = None


# --- Reports ---


class CustomerCreditResponse(CamelResponse):
    customer_id: int
    customer_name: str
    total_sales: float
    total_receipts: float
    outstanding_balance: float = Field(..., description="Sales minus receipts")
    status: SettlementStatus


class SupplierBalanceResponse(CamelResponse):
    supplier_id: int
    supplier_name: str
    total_purchases: float
    total_payments: float
    outstanding_balance: float = Field(..., description="Purchases minus payments")
    status: SettlementStatus


class AccountSummaryResponse(CamelResponse):
    account_id: int
    bank_name: str
    account_number: str
    opening_balance: float
    balance: float
    payment_count: int
    payments_total: float
    receipt_count: int
    receipts_total: float
    expected_balance: float
    in_sync: bool


class StockReconciliationResponse(CamelResponse):
    item_id: int
    item_name: str
    opening_stock: float
    movements_total: float
    movement_count: int
    current_stock: float
    in_sync: bool
    recent_movements: list[StockMovementResponse] = Field(default_factory=list)


class DailySummaryResponse(CamelResponse):
    day: dt.date
    purchases: float
    sales: float
    payments: float
    receipts: float


class PeriodResponse(CamelResponse):
    start_date: dt.date | None = None
    end_date: dt.date | None = None


class DashboardSummaryResponse(CamelResponse):
    """Totals dated in the period; counts are catalog-wide."""

    period: PeriodResponse
    total_sales: float
    total_purchases: float
    total_receipts: float
    total_payments: float
    customer_count: int
    supplier_count: int
    item_count: int
    account_count: int


class TradeTotalsResponse(CamelResponse):
    count: int
    total_amount: float
    settled_amount: float = Field(..., description="Paid (purchases) or received (sales)")
    due_amount: float = Field(..., description="total_amount minus settled_amount")


class SalesReportResponse(CamelResponse):
    period: PeriodResponse
    sales: list[SaleResponse]
    totals: TradeTotalsResponse


class PurchaseReportResponse(CamelResponse):
    period: PeriodResponse
    purchases: list[PurchaseResponse]
    totals: TradeTotalsResponse


class CustomerStatementResponse(CamelResponse):
    customer_id: int
    customer_name: str
    period: PeriodResponse
    sales: list[SaleResponse]
    receipts: list[ReceiptResponse]
    total_sales: float
    total_receipts: float
    balance: float = Field(..., description="Sales minus receipts within the period")


class SupplierStatementResponse(CamelResponse):
    supplier_id: int
    supplier_name: str
    period: PeriodResponse
    purchases: list[PurchaseResponse]
    payments: list[PaymentResponse]
    total_purchases: float
    total_payments: float
    balance: float = Field(..., description="Purchases minus payments within the period")


class LowStockResponse(CamelResponse):
    threshold: float
    count: int
    items: list[ItemResponse]


# --- Service ---


class ComponentHealthResponse(BaseModel):
    """Health of a backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PURCHASE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: dt.datetime = Field(default_factory=dt.datetime.now)
