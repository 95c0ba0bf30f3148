"""
Report endpoints.

Every figure is recomputed from the ledger tables on each request.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_credit_reporter
from src.application.dto.responses import (
    AccountSummaryResponse,
    CustomerCreditResponse,
    CustomerStatementResponse,
    DailySummaryResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    LowStockResponse,
    PurchaseReportResponse,
    SalesReportResponse,
    StockMovementResponse,
    StockReconciliationResponse,
    SupplierBalanceResponse,
    SupplierStatementResponse,
)
from src.application.use_cases import CreditReporter

router = APIRouter(prefix="/api/reports", tags=["reports"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_BAD_RANGE = {400: {"model": ErrorResponse}}


@router.get(
    "/customers/{customer_id}/credit",
    response_model=CustomerCreditResponse,
    responses=_NOT_FOUND,
)
async def customer_credit(
    customer_id: int,
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> CustomerCreditResponse:
    """Total sales minus total receipts for a customer."""
    return CustomerCreditResponse.model_validate(await reporter.customer_credit(customer_id))


@router.get(
    "/suppliers/{supplier_id}/balance",
    response_model=SupplierBalanceResponse,
    responses=_NOT_FOUND,
)
async def supplier_balance(
    supplier_id: int,
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> SupplierBalanceResponse:
    """Total purchases minus total payments for a supplier."""
    return SupplierBalanceResponse.model_validate(await reporter.supplier_balance(supplier_id))


@router.get(
    "/accounts/{account_id}/summary",
    response_model=AccountSummaryResponse,
    responses=_NOT_FOUND,
)
async def account_summary(
    account_id: int,
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> AccountSummaryResponse:
    """Account balance checked against the payments and receipts booked on it."""
    return AccountSummaryResponse.model_validate(await reporter.account_summary(account_id))


@router.get(
    "/items/{item_id}/stock",
    response_model=StockReconciliationResponse,
    responses=_NOT_FOUND,
)
async def stock_reconciliation(
    item_id: int,
    movements: int = Query(default=20, ge=0, le=500, description="Recent movements to include"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> StockReconciliationResponse:
    """Current stock checked against opening stock plus recorded movements."""
    reconciliation = StockReconciliationResponse.model_validate(
        await reporter.stock_reconciliation(item_id)
    )
    if movements:
        recent = await reporter.recent_movements(item_id, limit=movements)
        reconciliation.recent_movements = [
            StockMovementResponse.model_validate(m) for m in recent
        ]
    return reconciliation


@router.get("/summary", response_model=DailySummaryResponse)
async def daily_summary(
    day: date | None = Query(default=None, description="Defaults to today"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> DailySummaryResponse:
    """Purchases, sales, payments and receipts dated on one day."""
    return DailySummaryResponse.model_validate(
        await reporter.daily_summary(day or date.today())
    )


@router.get("/dashboard", response_model=DashboardSummaryResponse, responses=_BAD_RANGE)
async def dashboard_summary(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> DashboardSummaryResponse:
    """Sales, purchases, receipts and payments in the range, with catalog counts."""
    return DashboardSummaryResponse.model_validate(
        await reporter.dashboard_summary(start_date, end_date)
    )


@router.get("/sales", response_model=SalesReportResponse, responses=_BAD_RANGE)
async def sales_report(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> SalesReportResponse:
    """Sales in the range, newest first, with amount, received and due totals."""
    return SalesReportResponse.model_validate(await reporter.sales_report(start_date, end_date))


@router.get("/purchases", response_model=PurchaseReportResponse, responses=_BAD_RANGE)
async def purchase_report(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> PurchaseReportResponse:
    """Purchases in the range, newest first, with amount, paid and due totals."""
    return PurchaseReportResponse.model_validate(
        await reporter.purchase_report(start_date, end_date)
    )


@router.get(
    "/customers/{customer_id}/statement",
    response_model=CustomerStatementResponse,
    responses={**_NOT_FOUND, **_BAD_RANGE},
)
async def customer_statement(
    customer_id: int,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> CustomerStatementResponse:
    """Sales and receipts of a customer in the range."""
    return CustomerStatementResponse.model_validate(
        await reporter.customer_statement(customer_id, start_date, end_date)
    )


@router.get(
    "/suppliers/{supplier_id}/statement",
    response_model=SupplierStatementResponse,
    responses={**_NOT_FOUND, **_BAD_RANGE},
)
async def supplier_statement(
    supplier_id: int,
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> SupplierStatementResponse:
    """Purchases and payments of a supplier in the range."""
    return SupplierStatementResponse.model_validate(
        await reporter.supplier_statement(supplier_id, start_date, end_date)
    )


@router.get("/low-stock", response_model=LowStockResponse)
async def low_stock(
    threshold: float | None = Query(
        default=None, description="Stock cut-off; defaults to LEDGER_LOW_STOCK_THRESHOLD"
    ),
    reporter: CreditReporter = Depends(get_credit_reporter),
) -> LowStockResponse:
    """Items at or below the threshold, lowest stock first."""
    return LowStockResponse.model_validate(await reporter.low_stock(threshold))
