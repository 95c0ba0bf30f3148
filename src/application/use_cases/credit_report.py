"""Credit/Balance Reporter: read-only views recomputed from the ledgers on every call.

Balances and reconciliations cover all time; statements, trade reports and
the dashboard cover an optional inclusive date range.
"""

from datetime import date

from src.config import get_logger, get_settings
from src.core.entities.inventory import StockTransaction
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
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.ledger import IStockLedger
from src.core.interfaces.storage import ICashStore, ICatalogStore, IReportStore, ITradeStore

logger = get_logger(__name__)


class CreditReporter:
    """Outstanding balances, statements, period reports and consistency checks."""

    def __init__(
        self,
        report_store: IReportStore | None = None,
        catalog_store: ICatalogStore | None = None,
        stock_ledger: IStockLedger | None = None,
        purchase_store: ITradeStore | None = None,
        sale_store: ITradeStore | None = None,
        payment_store: ICashStore | None = None,
        receipt_store: ICashStore | None = None,
    ):
        self._report_store = report_store
        self._catalog_store = catalog_store
        self._stock_ledger = stock_ledger
        self._purchase_store = purchase_store
        self._sale_store = sale_store
        self._payment_store = payment_store
        self._receipt_store = receipt_store

    async def _get_report_store(self) -> IReportStore:
        if self._report_store is None:
            from src.infrastructure.storage.sqlite import get_report_store

            self._report_store = await get_report_store()
        return self._report_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_stock_ledger(self) -> IStockLedger:
        if self._stock_ledger is None:
            from src.infrastructure.storage.sqlite import get_stock_ledger

            self._stock_ledger = await get_stock_ledger()
        return self._stock_ledger

    async def _get_purchase_store(self) -> ITradeStore:
        if self._purchase_store is None:
            from src.infrastructure.storage.sqlite import get_purchase_store

            self._purchase_store = await get_purchase_store()
        return self._purchase_store

    async def _get_sale_store(self) -> ITradeStore:
        if self._sale_store is None:
            from src.infrastructure.storage.sqlite import get_sale_store

            self._sale_store = await get_sale_store()
        return self._sale_store

    async def _get_payment_store(self) -> ICashStore:
        if self._payment_store is None:
            from src.infrastructure.storage.sqlite import get_payment_store

            self._payment_store = await get_payment_store()
        return self._payment_store

    async def _get_receipt_store(self) -> ICashStore:
        if self._receipt_store is None:
            from src.infrastructure.storage.sqlite import get_receipt_store

            self._receipt_store = await get_receipt_store()
        return self._receipt_store

    async def customer_credit(self, customer_id: int) -> CustomerCredit:
        """Sales minus receipts. Positive means the customer owes us."""
        catalog = await self._get_catalog_store()
        customer = await catalog.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("customer", customer_id)

        reports = await self._get_report_store()
        total_sales, total_receipts = await reports.customer_totals(customer_id)
        outstanding = total_sales - total_receipts
        return CustomerCredit(
            customer_id=customer_id,
            customer_name=customer.name,
            total_sales=total_sales,
            total_receipts=total_receipts,
            outstanding_balance=outstanding,
            status=SettlementStatus.from_balance(outstanding),
        )

    async def supplier_balance(self, supplier_id: int) -> SupplierBalance:
        """Purchases minus payments. Positive means we owe the supplier."""
        catalog = await self._get_catalog_store()
        supplier = await catalog.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError("supplier", supplier_id)

        reports = await self._get_report_store()
        total_purchases, total_payments = await reports.supplier_totals(supplier_id)
        outstanding = total_purchases - total_payments
        return SupplierBalance(
            supplier_id=supplier_id,
            supplier_name=supplier.name,
            total_purchases=total_purchases,
            total_payments=total_payments,
            outstanding_balance=outstanding,
            status=SettlementStatus.from_balance(outstanding),
        )

    async def account_summary(self, account_id: int) -> AccountSummary:
        catalog = await self._get_catalog_store()
        account = await catalog.get_account(account_id)
        if account is None:
            raise NotFoundError("account", account_id)

        reports = await self._get_report_store()
        activity = await reports.account_activity(account_id)
        summary = AccountSummary(
            account_id=account_id,
            bank_name=account.bank_name,
            account_number=account.account_number,
            opening_balance=account.opening_balance,
            balance=account.balance,
            **activity,
        )
        if not summary.in_sync:
            logger.warning(
                "account_balance_drift",
                account_id=account_id,
                balance=summary.balance,
                expected=summary.expected_balance,
            )
        return summary

    async def stock_reconciliation(self, item_id: int) -> StockReconciliation:
        catalog = await self._get_catalog_store()
        item = await catalog.get_item(item_id)
        if item is None:
            raise NotFoundError("item", item_id)

        reports = await self._get_report_store()
        movements_total, movement_count = await reports.stock_movement_totals(item_id)
        reconciliation = StockReconciliation(
            item_id=item_id,
            item_name=item.name,
            opening_stock=item.opening_stock,
            movements_total=movements_total,
            movement_count=movement_count,
            current_stock=item.current_stock,
        )
        if not reconciliation.in_sync:
            logger.warning(
                "stock_drift",
                item_id=item_id,
                current_stock=item.current_stock,
                expected=item.opening_stock + movements_total,
            )
        return reconciliation

    async def recent_movements(self, item_id: int, limit: int = 20) -> list[StockTransaction]:
        ledger = await self._get_stock_ledger()
        return await ledger.list_movements(item_id, limit=limit)

    async def daily_summary(self, day: date) -> DailySummary:
        reports = await self._get_report_store()
        totals = await reports.daily_totals(day)
        return DailySummary(day=day, **totals)

    async def dashboard_summary(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> DashboardSummary:
        """Money totals dated in the range plus catalog sizes."""
        period = _period(start_date, end_date)
        reports = await self._get_report_store()
        totals = await reports.period_totals(start_date, end_date)
        counts = await reports.record_counts()
        return DashboardSummary(
            period=period,
            total_sales=totals["sales"],
            total_purchases=totals["purchases"],
            total_receipts=totals["receipts"],
            total_payments=totals["payments"],
            customer_count=counts["customers"],
            supplier_count=counts["suppliers"],
            item_count=counts["items"],
            account_count=counts["accounts"],
        )

    async def sales_report(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> SalesReport:
        period = _period(start_date, end_date)
        store = await self._get_sale_store()
        sales = await store.list_in_period(
            start_date=start_date, end_date=end_date, newest_first=True
        )
        return SalesReport(
            period=period, sales=sales, totals=TradeTotals.of(sales, "received_amount")
        )

    async def purchase_report(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> PurchaseReport:
        period = _period(start_date, end_date)
        store = await self._get_purchase_store()
        purchases = await store.list_in_period(
            start_date=start_date, end_date=end_date, newest_first=True
        )
        return PurchaseReport(
            period=period, purchases=purchases, totals=TradeTotals.of(purchases, "paid_amount")
        )

    async def customer_statement(
        self,
        customer_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> CustomerStatement:
        """Sales and receipts of one customer in the range, oldest first."""
        period = _period(start_date, end_date)
        catalog = await self._get_catalog_store()
        customer = await catalog.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("customer", customer_id)

        sales = await (await self._get_sale_store()).list_in_period(
            party_id=customer_id, start_date=start_date, end_date=end_date
        )
        receipts = await (await self._get_receipt_store()).list_in_period(
            party_id=customer_id, start_date=start_date, end_date=end_date
        )
        return CustomerStatement(
            customer_id=customer_id,
            customer_name=customer.name,
            period=period,
            sales=sales,
            receipts=receipts,
            total_sales=sum(sale.total_amount for sale in sales),
            total_receipts=sum(receipt.amount for receipt in receipts),
        )

    async def supplier_statement(
        self,
        supplier_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> SupplierStatement:
        """Purchases and payments of one supplier in the range, oldest first."""
        period = _period(start_date, end_date)
        catalog = await self._get_catalog_store()
        supplier = await catalog.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError("supplier", supplier_id)

        purchases = await (await self._get_purchase_store()).list_in_period(
            party_id=supplier_id, start_date=start_date, end_date=end_date
        )
        payments = await (await self._get_payment_store()).list_in_period(
            party_id=supplier_id, start_date=start_date, end_date=end_date
        )
        return SupplierStatement(
            supplier_id=supplier_id,
            supplier_name=supplier.name,
            period=period,
            purchases=purchases,
            payments=payments,
            total_purchases=sum(purchase.total_amount for purchase in purchases),
            total_payments=sum(payment.amount for payment in payments),
        )

    async def low_stock(self, threshold: float | None = None) -> LowStockReport:
        """Items at or below ``threshold`` (default from ledger settings)."""
        if threshold is None:
            threshold = get_settings().ledger.low_stock_threshold
        catalog = await self._get_catalog_store()
        items = await catalog.list_low_stock(threshold)
        if items:
            logger.info("low_stock_items", threshold=threshold, count=len(items))
        return LowStockReport(threshold=threshold, items=items)


def _period(start_date: date | None, end_date: date | None) -> Period:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date", "must not be after end_date", start_date)
    return Period(start_date=start_date, end_date=end_date)
