"""Tests for report entities."""

from datetime import date

from src.core.entities.report import (
    AccountSummary,
    DailySummary,
    LowStockReport,
    Period,
    SettlementStatus,
    StockReconciliation,
    SupplierStatement,
    TradeTotals,
)
from src.core.entities.trade import Purchase


class TestSettlementStatus:
    def test_from_balance(self):
        assert SettlementStatus.from_balance(25.0) is SettlementStatus.OWES
        assert SettlementStatus.from_balance(-5.0) is SettlementStatus.CREDIT
        assert SettlementStatus.from_balance(0.0) is SettlementStatus.SETTLED


class TestAccountSummary:
    def _summary(self, balance: float) -> AccountSummary:
        return AccountSummary(
            account_id=1,
            bank_name="First Bank",
            account_number="1",
            opening_balance=1000.0,
            balance=balance,
            payment_count=1,
            payments_total=300.0,
            receipt_count=2,
            receipts_total=50.0,
        )

    def test_expected_balance(self):
        assert self._summary(750.0).expected_balance == 750.0

    def test_in_sync(self):
        assert self._summary(750.0).in_sync is True
        assert self._summary(700.0).in_sync is False


class TestStockReconciliation:
    def test_in_sync(self):
        reconciliation = StockReconciliation(
            item_id=1, item_name="Widget", opening_stock=5, movements_total=6,
            movement_count=2, current_stock=11,
        )
        assert reconciliation.in_sync is True

    def test_drift(self):
        reconciliation = StockReconciliation(
            item_id=1, item_name="Widget", opening_stock=5, movements_total=6,
            movement_count=2, current_stock=10,
        )
        assert reconciliation.in_sync is False


def test_daily_summary_defaults():
    summary = DailySummary(day=date(2024, 1, 1))
    assert (summary.purchases, summary.sales, summary.payments, summary.receipts) == (0, 0, 0, 0)


class TestTradeTotals:
    def test_of_purchases(self):
        purchases = [
            Purchase(supplier_id=1, date=date(2024, 1, 1), total_amount=50, paid_amount=50),
            Purchase(supplier_id=1, date=date(2024, 1, 2), total_amount=30, paid_amount=5),
        ]
        totals = TradeTotals.of(purchases, "paid_amount")
        assert (totals.count, totals.total_amount, totals.settled_amount) == (2, 80, 55)
        assert totals.due_amount == 25

    def test_empty(self):
        assert TradeTotals.of([], "received_amount").due_amount == 0


def test_statement_balance_and_low_stock_count():
    statement = SupplierStatement(
        supplier_id=1, supplier_name="Acme", period=Period(),
        total_purchases=120.0, total_payments=150.0,
    )
    assert statement.balance == -30.0
    assert LowStockReport(threshold=10).count == 0
