"""Read-only report entities computed from the ledgers on demand."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.account import Payment, Receipt
from src.core.entities.inventory import Item
from src.core.entities.trade import Purchase, Sale


class SettlementStatus(str, Enum):
    """Direction of an outstanding balance."""

    OWES = "owes"  # party owes us / we owe the supplier
    CREDIT = "credit"  # overpaid, the difference is an advance
    SETTLED = "settled"

    @classmethod
    def from_balance(cls, balance: float) -> "SettlementStatus":
        if balance > 0:
            return cls.OWES
        if balance < 0:
            return cls.CREDIT
        return cls.SETTLED


class CustomerCredit(BaseModel):
    """Outstanding balance of a customer: sales minus receipts."""

    customer_id: int
    customer_name: str
    total_sales: float
    total_receipts: float
    outstanding_balance: float
    status: SettlementStatus


class SupplierBalance(BaseModel):
    """Outstanding balance towards a supplier: purchases minus payments."""

    supplier_id: int
    supplier_name: str
    total_purchases: float
    total_payments: float
    outstanding_balance: float
    status: SettlementStatus


class AccountSummary(BaseModel):
    """Balance of an account next to the payments and receipts that moved it."""

    account_id: int
    bank_name: str
    account_number: str
    opening_balance: float
    balance: float
    payment_count: int
    payments_total: float
    receipt_count: int
    receipts_total: float

    @property
    def expected_balance(self) -> float:
        return self.opening_balance - self.payments_total + self.receipts_total

    @property
    def in_sync(self) -> bool:
        return abs(self.expected_balance - self.balance) < 1e-9


class StockReconciliation(BaseModel):
    """Current stock of an item next to the movements that produced it."""

    item_id: int
    item_name: str
    opening_stock: float
    movements_total: float
    movement_count: int
    current_stock: float

    @property
    def in_sync(self) -> bool:
        return abs(self.opening_stock + self.movements_total - self.current_stock) < 1e-9


class DailySummary(BaseModel):
    """Totals of the records dated on one day."""

    day: dt.date
    purchases: float = 0.0
    sales: float = 0.0
    payments: float = 0.0
    receipts: float = 0.0


class Period(BaseModel):
    """Inclusive date range; an open end is unbounded."""

    start_date: dt.date | None = None
    end_date: dt.date | None = None


class TradeTotals(BaseModel):
    """Invoice, settled and due totals over a set of purchases or sales."""

    count: int = 0
    total_amount: float = 0.0
    settled_amount: float = 0.0

    @property
    def due_amount(self) -> float:
        return self.total_amount - self.settled_amount

    @classmethod
    def of(cls, docs: list[Purchase] | list[Sale], settled_field: str) -> "TradeTotals":
        return cls(
            count=len(docs),
            total_amount=sum(doc.total_amount for doc in docs),
            settled_amount=sum(getattr(doc, settled_field) for doc in docs),
        )


class SalesReport(BaseModel):
    """Sales dated in a period, newest first."""

    period: Period
    sales: list[Sale] = Field(default_factory=list)
    totals: TradeTotals


class PurchaseReport(BaseModel):
    """Purchases dated in a period, newest first."""

    period: Period
    purchases: list[Purchase] = Field(default_factory=list)
    totals: TradeTotals


class CustomerStatement(BaseModel):
    """A customer's sales and receipts in a period, oldest first.

    ``balance`` covers the period only; ``CustomerCredit`` is the all-time view.
    """

    customer_id: int
    customer_name: str
    period: Period
    sales: list[Sale] = Field(default_factory=list)
    receipts: list[Receipt] = Field(default_factory=list)
    total_sales: float = 0.0
    total_receipts: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_sales - self.total_receipts


class SupplierStatement(BaseModel):
    """A supplier's purchases and payments in a period, oldest first."""

    supplier_id: int
    supplier_name: str
    period: Period
    purchases: list[Purchase] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
    total_purchases: float = 0.0
    total_payments: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_purchases - self.total_payments


class LowStockReport(BaseModel):
    """Items at or below a stock threshold, lowest stock first."""

    threshold: float
    items: list[Item] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


class DashboardSummary(BaseModel):
    """Money totals dated in a period next to catalog sizes."""

    period: Period
    total_sales: float = 0.0
    total_purchases: float = 0.0
    total_receipts: float = 0.0
    total_payments: float = 0.0
    customer_count: int = 0
    supplier_count: int = 0
    item_count: int = 0
    account_count: int = 0
