"""Purchase and sale domain entities."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.entities.inventory import round_quantity


class TransactionStatus(str, Enum):
    """Settlement state of a purchase or sale."""

    RECORDED = "recorded"
    PAID = "paid"
    PARTIAL = "partial"
    CANCELLED = "cancelled"


class TradeLine(BaseModel):
    """A line item on a purchase or sale."""

    id: int | None = None
    item_id: int
    quantity: float
    unit_price: float
    total_price: float = 0.0

    # Read-back only
    item_name: str | None = None
    item_unit: str | None = None

    @field_validator("quantity")
    @classmethod
    def snap_quantity(cls, value: float) -> float:
        return round_quantity(value)

    @model_validator(mode="after")
    def compute_total(self) -> "TradeLine":
        """total_price is always quantity x unit_price."""
        self.total_price = self.quantity * self.unit_price
        return self


class PurchaseItem(TradeLine):
    """A purchased line; its quantity was added to stock."""

    purchase_id: int | None = None


class SaleItem(TradeLine):
    """A sold line; its quantity was removed from stock."""

    sale_id: int | None = None


class Purchase(BaseModel):
    """A purchase from a supplier with its line items."""

    id: int | None = None
    supplier_id: int
    date: dt.date
    total_amount: float = 0.0
    paid_amount: float = 0.0
    status: TransactionStatus = TransactionStatus.RECORDED
    items: list[PurchaseItem] = Field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    # Read-back only
    supplier_name: str | None = None

    @property
    def lines_total(self) -> float:
        return sum(line.total_price for line in self.items)


class Sale(BaseModel):
    """A sale to a customer with its line items."""

    id: int | None = None
    customer_id: int
    date: dt.date
    total_amount: float = 0.0
    received_amount: float = 0.0
    status: TransactionStatus = TransactionStatus.RECORDED
    items: list[SaleItem] = Field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    # Read-back only
    customer_name: str | None = None

    @property
    def lines_total(self) -> float:
        return sum(line.total_price for line in self.items)
