"""Inventory domain entities."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, field_validator

# Stock quantities are stored rounded to this many decimal places
QUANTITY_DECIMALS = 6


def round_quantity(value: float) -> float:
    return round(value, QUANTITY_DECIMALS)


class StockTransactionType(str, Enum):
    """Origin of a stock movement."""

    PURCHASE = "purchase"
    SALE = "sale"

    @property
    def sign(self) -> int:
        """Direction of the movement: purchases add stock, sales remove it."""
        return 1 if self is StockTransactionType.PURCHASE else -1


class Item(BaseModel):
    """A stocked item.

    ``current_stock`` is a derived aggregate: after creation it only moves
    through stock transactions recorded by purchases and sales.
    """

    id: int | None = None
    name: str
    description: str | None = None
    unit: str
    base_price: float = 0.0
    selling_price: float = 0.0
    opening_stock: float = 0.0
    current_stock: float = 0.0
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    @field_validator("opening_stock", "current_stock")
    @classmethod
    def snap_stock(cls, value: float) -> float:
        return round_quantity(value)


class StockTransaction(BaseModel):
    """One inventory movement caused by a purchase or sale line.

    Quantities are signed: positive for stock in, negative for stock out.
    """

    id: int | None = None
    item_id: int
    type: StockTransactionType
    quantity: float
    related_id: int  # owning purchase/sale id
    date: dt.date
    created_at: dt.datetime | None = None

    @field_validator("quantity")
    @classmethod
    def snap_quantity(cls, value: float) -> float:
        return round_quantity(value)
