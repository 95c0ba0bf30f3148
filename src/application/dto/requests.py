"""Request DTOs for API endpoints.

Pydantic v2 models for API request parsing. JSON bodies use camelCase
(``supplierId``, ``unitPrice``); snake_case names are accepted as well.

Fields the transaction managers check themselves (presence, positivity,
status and method values) are left permissive here so the managers report
them as ``ValidationError`` whether they are called over HTTP or directly.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for camelCase JSON contracts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Purchases / Sales ---


class TradeLineRequest(CamelModel):
    """A line on a new purchase or sale."""

    item_id: int | None = Field(default=None, description="Item ID")
    quantity: float | None = Field(default=None, description="Quantity, must be > 0")
    unit_price: float | None = Field(default=None, description="Price per unit, must be >= 0")


class LineQuantityUpdate(CamelModel):
    """New quantity for the line of an existing purchase or sale."""

    item_id: int | None = Field(default=None, description="Item ID of the line to change")
    quantity: float | None = Field(default=None, description="New quantity, must be > 0")


class CreatePurchaseRequest(CamelModel):
    """Request to record a purchase from a supplier."""

    supplier_id: int | None = Field(default=None, description="Supplier ID")
    date: dt.date | None = Field(default=None, description="Purchase date (ISO format)")
    items: list[TradeLineRequest] = Field(default_factory=list, description="Purchased lines")
    total_amount: float | None = Field(
        default=None,
        description="Invoice total; defaults to the sum of line totals",
    )
    paid_amount: float = Field(default=0.0, description="Amount already paid")
    status: str = Field(
        default="recorded",
        description="recorded, paid, partial or cancelled",
        examples=["recorded", "partial"],
    )


class UpdatePurchaseRequest(CamelModel):
    """Partial update of a purchase. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    paid_amount: float | None = None
    total_amount: float | None = None
    status: str | None = None
    items: list[LineQuantityUpdate] | None = Field(
        default=None,
        description="Line quantity changes; stock is re-balanced by the difference",
    )


class CreateSaleRequest(CamelModel):
    """Request to record a sale to a customer."""

    customer_id: int | None = Field(default=None, description="Customer ID")
    date: dt.date | None = Field(default=None, description="Sale date (ISO format)")
    items: list[TradeLineRequest] = Field(default_factory=list, description="Sold lines")
    total_amount: float | None = Field(
        default=None,
        description="Invoice total; defaults to the sum of line totals",
    )
    received_amount: float = Field(default=0.0, description="Amount already received")
    status: str = Field(default="recorded", description="recorded, paid, partial or cancelled")


class UpdateSaleRequest(CamelModel):
    """Partial update of a sale. Omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    received_amount: float | None = None
    total_amount: float | None = None
    status: str | None = None
    items: list[LineQuantityUpdate] | None = None


# --- Payments / Receipts ---


class CreatePaymentRequest(CamelModel):
    """Money paid to a supplier."""

    supplier_id: int | None = Field(default=None, description="Supplier ID")
    amount: float | None = Field(default=None, description="Amount, must be > 0")
    method: str | None = Field(default=None, description="cash or account")
    account_id: int | None = Field(
        default=None,
        description="Bank account debited; required when method is account",
    )
    date: dt.date | None = Field(default=None, description="Payment date (ISO format)")
    note: str | None = None


class CreateReceiptRequest(CamelModel):
    """Money received from a customer."""

    customer_id: int | None = Field(default=None, description="Customer ID")
    amount: float | None = Field(default=None, description="Amount, must be > 0")
    method: str | None = Field(default=None, description="cash or account")
    account_id: int | None = Field(
        default=None,
        description="Bank account credited; required when method is account",
    )
    date: dt.date | None = Field(default=None, description="Receipt date (ISO format)")
    note: str | None = None


class UpdateCashMovementRequest(CamelModel):
    """Only the date and note of a payment or receipt can change."""

    model_config = ConfigDict(extra="forbid")

    date: dt.date | None = None
    note: str | None = None


# --- Catalog ---


class CreatePartyRequest(CamelModel):
    """Request to create a supplier or customer."""

    name: str = Field(..., min_length=1, description="Display name")
    phone: str | None = None
    address: str | None = None


class CreateItemRequest(CamelModel):
    """Request to create a stocked item."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    unit: str = Field(..., min_length=1, examples=["pcs", "kg"])
    base_price: float = Field(default=0.0, ge=0, description="Purchase price per unit")
    selling_price: float = Field(default=0.0, ge=0, description="Selling price per unit")
    opening_stock: float = Field(default=0.0, ge=0, description="Stock on hand at creation")


class UpdateItemRequest(CamelModel):
    """Descriptive item fields. Stock moves only through purchases and sales."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    unit: str | None = Field(default=None, min_length=1)
    base_price: float | None = Field(default=None, ge=0)
    selling_price: float | None = Field(default=None, ge=0)


class CreateAccountRequest(CamelModel):
    """Request to open a bank account."""

    bank_name: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    account_holder: str = Field(..., min_length=1)
    opening_balance: float = Field(default=0.0, description="Balance at creation")


class UpdateAccountRequest(CamelModel):
    """Descriptive account fields. The balance moves only through payments and receipts."""

    model_config = ConfigDict(extra="forbid")

    bank_name: str | None = Field(default=None, min_length=1)
    account_number: str | None = Field(default=None, min_length=1)
    account_holder: str | None = Field(default=None, min_length=1)
