"""Bank account and cash movement entities."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel


class PaymentMethod(str, Enum):
    """How money moved: by hand or through a bank account."""

    CASH = "cash"
    ACCOUNT = "account"


class Account(BaseModel):
    """A bank account.

    ``balance`` is a derived aggregate: after creation it only moves through
    account-method payments and receipts.
    """

    id: int | None = None
    bank_name: str
    account_number: str
    account_holder: str
    opening_balance: float = 0.0
    balance: float = 0.0
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class CashMovement(BaseModel):
    """Fields shared by payments and receipts."""

    id: int | None = None
    amount: float
    method: PaymentMethod
    account_id: int | None = None
    date: dt.date
    note: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    # Read-back only
    bank_name: str | None = None
    account_number: str | None = None

    @property
    def touches_account(self) -> bool:
        return self.method is PaymentMethod.ACCOUNT and self.account_id is not None


class Payment(CashMovement):
    """Money paid out to a supplier; debits the account when method=account."""

    supplier_id: int
    supplier_name: str | None = None


class Receipt(CashMovement):
    """Money received from a customer; credits the account when method=account."""

    customer_id: int
    customer_name: str | None = None
