"""Trading party entities (suppliers and customers)."""

import datetime as dt

from pydantic import BaseModel


class Party(BaseModel):
    """Fields shared by suppliers and customers."""

    id: int | None = None
    name: str
    phone: str | None = None
    address: str | None = None
    created_at: dt.datetime | None = None


class Supplier(Party):
    """A party we purchase from and pay."""


class Customer(Party):
    """A party we sell to and receive money from."""
