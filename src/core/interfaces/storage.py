"""
Abstract storage interfaces for the ledger records.

Methods taking ``conn`` run inside the caller's transaction. Read methods
accept an optional ``conn`` so a transaction manager can read back its own
uncommitted writes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Generic, TypeVar

from src.core.entities.account import Account, CashMovement
from src.core.entities.inventory import Item
from src.core.entities.party import Customer, Supplier
from src.core.entities.trade import TradeLine, TransactionStatus
from src.core.interfaces.ledger import Connection

DocT = TypeVar("DocT")
MovementT = TypeVar("MovementT", bound=CashMovement)


class ITradeStore(ABC, Generic[DocT]):
    """Persistence of purchases or sales together with their lines."""

    @abstractmethod
    async def insert(self, conn: Connection, doc: DocT) -> DocT:
        """Insert the header and every line; ids are filled in."""
        pass

    @abstractmethod
    async def get(self, doc_id: int, conn: Connection | None = None) -> DocT | None:
        """Read back a document with party name and line item names."""
        pass

    @abstractmethod
    async def list(
        self,
        party_id: int | None = None,
        status: TransactionStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[DocT], int]:
        """Filtered page of documents, newest first, plus the total count."""
        pass

    @abstractmethod
    async def list_in_period(
        self,
        party_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        newest_first: bool = False,
    ) -> list[DocT]:
        """Every document dated in the inclusive range, with its lines."""
        pass

    @abstractmethod
    async def find_line(
        self, conn: Connection, doc_id: int, item_id: int
    ) -> TradeLine | None:
        """First line of a document for an item."""
        pass

    @abstractmethod
    async def update_line_quantity(
        self, conn: Connection, line_id: int, quantity: float, unit_price: float
    ) -> None:
        """Rewrite a line quantity and its total price."""
        pass

    @abstractmethod
    async def update_header(
        self, conn: Connection, doc_id: int, fields: dict[str, Any]
    ) -> None:
        """Update scalar header columns."""
        pass

    @abstractmethod
    async def delete_lines(self, conn: Connection, doc_id: int) -> int:
        """Delete every line of a document."""
        pass

    @abstractmethod
    async def delete(self, conn: Connection, doc_id: int) -> int:
        """Delete the header row; returns the number of rows removed."""
        pass


class ICashStore(ABC, Generic[MovementT]):
    """Persistence of payments or receipts."""

    @abstractmethod
    async def insert(self, conn: Connection, movement: MovementT) -> MovementT:
        pass

    @abstractmethod
    async def get(
        self, movement_id: int, conn: Connection | None = None
    ) -> MovementT | None:
        pass

    @abstractmethod
    async def list(
        self,
        party_id: int | None = None,
        account_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[MovementT], int]:
        pass

    @abstractmethod
    async def list_in_period(
        self,
        party_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[MovementT]:
        """Every movement dated in the inclusive range, oldest first."""
        pass

    @abstractmethod
    async def update_fields(
        self, conn: Connection, movement_id: int, fields: dict[str, Any]
    ) -> None:
        pass

    @abstractmethod
    async def delete(self, conn: Connection, movement_id: int) -> int:
        pass


class ICatalogStore(ABC):
    """Suppliers, customers, items and accounts.

    Nothing here writes ``Item.current_stock`` or ``Account.balance`` after
    the row is created.
    """

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def get_supplier(
        self, supplier_id: int, conn: Connection | None = None
    ) -> Supplier | None:
        pass

    @abstractmethod
    async def list_suppliers(self, limit: int = 100, offset: int = 0) -> list[Supplier]:
        pass

    @abstractmethod
    async def create_customer(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get_customer(
        self, customer_id: int, conn: Connection | None = None
    ) -> Customer | None:
        pass

    @abstractmethod
    async def list_customers(self, limit: int = 100, offset: int = 0) -> list[Customer]:
        pass

    @abstractmethod
    async def create_item(self, item: Item) -> Item:
        pass

    @abstractmethod
    async def get_item(self, item_id: int, conn: Connection | None = None) -> Item | None:
        pass

    @abstractmethod
    async def list_items(self, limit: int = 100, offset: int = 0) -> list[Item]:
        pass

    @abstractmethod
    async def update_item(self, item_id: int, fields: dict[str, Any]) -> Item | None:
        """Update descriptive item fields; stock columns are never touched."""
        pass

    @abstractmethod
    async def find_missing_items(
        self, item_ids: list[int], conn: Connection | None = None
    ) -> list[int]:
        """Ids from the list that have no item row."""
        pass

    @abstractmethod
    async def list_low_stock(self, threshold: float) -> list[Item]:
        """Items whose current stock is at or below ``threshold``, lowest first."""
        pass

    @abstractmethod
    async def create_account(self, account: Account) -> Account:
        pass

    @abstractmethod
    async def get_account(
        self, account_id: int, conn: Connection | None = None
    ) -> Account | None:
        pass

    @abstractmethod
    async def list_accounts(self, limit: int = 100, offset: int = 0) -> list[Account]:
        pass

    @abstractmethod
    async def update_account(
        self, account_id: int, fields: dict[str, Any]
    ) -> Account | None:
        """Update descriptive account fields; the balance is never touched."""
        pass


class IReportStore(ABC):
    """Aggregate queries behind the credit and balance reports."""

    @abstractmethod
    async def customer_totals(self, customer_id: int) -> tuple[float, float]:
        """(sum of sale totals, sum of receipts) for a customer."""
        pass

    @abstractmethod
    async def supplier_totals(self, supplier_id: int) -> tuple[float, float]:
        """(sum of purchase totals, sum of payments) for a supplier."""
        pass

    @abstractmethod
    async def account_activity(self, account_id: int) -> dict[str, float]:
        """Counts and totals of account-method payments and receipts."""
        pass

    @abstractmethod
    async def stock_movement_totals(self, item_id: int) -> tuple[float, int]:
        """(net logged movement, number of movements) for an item."""
        pass

    @abstractmethod
    async def daily_totals(self, day: date) -> dict[str, float]:
        """Purchase, sale, payment and receipt totals dated on a day."""
        pass

    @abstractmethod
    async def period_totals(
        self, start_date: date | None, end_date: date | None
    ) -> dict[str, float]:
        """Purchase, sale, payment and receipt totals dated in a range."""
        pass

    @abstractmethod
    async def record_counts(self) -> dict[str, int]:
        """Number of customers, suppliers, items and accounts."""
        pass
