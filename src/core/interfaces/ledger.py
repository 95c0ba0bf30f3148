"""
Abstract interfaces for the aggregate ledgers.

Both ledgers only ever run inside a transaction opened by a transaction
manager, so every mutating method takes the caller's connection.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from src.core.entities.inventory import StockTransaction, StockTransactionType

# Open connection of the enclosing transaction (aiosqlite.Connection in practice)
Connection = Any


class IStockLedger(ABC):
    """Keeps Item.current_stock and the stock movement log in step."""

    @abstractmethod
    async def record(
        self,
        conn: Connection,
        item_id: int,
        quantity: float,
        related_id: int,
        tx_type: StockTransactionType,
        movement_date: date,
        allow_negative: bool = False,
    ) -> StockTransaction:
        """Apply a signed quantity to stock and log the movement."""
        pass

    @abstractmethod
    async def reverse(
        self,
        conn: Connection,
        related_id: int,
        tx_type: StockTransactionType,
        item_id: int,
        allow_negative: bool = False,
    ) -> float:
        """Undo every movement of an item logged for a transaction.

        Returns the signed quantity that was reversed.
        """
        pass

    @abstractmethod
    async def adjust(
        self,
        conn: Connection,
        related_id: int,
        tx_type: StockTransactionType,
        item_id: int,
        delta: float,
        movement_date: date,
        allow_negative: bool = False,
    ) -> None:
        """Shift stock and the logged movement by a signed delta."""
        pass

    @abstractmethod
    async def list_movements(
        self, item_id: int, limit: int = 100, conn: Connection | None = None
    ) -> list[StockTransaction]:
        """Movements of an item, newest first."""
        pass

    @abstractmethod
    async def net_movement(self, item_id: int, conn: Connection | None = None) -> float:
        """Sum of all logged movements of an item."""
        pass


class IBalanceAdjuster(ABC):
    """Applies signed deltas to Account.balance."""

    @abstractmethod
    async def apply(self, conn: Connection, account_id: int, delta: float) -> float:
        """Add a signed delta to an account balance and return the new balance."""
        pass
