"""
Payment/Receipt Transaction Managers.

A payment made through a bank account debits it, a receipt credits it.
Cash movements never touch an account. Amount, method and account are fixed
once recorded; only the date and note can be edited.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from src.application.use_cases.trade_transactions import TransactionFactory
from src.application.use_cases.validation import (
    page_window,
    parse_method,
    reject_nulls,
    require,
    require_positive,
    set_fields,
)
from src.config import get_logger
from src.core.entities.account import Payment, PaymentMethod, Receipt
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.ledger import Connection, IBalanceAdjuster
from src.core.interfaces.storage import ICashStore, ICatalogStore

logger = get_logger(__name__)


class CashTransactionManager(ABC):
    """Base for payments and receipts; ``direction`` is the sign applied to the account."""

    entity: str
    party_entity: str
    party_field: str
    direction: int
    model: type

    def __init__(
        self,
        store: ICashStore | None = None,
        catalog_store: ICatalogStore | None = None,
        balance_adjuster: IBalanceAdjuster | None = None,
        transaction: TransactionFactory | None = None,
    ):
        self._store = store
        self._catalog_store = catalog_store
        self._balance_adjuster = balance_adjuster
        self._transaction = transaction

    @abstractmethod
    async def _resolve_store(self) -> ICashStore:
        """Default store for this movement type."""

    async def _get_store(self) -> ICashStore:
        if self._store is None:
            self._store = await self._resolve_store()
        return self._store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_balance_adjuster(self) -> IBalanceAdjuster:
        if self._balance_adjuster is None:
            from src.infrastructure.storage.sqlite import get_balance_adjuster

            self._balance_adjuster = await get_balance_adjuster()
        return self._balance_adjuster

    def _begin(self):
        if self._transaction is None:
            from src.infrastructure.storage.sqlite import get_transaction

            self._transaction = get_transaction
        return self._transaction()

    async def _ensure_party(
        self, catalog: ICatalogStore, party_id: int, conn: Connection
    ) -> None:
        getter = getattr(catalog, f"get_{self.party_entity}")
        if await getter(party_id, conn=conn) is None:
            raise NotFoundError(self.party_entity, party_id)

    async def create(self, request: Any):
        """Record the movement and, for account movements, adjust the balance."""
        party_id = require(self.party_field, getattr(request, self.party_field))
        amount = require_positive("amount", request.amount)
        method = parse_method(request.method)
        movement_date: date = require("date", request.date)
        account_id = request.account_id
        if method is PaymentMethod.ACCOUNT:
            require("account_id", account_id)
        elif account_id is not None:
            logger.warning(
                f"{self.entity}_account_ignored",
                account_id=account_id,
                reason="cash movements do not touch accounts",
            )
            account_id = None

        movement = self.model(
            amount=amount,
            method=method,
            account_id=account_id,
            date=movement_date,
            note=request.note,
            **{self.party_field: party_id},
        )

        store = await self._get_store()
        catalog = await self._get_catalog_store()
        adjuster = await self._get_balance_adjuster()

        async with self._begin() as conn:
            await self._ensure_party(catalog, party_id, conn)
            if movement.touches_account:
                if await catalog.get_account(account_id, conn=conn) is None:
                    raise NotFoundError("account", account_id)

            movement = await store.insert(conn, movement)
            balance = None
            if movement.touches_account:
                balance = await adjuster.apply(conn, account_id, self.direction * amount)
            created = await store.get(movement.id, conn=conn)

        logger.info(
            f"{self.entity}_created",
            id=created.id,
            amount=amount,
            method=method.value,
            account_id=account_id,
            balance=balance,
        )
        return created

    async def update(self, movement_id: int, request: Any):
        """Edit date and/or note."""
        fields = set_fields(request)
        if not fields:
            raise ValidationError("request", "no fields to update")
        reject_nulls(fields, nullable=("note",))

        store = await self._get_store()

        async with self._begin() as conn:
            if await store.get(movement_id, conn=conn) is None:
                raise NotFoundError(self.entity, movement_id)
            await store.update_fields(conn, movement_id, fields)
            updated = await store.get(movement_id, conn=conn)

        logger.info(f"{self.entity}_updated", id=movement_id, fields=sorted(fields))
        return updated

    async def delete(self, movement_id: int) -> None:
        """Reverse the balance effect, then delete the row."""
        store = await self._get_store()
        adjuster = await self._get_balance_adjuster()

        async with self._begin() as conn:
            movement = await store.get(movement_id, conn=conn)
            if movement is None:
                raise NotFoundError(self.entity, movement_id)

            if movement.touches_account:
                await adjuster.apply(conn, movement.account_id, -self.direction * movement.amount)
            await store.delete(conn, movement_id)

        logger.info(
            f"{self.entity}_deleted",
            id=movement_id,
            amount=movement.amount,
            account_id=movement.account_id,
        )

    async def get(self, movement_id: int):
        store = await self._get_store()
        movement = await store.get(movement_id)
        if movement is None:
            raise NotFoundError(self.entity, movement_id)
        return movement

    async def list_for_account(
        self, account_id: int, page: int = 1, limit: int = 20
    ) -> tuple[list, int]:
        """Movements booked against one bank account."""
        catalog = await self._get_catalog_store()
        if await catalog.get_account(account_id) is None:
            raise NotFoundError("account", account_id)
        return await self.list(account_id=account_id, page=page, limit=limit)

    async def list(
        self,
        party_id: int | None = None,
        account_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list, int]:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date", "must not be after end_date", start_date)
        limit, offset = page_window(page, limit)

        store = await self._get_store()
        return await store.list(
            party_id=party_id,
            account_id=account_id,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )


class PaymentTransactionManager(CashTransactionManager):
    """Payments to suppliers; account payments debit the account."""

    entity = "payment"
    party_entity = "supplier"
    party_field = "supplier_id"
    direction = -1
    model = Payment

    async def _resolve_store(self) -> ICashStore:
        from src.infrastructure.storage.sqlite import get_payment_store

        return await get_payment_store()


class ReceiptTransactionManager(CashTransactionManager):
    """Receipts from customers; account receipts credit the account."""

    entity = "receipt"
    party_entity = "customer"
    party_field = "customer_id"
    direction = 1
    model = Receipt

    async def _resolve_store(self) -> ICashStore:
        from src.infrastructure.storage.sqlite import get_receipt_store

        return await get_receipt_store()
