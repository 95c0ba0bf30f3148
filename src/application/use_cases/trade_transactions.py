"""
Shared create/update/delete flow for purchases and sales.

A purchase and a sale differ only in the party they reference, the name of
the settled amount and the direction stock moves. Every mutation runs in
one database transaction that writes the document, its lines and the
matching stock movements, or rolls all of it back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Any

from src.application.use_cases.validation import (
    page_window,
    parse_status,
    reject_nulls,
    require,
    require_non_negative,
    set_fields,
    validate_line_changes,
    validate_new_lines,
)
from src.config import get_logger, get_settings
from src.core.entities.inventory import StockTransactionType, round_quantity
from src.core.exceptions import NotFoundError, ValidationError
from src.core.interfaces.ledger import Connection, IStockLedger
from src.core.interfaces.storage import ICatalogStore, ITradeStore

logger = get_logger(__name__)

TransactionFactory = Callable[[], AbstractAsyncContextManager[Connection]]


class TradeTransactionManager(ABC):
    """Base for PurchaseTransactionManager and SaleTransactionManager."""

    entity: str
    tx_type: StockTransactionType
    party_entity: str
    party_field: str
    settled_field: str
    doc_model: type
    line_model: type

    def __init__(
        self,
        store: ITradeStore | None = None,
        catalog_store: ICatalogStore | None = None,
        stock_ledger: IStockLedger | None = None,
        transaction: TransactionFactory | None = None,
        allow_negative_stock: bool | None = None,
    ):
        self._store = store
        self._catalog_store = catalog_store
        self._stock_ledger = stock_ledger
        self._transaction = transaction
        if allow_negative_stock is None:
            allow_negative_stock = get_settings().ledger.allow_negative_stock
        self.allow_negative_stock = allow_negative_stock

    @abstractmethod
    async def _resolve_store(self) -> ITradeStore:
        """Default store for this document type."""

    async def _get_store(self) -> ITradeStore:
        if self._store is None:
            self._store = await self._resolve_store()
        return self._store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from src.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def _get_stock_ledger(self) -> IStockLedger:
        if self._stock_ledger is None:
            from src.infrastructure.storage.sqlite import get_stock_ledger

            self._stock_ledger = await get_stock_ledger()
        return self._stock_ledger

    def _begin(self) -> AbstractAsyncContextManager[Connection]:
        if self._transaction is None:
            from src.infrastructure.storage.sqlite import get_transaction

            self._transaction = get_transaction
        return self._transaction()

    @property
    def _allow_negative(self) -> bool:
        """Whether stock-outs from this manager may drive stock below zero.

        Selling more than is on hand is always refused. Undoing or shrinking
        a purchase follows the configured policy.
        """
        return self.tx_type is StockTransactionType.PURCHASE and self.allow_negative_stock

    async def _ensure_party(
        self, catalog: ICatalogStore, party_id: int, conn: Connection
    ) -> None:
        getter = getattr(catalog, f"get_{self.party_entity}")
        if await getter(party_id, conn=conn) is None:
            raise NotFoundError(self.party_entity, party_id)

    # Commands

    async def create(self, request: Any):
        """Record a document, its lines and one stock movement per line."""
        party_id = require(self.party_field, getattr(request, self.party_field))
        doc_date: date = require("date", request.date)
        lines = validate_new_lines(request.items)
        settled = require_non_negative(self.settled_field, getattr(request, self.settled_field))
        status = parse_status(request.status)

        doc = self.doc_model(
            date=doc_date,
            status=status,
            items=[
                self.line_model(
                    item_id=line.item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                )
                for line in lines
            ],
            **{self.party_field: party_id, self.settled_field: settled},
        )
        doc.total_amount = (
            require_non_negative("total_amount", request.total_amount)
            if request.total_amount is not None
            else doc.lines_total
        )

        logger.info(
            f"{self.entity}_create_started",
            party_id=party_id,
            lines=len(doc.items),
            total=doc.total_amount,
        )

        store = await self._get_store()
        catalog = await self._get_catalog_store()
        ledger = await self._get_stock_ledger()

        async with self._begin() as conn:
            await self._ensure_party(catalog, party_id, conn)
            missing = await catalog.find_missing_items(
                [line.item_id for line in doc.items], conn=conn
            )
            if missing:
                raise NotFoundError("item", missing[0])

            doc = await store.insert(conn, doc)
            for line in doc.items:
                await ledger.record(
                    conn,
                    item_id=line.item_id,
                    quantity=self.tx_type.sign * line.quantity,
                    related_id=doc.id,
                    tx_type=self.tx_type,
                    movement_date=doc.date,
                )
            created = await store.get(doc.id, conn=conn)

        logger.info(
            f"{self.entity}_created",
            id=created.id,
            lines=len(created.items),
            total=created.total_amount,
        )
        return created

    async def update(self, doc_id: int, request: Any):
        """Apply scalar changes and line quantity edits in one transaction."""
        fields = set_fields(request)
        if not fields:
            raise ValidationError("request", "no fields to update")
        reject_nulls(fields)

        header: dict[str, Any] = {}
        if self.settled_field in fields:
            header[self.settled_field] = require_non_negative(
                self.settled_field, fields[self.settled_field]
            )
        if "total_amount" in fields:
            header["total_amount"] = require_non_negative("total_amount", fields["total_amount"])
        if "status" in fields:
            header["status"] = parse_status(fields["status"])
        changes = validate_line_changes(fields.get("items") or [])
        if not header and not changes:
            raise ValidationError("items", "at least one line change or header field is required")

        store = await self._get_store()
        ledger = await self._get_stock_ledger()

        async with self._begin() as conn:
            doc = await store.get(doc_id, conn=conn)
            if doc is None:
                raise NotFoundError(self.entity, doc_id)

            await store.update_header(conn, doc_id, header)

            for change in changes:
                line = await store.find_line(conn, doc_id, change.item_id)
                if line is None:
                    raise NotFoundError(f"{self.entity}_item", f"{doc_id}/{change.item_id}")
                quantity = round_quantity(change.quantity)
                difference = round_quantity(quantity - line.quantity)
                if difference == 0:
                    continue
                await store.update_line_quantity(conn, line.id, quantity, line.unit_price)
                await ledger.adjust(
                    conn,
                    related_id=doc_id,
                    tx_type=self.tx_type,
                    item_id=change.item_id,
                    delta=self.tx_type.sign * difference,
                    movement_date=doc.date,
                    allow_negative=self._allow_negative,
                )

            updated = await store.get(doc_id, conn=conn)

        logger.info(
            f"{self.entity}_updated",
            id=doc_id,
            fields=sorted(header),
            line_changes=len(changes),
        )
        return updated

    async def delete(self, doc_id: int) -> None:
        """Reverse stock, then delete lines, then the document."""
        store = await self._get_store()
        ledger = await self._get_stock_ledger()

        async with self._begin() as conn:
            doc = await store.get(doc_id, conn=conn)
            if doc is None:
                raise NotFoundError(self.entity, doc_id)

            # One reversal per item; it covers every line of that item
            for item_id in dict.fromkeys(line.item_id for line in doc.items):
                await ledger.reverse(
                    conn,
                    related_id=doc_id,
                    tx_type=self.tx_type,
                    item_id=item_id,
                    allow_negative=self._allow_negative,
                )
            await store.delete_lines(conn, doc_id)
            await store.delete(conn, doc_id)

        logger.info(f"{self.entity}_deleted", id=doc_id, lines=len(doc.items))

    # Queries

    async def get(self, doc_id: int):
        store = await self._get_store()
        doc = await store.get(doc_id)
        if doc is None:
            raise NotFoundError(self.entity, doc_id)
        return doc

    async def list(
        self,
        party_id: int | None = None,
        status: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list, int]:
        """Page of documents (newest first) and the total matching count."""
        parsed_status = parse_status(status) if status is not None else None
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date", "must not be after end_date", start_date)
        limit, offset = page_window(page, limit)

        store = await self._get_store()
        return await store.list(
            party_id=party_id,
            status=parsed_status,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )
