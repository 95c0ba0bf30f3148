"""Unit tests for the purchase and sale transaction managers."""

from contextlib import asynccontextmanager
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.dto.requests import (
    CreatePurchaseRequest,
    CreateSaleRequest,
    LineQuantityUpdate,
    TradeLineRequest,
    UpdatePurchaseRequest,
    UpdateSaleRequest,
)
from src.application.use_cases import PurchaseTransactionManager, SaleTransactionManager
from src.application.use_cases.trade_transactions import TradeTransactionManager
from src.core.entities.inventory import StockTransactionType
from src.core.entities.trade import Purchase, PurchaseItem, TransactionStatus
from src.core.exceptions import NotFoundError, ValidationError

CONN = object()


class FakeTransaction:
    """Transaction factory that records how often a transaction was opened."""

    def __init__(self):
        self.opened = 0
        self.committed = 0

    @asynccontextmanager
    async def __call__(self):
        self.opened += 1
        yield CONN
        self.committed += 1


def stored_purchase(**overrides) -> Purchase:
    values = {
        "id": 7,
        "supplier_id": 1,
        "date": date(2024, 3, 1),
        "total_amount": 50.0,
        "items": [PurchaseItem(id=70, purchase_id=7, item_id=3, quantity=10, unit_price=5)],
    }
    values.update(overrides)
    return Purchase(**values)


@pytest.fixture
def mock_store():
    store = AsyncMock()

    async def insert(conn, doc):
        doc.id = 7
        return doc

    store.insert = AsyncMock(side_effect=insert)
    store.get = AsyncMock(return_value=stored_purchase())
    store.find_line = AsyncMock(return_value=stored_purchase().items[0])
    store.update_header = AsyncMock()
    store.list = AsyncMock(return_value=([], 0))
    return store


@pytest.fixture
def mock_catalog():
    catalog = AsyncMock()
    catalog.get_supplier = AsyncMock(return_value=MagicMock(id=1))
    catalog.get_customer = AsyncMock(return_value=MagicMock(id=2))
    catalog.find_missing_items = AsyncMock(return_value=[])
    return catalog


@pytest.fixture
def mock_ledger():
    return AsyncMock()


@pytest.fixture
def transaction():
    return FakeTransaction()


@pytest.fixture
def purchases(mock_store, mock_catalog, mock_ledger, transaction):
    return PurchaseTransactionManager(
        store=mock_store,
        catalog_store=mock_catalog,
        stock_ledger=mock_ledger,
        transaction=transaction,
        allow_negative_stock=False,
    )


@pytest.fixture
def sales(mock_store, mock_catalog, mock_ledger, transaction):
    return SaleTransactionManager(
        store=mock_store,
        catalog_store=mock_catalog,
        stock_ledger=mock_ledger,
        transaction=transaction,
    )


def purchase_request(**overrides) -> CreatePurchaseRequest:
    values = {
        "supplier_id": 1,
        "date": date(2024, 3, 1),
        "items": [TradeLineRequest(item_id=3, quantity=10, unit_price=5)],
    }
    values.update(overrides)
    return CreatePurchaseRequest(**values)


class TestCreateValidation:
    """Rejected requests never open a transaction."""

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"items": []}, "items"),
            ({"supplier_id": None}, "supplier_id"),
            ({"date": None}, "date"),
            ({"items": [TradeLineRequest(item_id=3, quantity=0, unit_price=5)]},
             "items[0].quantity"),
            ({"items": [TradeLineRequest(item_id=3, quantity=-2, unit_price=5)]},
             "items[0].quantity"),
            ({"items": [TradeLineRequest(quantity=1, unit_price=5)]}, "items[0].item_id"),
            ({"items": [TradeLineRequest(item_id=3, quantity=1, unit_price=-1)]},
             "items[0].unit_price"),
            ({"paid_amount": -5}, "paid_amount"),
            ({"total_amount": -1.0}, "total_amount"),
            ({"status": "shipped"}, "status"),
        ],
    )
    async def test_rejected(self, purchases, transaction, mock_store, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            await purchases.create(purchase_request(**overrides))

        assert exc_info.value.details["field"] == field
        assert transaction.opened == 0
        mock_store.insert.assert_not_awaited()


class TestCreate:
    async def test_records_one_movement_per_line(self, purchases, mock_ledger, transaction):
        request = purchase_request(items=[
            TradeLineRequest(item_id=3, quantity=10, unit_price=5),
            TradeLineRequest(item_id=4, quantity=2, unit_price=1.5),
        ])

        await purchases.create(request)

        assert transaction.committed == 1
        calls = mock_ledger.record.await_args_list
        assert [c.kwargs["quantity"] for c in calls] == [10, 2]
        assert all(c.kwargs["tx_type"] is StockTransactionType.PURCHASE for c in calls)
        assert all(c.kwargs["related_id"] == 7 for c in calls)

    async def test_total_defaults_to_line_sum(self, purchases, mock_store):
        request = purchase_request(items=[
            TradeLineRequest(item_id=3, quantity=10, unit_price=5),
            TradeLineRequest(item_id=4, quantity=2, unit_price=1.5),
        ])
        await purchases.create(request)

        inserted = mock_store.insert.await_args.args[1]
        assert inserted.total_amount == 53.0

    async def test_explicit_total_is_kept(self, purchases, mock_store):
        await purchases.create(purchase_request(total_amount=45.0))
        assert mock_store.insert.await_args.args[1].total_amount == 45.0

    async def test_sale_records_negative_quantities(self, sales, mock_ledger):
        request = CreateSaleRequest(
            customer_id=2,
            date=date(2024, 3, 2),
            items=[TradeLineRequest(item_id=3, quantity=4, unit_price=8)],
            status="paid",
        )
        await sales.create(request)

        call = mock_ledger.record.await_args
        assert call.kwargs["quantity"] == -4
        assert call.kwargs["tx_type"] is StockTransactionType.SALE

    async def test_unknown_supplier(self, purchases, mock_catalog, mock_store, transaction):
        mock_catalog.get_supplier.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await purchases.create(purchase_request())

        assert exc_info.value.code == "SUPPLIER_NOT_FOUND"
        assert transaction.committed == 0
        mock_store.insert.assert_not_awaited()

    async def test_unknown_item(self, purchases, mock_catalog, mock_ledger):
        mock_catalog.find_missing_items.return_value = [99]

        with pytest.raises(NotFoundError) as exc_info:
            await purchases.create(purchase_request())

        assert exc_info.value.code == "ITEM_NOT_FOUND"
        mock_ledger.record.assert_not_awaited()


class TestUpdate:
    async def test_empty_update_rejected(self, purchases, transaction):
        with pytest.raises(ValidationError):
            await purchases.update(7, UpdatePurchaseRequest())
        assert transaction.opened == 0

    async def test_null_field_rejected(self, purchases, transaction):
        with pytest.raises(ValidationError):
            await purchases.update(7, UpdatePurchaseRequest(status=None))
        assert transaction.opened == 0

    async def test_bad_status_rejected(self, purchases, transaction):
        with pytest.raises(ValidationError):
            await purchases.update(7, UpdatePurchaseRequest(status="void"))
        assert transaction.opened == 0

    @pytest.mark.parametrize(
        ("request_", "field"),
        [
            (UpdatePurchaseRequest(total_amount=-10.0), "total_amount"),
            (UpdatePurchaseRequest(items=[]), "items"),
        ],
    )
    async def test_rejected_before_transaction(self, purchases, transaction, request_, field):
        with pytest.raises(ValidationError) as exc_info:
            await purchases.update(7, request_)

        assert exc_info.value.details["field"] == field
        assert transaction.opened == 0

    async def test_header_fields(self, purchases, mock_store, mock_ledger):
        await purchases.update(7, UpdatePurchaseRequest(paid_amount=20, status="partial"))

        mock_store.update_header.assert_awaited_once_with(
            CONN, 7, {"paid_amount": 20, "status": TransactionStatus.PARTIAL}
        )
        mock_ledger.adjust.assert_not_awaited()

    async def test_quantity_change_adjusts_by_difference(self, purchases, mock_store, mock_ledger):
        request = UpdatePurchaseRequest(items=[LineQuantityUpdate(item_id=3, quantity=6)])
        await purchases.update(7, request)

        mock_store.update_line_quantity.assert_awaited_once_with(CONN, 70, 6, 5.0)
        call = mock_ledger.adjust.await_args
        assert call.kwargs["delta"] == -4
        assert call.kwargs["allow_negative"] is False

    async def test_sale_quantity_increase_takes_more_stock(self, sales, mock_ledger):
        await sales.update(7, UpdateSaleRequest(items=[LineQuantityUpdate(item_id=3, quantity=12)]))
        assert mock_ledger.adjust.await_args.kwargs["delta"] == -2

    async def test_unchanged_quantity_is_skipped(self, purchases, mock_store, mock_ledger):
        await purchases.update(7, UpdatePurchaseRequest(items=[LineQuantityUpdate(item_id=3, quantity=10)]))
        mock_store.update_line_quantity.assert_not_awaited()
        mock_ledger.adjust.assert_not_awaited()

    async def test_unknown_line(self, purchases, mock_store):
        mock_store.find_line.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            await purchases.update(7, UpdatePurchaseRequest(items=[LineQuantityUpdate(item_id=9, quantity=1)]))
        assert exc_info.value.code == "PURCHASE_ITEM_NOT_FOUND"

    async def test_missing_purchase(self, purchases, mock_store):
        mock_store.get.return_value = None
        with pytest.raises(NotFoundError):
            await purchases.update(7, UpdatePurchaseRequest(paid_amount=1))
        mock_store.update_header.assert_not_awaited()


class TestDelete:
    async def test_reverses_each_item_once_then_deletes(self, purchases, mock_store, mock_ledger):
        order = MagicMock()
        mock_ledger.reverse.side_effect = lambda *a, **kw: order("reverse", kw["item_id"])
        mock_store.delete_lines.side_effect = lambda *a: order("delete_lines")
        mock_store.delete.side_effect = lambda *a: order("delete")
        mock_store.get.return_value = stored_purchase(items=[
            PurchaseItem(id=70, item_id=3, quantity=10, unit_price=5),
            PurchaseItem(id=71, item_id=3, quantity=2, unit_price=5),
            PurchaseItem(id=72, item_id=4, quantity=1, unit_price=5),
        ])

        await purchases.delete(7)

        assert [c.args for c in order.call_args_list] == [
            ("reverse", 3),
            ("reverse", 4),
            ("delete_lines",),
            ("delete",),
        ]

    async def test_allow_negative_applies_to_purchases_only(
        self, mock_store, mock_catalog, mock_ledger, transaction
    ):
        kwargs = dict(
            store=mock_store,
            catalog_store=mock_catalog,
            stock_ledger=mock_ledger,
            transaction=transaction,
            allow_negative_stock=True,
        )
        await PurchaseTransactionManager(**kwargs).delete(7)
        assert mock_ledger.reverse.await_args.kwargs["allow_negative"] is True

        await SaleTransactionManager(**kwargs).delete(7)
        assert mock_ledger.reverse.await_args.kwargs["allow_negative"] is False

    async def test_missing(self, purchases, mock_store, mock_ledger):
        mock_store.get.return_value = None
        with pytest.raises(NotFoundError):
            await purchases.delete(7)
        mock_ledger.reverse.assert_not_awaited()
        mock_store.delete.assert_not_awaited()


class TestQueries:
    async def test_get_missing(self, purchases, mock_store):
        mock_store.get.return_value = None
        with pytest.raises(NotFoundError):
            await purchases.get(1)

    async def test_list_translates_page(self, purchases, mock_store):
        await purchases.list(party_id=1, status="paid", page=3, limit=10)

        kwargs = mock_store.list.await_args.kwargs
        assert kwargs["limit"] == 10
        assert kwargs["offset"] == 20
        assert kwargs["status"] is TransactionStatus.PAID

    async def test_list_rejects_inverted_dates(self, purchases, mock_store):
        with pytest.raises(ValidationError):
            await purchases.list(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))
        mock_store.list.assert_not_awaited()

    async def test_list_rejects_bad_status(self, purchases):
        with pytest.raises(ValidationError):
            await purchases.list(status="lost")


class TestBaseManager:
    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            TradeTransactionManager(allow_negative_stock=False)
