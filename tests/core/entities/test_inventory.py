"""Tests for inventory entities."""

from datetime import date

from src.core.entities.inventory import (
    Item,
    StockTransaction,
    StockTransactionType,
    round_quantity,
)


class TestStockTransactionType:
    def test_sign(self):
        assert StockTransactionType.PURCHASE.sign == 1
        assert StockTransactionType.SALE.sign == -1

    def test_values(self):
        assert StockTransactionType("purchase") is StockTransactionType.PURCHASE
        assert StockTransactionType.SALE.value == "sale"


class TestItem:
    def test_defaults(self):
        item = Item(name="Widget", unit="pcs")
        assert item.id is None
        assert item.opening_stock == 0.0
        assert item.current_stock == 0.0
        assert item.base_price == 0.0

    def test_stock_is_rounded(self):
        item = Item(name="Flour", unit="kg", opening_stock=0.1 + 0.2)
        assert item.opening_stock == 0.3


def test_round_quantity():
    assert round_quantity(0.3 - 0.1) == 0.2
    assert round_quantity(1.23456789) == 1.234568


class TestStockTransaction:
    def test_signed_quantity(self):
        movement = StockTransaction(
            item_id=1,
            type=StockTransactionType.SALE,
            quantity=-4,
            related_id=9,
            date=date(2024, 3, 1),
        )
        assert movement.quantity == -4
        assert movement.type is StockTransactionType.SALE
