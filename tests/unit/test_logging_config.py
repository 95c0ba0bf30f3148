"""Tests for the structlog processors and request logging context."""

import pytest
import structlog

from src.config import Settings, bind_request_context, clear_request_context
from src.config.logging import expand_ledger_error, ledger_context
from src.core.exceptions import InsufficientStockError, NotFoundError


class TestLedgerContext:
    def test_stamps_ledger_configuration(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("STORAGE_DB_NAME", "shop.db")
        monkeypatch.setenv("LEDGER_ALLOW_NEGATIVE_STOCK", "true")

        add_context = ledger_context(Settings())
        event = add_context(None, "info", {"event": "sale_created"})

        assert event["app"] == "Shop Ledger"
        assert event["environment"] == "production"
        assert event["db"] == "shop.db"
        assert event["allow_negative_stock"] is True

    def test_event_values_win(self):
        add_context = ledger_context(Settings())
        event = add_context(None, "info", {"event": "migration_applied", "db": "other.db"})
        assert event["db"] == "other.db"


class TestExpandLedgerError:
    def test_domain_error_is_flattened(self):
        error = InsufficientStockError(item_id=3, requested=5, available=2)

        event = expand_ledger_error(None, "warning", {"event": "request_error", "error": error})

        assert event["error"] == error.message
        assert event["error_code"] == "INSUFFICIENT_STOCK"
        # item_name was None and is left out
        assert event["error_details"] == {"item_id": 3, "requested": 5, "available": 2}

    def test_not_found(self):
        event = expand_ledger_error(
            None, "warning", {"event": "request_error", "error": NotFoundError("sale", 9)}
        )
        assert event["error_code"] == "SALE_NOT_FOUND"
        assert event["error_details"] == {"entity": "sale", "id": 9}

    def test_other_values_untouched(self):
        event = {"event": "request_failed", "error": "boom"}
        assert expand_ledger_error(None, "error", dict(event)) == event


def test_request_context_round_trip():
    clear_request_context()
    bind_request_context(request_id="abc123", path="/api/sales")
    try:
        assert structlog.contextvars.get_contextvars() == {
            "request_id": "abc123",
            "path": "/api/sales",
        }
    finally:
        clear_request_context()
    assert structlog.contextvars.get_contextvars() == {}
