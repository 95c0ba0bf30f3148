"""
Domain exceptions for the ledger.

Four kinds reach callers: validation failures (nothing written), missing
records, stock shortfalls, and database failures (transaction rolled back).
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(LedgerError):
    """Input validation failed before any write was attempted."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class NotFoundError(LedgerError):
    """A referenced record does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity.capitalize()} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(LedgerError):
    """A stock movement would drive an item below zero."""

    def __init__(
        self,
        item_id: int,
        requested: float,
        available: float,
        item_name: str | None = None,
    ):
        label = f'"{item_name}" (ID: {item_id})' if item_name else f"ID {item_id}"
        super().__init__(
            f"Insufficient stock for item {label}. "
            f"Available: {available:g}, requested: {requested:g}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "item_name": item_name,
                "requested": requested,
                "available": available,
            },
        )


class DatabaseError(LedgerError):
    """Database operation failed; the enclosing transaction was rolled back."""

    def __init__(self, operation: str, error: str, retryable: bool = False):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error, "retryable": retryable},
        )
        self.retryable = retryable
