"""Input checks shared by the transaction managers.

Everything here runs before a transaction is opened, so a failure leaves the
database untouched.
"""

from collections.abc import Sequence
from typing import Any

from src.core.entities.account import PaymentMethod
from src.core.entities.trade import TransactionStatus
from src.core.exceptions import ValidationError


def require(field: str, value: Any) -> Any:
    """Reject a missing value."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(field, "is required")
    return value


def require_positive(field: str, value: float | None) -> float:
    require(field, value)
    if value <= 0:
        raise ValidationError(field, "must be greater than 0", value)
    return value


def require_non_negative(field: str, value: float | None) -> float:
    require(field, value)
    if value < 0:
        raise ValidationError(field, "must not be negative", value)
    return value


def parse_status(value: str | TransactionStatus | None, field: str = "status") -> TransactionStatus:
    require(field, value)
    try:
        return TransactionStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in TransactionStatus)
        raise ValidationError(field, f"must be one of: {allowed}", value) from None


def parse_method(value: str | PaymentMethod | None, field: str = "method") -> PaymentMethod:
    require(field, value)
    try:
        return PaymentMethod(value)
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(field, f"must be one of: {allowed}", value) from None


def validate_new_lines(lines: Sequence[Any] | None) -> list[Any]:
    """Lines of a new purchase or sale: non-empty, each complete and positive."""
    if not lines:
        raise ValidationError("items", "at least one line is required")
    for index, line in enumerate(lines):
        require(f"items[{index}].item_id", line.item_id)
        require_positive(f"items[{index}].quantity", line.quantity)
        require_non_negative(f"items[{index}].unit_price", line.unit_price)
    return list(lines)


def validate_line_changes(lines: Sequence[Any]) -> list[Any]:
    """Quantity edits on existing lines."""
    for index, line in enumerate(lines):
        require(f"items[{index}].item_id", line.item_id)
        require_positive(f"items[{index}].quantity", line.quantity)
    return list(lines)


def set_fields(request: Any) -> dict[str, Any]:
    """Fields explicitly present on a partial update request."""
    return {name: getattr(request, name) for name in request.model_fields_set}


def reject_nulls(fields: dict[str, Any], nullable: Sequence[str] = ()) -> None:
    for name, value in fields.items():
        if value is None and name not in nullable:
            raise ValidationError(name, "cannot be null")


def page_window(page: int, limit: int) -> tuple[int, int]:
    """(limit, offset) for a 1-based page."""
    if page < 1:
        raise ValidationError("page", "must be 1 or greater", page)
    if limit < 1:
        raise ValidationError("limit", "must be 1 or greater", limit)
    return limit, (page - 1) * limit
