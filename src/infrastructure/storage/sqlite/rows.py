"""Helpers for turning SQLite rows into entities."""

from datetime import date, datetime
from typing import Any


def parse_date(value: str | None) -> date | None:
    """ISO date column to ``date``."""
    if not value:
        return None
    return date.fromisoformat(value[:10])


def parse_datetime(value: str | None) -> datetime | None:
    """``datetime('now')`` / ISO timestamp column to ``datetime``."""
    if not value:
        return None
    return datetime.fromisoformat(value)


def build_filters(conditions: list[tuple[str, Any]]) -> tuple[str, list[Any]]:
    """AND together the clauses whose value is not None.

    Returns the WHERE clause (empty when nothing applies) and its parameters.
    """
    clauses = []
    params: list[Any] = []
    for clause, value in conditions:
        if value is None:
            continue
        clauses.append(clause)
        params.append(value.isoformat() if isinstance(value, date) else value)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params
