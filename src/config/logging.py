"""
Structured logging configuration using structlog.

Every event carries the ledger it was written against (database file and
stock policy), and, while an HTTP request is being served, the request ID
bound by the logging middleware. Domain errors passed as ``error=`` are
expanded into their code and details so shortfalls and lookups can be
filtered without parsing messages.

JSON lines outside development, colored console output while developing.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from src.config.settings import Settings, get_settings
from src.core.exceptions import LedgerError


def ledger_context(settings: Settings) -> Processor:
    """Processor stamping the service and ledger configuration on each event."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "db": settings.storage.db_name,
        "allow_negative_stock": settings.ledger.allow_negative_stock,
    }

    def add_ledger_context(
        logger: logging.Logger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_ledger_context


def expand_ledger_error(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace a LedgerError under ``error`` with its message, code and details."""
    error = event_dict.get("error")
    if isinstance(error, LedgerError):
        event_dict["error"] = error.message
        event_dict["error_code"] = error.code
        details = {key: value for key, value in error.details.items() if value is not None}
        if details:
            event_dict["error_details"] = details
    return event_dict


def bind_request_context(**values: Any) -> None:
    """Attach values to every event logged while the current request runs."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for the application."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        expand_ledger_error,
        ledger_context(settings),
    ]

    if settings.environment == "development":
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # Driver statements and access lines stay quiet
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
