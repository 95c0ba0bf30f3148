"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from src.api.middleware.error_handler import setup_exception_handlers
from src.api.routes import (
    catalog_router,
    health_router,
    payments_router,
    purchases_router,
    receipts_router,
    reports_router,
    sales_router,
)
from src.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    from src.infrastructure.storage.sqlite import close_pool, get_pool
    from src.infrastructure.storage.sqlite.migrations import run_migrations

    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        db_path=str(settings.storage.db_path),
        allow_negative_stock=settings.ledger.allow_negative_stock,
    )

    results = await run_migrations()
    failed = [r for r in results if not r.success]
    if failed:
        logger.error("database_init_failed", version=failed[0].version, error=failed[0].error)
        raise RuntimeError(f"Migration {failed[0].version} failed: {failed[0].error}")
    logger.info("database_initialized", applied=len(results))

    await get_pool()
    logger.info("connection_pool_ready")

    logger.info("application_started")

    yield

    logger.info("application_stopping")
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title="Shop Ledger API",
        description="Purchases, sales, payments and receipts with derived stock and balances",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(catalog_router)
    app.include_router(purchases_router)
    app.include_router(sales_router)
    app.include_router(payments_router)
    app.include_router(receipts_router)
    app.include_router(reports_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {"status": "healthy", "version": settings.app_version}

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
