"""API route modules."""

from src.api.routes.catalog import router as catalog_router
from src.api.routes.health import router as health_router
from src.api.routes.payments import router as payments_router
from src.api.routes.purchases import router as purchases_router
from src.api.routes.receipts import router as receipts_router
from src.api.routes.reports import router as reports_router
from src.api.routes.sales import router as sales_router

__all__ = [
    "health_router",
    "catalog_router",
    "purchases_router",
    "sales_router",
    "payments_router",
    "receipts_router",
    "reports_router",
]
