"""
API Routes Module
"""
from .health import router as health_router
from .overview import router as overview_router
from .invoices import router as invoices_router
from .customers import router as customers_router

__all__ = [
    "health_router",
    "overview_router",
    "invoices_router",
    "customers_router",
]
