"""
FastAPI Application

Main entry point for the Billing Dashboard API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from dashboard.config import get_settings
from dashboard.config.logging import configure_logging
from dashboard.database.connection import init_database, close_database
from dashboard.serving.api import RequestLoggingMiddleware, register_exception_handlers
from dashboard.serving.api.routes import (
    health_router,
    overview_router,
    invoices_router,
    customers_router,
)

settings = get_settings()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting Billing Dashboard API")
    
    try:
        await init_database()
    except Exception as e:
        logger.warning(f"Database init failed: {e}")
    
    yield
    
    logger.info("Shutting down...")
    await close_database()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Billing Dashboard API",
        description="Read-only revenue, invoice and customer queries for the billing dashboard",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    
    register_exception_handlers(app)
    
    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(overview_router, prefix="/api/v1/dashboard", tags=["Dashboard"])
    app.include_router(invoices_router, prefix="/api/v1/invoices", tags=["Invoices"])
    app.include_router(customers_router, prefix="/api/v1/customers", tags=["Customers"])
    
    @app.get("/api/v1/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "Billing Dashboard API",
            "version": settings.version,
            "environment": settings.app_env,
        }
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
