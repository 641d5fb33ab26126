"""
Database Connection Management

Async engine lifecycle with SQLAlchemy 2.0: initialization, health checks,
and graceful shutdown.
"""

import time
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy import text

from dashboard.config import get_settings

logger = structlog.get_logger(__name__)

# Global engine
_engine: Optional[AsyncEngine] = None


async def init_database(url: Optional[str] = None) -> AsyncEngine:
    """
    Initialize the database engine.
    
    Every read checks out its own connection for the lifetime of a single
    query, so no pool is kept on our side.
    
    Args:
        url: Override for the configured database URL
    
    Returns:
        AsyncEngine: The initialized database engine
    """
    global _engine
    
    if _engine is not None:
        logger.warning("Database already initialized")
        return _engine
    
    settings = get_settings()
    _engine = create_async_engine(
        url or settings.database.async_url,
        echo=settings.database.echo,
        pool_pre_ping=True,
        poolclass=NullPool,
    )
    
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info(
            "Database connection established",
            host=settings.database.host,
            database=settings.database.db,
        )
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        await _engine.dispose()
        _engine = None
        raise
    
    return _engine


async def close_database() -> None:
    """Dispose the engine and its connections."""
    global _engine
    
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        logger.info("Database engine disposed")


def get_engine() -> AsyncEngine:
    """
    Get the database engine.
    
    Raises:
        RuntimeError: If database is not initialized
    """
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _engine


async def check_database_health() -> dict:
    """
    Check database health status.
    
    Returns:
        dict: Health status with latency information
    """
    try:
        start = time.perf_counter()
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000
        
        return {
            "status": "healthy",
            "latency_ms": round(latency_ms, 2),
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
