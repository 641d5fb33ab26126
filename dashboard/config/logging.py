"""
Logging for the billing dashboard.

Every event, whether from structlog or a stdlib logger (uvicorn, SQLAlchemy),
goes through one handler and carries the service identity fields.
"""

import logging
import sys
from typing import Any, Callable, MutableMapping, Optional, TextIO

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import ProcessorFormatter, add_log_level

from dashboard.config.settings import Settings, get_settings

EventDict = MutableMapping[str, Any]

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def service_context(settings: Settings) -> Callable[[Any, str, EventDict], EventDict]:
    """Processor stamping app name, environment and version on each event."""
    base = {
        "app_name": settings.app_name,
        "app_env": settings.app_env,
        "version": settings.version,
    }
    
    def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in base.items():
            event_dict.setdefault(key, value)
        return event_dict
    
    return add_service_context


def _renderer(log_format: str):
    if log_format == "json":
        return JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _adopt(logger_name: str, handler: logging.Handler, level: int) -> None:
    logger = logging.getLogger(logger_name)
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False


def configure_logging(log_level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog and the stdlib root logger.
    
    Args:
        log_level: Override for LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream, stdout by default
    """
    settings = get_settings()
    level_name = (log_level or settings.monitoring.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    
    # request_id comes in through contextvars, bound by the request middleware
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        service_context(settings),
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    
    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *pre_chain, ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=not settings.is_development,
    )
    
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(processor=_renderer(settings.monitoring.log_format), foreign_pre_chain=pre_chain)
    )
    
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    
    for name in SERVER_LOGGERS:
        _adopt(name, handler, level)
    # statement logging only when DATABASE echo is on
    _adopt("sqlalchemy.engine", handler, logging.INFO if settings.database.echo else logging.WARNING)
    
    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=level_name,
        format=settings.monitoring.log_format,
    )
