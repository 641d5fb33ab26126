"""
API Module
"""
from .dependencies import get_read_model
from .errors import register_exception_handlers
from .middleware import RequestLoggingMiddleware

__all__ = [
    "get_read_model",
    "register_exception_handlers",
    "RequestLoggingMiddleware",
]
