"""
Read Model Errors

Failures surfaced to callers carry a kind, the operation name and a fixed
message. Datastore detail stays in the logs.
"""

import functools
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, TypeVar

import structlog

from dashboard.database.store import QueryExecutionError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories"""
    DATASTORE = "datastore"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


class ReadModelError(Exception):
    """Base class for failures of a public read operation."""
    
    kind: ErrorKind
    
    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.message = message
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "operation": self.operation,
            "message": self.message,
        }
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(operation={self.operation!r}, message={self.message!r})"


class DatastoreError(ReadModelError):
    """The underlying query failed (connectivity, syntax, constraint)."""
    kind = ErrorKind.DATASTORE


class NotFoundError(ReadModelError):
    """A single-entity lookup matched no rows."""
    kind = ErrorKind.NOT_FOUND


class ValidationError(ReadModelError):
    """An argument was rejected before any query was issued."""
    kind = ErrorKind.VALIDATION


def read_operation(message: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Error boundary for a public read operation.
    
    Store failures are logged with the operation name and replaced by a
    DatastoreError carrying only `message`. NotFoundError and ValidationError
    pass through untouched.
    
    Args:
        message: Fixed, caller-facing failure message
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        operation = func.__name__
        
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except QueryExecutionError as e:
                logger.error(
                    "Database error",
                    operation=operation,
                    error=str(e),
                    error_type=type(e).__name__,
                    cause=repr(e.__cause__) if e.__cause__ else None,
                )
                raise DatastoreError(operation, message) from None
        
        return wrapper
    
    return decorator
