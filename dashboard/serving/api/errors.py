"""
API Error Handling

Maps read model failures, and request parameters FastAPI cannot parse, to
the same `{kind, operation, message}` error body.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from dashboard.readmodel.exceptions import ErrorKind, ReadModelError, ValidationError

logger = structlog.get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 422,
    ErrorKind.DATASTORE: 503,
}


async def read_model_exception_handler(request: Request, exc: ReadModelError) -> JSONResponse:
    logger.warning(
        "Read operation failed",
        path=request.url.path,
        kind=exc.kind.value,
        operation=exc.operation,
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content=exc.to_dict(),
    )


def describe_errors(errors: List[Dict[str, Any]]) -> str:
    """One line per bad parameter, e.g. "page: Input should be a valid integer" """
    parts = []
    for error in errors:
        # loc starts with the source ("query", "path"); the rest names the field
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request."


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    endpoint = request.scope.get("endpoint")
    error = ValidationError(getattr(endpoint, "__name__", "request"), describe_errors(exc.errors()))
    
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        operation=error.operation,
        error=error.message,
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND[error.kind],
        content=error.to_dict(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReadModelError, read_model_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
