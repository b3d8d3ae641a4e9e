"""Error Handlers — map storefront failures onto the JSON error envelope.

Invariants:
    - StorefrontError → its own status and to_response() envelope, with `details`
      (form field, upstream url, store operation) copied into the log record
    - PersistenceError adds Retry-After: the store was unavailable, the order was
      rolled back and can be resubmitted as is
    - RequestValidationError → 400 VALIDATION_ERROR; field names use the same form
      keys OrderValidationError reports (no "body." prefix)
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from storefront.core.errors import (
    ErrorCategory, ErrorSeverity, PersistenceError, StorefrontError,
)

logger = logging.getLogger(__name__)

PERSISTENCE_RETRY_AFTER_SECONDS = 5


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def storefront_error_handler(request: Request, exc: StorefrontError):
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "order_group_id": exc.context.order_group_id,
            "url": exc.context.url,
            "details": exc.details or None,
        },
    )
    headers = None
    if isinstance(exc, PersistenceError):
        headers = {"Retry-After": str(PERSISTENCE_RETRY_AFTER_SECONDS)}
    return JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": _field_name(e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request on {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _field_name(loc: tuple) -> str:
    """("body", "quantities", "25") -> "quantities.25"; query params keep their name."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path"):
        parts = parts[1:]
    return ".".join(parts) or "request"
