"""Error Handlers - map every failure escaping a route onto the ApiError envelope.

Invariants:
    - All three handlers answer with ApiError.to_response(): code, message,
      category, severity, timestamp and context {path, api_version}
    - context.api_version is the version the versioning middleware resolved
      for the request (None when it never ran)
    - RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from versioned_api.core.errors import (
    ApiError, ErrorSeverity, InternalServerError, RequestDataError,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def error_response(
    request: Request, exc: ApiError, cause: BaseException | None = None,
) -> JSONResponse:
    """Fill the request context into exc, log it and render the envelope."""
    exc.context.path = exc.context.path or request.url.path
    if exc.context.api_version is None:
        exc.context.api_version = getattr(request.state, "api_version", None)
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code} on {exc.context.path}: {exc.message}",
        extra={"error_code": exc.code, "api_version": exc.context.api_version},
        exc_info=cause,
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(request, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    return error_response(request, RequestDataError(details))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # the original exception goes to the log only
    return error_response(request, InternalServerError(), cause=exc)
