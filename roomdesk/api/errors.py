"""Exception handlers that render faults as JSON error envelopes.

Envelopes:
    {"status": "error", "message": "..."}          most faults
    {"status": "error", "errors": {field: [...]}}  validation faults (422)
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roomdesk.services.errors import INTERNAL_ERROR_MESSAGE, ServiceError, ValidationFault

logger = structlog.get_logger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a ``{status: error, message}`` response."""
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def validation_response(errors: dict[str, list[str]]) -> JSONResponse:
    """Build a 422 ``{status: error, errors}`` response."""
    return JSONResponse(
        status_code=422,
        content={"status": "error", "errors": errors},
    )


def field_errors(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error entries by field name.

    The leading location segment (body, path, query) is dropped; nested
    locations are joined with dots.
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "path", "query", "header"):
            loc = loc[1:]
        field = ".".join(loc) or "body"

        if error.get("type") == "missing":
            message = f"{field} is required"
        else:
            message = error.get("msg", "Invalid value")
            if message.startswith(_VALUE_ERROR_PREFIX):
                message = message[len(_VALUE_ERROR_PREFIX):]

        grouped.setdefault(field, []).append(message)
    return grouped


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for service faults, request validation and HTTP errors."""

    @app.exception_handler(ValidationFault)
    async def handle_validation_fault(request: Request, exc: ValidationFault):
        logger.warning(
            "validation_fault",
            path=request.url.path,
            method=request.method,
            errors=exc.errors,
        )
        return validation_response(exc.errors)

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        log_fn = logger.error if exc.status_code >= 500 else logger.warning
        log_fn(
            "service_error",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            error_type=type(exc).__name__,
            message=exc.message,
            cause=repr(exc.__cause__) if exc.__cause__ is not None else None,
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = field_errors(exc.errors())
        logger.warning(
            "request_validation_error",
            path=request.url.path,
            method=request.method,
            fields=sorted(errors),
        )
        return validation_response(errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return error_response(500, INTERNAL_ERROR_MESSAGE)
