"""Error Handlers — global exception handlers rendering the {data, errors} envelope.

Invariants:
    - SakeHackError → its own code and http_status
    - RequestValidationError → 400 VALIDATION_ERROR, one entry per failed field
    - HTTPException (unknown route, method) → envelope with the matching code
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - DatabaseError causes are logged, never rendered
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import (
    ErrorCode, InternalError, SakeHackError, ValidationError,
)

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_app_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _register_app_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SakeHackError)
    async def app_error_handler(request: Request, exc: SakeHackError):
        """Handle all domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc}",
            extra={
                "error_code": exc.code.value,
                "path": request.url.path,
                "request_id": _request_id(request),
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request binding errors as field-level validation errors."""
        error = build_validation_error(exc)
        logger.warning(
            f"Validation error on {request.url.path}: {error.fields}",
            extra={
                "error_code": error.code.value,
                "request_id": _request_id(request),
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.BAD_REQUEST)
        if exc.status_code >= 500:
            code = ErrorCode.INTERNAL_ERROR
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "data": None,
                "errors": [{"code": code.value, "message": str(exc.detail)}],
            },
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_response(),
        )


def build_validation_error(exc: RequestValidationError) -> ValidationError:
    """One message per field; the first failure of a field wins."""
    error = ValidationError()
    for e in exc.errors():
        field = _field_name(e.get("loc", ()))
        if field not in error.fields:
            error.add_field(field, e.get("msg", "invalid value"))
    return error


def _field_name(loc: tuple | list) -> str:
    parts = [str(p) for p in loc if p not in ("query", "body", "path", "header")]
    return ".".join(parts) or "request"
