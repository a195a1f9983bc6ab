"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with one consistent
error format.

Error Response Format:
    {
        "success": false,
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "field": "email",                              # single-field errors
        "errors": [{"field": "...", "message": "..."}]  # validation errors
    }

Usage:
    from pdao.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdao_contracts import FieldError

from pdao.domain.shared import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from pdao.domain.shared.time import utc_now

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors and duplicates
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FORM_ID_NOT_ALLOWED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_ENTRY: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - credentials and bearer tokens
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_MISSING: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.USER_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden - account status and roles
    ErrorCode.ACCOUNT_SUSPENDED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_INACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_NOT_ACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorCode.INSUFFICIENT_ROLE: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ROUTE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 405 Method Not Allowed
    ErrorCode.METHOD_NOT_ALLOWED: status.HTTP_405_METHOD_NOT_ALLOWED,
    # 500 Internal Server Error
    ErrorCode.DATABASE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND

    return status.HTTP_400_BAD_REQUEST


def _http_error_code(status_code: int) -> ErrorCode:
    """Error code for an HTTP error raised by the framework itself."""
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorCode.METHOD_NOT_ALLOWED
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ErrorCode.INTERNAL_ERROR
    return ErrorCode.HTTP_ERROR


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    field: str | None = None,
    errors: list[FieldError] | None = None,
    **extra: Any,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {"success": False, "message": message, "code": code}
    if field is not None:
        content["field"] = field
    if errors is not None:
        content["errors"] = [error.model_dump() for error in errors]
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _request_errors(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        # Drop the leading "body" segment FastAPI adds to every location
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            FieldError(field=".".join(loc) or "body", message=str(error.get("msg"))),
        )
    return errors


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        ``details`` are logged for debugging but never returned.
        """
        status_code = _get_status_for_exception(exc)
        log = logger.error if status_code >= 500 else logger.info
        log(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            field=exc.field,
            errors=exc.errors if isinstance(exc, ValidationError) else None,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """A body that is not a JSON object never reaches the pipeline."""
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Validation failed",
            code=ErrorCode.VALIDATION_ERROR.value,
            errors=_request_errors(exc),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _create_error_response(
                status_code=status.HTTP_404_NOT_FOUND,
                message=f"Route not found: {request.method} {request.url.path}",
                code=ErrorCode.ROUTE_NOT_FOUND.value,
                path=request.url.path,
                timestamp=utc_now().isoformat(),
            )
        response = _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=_http_error_code(exc.status_code).value,
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        logger.exception(
            "Database error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Server error. Please try again later.",
            code=ErrorCode.DATABASE_UNAVAILABLE.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all: log the details, return a generic message."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code=ErrorCode.INTERNAL_ERROR.value,
        )
