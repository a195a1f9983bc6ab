"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire application. All errors that should reach a client inherit from
DomainException so the presentation layer can map them to a single
response shape.
"""

from enum import Enum
from typing import Any

from pdao_contracts import FieldError


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORM_ID_NOT_ALLOWED = "FORM_ID_NOT_ALLOWED"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Authentication Errors (401)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Authorization Errors (403)
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    ACCOUNT_NOT_ACTIVE = "ACCOUNT_NOT_ACTIVE"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Protocol Errors raised by the web framework
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    HTTP_ERROR = "HTTP_ERROR"

    # General Errors
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    field
        Name of the offending field, when the error concerns exactly one
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
        field: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.field = field

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"field={self.field!r})"
        )


class ValidationError(DomainException):
    """Raised when a payload fails validation.

    Carries every violated rule; validation is all-or-nothing.
    """

    def __init__(
        self,
        errors: list[FieldError],
        message: str = "Validation failed",
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(message, code)
        self.errors = errors


class DuplicateError(DomainException):
    """Raised when a unique field (email, contact number, user id) is taken."""

    MESSAGES = {
        "email": (
            "This email is already registered. "
            "Please use a different email or try logging in."
        ),
        "contact_number": (
            "This contact number is already registered. "
            "Please use a different number."
        ),
    }
    DEFAULT_MESSAGE = "Registration failed. Please try again."

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(
            message or self.MESSAGES.get(field, self.DEFAULT_MESSAGE),
            ErrorCode.DUPLICATE_ENTRY,
            field=field,
        )


class AuthenticationError(DomainException):
    """Raised when credentials or a bearer token are not acceptable (401)."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        code: ErrorCode = ErrorCode.INVALID_CREDENTIALS,
        field: str | None = None,
    ) -> None:
        super().__init__(message, code, field=field)


class AuthorizationError(DomainException):
    """Raised when an identified user may not proceed (403)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INSUFFICIENT_ROLE,
    ) -> None:
        super().__init__(message, code)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ServerError(DomainException):
    """Raised when an infrastructure dependency fails."""

    def __init__(
        self,
        message: str = "Server error. Please try again later.",
        code: ErrorCode = ErrorCode.DATABASE_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
