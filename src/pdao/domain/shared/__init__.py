"""Shared domain building blocks."""

from pdao.domain.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    DuplicateError,
    EntityNotFoundError,
    ErrorCode,
    ServerError,
    ValidationError,
)
from pdao.domain.shared.time import ensure_tz_aware, today_utc, utc_now

__all__ = [
    # Exceptions
    "AuthenticationError",
    "AuthorizationError",
    "DomainException",
    "DuplicateError",
    "EntityNotFoundError",
    "ErrorCode",
    "ServerError",
    "ValidationError",
    # Time
    "ensure_tz_aware",
    "today_utc",
    "utc_now",
]
