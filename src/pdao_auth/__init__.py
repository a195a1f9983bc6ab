"""PDAO Auth - authentication infrastructure.

Independent of the PDAO domain model; it handles:
- Password hashing (bcrypt)
- JWT token creation and verification

Usage:
    from pdao_auth import JWTService, PasswordHashingService

    passwords = PasswordHashingService(rounds=10)
    tokens = JWTService(secret_key=settings.jwt_secret_key.get_secret_value())
"""

from pdao_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenExpiredError,
    WeakPasswordError,
)
from pdao_auth.schemas import TokenPayload
from pdao_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "TokenExpiredError",
    "WeakPasswordError",
]
