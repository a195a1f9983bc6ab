"""Authentication services.

Provides password hashing and JWT token management.
"""

from pdao_auth.services.jwt_service import JWTService
from pdao_auth.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
    "JWTService",
]
