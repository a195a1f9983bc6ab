"""Authentication exceptions.

These exceptions are raised by the pdao_auth package and are translated
into domain errors by the application layer (AuthenticationService and
the API dependencies).
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is malformed or its signature is wrong."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a JWT token is well-formed but past its expiry."""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet length requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)

