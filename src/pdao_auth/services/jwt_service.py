"""JWT token service.

Tokens carry the user's storage identity and role and expire after a
fixed number of days; there are no refresh tokens.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from pdao_auth.exceptions import InvalidTokenError, TokenExpiredError
from pdao_auth.schemas import TokenPayload


class JWTService:
    """Issues and checks the HS256 bearer tokens handed out on register and login.

    >>> service = JWTService(secret_key="change-me")
    >>> token = service.create_access_token(user.id, "Staff")
    >>> service.verify_token(token).role
    'Staff'
    """

    DEFAULT_EXPIRE_DAYS = 7
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("userId", "role", "iat", "exp")

    def __init__(self, secret_key: str, expire_days: int = DEFAULT_EXPIRE_DAYS):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        expire_days
            Days until a token expires (default 7)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(days=expire_days)

    def create_access_token(
        self,
        user_id: UUID,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed access token with ``userId`` and ``role`` claims.

        Parameters
        ----------
        user_id
            The user's storage identity
        role
            The user's role value
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        payload = {
            "userId": str(user_id),
            "role": role,
            "iat": now,
            "exp": now + (expires_delta or self._expire),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Raises
        ------
        TokenExpiredError
            If the token is past its expiry
        InvalidTokenError
            If the token is malformed or its signature does not verify
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
            return TokenPayload(
                user_id=UUID(payload["userId"]),
                role=payload["role"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError from e
