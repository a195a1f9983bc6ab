"""Authentication service for registration, login and bearer tokens."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from pdao_auth import InvalidTokenError, JWTService, PasswordHashingService, TokenExpiredError
from pdao_contracts import LoginRequest, RegistrationRequest, UserRole, UserStatus

from pdao.domain.shared import (
    AuthenticationError,
    AuthorizationError,
    DuplicateError,
    ErrorCode,
)
from pdao.domain.user import Address, User

if TYPE_CHECKING:
    from pdao.domain.user import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

# Statuses that block login even with a correct password
_BLOCKED_LOGIN = {
    UserStatus.SUSPENDED: (
        "Your account has been suspended. Please contact support.",
        ErrorCode.ACCOUNT_SUSPENDED,
    ),
    UserStatus.INACTIVE: (
        "Your account is inactive. Please contact support.",
        ErrorCode.ACCOUNT_INACTIVE,
    ),
}


class AuthenticationService:
    """
    Application service for user authentication.

    Bridges the pdao_auth infrastructure (password hashing, JWT tokens)
    and the User aggregate:
    - Registration (duplicate checks, account creation, token)
    - Login (status gate, password check, Pending -> Active)
    - Bearer token resolution for protected endpoints
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    def _issue_token(self, user: User) -> str:
        return self._jwt_service.create_access_token(
            user_id=user.id,
            role=user.role.value,
        )

    async def register(self, request: RegistrationRequest) -> tuple[User, str]:
        """Create a Pending account and return it with a fresh token.

        Raises
        ------
        DuplicateError
            If the e-mail or contact number is already taken, whether found
            up front or reported by storage during creation
        """
        if await self._user_repo.exists_by_email(request.email):
            raise DuplicateError("email")
        if await self._user_repo.exists_by_contact_number(request.contact_number):
            raise DuplicateError("contact_number")

        user = User.register(
            first_name=request.first_name,
            middle_name=request.middle_name,
            last_name=request.last_name,
            suffix=request.suffix,
            sex=request.sex,
            date_of_birth=request.date_of_birth,
            address=Address.from_dict(request.address.model_dump()),
            contact_number=request.contact_number,
            email=request.email,
            password=request.password,
        )
        await self._user_repo.save(user)

        logger.info("User registered: %s", user.user_id)
        return user, self._issue_token(user)

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """Check credentials and account status, then issue a token.

        The status gate runs before the password check, so a suspended or
        inactive account is refused even with the right password.

        Raises
        ------
        AuthenticationError
            Unknown e-mail (``field="email"``) or wrong password
            (``field="password"``); the message is identical for both
        AuthorizationError
            Suspended or inactive account
        """
        user = await self._user_repo.find_by_email(request.email)
        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, field="email")

        blocked = _BLOCKED_LOGIN.get(user.status)
        if blocked is not None:
            message, code = blocked
            logger.info("Login refused for %s account %s", user.status.value, user.user_id)
            raise AuthorizationError(message, code)

        if not user.password_hash or not self._password_service.verify(
            request.password,
            user.password_hash,
        ):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, field="password")

        user.record_login()
        await self._user_repo.save(user)

        logger.info("User logged in: %s", user.user_id)
        return user, self._issue_token(user)

    async def authenticate_token(self, token: str | None) -> User:
        """Resolve a bearer token to an active user.

        Raises
        ------
        AuthenticationError
            Missing, invalid or expired token, or the user no longer exists
        AuthorizationError
            The account is not Active
        """
        if not token:
            raise AuthenticationError(
                "Access denied. No token provided.",
                ErrorCode.TOKEN_MISSING,
            )

        try:
            payload = self._jwt_service.verify_token(token)
        except TokenExpiredError as e:
            raise AuthenticationError("Token expired", ErrorCode.TOKEN_EXPIRED) from e
        except InvalidTokenError as e:
            logger.warning("Invalid token: %s", e)
            raise AuthenticationError("Invalid token", ErrorCode.TOKEN_INVALID) from e

        user = await self._user_repo.find_by_id(payload.user_id)
        if user is None:
            logger.warning("User not found for token: %s", payload.user_id)
            raise AuthenticationError("User not found", ErrorCode.USER_NOT_FOUND)

        if not user.is_active:
            raise AuthorizationError(
                f"Account is {user.status.value.lower()}. Please contact support.",
                ErrorCode.ACCOUNT_NOT_ACTIVE,
            )
        return user

    @staticmethod
    def authorize(user: User, roles: Iterable[UserRole]) -> User:
        """Allow ``user`` only if it holds one of ``roles``."""
        allowed = list(roles)
        if user.role not in allowed:
            names = ", ".join(role.value for role in allowed)
            raise AuthorizationError(
                f"Access denied. Required roles: {names}",
                ErrorCode.INSUFFICIENT_ROLE,
            )
        return user
