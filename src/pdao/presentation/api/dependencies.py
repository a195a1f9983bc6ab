"""FastAPI dependency injection for the PDAO API.

Provides dependencies for:
- Settings and the Database resource (both live on ``app.state``)
- Database sessions
- Authentication services and the current user (bearer token)
- Role guards
"""

import logging
from typing import Annotated, Any, AsyncGenerator, Callable, Coroutine

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pdao_auth import JWTService, PasswordHashingService
from pdao_config import Settings
from pdao_contracts import UserRole
from pdao_geo import PhilippineGeography, get_geography

from pdao.application.services import AuthenticationService, ProfileService
from pdao.domain.user import User
from pdao.infrastructure.persistence.sqlalchemy import Database, UserRepositorySQLAlchemy

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens; a missing header is reported by
# AuthenticationService rather than by FastAPI
security = HTTPBearer(auto_error=False)


def get_api_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_api_settings)]


def get_database(request: Request) -> Database:
    return request.app.state.database


DatabaseDep = Annotated[Database, Depends(get_database)]


async def get_db_session(database: DatabaseDep) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Routers commit explicitly; anything left uncommitted is rolled back
    when the session closes.
    """
    async with database.session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        expire_days=settings.jwt_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


def get_user_repository(
    session: DBSession,
    password_service: PasswordServiceDep,
) -> UserRepositorySQLAlchemy:
    return UserRepositorySQLAlchemy(session, password_service)


UserRepositoryDep = Annotated[UserRepositorySQLAlchemy, Depends(get_user_repository)]


def get_authentication_service(
    user_repository: UserRepositoryDep,
    password_service: PasswordServiceDep,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=user_repository,
        password_service=password_service,
        jwt_service=jwt_service,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


def get_profile_service(
    user_repository: UserRepositoryDep,
    password_service: PasswordServiceDep,
) -> ProfileService:
    return ProfileService(user_repository, password_service)


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_user(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    Resolve the bearer token to an active user.

    Raises
    ------
    AuthenticationError
        401 if the token is missing, invalid or expired, or the user is gone
    AuthorizationError
        403 if the account is not Active
    """
    token = credentials.credentials if credentials else None
    return await auth_service.authenticate_token(token)


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, User]]:
    """Build a dependency admitting only users holding one of ``roles``."""

    async def dependency(user: CurrentUser) -> User:
        return AuthenticationService.authorize(user, roles)

    return dependency


StaffUser = Annotated[
    User,
    Depends(require_roles(UserRole.ADMIN, UserRole.SUPERVISOR, UserRole.STAFF)),
]


# -----------------------------------------------------------------------------
# Reference Data
# -----------------------------------------------------------------------------


def get_geography_dataset() -> PhilippineGeography:
    return get_geography()


GeographyDep = Annotated[PhilippineGeography, Depends(get_geography_dataset)]
