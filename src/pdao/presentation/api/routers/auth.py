"""Authentication router for registration, login and the current user."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from pdao.application.validation import validate_login, validate_registration
from pdao.domain.shared import DomainException
from pdao.presentation.api.dependencies import AuthService, CurrentUser, DBSession
from pdao.presentation.api.schemas import AuthResponse, UserResponse, to_public

logger = logging.getLogger(__name__)

router = APIRouter()

# The raw body goes through the validation pipeline, not FastAPI's model binding
JsonBody = Annotated[Any, Body()]

REGISTERED_MESSAGE = (
    "Registration successful! Please check your email for verification instructions."
)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Validation failed or email/contact number taken"},
    },
)
async def register(
    payload: JsonBody,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """
    Register a PDAO account.

    The account starts ``Pending`` with role ``User``; ``form_id`` may not be
    sent at all.
    """
    request = validate_registration(payload)

    try:
        user, token = await auth_service.register(request)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    return AuthResponse(message=REGISTERED_MESSAGE, user=to_public(user), token=token)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid email or password"},
        403: {"description": "Account suspended or inactive"},
    },
)
async def login(
    payload: JsonBody,
    auth_service: AuthService,
    session: DBSession,
) -> AuthResponse:
    """Authenticate with email and password; a Pending account becomes Active."""
    request = validate_login(payload)

    try:
        user, token = await auth_service.login(request)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    return AuthResponse(message="Login successful", user=to_public(user), token=token)


@router.get(
    "/me",
    summary="Get current user",
    responses={401: {"description": "Missing, invalid or expired token"}},
)
async def me(user: CurrentUser) -> UserResponse:
    return UserResponse(user=to_public(user))
