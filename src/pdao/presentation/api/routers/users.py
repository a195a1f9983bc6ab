"""User profile router."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body

from pdao.application.validation import validate_profile_update
from pdao.domain.shared import DomainException
from pdao.presentation.api.dependencies import (
    CurrentUser,
    DBSession,
    ProfileServiceDep,
    StaffUser,
)
from pdao.presentation.api.schemas import UserResponse, to_public

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile", summary="Get own profile")
async def get_profile(user: CurrentUser) -> UserResponse:
    return UserResponse(user=to_public(user))


@router.patch(
    "/profile",
    summary="Update own profile",
    responses={
        400: {"description": "Validation failed or email/contact number taken"},
        401: {"description": "Not authenticated or wrong current password"},
    },
)
async def update_profile(
    payload: Annotated[Any, Body()],
    user: CurrentUser,
    profile_service: ProfileServiceDep,
    session: DBSession,
) -> UserResponse:
    """
    Update profile fields of the current user.

    All fields are optional. ``password``, ``user_id`` and ``form_id`` are
    ignored; send ``current_password`` and ``new_password`` to change the
    password.
    """
    request = validate_profile_update(payload)

    try:
        user = await profile_service.update_profile(user, request)
        await session.commit()
    except DomainException:
        await session.rollback()
        raise

    return UserResponse(message="Profile updated successfully", user=to_public(user))


@router.get(
    "/{user_id}",
    summary="Look up a user by PDAO id",
    responses={
        403: {"description": "Requires role Admin, Supervisor or Staff"},
        404: {"description": "No such user"},
    },
)
async def get_user(
    user_id: str,
    _: StaffUser,
    profile_service: ProfileServiceDep,
) -> UserResponse:
    user = await profile_service.get_by_user_id(user_id)
    return UserResponse(user=to_public(user))
