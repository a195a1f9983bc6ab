"""Profile service: reading and updating a user's own record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdao_auth import PasswordHashingService
from pdao_contracts import UpdateProfileRequest, normalize_contact_number

from pdao.domain.shared import AuthenticationError, DuplicateError, EntityNotFoundError
from pdao.domain.user import User

if TYPE_CHECKING:
    from pdao.domain.user import UserRepository

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service

    async def get_by_user_id(self, user_id: str) -> User:
        user = await self._user_repo.find_by_user_id(user_id)
        if user is None:
            msg = f"User {user_id} not found"
            raise EntityNotFoundError(msg, details={"user_id": user_id})
        return user

    async def update_profile(self, user: User, request: UpdateProfileRequest) -> User:
        """Apply a validated update to ``user`` and persist it.

        Raises
        ------
        DuplicateError
            The new e-mail or contact number belongs to another user
        AuthenticationError
            A new password was given with a wrong ``current_password``
        """
        changes = request.changes()

        email = changes.get("email")
        if email and email != user.email:
            other = await self._user_repo.find_by_email(email)
            if other is not None and other.id != user.id:
                raise DuplicateError("email")

        contact_number = changes.get("contact_number")
        if contact_number and normalize_contact_number(contact_number) != user.contact_number:
            other = await self._user_repo.find_by_contact_number(contact_number)
            if other is not None and other.id != user.id:
                raise DuplicateError("contact_number")

        if request.new_password is not None:
            current = request.current_password or ""
            if not user.password_hash or not self._password_service.verify(
                current,
                user.password_hash,
            ):
                raise AuthenticationError(
                    "Current password is incorrect",
                    field="current_password",
                )
            user.set_password(request.new_password)

        user.apply_update(changes)
        await self._user_repo.save(user)

        logger.info("Profile updated: %s", user.user_id)
        return user
