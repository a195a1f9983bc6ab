"""SQLAlchemy implementation of UserRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pdao_auth import PasswordHashingService
from pdao_contracts import normalize_contact_number

from pdao.domain.shared import DuplicateError, ServerError
from pdao.domain.user import Address, User, UserRepository
from pdao.infrastructure.persistence.sqlalchemy.models import UNIQUE_FIELDS, UserModel

logger = logging.getLogger(__name__)


def duplicate_field(error: IntegrityError) -> str | None:
    """Name the unique field behind an integrity error, if any.

    SQLite reports ``UNIQUE constraint failed: users.email`` while
    PostgreSQL names the constraint (``uq_users_email``); both are
    recognised.
    """
    text = str(error.orig) if error.orig is not None else str(error)
    for field in UNIQUE_FIELDS:
        if f"users.{field}" in text or f"uq_users_{field}" in text:
            return field
    return None


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(
        self,
        session: AsyncSession,
        password_service: PasswordHashingService,
    ) -> None:
        self._session = session
        self._password_service = password_service

    async def find_by_id(self, id: UUID) -> User | None:
        model = await self._find_model_by_id(id)
        return self._map_to_domain(model) if model else None

    async def find_by_user_id(self, user_id: str) -> User | None:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        return await self._find_one(stmt)

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        return await self._find_one(stmt)

    async def find_by_contact_number(self, contact_number: str) -> User | None:
        stmt = select(UserModel).where(
            UserModel.contact_number == normalize_contact_number(contact_number),
        )
        return await self._find_one(stmt)

    async def exists_by_email(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def exists_by_contact_number(self, contact_number: str) -> bool:
        return await self.find_by_contact_number(contact_number) is not None

    async def save(self, user: User) -> None:
        user.prepare_for_save(self._password_service.hash)
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.user_id)
            else:
                self._session.add(self._map_to_model(user))
                logger.info("Created user: %s", user.user_id)

            await self._session.flush()
        except IntegrityError as e:
            field = duplicate_field(e)
            if field is None:
                raise
            logger.info("Duplicate %s rejected by storage for %s", field, user.user_id)
            raise DuplicateError(field) from e
        except DBAPIError as e:
            logger.exception("Database error while saving user %s", user.user_id)
            raise ServerError(details={"error": str(e)}) from e

    async def _find_one(self, stmt) -> User | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def _find_model_by_id(self, id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            user_id=model.user_id,
            form_id=model.form_id,
            first_name=model.first_name,
            middle_name=model.middle_name,
            last_name=model.last_name,
            suffix=model.suffix,
            sex=model.sex,
            age=model.age,
            date_of_birth=model.date_of_birth,
            address=Address.from_dict(model.address),
            contact_number=model.contact_number,
            avatar_url=model.avatar_url,
            email=model.email,
            password_hash=model.password,
            role=model.role,
            status=model.status,
            is_verified=model.is_verified,
            is_email_verified=model.is_email_verified,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        model = UserModel(id=user.id, created_at=user.created_at)
        self._update_model(model, user)
        return model

    def _update_model(self, model: UserModel, user: User) -> None:
        model.user_id = user.user_id
        model.form_id = user.form_id
        model.first_name = user.first_name
        model.middle_name = user.middle_name
        model.last_name = user.last_name
        model.suffix = user.suffix
        model.sex = user.sex.value
        model.age = user.age
        model.date_of_birth = user.date_of_birth
        model.address = user.address.to_dict()
        model.contact_number = user.contact_number
        model.avatar_url = user.avatar_url
        model.email = user.email
        model.password = user.password_hash
        model.role = user.role.value
        model.status = user.status.value
        model.is_verified = user.is_verified
        model.is_email_verified = user.is_email_verified
        model.updated_at = user.updated_at
