"""Unit tests for ProfileService."""

from unittest.mock import AsyncMock, Mock

import pytest

from pdao_auth import PasswordHashingService
from pdao_contracts import UpdateProfileRequest, UserStatus

from pdao.application.services import ProfileService
from pdao.domain.shared import AuthenticationError, DuplicateError, EntityNotFoundError
from pdao.domain.user import Address, User


def _user(email: str = "juan@example.com", contact: str = "09171234567") -> User:
    return User.reconstitute(
        first_name="Juan",
        last_name="Dela Cruz",
        sex="Male",
        date_of_birth="1990-05-15",
        address=Address(
            street="123 Rizal Street",
            barangay="Bonuan Binloc",
            city_municipality="Dagupan City",
            province="Pangasinan",
            region="Region I",
        ),
        contact_number=contact,
        email=email,
        user_id="PDAO-20240601-ABCDE",
        password_hash="stored-hash",
        status=UserStatus.ACTIVE,
    )


class TestProfileService:
    def setup_method(self):
        self.user_repo = AsyncMock()
        self.user_repo.find_by_email.return_value = None
        self.user_repo.find_by_contact_number.return_value = None
        self.password_service = Mock(spec=PasswordHashingService)
        self.service = ProfileService(self.user_repo, self.password_service)

    async def test_get_by_user_id(self):
        user = _user()
        self.user_repo.find_by_user_id.return_value = user
        assert await self.service.get_by_user_id(user.user_id) is user

    async def test_get_by_user_id_missing(self):
        self.user_repo.find_by_user_id.return_value = None
        with pytest.raises(EntityNotFoundError):
            await self.service.get_by_user_id("PDAO-20240601-ZZZZZ")

    async def test_update_fields(self):
        user = _user()
        request = UpdateProfileRequest.model_validate(
            {"first_name": "Pedro", "address": {"zip_code": "2401"}},
        )

        updated = await self.service.update_profile(user, request)

        assert updated.first_name == "Pedro"
        assert updated.address.zip_code == "2401"
        self.user_repo.save.assert_awaited_once_with(user)

    async def test_email_taken_by_someone_else(self):
        self.user_repo.find_by_email.return_value = _user(email="taken@example.com")
        request = UpdateProfileRequest.model_validate({"email": "taken@example.com"})

        with pytest.raises(DuplicateError) as exc_info:
            await self.service.update_profile(_user(), request)

        assert exc_info.value.field == "email"

    async def test_same_email_is_not_a_duplicate(self):
        user = _user()
        request = UpdateProfileRequest.model_validate({"email": "JUAN@example.com"})

        await self.service.update_profile(user, request)

        self.user_repo.find_by_email.assert_not_called()

    async def test_contact_taken_by_someone_else(self):
        self.user_repo.find_by_contact_number.return_value = _user(contact="09181234567")
        request = UpdateProfileRequest.model_validate({"contact_number": "09181234567"})

        with pytest.raises(DuplicateError) as exc_info:
            await self.service.update_profile(_user(), request)

        assert exc_info.value.field == "contact_number"

    async def test_password_change(self):
        self.password_service.verify.return_value = True
        user = _user()
        request = UpdateProfileRequest.model_validate(
            {"current_password": "OldPassword1", "new_password": "NewPassword1"},
        )

        await self.service.update_profile(user, request)

        self.password_service.verify.assert_called_once_with("OldPassword1", "stored-hash")
        assert user.password_modified

    async def test_wrong_current_password(self):
        self.password_service.verify.return_value = False
        request = UpdateProfileRequest.model_validate(
            {"current_password": "WrongPassword1", "new_password": "NewPassword1"},
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.update_profile(_user(), request)

        assert exc_info.value.message == "Current password is incorrect"
        assert exc_info.value.field == "current_password"
        self.user_repo.save.assert_not_called()
