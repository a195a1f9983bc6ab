"""Unit tests for the User aggregate."""

from datetime import date
from unittest.mock import Mock

import pytest

from pdao_contracts import USER_ID_PATTERN, Sex, UserRole, UserStatus

from pdao.domain.user import Address, User


def _address() -> Address:
    return Address(
        street="123 Rizal Street",
        barangay="Bonuan Binloc",
        city_municipality="Dagupan City",
        province="Pangasinan",
        region="Region I",
    )


def _register(**overrides) -> User:
    fields = {
        "first_name": "Juan",
        "middle_name": "Santos",
        "last_name": "Dela Cruz",
        "suffix": "Jr.",
        "sex": "Male",
        "date_of_birth": "1990-05-15",
        "address": _address(),
        "contact_number": "+63 917 123 4567",
        "email": " Juan@Example.com ",
        "password": "SecurePass123",
    }
    fields.update(overrides)
    return User.register(**fields)


class TestUserRegister:
    """Tests for User.register."""

    def test_starts_pending_unverified_user(self):
        user = _register()

        assert user.status is UserStatus.PENDING
        assert user.role is UserRole.USER
        assert user.form_id is None
        assert user.is_verified is False
        assert user.is_email_verified is False
        assert not user.is_active

    def test_generates_user_id(self):
        user = _register(today=date(2024, 6, 1))
        assert USER_ID_PATTERN.match(user.user_id)

    def test_normalizes_contact_and_email(self):
        user = _register()
        assert user.contact_number == "09171234567"
        assert user.email == "juan@example.com"

    def test_password_is_pending_until_save(self):
        user = _register()
        assert user.password_hash is None
        assert user.password_modified

    def test_derived_fields(self):
        user = _register()
        assert user.full_name == "Juan Santos Dela Cruz Jr."
        assert user.age_display == f"{user.age} years"
        assert user.is_pwd_verified is False
        assert user.sex is Sex.MALE


class TestPrepareForSave:
    """The pre-save hook: hash once, recompute age, normalize contact."""

    def test_hashes_new_password_once(self):
        user = _register()
        hasher = Mock(return_value="hashed")

        user.prepare_for_save(hasher, today=date(2024, 6, 1))
        user.prepare_for_save(hasher, today=date(2024, 6, 1))

        hasher.assert_called_once_with("SecurePass123")
        assert user.password_hash == "hashed"
        assert not user.password_modified

    def test_unchanged_password_not_rehashed(self):
        user = User.reconstitute(
            first_name="Maria",
            last_name="Clara",
            sex="Female",
            date_of_birth=date(2000, 2, 29),
            address=_address(),
            contact_number="09181234567",
            email="maria@example.com",
            user_id="PDAO-20240101-ABCDE",
            password_hash="existing-hash",
            age=1,
        )
        hasher = Mock()

        user.prepare_for_save(hasher, today=date(2023, 3, 1))

        hasher.assert_not_called()
        assert user.password_hash == "existing-hash"
        assert user.age == 23

    def test_recomputes_age(self):
        user = _register(date_of_birth="1990-06-02")
        user.prepare_for_save(Mock(return_value="h"), today=date(2024, 6, 1))
        assert user.age == 33

    def test_set_password_marks_modified(self):
        user = _register()
        user.prepare_for_save(Mock(return_value="first"))
        user.set_password("AnotherPass456")
        hasher = Mock(return_value="second")

        user.prepare_for_save(hasher)

        hasher.assert_called_once_with("AnotherPass456")
        assert user.password_hash == "second"


class TestStatusTransitions:
    def test_first_login_activates_pending(self):
        user = _register()
        before = user.updated_at

        user.record_login()

        assert user.status is UserStatus.ACTIVE
        assert user.updated_at >= before

    def test_login_keeps_other_statuses(self):
        user = _register()
        user.change_status(UserStatus.INACTIVE)
        user.record_login()
        assert user.status is UserStatus.INACTIVE

    def test_mark_verified(self):
        user = _register()
        user.mark_verified("FORM-20240601-ABCDE")
        assert user.form_id == "FORM-20240601-ABCDE"
        assert user.is_pwd_verified is True

    def test_change_role(self):
        user = _register()
        user.change_role("Staff")
        assert user.role is UserRole.STAFF

    def test_unknown_status_rejected(self):
        user = _register()
        with pytest.raises(ValueError):
            user.change_status("Deleted")


class TestApplyUpdate:
    def test_updates_plain_fields(self):
        user = _register()
        user.apply_update(
            {
                "first_name": "Pedro",
                "email": "PEDRO@example.com",
                "contact_number": "639181234567",
                "sex": "Other",
                "date_of_birth": "1991-01-01",
            },
        )

        assert user.first_name == "Pedro"
        assert user.email == "pedro@example.com"
        assert user.contact_number == "09181234567"
        assert user.sex is Sex.OTHER
        assert user.date_of_birth == date(1991, 1, 1)

    def test_merges_partial_address(self):
        user = _register()
        user.apply_update({"address": {"street": "New Street", "zip_code": "2401"}})

        assert user.address.street == "New Street"
        assert user.address.zip_code == "2401"
        assert user.address.barangay == "Bonuan Binloc"

    def test_ignores_credentials_and_identifiers(self):
        user = _register()
        user_id = user.user_id
        user.apply_update({"user_id": "PDAO-20990101-ZZZZZ", "password": "x", "role": "Admin"})

        assert user.user_id == user_id
        assert user.role is UserRole.USER

    def test_none_values_are_skipped(self):
        user = _register()
        user.apply_update({"first_name": None})
        assert user.first_name == "Juan"


class TestEquality:
    def test_identity_by_id(self):
        user = _register()
        same = User.reconstitute(
            id=user.id,
            first_name="Other",
            last_name="Name",
            sex="Female",
            date_of_birth="1980-01-01",
            address=_address(),
            contact_number="09991234567",
            email="other@example.com",
            user_id=user.user_id,
        )
        assert user == same
        assert hash(user) == hash(same)
        assert user != _register()
