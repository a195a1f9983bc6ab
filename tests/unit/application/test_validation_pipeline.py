"""Unit tests for the two-pass request validation pipeline."""

import pytest

from pdao_contracts import FORM_ID_MESSAGE, errors_by_field

from pdao.application.validation import (
    LOGIN_RULES,
    REGISTRATION_RULES,
    check_request_fields,
    validate_login,
    validate_profile_update,
    validate_registration,
)
from pdao.domain.shared import ErrorCode, ValidationError


def _errors(validate, payload) -> dict[str, str]:
    with pytest.raises(ValidationError) as exc_info:
        validate(payload)
    return errors_by_field(exc_info.value.errors)


class TestRequestFieldPass:
    """The per-field rules on the raw body."""

    def test_clean_payload_has_no_errors(self, registration_payload):
        errors, _ = check_request_fields(registration_payload, REGISTRATION_RULES)
        assert errors == []

    def test_input_is_not_modified(self, registration_payload):
        registration_payload["email"] = " JUAN@EXAMPLE.COM "
        _, cleaned = check_request_fields(registration_payload, REGISTRATION_RULES)

        assert registration_payload["email"] == " JUAN@EXAMPLE.COM "
        assert cleaned["email"] == "juan@example.com"

    def test_trims_text(self, registration_payload):
        registration_payload["address"]["street"] = "  123 Rizal Street  "
        _, cleaned = check_request_fields(registration_payload, REGISTRATION_RULES)
        assert cleaned["address"]["street"] == "123 Rizal Street"

    def test_password_is_not_trimmed(self):
        _, cleaned = check_request_fields(
            {"email": "a@example.com", "password": " spaced "},
            LOGIN_RULES,
        )
        assert cleaned["password"] == " spaced "

    def test_whitespace_is_blank_except_for_passwords(self):
        errors, _ = check_request_fields(
            {"email": "   ", "password": " " * 8},
            LOGIN_RULES,
        )
        assert errors_by_field(errors) == {"email": "Email is required"}

    def test_required_fields(self):
        errors, _ = check_request_fields({}, LOGIN_RULES)
        assert errors_by_field(errors) == {
            "email": "Email is required",
            "password": "Password is required",
        }

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("first_name", "x" * 51, "First name must be 1-50 characters"),
            ("last_name", "x" * 51, "Last name must be 1-50 characters"),
            ("suffix", "Esq.", "Invalid suffix format"),
            ("sex", "Unknown", "Invalid sex value"),
            ("email", "not-an-email", "Must be a valid email"),
            ("date_of_birth", "1990/05/15", "Must be a valid date (YYYY-MM-DD)"),
            ("date_of_birth", "1990-02-30", "Must be a valid date (YYYY-MM-DD)"),
            ("date_of_birth", "2999-01-01", "Date of birth cannot be in the future"),
        ],
    )
    def test_field_messages(self, registration_payload, field, value, message):
        registration_payload[field] = value
        errors, _ = check_request_fields(registration_payload, REGISTRATION_RULES)
        assert errors_by_field(errors)[field] == message

    def test_contact_number_message(self, registration_payload):
        registration_payload["contact_number"] = "0917123456"
        errors, _ = check_request_fields(registration_payload, REGISTRATION_RULES)
        assert errors_by_field(errors)["contact_number"] == (
            "Phone number must be exactly 11 digits starting with 09 (09XXXXXXXXX)"
        )

    def test_address_rules(self, registration_payload):
        registration_payload["address"].update(zip_code="12", type="Home", barangay="")
        errors = errors_by_field(
            check_request_fields(registration_payload, REGISTRATION_RULES)[0],
        )

        assert errors["address.zip_code"] == "ZIP code must be 4 digits"
        assert errors["address.type"] == (
            "Address type must be Permanent, Temporary, or Present"
        )
        assert errors["address.barangay"] == "Barangay is required"

    def test_blank_zip_code_is_allowed(self, registration_payload):
        registration_payload["address"]["zip_code"] = ""
        errors, _ = check_request_fields(registration_payload, REGISTRATION_RULES)
        assert errors == []


class TestValidateRegistration:
    def test_returns_typed_record(self, registration_payload):
        request = validate_registration(registration_payload)
        assert request.email == "juan.delacruz@example.com"
        assert request.address.city_municipality == "Dagupan City"

    def test_whitespace_password_counts_its_spaces(self, registration_payload):
        registration_payload["password"] = " " * 8
        assert validate_registration(registration_payload).password == " " * 8

        registration_payload["password"] = " " * 7
        assert _errors(validate_registration, registration_payload) == {
            "password": "Password must be at least 8 characters",
        }

    def test_form_id_is_the_only_error(self, registration_payload):
        registration_payload["form_id"] = "FORM-20240101-ABCDE"
        registration_payload["email"] = "broken"

        with pytest.raises(ValidationError) as exc_info:
            validate_registration(registration_payload)

        error = exc_info.value
        assert error.code is ErrorCode.FORM_ID_NOT_ALLOWED
        assert error.message == "Invalid registration data"
        assert [(e.field, e.message) for e in error.errors] == [
            ("form_id", FORM_ID_MESSAGE),
        ]

    def test_null_form_id_also_rejected(self, registration_payload):
        registration_payload["form_id"] = None
        assert _errors(validate_registration, registration_payload) == {
            "form_id": FORM_ID_MESSAGE,
        }

    def test_escapes_free_text_after_validation(self, registration_payload):
        """A 50-character name with markup passes and comes back escaped."""
        name = "<b>" + "x" * 43 + "</b>"
        assert len(name) == 50
        registration_payload["first_name"] = name
        registration_payload["address"]["street"] = "Purok 1 & 2"

        request = validate_registration(registration_payload)

        assert request.first_name == "&lt;b&gt;" + "x" * 43 + "&lt;/b&gt;"
        assert request.address.street == "Purok 1 &amp; 2"

    def test_structural_pass_runs_after_field_pass(self, registration_payload):
        registration_payload["age"] = 3
        assert _errors(validate_registration, registration_payload) == {
            "age": "Age does not match date of birth",
        }

    def test_failure_is_all_or_nothing(self, registration_payload):
        registration_payload["first_name"] = ""
        registration_payload["sex"] = "Unknown"
        errors = _errors(validate_registration, registration_payload)
        assert set(errors) == {"first_name", "sex"}

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_non_object_body(self, payload):
        assert _errors(validate_registration, payload) == {
            "body": "Request body must be a JSON object",
        }


class TestValidateLogin:
    def test_lowercases_email(self):
        request = validate_login({"email": "JUAN@Example.com", "password": "x"})
        assert request.email == "juan@example.com"

    def test_invalid_email(self):
        assert _errors(validate_login, {"email": "nope", "password": "x"}) == {
            "email": "Must be a valid email",
        }

    def test_whitespace_password_is_kept(self):
        request = validate_login({"email": "juan@example.com", "password": " " * 8})
        assert request.password == " " * 8


class TestValidateProfileUpdate:
    def test_drops_password_and_identifiers(self):
        request = validate_profile_update(
            {
                "password": "NewPassword1",
                "user_id": "PDAO-20240101-AAAAA",
                "form_id": "FORM-20240101-AAAAA",
                "first_name": "Pedro",
            },
        )
        assert request.changes() == {"first_name": "Pedro"}

    def test_blank_optional_fields_pass_field_rules(self):
        """Absent fields are not required on update."""
        assert validate_profile_update({}).changes() == {}

    def test_avatar_url(self):
        assert _errors(validate_profile_update, {"avatar_url": "ftp://x"}) == {
            "avatar_url": "Invalid URL format",
        }

    def test_new_password_length(self):
        errors = _errors(
            validate_profile_update,
            {"current_password": "OldPassword1", "new_password": "short"},
        )
        assert errors == {"new_password": "New password must be at least 8 characters"}

    def test_escapes_nested_address(self):
        request = validate_profile_update({"address": {"street": "A & B"}})
        assert request.changes() == {"address": {"street": "A &amp; B"}}
