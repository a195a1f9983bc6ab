"""Registration and login form state.

Forms validate locally with the very models the API uses, so a payload
that passes here only fails on the server for reasons the client cannot
know (duplicates, credentials, account status). Server errors are mapped
back onto ``field_errors`` keyed by the same dotted field paths.
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any

from pydantic import ValidationError

from pdao_contracts import (
    DEFAULT_COUNTRY,
    AddressType,
    FieldError,
    LoginRequest,
    RegistrationRequest,
    Sex,
    errors_by_field,
    field_errors_from_pydantic,
    normalize_contact_number,
)

from pdao_client.api_client import AuthResult, PDAOApiClient
from pdao_client.auth_store import AuthStore
from pdao_client.exceptions import ApiError

logger = logging.getLogger(__name__)

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"
CONFIRM_PASSWORD_REQUIRED_MESSAGE = "Confirm password is required"


class RegistrationStep(str, Enum):
    PERSONAL = "personal"
    CONTACT = "contact"
    ACCOUNT = "account"


STEPS: tuple[RegistrationStep, ...] = tuple(RegistrationStep)

# Top-level fields owned by each step; nested paths belong to their root
STEP_FIELDS: dict[RegistrationStep, tuple[str, ...]] = {
    RegistrationStep.PERSONAL: (
        "first_name",
        "middle_name",
        "last_name",
        "suffix",
        "sex",
        "date_of_birth",
        "age",
    ),
    RegistrationStep.CONTACT: ("contact_number", "address"),
    RegistrationStep.ACCOUNT: ("email", "password", "confirm_password"),
}

# Picker result keys and where they land on the address
_PICKED_ADDRESS_FIELDS = {
    "region": "region",
    "province": "province",
    "city": "city_municipality",
    "barangay": "barangay",
}


def _step_of(field: str) -> RegistrationStep | None:
    root = field.split(".", 1)[0]
    for step, fields in STEP_FIELDS.items():
        if root in fields:
            return step
    return None


def _apply_api_error(error: ApiError) -> dict[str, str]:
    if error.errors:
        return errors_by_field(error.errors)
    if error.field:
        return {error.field: error.message}
    return {}


def _empty_registration() -> dict[str, Any]:
    return {
        "first_name": "",
        "middle_name": "",
        "last_name": "",
        "suffix": "",
        "sex": Sex.OTHER.value,
        "date_of_birth": "",
        "contact_number": "",
        "address": {
            "street": "",
            "barangay": "",
            "city_municipality": "",
            "province": "",
            "region": "",
            "zip_code": "",
            "country": DEFAULT_COUNTRY,
            "type": AddressType.PERMANENT.value,
        },
        "email": "",
        "password": "",
        "confirm_password": "",
    }


class RegistrationForm:
    """
    Three-step registration form: personal details, contact and address,
    then account credentials.

    Parameters
    ----------
    client
        API client used by ``submit``
    store
        Session store that receives the new user and token on success
    """

    def __init__(self, client: PDAOApiClient, store: AuthStore):
        self._client = client
        self._store = store
        self.values = _empty_registration()
        self.step = RegistrationStep.PERSONAL
        self.field_errors: dict[str, str] = {}
        self.message: str | None = None

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def set_field(self, field: str, value: Any) -> None:
        """Set a (dotted) field and drop its pending error."""
        *parents, leaf = field.split(".")
        target = self.values
        for part in parents:
            target = target[part]
        target[leaf] = value
        self.field_errors.pop(field, None)

    def set_contact_number(self, text: str) -> None:
        """Normalize the contact number as it is typed."""
        self.set_field("contact_number", normalize_contact_number(text))

    def apply_address(self, address: dict[str, str]) -> None:
        """Take the cascading picker's result.

        Suitable as the picker's ``on_select`` callback.
        """
        for key, field in _PICKED_ADDRESS_FIELDS.items():
            if key in address:
                self.set_field(f"address.{field}", address[key])

    def reset(self) -> None:
        self.values = _empty_registration()
        self.step = RegistrationStep.PERSONAL
        self.field_errors = {}
        self.message = None

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def build_payload(self) -> dict[str, Any]:
        """Request body for ``/api/auth/register``.

        ``confirm_password`` stays on the client and ``form_id`` is never
        part of the body.
        """
        payload = copy.deepcopy(self.values)
        payload.pop("confirm_password", None)
        payload.pop("form_id", None)
        payload["email"] = payload["email"].strip().lower()
        return payload

    def _collect_errors(self) -> dict[str, str]:
        errors: list[FieldError] = []
        try:
            RegistrationRequest.model_validate(self.build_payload())
        except ValidationError as exc:
            errors = field_errors_from_pydantic(exc)

        found = errors_by_field(errors)
        confirm = self.values.get("confirm_password", "")
        if not confirm:
            found.setdefault("confirm_password", CONFIRM_PASSWORD_REQUIRED_MESSAGE)
        elif confirm != self.values.get("password"):
            found.setdefault("confirm_password", PASSWORD_MISMATCH_MESSAGE)
        return found

    def validate_step(self, step: RegistrationStep | None = None) -> bool:
        """Validate one step's fields; errors of other steps are left alone."""
        step = step or self.step
        step_errors = {
            field: message
            for field, message in self._collect_errors().items()
            if _step_of(field) is step
        }
        self.field_errors = {
            field: message
            for field, message in self.field_errors.items()
            if _step_of(field) is not step
        }
        self.field_errors.update(step_errors)
        return not step_errors

    def validate(self) -> bool:
        self.field_errors = self._collect_errors()
        return not self.field_errors

    def next_step(self) -> bool:
        """Advance when the current step is valid."""
        if not self.validate_step():
            return False
        index = STEPS.index(self.step)
        if index < len(STEPS) - 1:
            self.step = STEPS[index + 1]
        return True

    def previous_step(self) -> None:
        index = STEPS.index(self.step)
        if index > 0:
            self.step = STEPS[index - 1]

    def first_invalid_step(self) -> RegistrationStep | None:
        for step in STEPS:
            if any(_step_of(field) is step for field in self.field_errors):
                return step
        return None

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    async def submit(self) -> AuthResult | None:
        """Validate and post the registration.

        Returns the auth result on success. On failure ``field_errors`` and
        ``message`` describe what went wrong and None is returned.
        """
        self.message = None
        self._store.clear_error()
        if not self.validate():
            self.step = self.first_invalid_step() or self.step
            self.message = "Please check your inputs"
            return None

        self._store.set_loading(True)
        try:
            result = await self._client.register(self.build_payload())
        except ApiError as e:
            logger.info("Registration rejected (%d): %s", e.status_code, e.message)
            self.field_errors = _apply_api_error(e)
            self.step = self.first_invalid_step() or self.step
            self.message = e.message
            self._store.set_error(e.message)
            return None
        finally:
            self._store.set_loading(False)

        self._store.register(result.user, result.token)
        self.message = result.message
        return result


class LoginForm:
    """E-mail and password sign-in."""

    def __init__(self, client: PDAOApiClient, store: AuthStore):
        self._client = client
        self._store = store
        self.email = ""
        self.password = ""
        self.field_errors: dict[str, str] = {}
        self.message: str | None = None

    def set_email(self, value: str) -> None:
        self.email = value
        self.field_errors.pop("email", None)

    def set_password(self, value: str) -> None:
        self.password = value
        self.field_errors.pop("password", None)

    def validate(self) -> LoginRequest | None:
        try:
            request = LoginRequest.model_validate(
                {"email": self.email.strip().lower(), "password": self.password},
            )
        except ValidationError as exc:
            self.field_errors = errors_by_field(field_errors_from_pydantic(exc))
            return None
        self.field_errors = {}
        return request

    async def submit(self) -> AuthResult | None:
        self.message = None
        self._store.clear_error()
        request = self.validate()
        if request is None:
            return None

        self._store.set_loading(True)
        try:
            result = await self._client.login(request.email, request.password)
        except ApiError as e:
            logger.info("Login rejected (%d): %s", e.status_code, e.message)
            self.field_errors = _apply_api_error(e)
            self.message = e.message
            self._store.set_error(e.message)
            return None
        finally:
            self._store.set_loading(False)

        self._store.login(result.user, result.token)
        self.message = result.message
        return result
