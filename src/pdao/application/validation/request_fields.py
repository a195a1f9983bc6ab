"""Per-field request rules, checked before the structural schema pass.

Each rule addresses one (possibly dotted) field of the raw JSON body and
knows how to sanitize it: trimming, lower-casing e-mails and HTML-escaping
free text. Escaping is applied only after the structural pass has
accepted the record, so length limits always count the characters the
user typed.
"""

from __future__ import annotations

import copy
import html
from dataclasses import dataclass
from datetime import date
from enum import Enum
from re import Pattern
from typing import Any
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from pdao_contracts import (
    CONTACT_NUMBER_PATTERN,
    AddressType,
    FieldError,
    Sex,
    Suffix,
)
from pdao_contracts.constants import (
    CONTACT_NUMBER_MESSAGE,
    DATE_PATTERN,
    EMAIL_MAX_LENGTH,
    LOCALITY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    STREET_MAX_LENGTH,
    ZIP_CODE_PATTERN,
)

from pdao.domain.shared.time import today_utc


class FieldKind(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    DATE = "date"
    URL = "url"


@dataclass(frozen=True)
class FieldRule:
    """Checks and sanitization for one request field.

    A missing or blank value only fails when ``required`` is set; an
    optional blank value is left untouched. Non-string values are left to
    the structural pass.
    """

    path: str
    label: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    min_length: int = 0
    max_length: int | None = None
    length_message: str | None = None
    choices: tuple[str, ...] = ()
    choices_message: str | None = None
    pattern: Pattern[str] | None = None
    pattern_message: str | None = None
    escape: bool = False

    def check(self, value: Any) -> tuple[str | None, Any]:
        """Return ``(error message or None, sanitized value)``."""
        if self._is_blank(value):
            if self.required:
                return f"{self.label} is required", value
            return None, value
        if not isinstance(value, str):
            return None, value

        if self.kind is not FieldKind.PASSWORD:
            value = value.strip()
        if self.kind is FieldKind.EMAIL:
            value = value.lower()

        return self._first_violation(value), value

    def _is_blank(self, value: Any) -> bool:
        if value is None or value == "":
            return True
        # Passwords are taken verbatim, so spaces count as characters
        return (
            self.kind is not FieldKind.PASSWORD
            and isinstance(value, str)
            and not value.strip()
        )

    def _first_violation(self, value: str) -> str | None:
        if len(value) < self.min_length:
            return self.length_message or (
                f"{self.label} must be at least {self.min_length} characters"
            )
        if self.max_length is not None and len(value) > self.max_length:
            return self.length_message or (
                f"{self.label} cannot exceed {self.max_length} characters"
            )
        if self.choices and value not in self.choices:
            return self.choices_message or f"Invalid {self.label.lower()} value"
        if self.pattern is not None and not self.pattern.match(value):
            return self.pattern_message or f"Invalid {self.label.lower()} format"
        if self.kind is FieldKind.EMAIL:
            return _email_violation(value)
        if self.kind is FieldKind.DATE:
            return _date_violation(value, self.label)
        if self.kind is FieldKind.URL:
            return _url_violation(value)
        return None


def _email_violation(value: str) -> str | None:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return "Must be a valid email"
    return None


def _date_violation(value: str, label: str) -> str | None:
    if not DATE_PATTERN.match(value):
        return "Must be a valid date (YYYY-MM-DD)"
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return "Must be a valid date (YYYY-MM-DD)"
    if parsed > today_utc():
        return f"{label} cannot be in the future"
    return None


def _url_violation(value: str) -> str | None:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return "Invalid URL format"
    return None


def _values(enum: type[Enum]) -> tuple[str, ...]:
    return tuple(member.value for member in enum)


def _name_rules(required: bool) -> list[FieldRule]:
    return [
        FieldRule(
            "first_name",
            "First name",
            required=required,
            min_length=1,
            max_length=NAME_MAX_LENGTH,
            length_message=f"First name must be 1-{NAME_MAX_LENGTH} characters",
            escape=True,
        ),
        FieldRule(
            "middle_name",
            "Middle name",
            max_length=NAME_MAX_LENGTH,
            escape=True,
        ),
        FieldRule(
            "last_name",
            "Last name",
            required=required,
            min_length=1,
            max_length=NAME_MAX_LENGTH,
            length_message=f"Last name must be 1-{NAME_MAX_LENGTH} characters",
            escape=True,
        ),
        FieldRule(
            "suffix",
            "Suffix",
            choices=_values(Suffix),
            choices_message="Invalid suffix format",
        ),
    ]


def _profile_rules(required: bool) -> list[FieldRule]:
    return [
        *_name_rules(required),
        FieldRule(
            "email",
            "Email",
            required=required,
            kind=FieldKind.EMAIL,
            max_length=EMAIL_MAX_LENGTH,
        ),
        FieldRule("date_of_birth", "Date of birth", required=required, kind=FieldKind.DATE),
        FieldRule(
            "sex",
            "Sex",
            required=required,
            choices=_values(Sex),
            choices_message="Invalid sex value",
        ),
        FieldRule(
            "contact_number",
            "Contact number",
            required=required,
            pattern=CONTACT_NUMBER_PATTERN,
            pattern_message=CONTACT_NUMBER_MESSAGE,
        ),
        FieldRule(
            "address.street",
            "Street",
            required=required,
            max_length=STREET_MAX_LENGTH,
            escape=True,
        ),
        *(
            FieldRule(
                f"address.{field}",
                label,
                required=required,
                max_length=LOCALITY_MAX_LENGTH,
                escape=True,
            )
            for field, label in (
                ("barangay", "Barangay"),
                ("city_municipality", "City/Municipality"),
                ("province", "Province"),
                ("region", "Region"),
            )
        ),
        FieldRule(
            "address.zip_code",
            "ZIP code",
            pattern=ZIP_CODE_PATTERN,
            pattern_message="ZIP code must be 4 digits",
        ),
        FieldRule("address.country", "Country"),
        FieldRule(
            "address.type",
            "Address type",
            choices=_values(AddressType),
            choices_message="Address type must be Permanent, Temporary, or Present",
        ),
    ]


_PASSWORD_RULE = FieldRule(
    "password",
    "Password",
    required=True,
    kind=FieldKind.PASSWORD,
    min_length=PASSWORD_MIN_LENGTH,
    max_length=PASSWORD_MAX_LENGTH,
)

REGISTRATION_RULES: tuple[FieldRule, ...] = (*_profile_rules(required=True), _PASSWORD_RULE)

LOGIN_RULES: tuple[FieldRule, ...] = (
    FieldRule("email", "Email", required=True, kind=FieldKind.EMAIL),
    FieldRule("password", "Password", required=True, kind=FieldKind.PASSWORD),
)

UPDATE_PROFILE_RULES: tuple[FieldRule, ...] = (
    *_profile_rules(required=False),
    FieldRule("avatar_url", "Avatar URL", kind=FieldKind.URL),
    FieldRule(
        "new_password",
        "New password",
        kind=FieldKind.PASSWORD,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
    ),
)


_MISSING = object()


def _get(payload: dict[str, Any], path: str) -> Any:
    current: Any = payload
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _set(payload: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    current = payload
    for part in parents:
        current = current[part]
    current[leaf] = value


def check_request_fields(
    payload: dict[str, Any],
    rules: tuple[FieldRule, ...],
) -> tuple[list[FieldError], dict[str, Any]]:
    """Run every rule against ``payload``.

    Returns
    -------
    The collected field errors (at most one per field) and a sanitized deep
    copy of the payload. The input dict is never modified.
    """
    cleaned = copy.deepcopy(payload)
    errors: list[FieldError] = []
    for rule in rules:
        value = _get(cleaned, rule.path)
        message, sanitized = rule.check(None if value is _MISSING else value)
        if message is not None:
            errors.append(FieldError(field=rule.path, message=message))
        elif value is not _MISSING and sanitized is not value:
            _set(cleaned, rule.path, sanitized)
    return errors, cleaned


def escaped_paths(rules: tuple[FieldRule, ...]) -> tuple[str, ...]:
    return tuple(rule.path for rule in rules if rule.escape)


def escape_text(value: Any) -> Any:
    return html.escape(value) if isinstance(value, str) else value
