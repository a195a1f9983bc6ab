"""Request validation pipeline."""

from pdao.application.validation.pipeline import (
    validate_login,
    validate_profile_update,
    validate_registration,
)
from pdao.application.validation.request_fields import (
    LOGIN_RULES,
    REGISTRATION_RULES,
    UPDATE_PROFILE_RULES,
    FieldKind,
    FieldRule,
    check_request_fields,
)

__all__ = [
    "FieldKind",
    "FieldRule",
    "LOGIN_RULES",
    "REGISTRATION_RULES",
    "UPDATE_PROFILE_RULES",
    "check_request_fields",
    "validate_login",
    "validate_profile_update",
    "validate_registration",
]
