"""Two-pass validation of untyped request payloads.

1. Request-field pass: per-field rules on the raw JSON body. A ``form_id``
   key on registration short-circuits everything else. Any error stops
   the pipeline here.
2. Structural pass: the canonical pydantic model from ``pdao_contracts``
   validates types, ranges and cross-field rules.

Both passes report the same ``{field, message}`` list through
``ValidationError``; the caller either gets a fully typed record or
nothing.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from pdao_contracts import (
    FORM_ID_MESSAGE,
    FieldError,
    LoginRequest,
    RegistrationRequest,
    UpdateProfileRequest,
    field_errors_from_pydantic,
)

from pdao.application.validation.request_fields import (
    LOGIN_RULES,
    REGISTRATION_RULES,
    UPDATE_PROFILE_RULES,
    FieldRule,
    check_request_fields,
    escape_text,
    escaped_paths,
)
from pdao.domain.shared import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_ID_FIELD = "form_id"
INVALID_REGISTRATION_MESSAGE = "Invalid registration data"


def _require_object(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError(
            [FieldError(field="body", message="Request body must be a JSON object")],
        )
    return payload


def _escape_path(model: BaseModel, parts: list[str]) -> BaseModel:
    head, *rest = parts
    current = getattr(model, head, None)
    if current is None:
        return model
    if rest:
        replacement = _escape_path(current, rest)
    else:
        replacement = escape_text(current)
    return model.model_copy(update={head: replacement})


def _run(
    payload: Any,
    rules: tuple[FieldRule, ...],
    model: type[ModelT],
) -> ModelT:
    data = _require_object(payload)

    errors, cleaned = check_request_fields(data, rules)
    if errors:
        logger.debug("Request-field pass rejected %s: %d error(s)", model.__name__, len(errors))
        raise ValidationError(errors)

    try:
        record = model.model_validate(cleaned)
    except pydantic.ValidationError as e:
        logger.debug("Structural pass rejected %s", model.__name__)
        raise ValidationError(field_errors_from_pydantic(e)) from e

    for path in escaped_paths(rules):
        record = _escape_path(record, path.split("."))
    return record


def validate_registration(payload: Any) -> RegistrationRequest:
    """Validate a registration body.

    Raises
    ------
    ValidationError
        With only the dedicated ``form_id`` error when that key is present
        (whatever its value), otherwise with every violated rule.
    """
    data = _require_object(payload)
    if FORM_ID_FIELD in data:
        raise ValidationError(
            [FieldError(field=FORM_ID_FIELD, message=FORM_ID_MESSAGE)],
            message=INVALID_REGISTRATION_MESSAGE,
            code=ErrorCode.FORM_ID_NOT_ALLOWED,
        )
    return _run(data, REGISTRATION_RULES, RegistrationRequest)


def validate_login(payload: Any) -> LoginRequest:
    return _run(payload, LOGIN_RULES, LoginRequest)


def validate_profile_update(payload: Any) -> UpdateProfileRequest:
    """Validate a profile update; ``password``, ``user_id`` and ``form_id`` are dropped."""
    data = {
        key: value
        for key, value in _require_object(payload).items()
        if key not in ("password", "user_id", FORM_ID_FIELD)
    }
    return _run(data, UPDATE_PROFILE_RULES, UpdateProfileRequest)
