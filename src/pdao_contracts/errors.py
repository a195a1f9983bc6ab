"""Field error shape shared by the API responses and the client forms."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from pdao_contracts.constants import FIELD_LABELS

_VALUE_ERROR_PREFIX = "Value error, "


class FieldError(BaseModel):
    """A single violated rule, addressed by dotted field path."""

    field: str
    message: str


def _label(field: str) -> str:
    return FIELD_LABELS.get(field, field.rsplit(".", 1)[-1].replace("_", " ").capitalize())


def _message_for(field: str, error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return f"{_label(field)} is required"
    if error_type == "enum":
        return f"Invalid {_label(field).lower()} value"
    if error_type in ("model_type", "dict_type", "model_attributes_type"):
        return f"{_label(field)} must be an object"
    if error_type.startswith("url"):
        return "Invalid URL format"
    if error_type in ("string_type", "int_type", "int_parsing", "float_type"):
        return f"{_label(field)} has an invalid type"
    message = str(error.get("msg", "Invalid value"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX) :]
    return message


def field_errors_from_pydantic(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ``ValidationError`` into ``{field, message}`` items."""
    errors: list[FieldError] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()))
        errors.append(FieldError(field=field, message=_message_for(field, error)))
    return errors


def errors_by_field(errors: list[FieldError]) -> dict[str, str]:
    """Collapse an error list to the first message per field."""
    result: dict[str, str] = {}
    for error in errors:
        result.setdefault(error.field, error.message)
    return result
