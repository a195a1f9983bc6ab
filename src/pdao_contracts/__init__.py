"""PDAO Contracts - the registration contract shared by server and client.

Both sides import the same enums, limits, pydantic models and
normalization helpers from here, so the client's mirror validation can
never drift from what the API enforces.

Usage:
    from pdao_contracts import RegistrationRequest, field_errors_from_pydantic

    try:
        request = RegistrationRequest.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors = field_errors_from_pydantic(exc)
"""

from pdao_contracts.constants import (
    CONTACT_NUMBER_MESSAGE,
    CONTACT_NUMBER_PATTERN,
    DEFAULT_COUNTRY,
    FORM_ID_MESSAGE,
    FORM_ID_PATTERN,
    USER_ID_PATTERN,
)
from pdao_contracts.enums import AddressType, Sex, Suffix, UserRole, UserStatus
from pdao_contracts.errors import FieldError, errors_by_field, field_errors_from_pydantic
from pdao_contracts.normalization import (
    build_full_name,
    calculate_age,
    coerce_date,
    normalize_contact_number,
)
from pdao_contracts.schemas import (
    AddressIn,
    AddressOut,
    AddressUpdate,
    Coordinates,
    LoginRequest,
    RegistrationRequest,
    UpdateProfileRequest,
    UserPublic,
)

__all__ = [
    # Enums
    "AddressType",
    "Sex",
    "Suffix",
    "UserRole",
    "UserStatus",
    # Constants
    "CONTACT_NUMBER_MESSAGE",
    "CONTACT_NUMBER_PATTERN",
    "DEFAULT_COUNTRY",
    "FORM_ID_MESSAGE",
    "FORM_ID_PATTERN",
    "USER_ID_PATTERN",
    # Schemas
    "AddressIn",
    "AddressOut",
    "AddressUpdate",
    "Coordinates",
    "LoginRequest",
    "RegistrationRequest",
    "UpdateProfileRequest",
    "UserPublic",
    # Errors
    "FieldError",
    "errors_by_field",
    "field_errors_from_pydantic",
    # Normalization
    "build_full_name",
    "calculate_age",
    "coerce_date",
    "normalize_contact_number",
]
