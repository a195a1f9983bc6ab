"""Canonical request and response schemas.

These pydantic models are the single description of the registration
contract. The API validates request bodies with them and the client runs
the very same models for its mirror validation before submitting.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any, Callable
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationInfo,
    field_validator,
)

from pdao_contracts.constants import (
    AGE_MAX,
    CONTACT_NUMBER_MESSAGE,
    CONTACT_NUMBER_PATTERN,
    DATE_PATTERN,
    DEFAULT_COUNTRY,
    EMAIL_MAX_LENGTH,
    FORM_ID_MESSAGE,
    LOCALITY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    STREET_MAX_LENGTH,
    ZIP_CODE_PATTERN,
)
from pdao_contracts.enums import AddressType, Sex, Suffix, UserRole, UserStatus
from pdao_contracts.normalization import calculate_age


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def _text(label: str, max_length: int, *, required: bool = True) -> AfterValidator:
    def check(value: str) -> str:
        value = value.strip()
        if required and not value:
            raise ValueError(f"{label} is required")
        if len(value) > max_length:
            raise ValueError(f"{label} cannot exceed {max_length} characters")
        return value

    return AfterValidator(check)


def _check_email(value: str) -> str:
    value = value.strip().lower()
    if not value:
        raise ValueError("Email is required")
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email cannot exceed {EMAIL_MAX_LENGTH} characters")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Invalid email format") from None
    return value


def _password(label: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"{label} must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        if len(value) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"{label} cannot exceed {PASSWORD_MAX_LENGTH} characters")
        return value

    return AfterValidator(check)


def _check_contact_number(value: str) -> str:
    value = value.strip()
    if not CONTACT_NUMBER_PATTERN.match(value):
        raise ValueError(CONTACT_NUMBER_MESSAGE)
    return value


def _check_zip_code(value: str) -> str:
    value = value.strip()
    if value and not ZIP_CODE_PATTERN.match(value):
        raise ValueError("ZIP code must be 4 digits")
    return value


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        raise ValueError("Date must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError("Must be a valid date (YYYY-MM-DD)") from None


def _not_in_future(value: date) -> date:
    if value > _today():
        raise ValueError("Date of birth cannot be in the future")
    return value


def _default_if_blank(default: str) -> Callable[[Any], Any]:
    return lambda value: value or default


FirstName = Annotated[str, _text("First name", NAME_MAX_LENGTH)]
MiddleName = Annotated[str, _text("Middle name", NAME_MAX_LENGTH, required=False)]
LastName = Annotated[str, _text("Last name", NAME_MAX_LENGTH)]
Email = Annotated[str, AfterValidator(_check_email)]
ContactNumber = Annotated[str, AfterValidator(_check_contact_number)]
DateOfBirth = Annotated[date, BeforeValidator(_parse_date), AfterValidator(_not_in_future)]
Age = Annotated[int, Field(ge=0, le=AGE_MAX)]
Street = Annotated[str, _text("Street", STREET_MAX_LENGTH)]
Barangay = Annotated[str, _text("Barangay", LOCALITY_MAX_LENGTH)]
CityMunicipality = Annotated[str, _text("City/Municipality", LOCALITY_MAX_LENGTH)]
Province = Annotated[str, _text("Province", LOCALITY_MAX_LENGTH)]
Region = Annotated[str, _text("Region", LOCALITY_MAX_LENGTH)]
ZipCode = Annotated[str, AfterValidator(_check_zip_code)]
Country = Annotated[str, BeforeValidator(_default_if_blank(DEFAULT_COUNTRY))]


def _check_age_matches(age: int | None, info: ValidationInfo) -> int | None:
    dob = info.data.get("date_of_birth")
    if age and dob is not None and age != calculate_age(dob, _today()):
        raise ValueError("Age does not match date of birth")
    return age


class Coordinates(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class AddressIn(BaseModel):
    """Embedded address as submitted on registration."""

    model_config = ConfigDict(extra="ignore")

    street: Street
    barangay: Barangay
    city_municipality: CityMunicipality
    province: Province
    region: Region
    zip_code: ZipCode = ""
    country: Country = DEFAULT_COUNTRY
    type: AddressType = AddressType.PERMANENT
    coordinates: Coordinates | None = None


class AddressUpdate(BaseModel):
    """Partial address for profile updates."""

    model_config = ConfigDict(extra="ignore")

    street: Street | None = None
    barangay: Barangay | None = None
    city_municipality: CityMunicipality | None = None
    province: Province | None = None
    region: Region | None = None
    zip_code: ZipCode | None = None
    country: Country | None = None
    type: AddressType | None = None
    coordinates: Coordinates | None = None


class RegistrationRequest(BaseModel):
    """Registration payload.

    ``form_id`` may never be supplied, whatever its value; status, role and
    verification flags are not part of the contract and are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: FirstName
    middle_name: MiddleName = ""
    last_name: LastName
    suffix: Suffix = Suffix.NONE
    sex: Sex = Sex.OTHER
    date_of_birth: DateOfBirth
    age: Age | None = None
    address: AddressIn
    contact_number: ContactNumber
    email: Email
    password: Annotated[str, _password("Password")]
    form_id: Any = Field(default=None, exclude=True)

    @field_validator("form_id")
    @classmethod
    def _reject_form_id(cls, value: Any) -> Any:
        raise ValueError(FORM_ID_MESSAGE)

    @field_validator("age")
    @classmethod
    def _age_matches(cls, value: int | None, info: ValidationInfo) -> int | None:
        return _check_age_matches(value, info)


class LoginRequest(BaseModel):
    email: Email
    password: str

    @field_validator("password")
    @classmethod
    def _require_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UpdateProfileRequest(BaseModel):
    """Profile update: every registration field optional.

    ``password``, ``user_id`` and ``form_id`` are not accepted here and are
    silently dropped; credentials change through the
    ``current_password``/``new_password`` pair.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: FirstName | None = None
    middle_name: MiddleName | None = None
    last_name: LastName | None = None
    suffix: Suffix | None = None
    sex: Sex | None = None
    date_of_birth: DateOfBirth | None = None
    age: Age | None = None
    address: AddressUpdate | None = None
    contact_number: ContactNumber | None = None
    email: Email | None = None
    avatar_url: HttpUrl | None = None
    current_password: str | None = None
    new_password: Annotated[str, _password("New password")] | None = None

    @field_validator("age")
    @classmethod
    def _age_matches(cls, value: int | None, info: ValidationInfo) -> int | None:
        return _check_age_matches(value, info)

    @field_validator("new_password")
    @classmethod
    def _check_password_pair(
        cls,
        value: str | None,
        info: ValidationInfo,
    ) -> str | None:
        if value is None:
            return value
        current = info.data.get("current_password")
        if not current:
            raise ValueError("Current password is required to set a new password")
        if value == current:
            raise ValueError("New password must be different from current password")
        return value

    def changes(self) -> dict[str, Any]:
        """Profile fields explicitly set by the caller (credentials excluded)."""
        changes = self.model_dump(
            exclude_unset=True,
            exclude={"current_password", "new_password", "age"},
        )
        if changes.get("avatar_url") is not None:
            changes["avatar_url"] = str(changes["avatar_url"])
        return changes


class AddressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street: str
    barangay: str
    city_municipality: str
    province: str
    region: str
    zip_code: str = ""
    country: str = DEFAULT_COUNTRY
    type: AddressType = AddressType.PERMANENT
    coordinates: Coordinates | None = None


class UserPublic(BaseModel):
    """User as exposed to clients. There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    form_id: str | None = None
    first_name: str
    middle_name: str = ""
    last_name: str
    suffix: str = ""
    sex: Sex
    age: int
    date_of_birth: date
    address: AddressOut
    contact_number: str
    avatar_url: str | None = None
    email: str
    role: UserRole
    status: UserStatus
    is_verified: bool
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime
    full_name: str
    age_display: str
    is_pwd_verified: bool
