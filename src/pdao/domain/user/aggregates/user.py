"""User aggregate: a registered PDAO applicant or staff member."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Union
from uuid import UUID, uuid4

from pdao_contracts import (
    Sex,
    Suffix,
    UserRole,
    UserStatus,
    build_full_name,
    calculate_age,
    coerce_date,
    normalize_contact_number,
)

from pdao.domain.shared.time import today_utc, utc_now
from pdao.domain.user.value_objects import Address, generate_user_id

# Fields a profile update may touch; credentials and identifiers are not among them
_UPDATABLE_FIELDS = (
    "first_name",
    "middle_name",
    "last_name",
    "suffix",
    "sex",
    "date_of_birth",
    "contact_number",
    "email",
    "avatar_url",
)


class User:
    """
    User aggregate root.

    The password is held as a bcrypt hash. A new plaintext password is
    only kept until the next ``prepare_for_save`` call, which is the single
    place where it gets hashed; an unchanged password is never re-hashed.
    """

    def __init__(
        self,
        *,
        first_name: str,
        last_name: str,
        sex: Union[str, Sex],
        date_of_birth: Union[date, str],
        address: Address,
        contact_number: str,
        email: str,
        user_id: str,
        id: UUID | None = None,
        form_id: str | None = None,
        middle_name: str = "",
        suffix: Union[str, Suffix] = Suffix.NONE,
        age: int | None = None,
        avatar_url: str | None = None,
        password_hash: str | None = None,
        role: Union[str, UserRole] = UserRole.USER,
        status: Union[str, UserStatus] = UserStatus.PENDING,
        is_verified: bool = False,
        is_email_verified: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._user_id = user_id
        self._form_id = form_id
        self._first_name = first_name
        self._middle_name = middle_name
        self._last_name = last_name
        self._suffix = Suffix(suffix)
        self._sex = Sex(sex)
        self._date_of_birth = coerce_date(date_of_birth)
        self._age = age if age is not None else calculate_age(self._date_of_birth, today_utc())
        self._address = address
        self._contact_number = contact_number
        self._avatar_url = avatar_url
        self._email = email.strip().lower()
        self._password_hash = password_hash
        self._new_password: str | None = None
        self._role = UserRole(role)
        self._status = UserStatus(status)
        self._is_verified = is_verified
        self._is_email_verified = is_email_verified
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def form_id(self) -> str | None:
        return self._form_id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def middle_name(self) -> str:
        return self._middle_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def suffix(self) -> str:
        return self._suffix.value

    @property
    def sex(self) -> Sex:
        return self._sex

    @property
    def date_of_birth(self) -> date:
        return self._date_of_birth

    @property
    def age(self) -> int:
        return self._age

    @property
    def address(self) -> Address:
        return self._address

    @property
    def contact_number(self) -> str:
        return self._contact_number

    @property
    def avatar_url(self) -> str | None:
        return self._avatar_url

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def password_modified(self) -> bool:
        return self._new_password is not None

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == UserStatus.ACTIVE

    @property
    def is_verified(self) -> bool:
        return self._is_verified

    @property
    def is_email_verified(self) -> bool:
        return self._is_email_verified

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # Derived, exposed on the public projection
    @property
    def full_name(self) -> str:
        return build_full_name(
            self._first_name,
            self._middle_name,
            self._last_name,
            self._suffix.value,
        )

    @property
    def age_display(self) -> str:
        return f"{self._age} years"

    @property
    def is_pwd_verified(self) -> bool:
        return self._is_verified

    def set_password(self, plain_password: str) -> None:
        """Replace the password; hashing happens on the next save."""
        self._new_password = plain_password
        self._updated_at = utc_now()

    def prepare_for_save(
        self,
        hash_password: Callable[[str], str],
        today: date | None = None,
    ) -> None:
        """Bring derived fields up to date right before persisting.

        Parameters
        ----------
        hash_password
            Turns a plaintext password into a stored hash. Only called when
            the password changed since the user was loaded or created.
        today
            Reference date for the age computation (UTC today by default)
        """
        if self._new_password is not None:
            self._password_hash = hash_password(self._new_password)
            self._new_password = None
        self._age = calculate_age(self._date_of_birth, today or today_utc())
        self._contact_number = normalize_contact_number(self._contact_number)

    def record_login(self) -> None:
        """A first successful login activates a pending account."""
        if self._status == UserStatus.PENDING:
            self._status = UserStatus.ACTIVE
        self._updated_at = utc_now()

    # The three mutators below serve the office's own account review, which
    # runs outside this service; no API route calls them.

    def change_status(self, status: Union[str, UserStatus]) -> None:
        """Suspend, deactivate or reinstate the account."""
        self._status = UserStatus(status)
        self._updated_at = utc_now()

    def change_role(self, role: Union[str, UserRole]) -> None:
        """Grant or revoke staff roles."""
        self._role = UserRole(role)
        self._updated_at = utc_now()

    def mark_verified(self, form_id: str) -> None:
        """Attach the reviewed verification form to this user.

        ``form_id`` comes from ``generate_form_id()`` when the office accepts
        the submitted PWD verification form.
        """
        self._form_id = form_id
        self._is_verified = True
        self._updated_at = utc_now()

    def apply_update(self, changes: dict[str, Any]) -> None:
        """Apply validated profile changes.

        ``address`` may be partial; it is merged onto the stored address.
        Keys outside the updatable profile fields are ignored.
        """
        for field in _UPDATABLE_FIELDS:
            if field not in changes or changes[field] is None:
                continue
            value = changes[field]
            if field == "email":
                value = value.strip().lower()
            elif field == "contact_number":
                value = normalize_contact_number(value)
            elif field == "date_of_birth":
                value = coerce_date(value)
            elif field == "suffix":
                value = Suffix(value)
            elif field == "sex":
                value = Sex(value)
            setattr(self, f"_{field}", value)

        if changes.get("address"):
            self._address = self._address.merged(changes["address"])

        self._updated_at = utc_now()

    @classmethod
    def register(
        cls,
        *,
        first_name: str,
        last_name: str,
        sex: Union[str, Sex],
        date_of_birth: Union[date, str],
        address: Address,
        contact_number: str,
        email: str,
        password: str,
        middle_name: str = "",
        suffix: Union[str, Suffix] = Suffix.NONE,
        today: date | None = None,
    ) -> User:
        """Create a brand-new self-registered account.

        Whatever the caller supplied elsewhere, a registration starts with
        no verification form, unverified, ``Pending`` and with role ``User``.
        """
        user = cls(
            user_id=generate_user_id(today),
            form_id=None,
            first_name=first_name,
            middle_name=middle_name,
            last_name=last_name,
            suffix=suffix,
            sex=sex,
            date_of_birth=date_of_birth,
            address=address,
            contact_number=normalize_contact_number(contact_number),
            email=email,
            role=UserRole.USER,
            status=UserStatus.PENDING,
            is_verified=False,
            is_email_verified=False,
        )
        user.set_password(password)
        return user

    @classmethod
    def reconstitute(cls, **fields: Any) -> User:
        """Rebuild a stored user; nothing is recomputed or reset."""
        return cls(**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, user_id={self._user_id}, email={self._email})"
