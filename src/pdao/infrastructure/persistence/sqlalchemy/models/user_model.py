"""SQLAlchemy model for the User aggregate."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, Date, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from pdao_contracts.constants import NAME_MAX_LENGTH

from pdao.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin

# Columns guarded by a unique constraint, named uq_users_<column> by the
# metadata naming convention
UNIQUE_FIELDS = ("email", "contact_number", "user_id")

# html.escape turns one character into at most six ('"' becomes "&quot;")
ESCAPED_NAME_LENGTH = NAME_MAX_LENGTH * 6


class UserModel(Base, TimestampMixin):
    """One row per user; the address is embedded as a JSON document."""

    __tablename__ = "users"
    __table_args__ = tuple(UniqueConstraint(field) for field in UNIQUE_FIELDS)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(20), nullable=False)
    form_id: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)

    first_name: Mapped[str] = mapped_column(String(ESCAPED_NAME_LENGTH), nullable=False)
    middle_name: Mapped[str] = mapped_column(
        String(ESCAPED_NAME_LENGTH),
        default="",
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(String(ESCAPED_NAME_LENGTH), nullable=False)
    suffix: Mapped[str] = mapped_column(String(5), default="", nullable=False)
    sex: Mapped[str] = mapped_column(String(10), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    contact_number: Mapped[str] = mapped_column(String(11), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    email: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="User", nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="Pending", nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, user_id={self.user_id}, email={self.email})>"
