"""User domain: aggregate, embedded address, identifiers and repository."""

from pdao.domain.user.aggregates import User
from pdao.domain.user.repositories import UserRepository
from pdao.domain.user.value_objects import (
    Address,
    Coordinates,
    generate_form_id,
    generate_user_id,
)

__all__ = [
    "Address",
    "Coordinates",
    "User",
    "UserRepository",
    "generate_form_id",
    "generate_user_id",
]
