"""Response envelopes for the authentication and user endpoints."""

from pydantic import BaseModel, Field

from pdao_contracts import UserPublic

from pdao.domain.user import User


class AuthResponse(BaseModel):
    """Returned by register and login."""

    success: bool = True
    message: str
    user: UserPublic
    token: str = Field(description="Bearer token, valid for 7 days")


class UserResponse(BaseModel):
    success: bool = True
    message: str | None = None
    user: UserPublic


def to_public(user: User) -> UserPublic:
    """Project a user for output; the password hash has no field to land in."""
    return UserPublic.model_validate(user)
