"""Auth data structures."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes
    ----------
    user_id
        Storage identity of the user (the ``userId`` claim)
    role
        Role the user held when the token was issued
    exp
        Token expiration timestamp
    """

    user_id: UUID
    role: str
    exp: datetime

    def is_expired(self) -> bool:
        return datetime.now(tz=timezone.utc) > self.exp
