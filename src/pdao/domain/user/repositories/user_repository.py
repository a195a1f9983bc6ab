"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from pdao.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    ``save`` runs the aggregate's pre-save hook and translates storage
    uniqueness violations into ``DuplicateError``.
    """

    @abstractmethod
    async def find_by_id(self, id: UUID) -> Optional[User]:
        """Find a user by storage identity."""

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Optional[User]:
        """Find a user by the public ``PDAO-...`` identifier."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by e-mail (case-insensitive)."""

    @abstractmethod
    async def find_by_contact_number(self, contact_number: str) -> Optional[User]:
        """Find a user by contact number (normalized before lookup)."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def exists_by_contact_number(self, contact_number: str) -> bool:
        """Check if a user exists with the given contact number."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save or update a user."""
