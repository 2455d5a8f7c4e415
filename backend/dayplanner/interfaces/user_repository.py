"""
User repository interface.

Accounts are looked up by id, email (case-insensitive) or username; the
admin views read the full list.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from dayplanner.models.user import UserAccount, UserCreate, UserUpdate


class IUserRepository(ABC):
    """Abstract interface for planner account persistence."""

    @abstractmethod
    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        """Look up an account by email, ignoring case and surrounding whitespace."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[UserAccount]:
        pass

    @abstractmethod
    async def create(self, data: UserCreate) -> UserAccount:
        """
        Store a new account.

        Raises:
            DuplicateError: Email or username already taken
        """
        pass

    @abstractmethod
    async def update(self, user_id: UUID, update: UserUpdate) -> UserAccount:
        """
        Apply the non-None fields of ``update``.

        Raises:
            NotFoundError: No account with ``user_id``
            DuplicateError: New email or username already taken
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[UserAccount]:
        """All accounts, oldest first."""
        pass
