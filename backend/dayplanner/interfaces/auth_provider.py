"""
Authentication provider interface.

Defines the contract for resolving bearer tokens to users.
Implementations: mock (development), local (password + JWT).
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from dayplanner.models.user import UserRole


class User(BaseModel):
    """Authenticated caller."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    username: Optional[str] = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class IAuthProvider(ABC):
    """Abstract interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """
        Verify a bearer token.

        Args:
            token: Raw token from the Authorization header

        Returns:
            The authenticated user

        Raises:
            Exception: If the token is invalid
        """
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is enforced."""
        pass
