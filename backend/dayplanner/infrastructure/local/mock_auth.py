"""
Mock authentication provider for local development.
"""

from typing import Optional

from dayplanner.interfaces.auth_provider import IAuthProvider, User
from dayplanner.models.user import UserRole


class MockAuthProvider(IAuthProvider):
    """Mock auth provider; the bearer token is treated as the user id."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled
        self._mock_users = {
            "dev_user": User(
                id="dev_user",
                email="dev@example.com",
                display_name="Developer",
                username="dev_user",
            ),
            "admin": User(
                id="admin",
                email="admin@planner.com",
                display_name="Admin",
                username="admin",
                role=UserRole.ADMIN,
            ),
        }

    async def verify_token(self, token: str) -> User:
        if token in self._mock_users:
            return self._mock_users[token]
        if "@" in token:
            return User(id=token, email=token, display_name=token, username=token.split("@")[0])
        return User(id=token, email=f"{token}@example.com", display_name=token, username=token)

    async def get_user(self, user_id: str) -> Optional[User]:
        return self._mock_users.get(user_id)

    def is_enabled(self) -> bool:
        return self._enabled
