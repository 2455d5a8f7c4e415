"""Abstract interfaces for infrastructure abstraction."""

from dayplanner.interfaces.auth_provider import IAuthProvider, User
from dayplanner.interfaces.llm_provider import ILLMProvider
from dayplanner.interfaces.timetable_repository import ITimetableRepository
from dayplanner.interfaces.user_repository import IUserRepository

__all__ = [
    "IAuthProvider",
    "User",
    "ILLMProvider",
    "ITimetableRepository",
    "IUserRepository",
]
