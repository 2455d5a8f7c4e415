"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from dayplanner.core.config import get_settings
from dayplanner.interfaces.auth_provider import IAuthProvider, User
from dayplanner.interfaces.llm_provider import ILLMProvider
from dayplanner.interfaces.timetable_repository import ITimetableRepository
from dayplanner.interfaces.user_repository import IUserRepository
from dayplanner.services.admin_service import AdminService
from dayplanner.services.ai_schedule_service import AIScheduleService
from dayplanner.services.editor_session_service import EditorSessionService
from dayplanner.services.password_reset_service import PasswordResetService
from dayplanner.services.schedule_export_service import ScheduleExportService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from dayplanner.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_timetable_repository() -> ITimetableRepository:
    """Get timetable repository instance."""
    from dayplanner.infrastructure.local.timetable_repository import SqliteTimetableRepository
    return SqliteTimetableRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """
    Get LLM provider instance based on LLM_PROVIDER setting.

    Supports:
    - litellm: LiteLLM (OpenAI, Bedrock, etc. with optional custom endpoint)
    - gemini-api: Gemini API (API Key)
    """
    settings = get_settings()

    if settings.LLM_PROVIDER == "litellm":
        from dayplanner.infrastructure.local.litellm_provider import LiteLLMProvider
        return LiteLLMProvider(settings.LITELLM_MODEL)

    elif settings.LLM_PROVIDER == "gemini-api":
        from dayplanner.infrastructure.local.gemini_api_provider import GeminiAPIProvider
        return GeminiAPIProvider(settings.GEMINI_MODEL)

    else:
        raise ValueError(f"Unknown LLM_PROVIDER: {settings.LLM_PROVIDER}")


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    if settings.AUTH_PROVIDER == "local":
        from dayplanner.infrastructure.auth.local_auth import LocalAuthProvider

        return LocalAuthProvider(settings, get_user_repository())

    from dayplanner.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=True)


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_editor_session_service() -> EditorSessionService:
    """Process-wide registry of live schedule editors."""
    return EditorSessionService(get_timetable_repository())


@lru_cache()
def get_password_reset_service() -> PasswordResetService:
    return PasswordResetService(get_user_repository())


def get_export_service() -> ScheduleExportService:
    return ScheduleExportService()


def get_ai_schedule_service(
    llm_provider: ILLMProvider = Depends(get_llm_provider),
) -> AIScheduleService:
    return AIScheduleService(llm_provider)


def get_admin_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    timetable_repo: ITimetableRepository = Depends(get_timetable_repository),
) -> AdminService:
    return AdminService(user_repo, timetable_repo)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With the mock provider disabled, returns the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Reject callers without the admin role."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
TimetableRepo = Annotated[ITimetableRepository, Depends(get_timetable_repository)]
LLMProvider = Annotated[ILLMProvider, Depends(get_llm_provider)]
EditorSessions = Annotated[EditorSessionService, Depends(get_editor_session_service)]
PasswordResets = Annotated[PasswordResetService, Depends(get_password_reset_service)]
ExportService = Annotated[ScheduleExportService, Depends(get_export_service)]
AdminSvc = Annotated[AdminService, Depends(get_admin_service)]
AIScheduler = Annotated[AIScheduleService, Depends(get_ai_schedule_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
