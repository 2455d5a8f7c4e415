"""
Local authentication endpoints (register/login/account/password reset).
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from dayplanner.api.deps import CurrentUser, EditorSessions, PasswordResets, UserRepo
from dayplanner.core.config import Settings, get_settings
from dayplanner.core.exceptions import (
    AuthenticationError,
    BusinessLogicError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from dayplanner.core.logger import setup_logger
from dayplanner.core.security import create_access_token, hash_password, verify_password
from dayplanner.models.user import UserAccount, UserCreate, UserRole, UserUpdate
from dayplanner.services.password_reset_service import MIN_PASSWORD_LENGTH

logger = setup_logger(__name__)

router = APIRouter()


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(BaseModel):
    identifier: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class EmailChangeRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class ResetRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class ResetVerifyRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    code: str = Field(..., min_length=6, max_length=6)


class ResetConfirmRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class ResetRequestResponse(BaseModel):
    sent: bool = True
    expires_in_seconds: int
    debug_code: Optional[str] = None


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    username: Optional[str] = None
    role: UserRole = UserRole.USER


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _role_for_email(email: str, settings: Settings) -> UserRole:
    return UserRole.ADMIN if email.lower() in settings.admin_emails else UserRole.USER


def _ensure_local_auth(settings: Settings) -> None:
    if settings.AUTH_PROVIDER != "local":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Local auth is not enabled",
        )
    if not settings.LOCAL_JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="LOCAL_JWT_SECRET is not configured",
        )


def _auth_user(user: UserAccount) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=user.email,
        display_name=user.display_name,
        username=user.username,
        role=user.role,
    )


def _auth_response(user: UserAccount, settings: Settings) -> AuthResponse:
    token = create_access_token(str(user.id), settings, role=user.role.value)
    return AuthResponse(access_token=token, user=_auth_user(user))


async def _load_account(user_repo, user_id: str) -> UserAccount:
    try:
        account = await user_repo.get(UUID(user_id))
    except ValueError:
        account = None
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account not found",
        )
    return account


@router.post("/register", response_model=AuthResponse)
async def register(
    data: RegisterRequest,
    user_repo: UserRepo,
) -> AuthResponse:
    settings = get_settings()
    _ensure_local_auth(settings)

    username = data.username.strip()
    if not username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username is required",
        )
    email = _normalize_email(data.email)
    if "@" not in email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A valid email is required",
        )

    if await user_repo.get_by_username(username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )
    if await user_repo.get_by_email(email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already exists",
        )

    try:
        user = await user_repo.create(
            UserCreate(
                provider_issuer="local",
                provider_sub=username,
                email=email,
                display_name=username,
                username=username,
                password_hash=hash_password(data.password),
                role=_role_for_email(email, settings),
            )
        )
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    logger.info(f"Registered user {user.id} ({user.role.value})")
    return _auth_response(user, settings)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    user_repo: UserRepo,
) -> AuthResponse:
    settings = get_settings()
    _ensure_local_auth(settings)

    identifier = data.identifier.strip()
    user = None
    if "@" in identifier:
        user = await user_repo.get_by_email(_normalize_email(identifier))
    if not user:
        user = await user_repo.get_by_username(identifier)

    if not user or not user.password_hash or user.provider_issuer != "local":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    if not verify_password(data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return _auth_response(user, settings)


@router.get("/me", response_model=AuthUser)
async def me(user: CurrentUser) -> AuthUser:
    return AuthUser(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        username=user.username,
        role=user.role,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(user: CurrentUser, sessions: EditorSessions) -> None:
    """Drop the caller's unsaved editing session."""
    await sessions.discard(user.id)


@router.patch("/me/email", response_model=AuthUser)
async def change_email(
    data: EmailChangeRequest,
    user: CurrentUser,
    user_repo: UserRepo,
) -> AuthUser:
    _ensure_local_auth(get_settings())
    email = _normalize_email(data.email)
    if "@" not in email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A valid email is required",
        )
    existing = await user_repo.get_by_email(email)
    if existing and str(existing.id) != user.id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already exists",
        )
    account = await _load_account(user_repo, user.id)
    try:
        updated = await user_repo.update(account.id, UserUpdate(email=email))
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return _auth_user(updated)


@router.patch("/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    data: PasswordChangeRequest,
    user: CurrentUser,
    user_repo: UserRepo,
) -> None:
    _ensure_local_auth(get_settings())
    account = await _load_account(user_repo, user.id)
    if not account.password_hash or not verify_password(data.current_password, account.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )
    await user_repo.update(account.id, UserUpdate(password_hash=hash_password(data.new_password)))


@router.post("/password-reset/request", response_model=ResetRequestResponse)
async def request_password_reset(
    data: ResetRequest,
    resets: PasswordResets,
) -> ResetRequestResponse:
    settings = get_settings()
    try:
        code = await resets.request_reset(data.email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except BusinessLogicError as e:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=e.message)
    # No mail transport is wired; DEBUG builds return the code for manual testing.
    return ResetRequestResponse(
        expires_in_seconds=settings.PASSWORD_RESET_OTP_TTL_SECONDS,
        debug_code=code if settings.DEBUG else None,
    )


@router.post("/password-reset/verify", status_code=status.HTTP_204_NO_CONTENT)
async def verify_password_reset(
    data: ResetVerifyRequest,
    resets: PasswordResets,
) -> None:
    try:
        await resets.verify_code(data.email, data.code)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("/password-reset/confirm", status_code=status.HTTP_204_NO_CONTENT)
async def confirm_password_reset(
    data: ResetConfirmRequest,
    resets: PasswordResets,
) -> None:
    try:
        await resets.reset_password(data.email, data.new_password)
    except (AuthenticationError, ValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
