"""
Password reset via one-time code.

Flow: request (issue a 6-digit code) -> verify (check the code) ->
reset (set the new password). Codes live in process memory only and are
stored hashed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from dayplanner.core.config import Settings, get_settings
from dayplanner.core.exceptions import (
    AuthenticationError,
    BusinessLogicError,
    NotFoundError,
    ValidationError,
)
from dayplanner.core.logger import setup_logger
from dayplanner.core.security import generate_otp, hash_otp, hash_password, verify_otp
from dayplanner.interfaces.user_repository import IUserRepository
from dayplanner.models.user import UserUpdate
from dayplanner.utils.datetime_utils import now_utc

logger = setup_logger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass
class _ResetRecord:
    user_id: str
    code_hash: str
    expires_at: datetime
    attempts: int = 0
    verified: bool = False
    requested_at: list[datetime] = field(default_factory=list)


class PasswordResetService:
    """Issues, verifies and redeems password reset codes."""

    def __init__(
        self,
        user_repo: IUserRepository,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._user_repo = user_repo
        self._settings = settings or get_settings()
        self._clock = clock
        self._records: dict[str, _ResetRecord] = {}
        self._lock = asyncio.Lock()

    @property
    def _ttl(self) -> timedelta:
        return timedelta(seconds=self._settings.PASSWORD_RESET_OTP_TTL_SECONDS)

    async def request_reset(self, email: str) -> str:
        """
        Issue a new code for ``email`` and return it for delivery.

        Raises:
            NotFoundError: No account uses this email
            BusinessLogicError: Too many requests inside one TTL window
        """
        email = email.strip().lower()
        user = await self._user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("No account found with this email address")

        now = self._clock()
        async with self._lock:
            previous = self._records.get(email)
            recent = [t for t in (previous.requested_at if previous else []) if now - t < self._ttl]
            if len(recent) >= self._settings.PASSWORD_RESET_MAX_REQUESTS:
                raise BusinessLogicError("Too many reset requests; try again later")

            code = generate_otp()
            self._records[email] = _ResetRecord(
                user_id=str(user.id),
                code_hash=hash_otp(code),
                expires_at=now + self._ttl,
                requested_at=recent + [now],
            )

        logger.info(f"Password reset code issued for user {user.id}")
        if self._settings.DEBUG:
            logger.debug(f"Password reset code for {email}: {code}")
        return code

    async def verify_code(self, email: str, code: str) -> None:
        """
        Raises:
            AuthenticationError: Unknown, expired, exhausted or wrong code
        """
        email = email.strip().lower()
        now = self._clock()
        async with self._lock:
            record = self._live_record(email, now)
            if not verify_otp(code.strip(), record.code_hash):
                record.attempts += 1
                if record.attempts >= self._settings.PASSWORD_RESET_MAX_ATTEMPTS:
                    self._records.pop(email, None)
                raise AuthenticationError("The code is incorrect or has expired")
            record.verified = True

    async def reset_password(self, email: str, new_password: str) -> None:
        """
        Raises:
            ValidationError: Password too short
            AuthenticationError: Code not verified or expired
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        email = email.strip().lower()
        now = self._clock()
        async with self._lock:
            record = self._live_record(email, now)
            if not record.verified:
                raise AuthenticationError("Reset code has not been verified")
            self._records.pop(email, None)

        await self._user_repo.update(
            UUID(record.user_id),
            UserUpdate(password_hash=hash_password(new_password)),
        )
        logger.info(f"Password reset completed for user {record.user_id}")

    def _live_record(self, email: str, now: datetime) -> _ResetRecord:
        record = self._records.get(email)
        if not record or record.expires_at <= now:
            raise AuthenticationError("The code is incorrect or has expired")
        if record.attempts >= self._settings.PASSWORD_RESET_MAX_ATTEMPTS:
            raise AuthenticationError("Too many attempts; request a new code")
        return record
