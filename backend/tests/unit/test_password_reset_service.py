"""
Unit tests for the one-time-code password reset flow.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from dayplanner.core.exceptions import (
    AuthenticationError,
    BusinessLogicError,
    NotFoundError,
    ValidationError,
)
from dayplanner.core.security import verify_password
from dayplanner.services.password_reset_service import PasswordResetService


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def account():
    user = MagicMock()
    user.id = uuid4()
    return user


@pytest.fixture
def user_repo(account):
    repo = AsyncMock()
    repo.get_by_email.return_value = account
    return repo


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(user_repo, settings, clock):
    return PasswordResetService(user_repo, settings, clock=clock)


@pytest.mark.asyncio
async def test_full_flow_updates_password(service, user_repo, account):
    code = await service.request_reset(" Alice@Example.com ")
    user_repo.get_by_email.assert_awaited_once_with("alice@example.com")
    assert len(code) == 6 and code.isdigit()

    await service.verify_code("alice@example.com", code)
    await service.reset_password("alice@example.com", "new-secret")

    user_id, update = user_repo.update.await_args.args
    assert user_id == account.id
    assert verify_password("new-secret", update.password_hash)


@pytest.mark.asyncio
async def test_unknown_email(service, user_repo):
    user_repo.get_by_email.return_value = None

    with pytest.raises(NotFoundError):
        await service.request_reset("nobody@example.com")


@pytest.mark.asyncio
async def test_wrong_code(service):
    code = await service.request_reset("alice@example.com")
    wrong = "000000" if code != "000000" else "111111"

    with pytest.raises(AuthenticationError):
        await service.verify_code("alice@example.com", wrong)


@pytest.mark.asyncio
async def test_code_expires_after_ttl(service, clock, settings):
    code = await service.request_reset("alice@example.com")
    clock.advance(settings.PASSWORD_RESET_OTP_TTL_SECONDS)

    with pytest.raises(AuthenticationError):
        await service.verify_code("alice@example.com", code)


@pytest.mark.asyncio
async def test_reset_requires_verified_code(service, user_repo):
    await service.request_reset("alice@example.com")

    with pytest.raises(AuthenticationError):
        await service.reset_password("alice@example.com", "new-secret")
    user_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_short_password_rejected(service):
    code = await service.request_reset("alice@example.com")
    await service.verify_code("alice@example.com", code)

    with pytest.raises(ValidationError):
        await service.reset_password("alice@example.com", "12345")


@pytest.mark.asyncio
async def test_code_is_single_use(service):
    code = await service.request_reset("alice@example.com")
    await service.verify_code("alice@example.com", code)
    await service.reset_password("alice@example.com", "new-secret")

    with pytest.raises(AuthenticationError):
        await service.reset_password("alice@example.com", "another-secret")


@pytest.mark.asyncio
async def test_request_limit_within_window(service, clock, settings):
    for _ in range(settings.PASSWORD_RESET_MAX_REQUESTS):
        await service.request_reset("alice@example.com")

    with pytest.raises(BusinessLogicError):
        await service.request_reset("alice@example.com")

    clock.advance(settings.PASSWORD_RESET_OTP_TTL_SECONDS)
    await service.request_reset("alice@example.com")


@pytest.mark.asyncio
async def test_new_request_replaces_old_code(service):
    with patch(
        "dayplanner.services.password_reset_service.generate_otp",
        side_effect=["111111", "222222"],
    ):
        await service.request_reset("alice@example.com")
        await service.request_reset("alice@example.com")

    with pytest.raises(AuthenticationError):
        await service.verify_code("alice@example.com", "111111")
    await service.verify_code("alice@example.com", "222222")


@pytest.mark.asyncio
async def test_too_many_wrong_attempts_burns_code(service, settings):
    with patch("dayplanner.services.password_reset_service.generate_otp", return_value="123456"):
        await service.request_reset("alice@example.com")

    for _ in range(settings.PASSWORD_RESET_MAX_ATTEMPTS):
        with pytest.raises(AuthenticationError):
            await service.verify_code("alice@example.com", "654321")

    with pytest.raises(AuthenticationError):
        await service.verify_code("alice@example.com", "123456")
