"""
Shared pytest fixtures.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from dayplanner.core.config import Settings
from dayplanner.infrastructure.local.database import Base


@pytest.fixture
async def session_factory():
    """In-memory SQLite session factory with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def settings():
    """Local-auth settings that do not read the environment file."""
    return Settings(
        _env_file=None,
        DEBUG=False,
        AUTH_PROVIDER="local",
        LOCAL_JWT_SECRET="test-secret",
        LOCAL_JWT_ISSUER="test",
        LOCAL_JWT_EXPIRE_MINUTES=60,
        ADMIN_EMAILS="admin@planner.com",
    )
