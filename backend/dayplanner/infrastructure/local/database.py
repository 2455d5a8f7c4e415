"""
SQLite database configuration and ORM models.

Two tables: ``users`` (accounts and credentials) and ``timetables``
(one saved schedule per user, entries stored as a JSON array).
"""

from functools import lru_cache
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from dayplanner.core.config import get_settings
from dayplanner.core.logger import logger
from dayplanner.models.user import UserRole
from dayplanner.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    pass


class UserORM(Base):
    """Planner account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    provider_issuer = Column(String(500), nullable=False)
    provider_sub = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True, unique=True, index=True)
    display_name = Column(String(255), nullable=True)
    username = Column(String(255), nullable=True, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(10), default=UserRole.USER.value, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class TimetableORM(Base):
    """Saved schedule, keyed by owner."""

    __tablename__ = "timetables"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, unique=True, index=True)
    data = Column(JSON, nullable=False, default=list)  # [{start, end, task}, ...]
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


@lru_cache()
def get_engine() -> AsyncEngine:
    """Process-wide async engine for DATABASE_URL."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    return sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def init_db() -> None:
    """Create missing tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        get_engine.cache_clear()
