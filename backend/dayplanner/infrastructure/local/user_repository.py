"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dayplanner.core.exceptions import DuplicateError, NotFoundError
from dayplanner.infrastructure.local.database import UserORM, get_session_factory
from dayplanner.interfaces.user_repository import IUserRepository
from dayplanner.models.user import UserAccount, UserCreate, UserRole, UserUpdate
from dayplanner.utils.datetime_utils import ensure_utc, now_utc


class SqliteUserRepository(IUserRepository):
    """Planner accounts stored in the ``users`` table."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=UUID(orm.id),
            provider_issuer=orm.provider_issuer,
            provider_sub=orm.provider_sub,
            email=orm.email,
            display_name=orm.display_name,
            username=orm.username,
            password_hash=orm.password_hash,
            role=UserRole(orm.role or UserRole.USER.value),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    @staticmethod
    async def _fetch(session: AsyncSession, *criteria) -> Optional[UserORM]:
        result = await session.execute(select(UserORM).where(*criteria))
        return result.scalar_one_or_none()

    @staticmethod
    async def _commit(session: AsyncSession) -> None:
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            raise DuplicateError("Username or email already exists", details={"error": str(exc.orig)}) from exc

    async def _find(self, *criteria) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            orm = await self._fetch(session, *criteria)
            return self._orm_to_model(orm) if orm else None

    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        return await self._find(UserORM.id == str(user_id))

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        return await self._find(func.lower(UserORM.email) == email.strip().lower())

    async def get_by_username(self, username: str) -> Optional[UserAccount]:
        return await self._find(UserORM.username == username.strip())

    async def create(self, data: UserCreate) -> UserAccount:
        orm = UserORM(id=str(uuid4()), **data.model_dump(exclude={"role"}), role=data.role.value)
        async with self._session_factory() as session:
            session.add(orm)
            await self._commit(session)
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update(self, user_id: UUID, update: UserUpdate) -> UserAccount:
        async with self._session_factory() as session:
            orm = await self._fetch(session, UserORM.id == str(user_id))
            if not orm:
                raise NotFoundError(f"User {user_id} not found")

            for field, value in update.model_dump(exclude_none=True).items():
                setattr(orm, field, value.value if isinstance(value, UserRole) else value)
            orm.updated_at = now_utc()

            await self._commit(session)
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_all(self) -> list[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).order_by(UserORM.created_at))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
