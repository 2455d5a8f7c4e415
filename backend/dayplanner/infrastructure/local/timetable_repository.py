"""
SQLite implementation of timetable repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from dayplanner.infrastructure.local.database import TimetableORM, get_session_factory
from dayplanner.interfaces.timetable_repository import ITimetableRepository
from dayplanner.models.schedule import ScheduleEntry, Timetable
from dayplanner.utils.datetime_utils import ensure_utc, now_utc


class SqliteTimetableRepository(ITimetableRepository):
    """SQLite implementation of timetable repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TimetableORM) -> Timetable:
        return Timetable(
            id=UUID(orm.id),
            user_id=orm.user_id,
            entries=[ScheduleEntry.model_validate(item) for item in (orm.data or [])],
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def get(self, user_id: str) -> Optional[Timetable]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TimetableORM).where(TimetableORM.user_id == user_id)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def save(self, user_id: str, entries: list[ScheduleEntry]) -> Timetable:
        data = [entry.model_dump() for entry in entries]
        async with self._session_factory() as session:
            result = await session.execute(
                select(TimetableORM).where(TimetableORM.user_id == user_id)
            )
            orm = result.scalar_one_or_none()
            if orm:
                orm.data = data
                orm.updated_at = now_utc()
            else:
                orm = TimetableORM(id=str(uuid4()), user_id=user_id, data=data)
                session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_all(self) -> list[Timetable]:
        async with self._session_factory() as session:
            result = await session.execute(select(TimetableORM))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
