"""
Admin views over all users' stored schedules.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from dayplanner.core.exceptions import NotFoundError
from dayplanner.interfaces.timetable_repository import ITimetableRepository
from dayplanner.interfaces.user_repository import IUserRepository
from dayplanner.models.schedule import Timetable
from dayplanner.models.user import AdminStats, AdminUserSummary, UserAccount
from dayplanner.utils.datetime_utils import is_within

ACTIVE_WINDOW = timedelta(hours=24)


class AdminService:
    def __init__(self, user_repo: IUserRepository, timetable_repo: ITimetableRepository):
        self._user_repo = user_repo
        self._timetable_repo = timetable_repo

    async def _timetables_by_user(self) -> dict[str, Timetable]:
        return {t.user_id: t for t in await self._timetable_repo.list_all()}

    async def list_users(self, exclude_user_id: Optional[str] = None) -> list[AdminUserSummary]:
        """All users except the caller, with schedule size and last edit time."""
        timetables = await self._timetables_by_user()
        summaries = []
        for user in await self._user_repo.list_all():
            user_id = str(user.id)
            if user_id == exclude_user_id:
                continue
            timetable = timetables.get(user_id)
            summaries.append(
                AdminUserSummary(
                    id=user_id,
                    username=user.username,
                    email=user.email,
                    role=user.role,
                    entry_count=len(timetable.entries) if timetable else 0,
                    last_edited=timetable.updated_at if timetable else None,
                )
            )
        return summaries

    async def stats(
        self, exclude_user_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> AdminStats:
        users = await self.list_users(exclude_user_id)
        return AdminStats(
            total_users=len(users),
            total_entries=sum(u.entry_count for u in users),
            active_today=sum(1 for u in users if is_within(u.last_edited, ACTIVE_WINDOW, now)),
        )

    async def get_user_schedule(self, user_id: str) -> tuple[UserAccount, Optional[Timetable]]:
        """
        Raises:
            NotFoundError: Unknown user id
        """
        try:
            account = await self._user_repo.get(UUID(user_id))
        except ValueError:
            account = None
        if not account:
            raise NotFoundError(f"User {user_id} not found")
        return account, await self._timetable_repo.get(user_id)
