"""
Timetable repository interface.

Durable copy of each user's schedule. Written only on explicit save.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from dayplanner.models.schedule import ScheduleEntry, Timetable


class ITimetableRepository(ABC):
    """Abstract interface for timetable persistence."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Timetable]:
        """
        Get a user's stored timetable.

        Args:
            user_id: Owner user ID

        Returns:
            Timetable if one was saved, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user_id: str, entries: list[ScheduleEntry]) -> Timetable:
        """
        Create or replace a user's timetable.

        Args:
            user_id: Owner user ID
            entries: Full schedule to store

        Returns:
            Stored timetable with refreshed updated_at
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Timetable]:
        """List every stored timetable."""
        pass
