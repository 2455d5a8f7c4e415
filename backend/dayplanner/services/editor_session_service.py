"""
Per-user editing sessions.

Each user gets one live ScheduleEditor, created lazily from the stored
timetable (or the seed schedule). Edits stay in memory; the repository
is only written on explicit save.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from dayplanner.core.logger import setup_logger
from dayplanner.interfaces.timetable_repository import ITimetableRepository
from dayplanner.models.schedule import ScheduleEntry, ScheduleState, Timetable, default_schedule
from dayplanner.services.schedule_editor import ScheduleEditor
from dayplanner.utils.time_utils import normalize_time_text

logger = setup_logger(__name__)


def _canonical(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    return [
        ScheduleEntry(
            start=normalize_time_text(entry.start),
            end=normalize_time_text(entry.end),
            task=entry.task,
        )
        for entry in entries
    ]


def editor_state(editor: ScheduleEditor, applied: bool = True) -> ScheduleState:
    """Snapshot of an editor for API responses."""
    return ScheduleState(
        entries=editor.get_schedule(),
        can_undo=editor.can_undo,
        can_redo=editor.can_redo,
        undo_depth=editor.undo_depth,
        redo_depth=editor.redo_depth,
        applied=applied,
    )


class EditorSessionService:
    """Registry of live editors keyed by user id."""

    def __init__(self, timetable_repo: ITimetableRepository):
        self._timetable_repo = timetable_repo
        self._editors: dict[str, ScheduleEditor] = {}
        self._lock = asyncio.Lock()

    async def _load_entries(self, user_id: str) -> list[ScheduleEntry]:
        stored = await self._timetable_repo.get(user_id)
        if stored and stored.entries:
            logger.info(f"Loaded stored schedule for user {user_id} ({len(stored.entries)} entries)")
            return _canonical(stored.entries)
        logger.info(f"No stored schedule for user {user_id}; using default")
        return default_schedule()

    async def get_editor(self, user_id: str) -> ScheduleEditor:
        async with self._lock:
            editor = self._editors.get(user_id)
            if editor is None:
                editor = ScheduleEditor(await self._load_entries(user_id))
                self._editors[user_id] = editor
            return editor

    async def reload(self, user_id: str) -> ScheduleEditor:
        """Replace the live schedule with the stored one; history is reset."""
        entries = await self._load_entries(user_id)
        async with self._lock:
            editor = self._editors.setdefault(user_id, ScheduleEditor())
            editor.load_schedule(entries)
            return editor

    async def replace(self, user_id: str, entries: list[ScheduleEntry]) -> ScheduleEditor:
        """Load an externally produced schedule (e.g. AI output); history is reset."""
        canonical = _canonical(entries)
        async with self._lock:
            editor = self._editors.setdefault(user_id, ScheduleEditor())
            editor.load_schedule(canonical)
            return editor

    async def save(self, user_id: str) -> Timetable:
        editor = await self.get_editor(user_id)
        timetable = await self._timetable_repo.save(user_id, editor.get_schedule())
        logger.info(f"Saved schedule for user {user_id} ({len(timetable.entries)} entries)")
        return timetable

    async def discard(self, user_id: str) -> None:
        async with self._lock:
            self._editors.pop(user_id, None)

    def peek(self, user_id: str) -> Optional[ScheduleEditor]:
        return self._editors.get(user_id)
