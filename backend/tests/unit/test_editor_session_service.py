"""
Unit tests for EditorSessionService.
"""

from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from dayplanner.models.schedule import ScheduleEntry, Timetable, default_schedule
from dayplanner.services.editor_session_service import EditorSessionService, editor_state


def _timetable(user_id, entries):
    now = datetime(2024, 5, 1, 12, 0)
    return Timetable(id=uuid4(), user_id=user_id, entries=entries, created_at=now, updated_at=now)


@pytest.fixture
def timetable_repo():
    repo = AsyncMock()
    repo.get.return_value = None
    return repo


@pytest.fixture
def sessions(timetable_repo):
    return EditorSessionService(timetable_repo)


@pytest.mark.asyncio
async def test_new_user_gets_default_schedule(sessions, timetable_repo):
    editor = await sessions.get_editor("user-1")

    assert editor.get_schedule() == default_schedule()
    timetable_repo.get.assert_awaited_once_with("user-1")


@pytest.mark.asyncio
async def test_stored_schedule_is_loaded_and_normalized(sessions, timetable_repo):
    timetable_repo.get.return_value = _timetable(
        "user-1",
        [ScheduleEntry(start="06:00 AM", end="7:30am", task="Run")],
    )

    editor = await sessions.get_editor("user-1")

    assert editor.get_schedule() == [ScheduleEntry(start="6:00 AM", end="7:30 AM", task="Run")]


@pytest.mark.asyncio
async def test_editor_is_reused_per_user(sessions, timetable_repo):
    first = await sessions.get_editor("user-1")
    first.apply_task_edit(0, "Edited")

    second = await sessions.get_editor("user-1")

    assert second is first
    assert timetable_repo.get.await_count == 1
    other = await sessions.get_editor("user-2")
    assert other is not first


@pytest.mark.asyncio
async def test_reload_discards_edits_and_history(sessions, timetable_repo):
    editor = await sessions.get_editor("user-1")
    editor.apply_task_edit(0, "Unsaved")

    reloaded = await sessions.reload("user-1")

    assert reloaded is editor
    assert editor.get_schedule() == default_schedule()
    assert editor.can_undo is False


@pytest.mark.asyncio
async def test_replace_loads_external_schedule(sessions):
    entries = [
        ScheduleEntry(start="9:00 am", end="10:00 AM", task="Standup"),
        ScheduleEntry(start="10:00 AM", end="12:00 PM", task="Focus"),
    ]

    editor = await sessions.replace("user-1", entries)

    assert editor.get_schedule()[0].start == "9:00 AM"
    assert len(editor) == 2
    assert editor.can_undo is False


@pytest.mark.asyncio
async def test_save_persists_live_schedule(sessions, timetable_repo):
    editor = await sessions.get_editor("user-1")
    editor.apply_task_edit(0, "Saved task")
    timetable_repo.save.return_value = _timetable("user-1", editor.get_schedule())

    timetable = await sessions.save("user-1")

    timetable_repo.save.assert_awaited_once()
    user_id, entries = timetable_repo.save.await_args.args
    assert user_id == "user-1"
    assert entries[0].task == "Saved task"
    assert timetable.entries[0].task == "Saved task"
    # Saving keeps the history so the user can keep undoing.
    assert editor.can_undo is True


@pytest.mark.asyncio
async def test_discard_forgets_editor(sessions):
    await sessions.get_editor("user-1")

    await sessions.discard("user-1")

    assert sessions.peek("user-1") is None
    await sessions.discard("missing")


def test_editor_state_reports_history_flags():
    from dayplanner.services.schedule_editor import ScheduleEditor

    editor = ScheduleEditor(default_schedule())
    editor.apply_task_edit(0, "x")
    editor.apply_task_edit(0, "y")
    editor.undo()

    state = editor_state(editor, applied=False)

    assert state.can_undo is True
    assert state.can_redo is True
    assert state.undo_depth == 1
    assert state.redo_depth == 1
    assert state.applied is False
    assert state.entries[0].task == "x"
