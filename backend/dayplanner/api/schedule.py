"""
Schedule editing API endpoints.

Every mutation goes through the caller's live editor and returns the
resulting state; nothing is persisted until ``/save``.
"""

from fastapi import APIRouter, HTTPException, Response, status

from dayplanner.api.deps import AIScheduler, CurrentUser, EditorSessions, ExportService
from dayplanner.core.exceptions import InvariantViolation, LLMError, ValidationError
from dayplanner.core.logger import setup_logger
from dayplanner.models.schedule import (
    SavedSchedule,
    ScheduleGenerateRequest,
    ScheduleGenerateResponse,
    ScheduleState,
    TaskEditRequest,
    TimeEditRequest,
)
from dayplanner.services.ai_schedule_service import detect_schedule_conflicts
from dayplanner.services.editor_session_service import editor_state
from dayplanner.services.schedule_export_service import export_filename

logger = setup_logger(__name__)

router = APIRouter()


def _raise_for_edit(exc: Exception) -> None:
    if isinstance(exc, InvariantViolation):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    if isinstance(exc, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    raise exc


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("", response_model=ScheduleState)
async def get_schedule(user: CurrentUser, sessions: EditorSessions):
    editor = await sessions.get_editor(user.id)
    return editor_state(editor)


@router.post("/load", response_model=ScheduleState)
async def load_schedule(user: CurrentUser, sessions: EditorSessions):
    """Reload the stored schedule, discarding unsaved edits and history."""
    editor = await sessions.reload(user.id)
    return editor_state(editor)


@router.put("/entries/{index}/time", response_model=ScheduleState)
async def edit_time(
    index: int,
    data: TimeEditRequest,
    user: CurrentUser,
    sessions: EditorSessions,
):
    """
    Change a start or end time and cascade to later rows.

    Malformed time text is not an error: the schedule is returned
    unchanged with ``applied=false``.
    """
    editor = await sessions.get_editor(user.id)
    try:
        applied = editor.apply_time_edit(index, data.field, data.value)
    except (ValidationError, InvariantViolation) as e:
        _raise_for_edit(e)
    return editor_state(editor, applied=applied)


@router.put("/entries/{index}/task", response_model=ScheduleState)
async def edit_task(
    index: int,
    data: TaskEditRequest,
    user: CurrentUser,
    sessions: EditorSessions,
):
    editor = await sessions.get_editor(user.id)
    try:
        editor.apply_task_edit(index, data.task)
    except ValidationError as e:
        _raise_for_edit(e)
    return editor_state(editor)


@router.post("/entries", response_model=ScheduleState, status_code=status.HTTP_201_CREATED)
async def insert_entry(user: CurrentUser, sessions: EditorSessions):
    editor = await sessions.get_editor(user.id)
    editor.insert_row()
    return editor_state(editor)


@router.delete("/entries/{index}", response_model=ScheduleState)
async def delete_entry(index: int, user: CurrentUser, sessions: EditorSessions):
    editor = await sessions.get_editor(user.id)
    try:
        editor.delete_row(index)
    except (ValidationError, InvariantViolation) as e:
        _raise_for_edit(e)
    return editor_state(editor)


@router.post("/undo", response_model=ScheduleState)
async def undo(user: CurrentUser, sessions: EditorSessions):
    editor = await sessions.get_editor(user.id)
    return editor_state(editor, applied=editor.undo())


@router.post("/redo", response_model=ScheduleState)
async def redo(user: CurrentUser, sessions: EditorSessions):
    editor = await sessions.get_editor(user.id)
    return editor_state(editor, applied=editor.redo())


@router.post("/save", response_model=SavedSchedule)
async def save_schedule(user: CurrentUser, sessions: EditorSessions):
    timetable = await sessions.save(user.id)
    return SavedSchedule(entries=timetable.entries, last_edited=timetable.updated_at)


@router.post("/generate", response_model=ScheduleGenerateResponse)
async def generate_schedule(
    data: ScheduleGenerateRequest,
    user: CurrentUser,
    sessions: EditorSessions,
    ai: AIScheduler,
):
    """Replace the live schedule with one generated from free text."""
    try:
        entries = await ai.generate_schedule(data.prompt)
    except LLMError as e:
        logger.warning(f"Schedule generation failed for user {user.id}: {e.message}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    editor = await sessions.replace(user.id, entries)
    return ScheduleGenerateResponse(
        state=editor_state(editor),
        model=ai.model_name,
        conflicts=detect_schedule_conflicts(entries),
    )


@router.get("/export.csv")
async def export_csv(user: CurrentUser, sessions: EditorSessions, exporter: ExportService):
    editor = await sessions.get_editor(user.id)
    return _attachment(
        exporter.to_csv(editor.get_schedule()),
        "text/csv; charset=utf-8",
        export_filename("csv"),
    )


@router.get("/export.pdf")
async def export_pdf(user: CurrentUser, sessions: EditorSessions, exporter: ExportService):
    editor = await sessions.get_editor(user.id)
    return _attachment(
        exporter.to_pdf(editor.get_schedule()),
        "application/pdf",
        export_filename("pdf"),
    )
