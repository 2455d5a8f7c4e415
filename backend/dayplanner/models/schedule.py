"""
Daily schedule models.

A schedule is an ordered list of back-to-back time blocks for one day.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


TimeField = Literal["start", "end"]


class ScheduleEntry(BaseModel):
    """One row of the schedule: a contiguous time block with a task label."""

    start: str = Field(..., description='Canonical time text, e.g. "6:00 AM"')
    end: str = Field(..., description='Canonical time text, e.g. "9:00 AM"')
    task: str = ""


def _seed(start: str, end: str, task: str) -> ScheduleEntry:
    return ScheduleEntry(start=start, end=end, task=task)


DEFAULT_SCHEDULE: tuple[ScheduleEntry, ...] = (
    _seed("6:00 AM", "9:00 AM", "Morning Routine"),
    _seed("9:00 AM", "12:00 PM", "Work/Study"),
    _seed("12:00 PM", "1:00 PM", "Lunch Break"),
    _seed("1:00 PM", "5:00 PM", "Afternoon Work"),
    _seed("5:00 PM", "7:00 PM", "Exercise/Hobby"),
    _seed("7:00 PM", "9:00 PM", "Dinner & Family"),
    _seed("9:00 PM", "10:00 PM", "Personal Time"),
)


def default_schedule() -> list[ScheduleEntry]:
    """Fresh copy of the seed schedule used when nothing is stored."""
    return [entry.model_copy() for entry in DEFAULT_SCHEDULE]


# ===========================================
# Persistence Models
# ===========================================


class Timetable(BaseModel):
    """A user's stored schedule."""

    id: UUID
    user_id: str
    entries: list[ScheduleEntry] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ===========================================
# Editing API Models
# ===========================================


class TimeEditRequest(BaseModel):
    """Change the start or end time of one entry."""

    field: TimeField
    value: str = Field(..., max_length=20)


class TaskEditRequest(BaseModel):
    """Change the task label of one entry."""

    task: str = Field("", max_length=500)


class ScheduleState(BaseModel):
    """Live editor state returned after every operation."""

    entries: list[ScheduleEntry]
    can_undo: bool = False
    can_redo: bool = False
    undo_depth: int = 0
    redo_depth: int = 0
    applied: bool = Field(True, description="False when the edit was rejected as malformed")


class SavedSchedule(BaseModel):
    """Result of an explicit save."""

    entries: list[ScheduleEntry]
    last_edited: datetime


# ===========================================
# AI Generation Models
# ===========================================


class ScheduleGenerateRequest(BaseModel):
    """Free-text description of the day to turn into a schedule."""

    prompt: str = Field(..., min_length=1, max_length=4000)


class ScheduleGenerateResponse(BaseModel):
    state: ScheduleState
    model: Optional[str] = None
    conflicts: list[str] = Field(default_factory=list)
