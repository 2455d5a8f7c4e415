"""Pydantic models (schemas) for the application."""

from dayplanner.models.schedule import (
    DEFAULT_SCHEDULE,
    SavedSchedule,
    ScheduleEntry,
    ScheduleGenerateRequest,
    ScheduleGenerateResponse,
    ScheduleState,
    TaskEditRequest,
    TimeEditRequest,
    Timetable,
    default_schedule,
)
from dayplanner.models.user import (
    AdminStats,
    AdminUserSchedule,
    AdminUserSummary,
    UserAccount,
    UserCreate,
    UserRole,
    UserUpdate,
)

__all__ = [
    # Schedule
    "DEFAULT_SCHEDULE",
    "ScheduleEntry",
    "Timetable",
    "TimeEditRequest",
    "TaskEditRequest",
    "ScheduleState",
    "SavedSchedule",
    "ScheduleGenerateRequest",
    "ScheduleGenerateResponse",
    "default_schedule",
    # Users
    "UserRole",
    "UserCreate",
    "UserAccount",
    "UserUpdate",
    "AdminUserSummary",
    "AdminUserSchedule",
    "AdminStats",
]
