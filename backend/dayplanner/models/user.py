"""
User account models for authentication mapping.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from dayplanner.models.schedule import ScheduleEntry


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserCreate(BaseModel):
    """Create a user account."""

    provider_issuer: str = Field(..., min_length=1, max_length=500)
    provider_sub: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    username: Optional[str] = Field(None, max_length=255)
    password_hash: Optional[str] = Field(None, max_length=255)
    role: UserRole = UserRole.USER


class UserAccount(BaseModel):
    """User account stored in the database."""

    id: UUID
    provider_issuer: str
    provider_sub: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    username: Optional[str] = None
    password_hash: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserUpdate(BaseModel):
    """Update user account fields."""

    email: Optional[str] = Field(None, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    username: Optional[str] = Field(None, max_length=255)
    password_hash: Optional[str] = Field(None, max_length=255)
    role: Optional[UserRole] = None


class AdminUserSummary(BaseModel):
    """One row of the admin user listing."""

    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    role: UserRole
    entry_count: int = 0
    last_edited: Optional[datetime] = None


class AdminStats(BaseModel):
    total_users: int
    total_entries: int
    active_today: int


class AdminUserSchedule(BaseModel):
    """A chosen user's stored schedule as seen by an admin."""

    user: AdminUserSummary
    entries: list[ScheduleEntry] = Field(default_factory=list)
