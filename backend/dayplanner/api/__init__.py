"""API routers."""

from dayplanner.api import admin, auth, schedule

__all__ = [
    "admin",
    "auth",
    "schedule",
]
