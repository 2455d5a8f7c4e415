"""
Admin API endpoints: user listing, usage stats and per-user exports.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Response, status

from dayplanner.api.deps import AdminSvc, AdminUser, ExportService
from dayplanner.core.exceptions import NotFoundError
from dayplanner.models.schedule import Timetable
from dayplanner.models.user import AdminStats, AdminUserSchedule, AdminUserSummary, UserAccount
from dayplanner.services.schedule_export_service import ExportOwner, export_filename

router = APIRouter()


async def _load(admin: AdminSvc, user_id: str) -> tuple[UserAccount, Optional[Timetable]]:
    try:
        return await admin.get_user_schedule(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _owner(account: UserAccount, timetable: Optional[Timetable]) -> ExportOwner:
    return ExportOwner(
        username=account.username or account.display_name or str(account.id),
        email=account.email,
        last_edited=timetable.updated_at if timetable else None,
    )


@router.get("/users", response_model=list[AdminUserSummary])
async def list_users(user: AdminUser, admin: AdminSvc):
    return await admin.list_users(exclude_user_id=user.id)


@router.get("/stats", response_model=AdminStats)
async def get_stats(user: AdminUser, admin: AdminSvc):
    return await admin.stats(exclude_user_id=user.id)


@router.get("/users/{user_id}/schedule", response_model=AdminUserSchedule)
async def get_user_schedule(user_id: str, user: AdminUser, admin: AdminSvc):
    account, timetable = await _load(admin, user_id)
    entries = timetable.entries if timetable else []
    return AdminUserSchedule(
        user=AdminUserSummary(
            id=str(account.id),
            username=account.username,
            email=account.email,
            role=account.role,
            entry_count=len(entries),
            last_edited=timetable.updated_at if timetable else None,
        ),
        entries=entries,
    )


@router.get("/users/{user_id}/export.csv")
async def export_user_csv(
    user_id: str,
    user: AdminUser,
    admin: AdminSvc,
    exporter: ExportService,
):
    account, timetable = await _load(admin, user_id)
    owner = _owner(account, timetable)
    return Response(
        content=exporter.to_csv(timetable.entries if timetable else [], owner),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename("csv", owner)}"'},
    )


@router.get("/users/{user_id}/export.pdf")
async def export_user_pdf(
    user_id: str,
    user: AdminUser,
    admin: AdminSvc,
    exporter: ExportService,
):
    account, timetable = await _load(admin, user_id)
    owner = _owner(account, timetable)
    return Response(
        content=exporter.to_pdf(timetable.entries if timetable else [], owner),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename("pdf", owner)}"'},
    )
