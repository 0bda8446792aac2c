from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.engine import get_db
from app.dependencies import require_auth, require_schedule_admin
from app.schemas import ScheduleCreate, ScheduleRead, ScheduleStatusUpdate
from app.services.auth import AuthContext

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.post("", response_model=ScheduleRead, status_code=201)
async def create_schedule(
    body: ScheduleCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    """Request a viewing; starts out pending."""
    prop = await crud.get_property(db, body.property_id)
    user = await crud.get_user(db, auth.user_id)
    return await crud.create_schedule(
        db, prop, user, body.scheduled_date, body.contact_method, body.message,
    )


@router.get("/mine", response_model=list[ScheduleRead])
async def list_my_schedules(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await crud.list_schedules(db, user_id=auth.user_id)


@router.get("", response_model=list[ScheduleRead])
async def list_schedules(
    status: str | None = Query(default=None),
    auth: AuthContext = Depends(require_schedule_admin),
    db: AsyncSession = Depends(get_db),
):
    return await crud.list_schedules(db, status=status)


@router.put("/{schedule_id}/status", response_model=ScheduleRead)
async def update_schedule_status(
    schedule_id: str,
    body: ScheduleStatusUpdate,
    auth: AuthContext = Depends(require_schedule_admin),
    db: AsyncSession = Depends(get_db),
):
    return await crud.update_schedule_status(db, schedule_id, body.status)


@router.delete("/{schedule_id}")
async def delete_schedule(
    schedule_id: str,
    auth: AuthContext = Depends(require_schedule_admin),
    db: AsyncSession = Depends(get_db),
):
    await crud.delete_schedule(db, schedule_id)
    return {"deleted": schedule_id}
