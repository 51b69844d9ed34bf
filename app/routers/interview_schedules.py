"""
Interview schedule router - API endpoints for interview rounds.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_actor_id, get_db, get_notifier
from app.schemas.interview_schedule import (
    InterviewScheduleCreate,
    InterviewScheduleRead,
    InterviewScheduleUpdate,
)
from app.services.notification_service import NotificationSender, dispatch_notification
from app.services.schedule_service import ScheduleService

router = APIRouter(prefix="/interview-schedules", tags=["interview-schedules"])


@router.post("", response_model=InterviewScheduleRead, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    data: InterviewScheduleCreate,
    background_tasks: BackgroundTasks,
    actor_id: Optional[str] = Depends(get_actor_id),
    notifier: NotificationSender = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
):
    """
    Confirm an interview round.

    Re-validates the stage gate and interviewer availability at write time;
    a suggestion is never trusted as-is.
    """
    service = ScheduleService(db)
    schedule = await service.create_schedule(data, created_by=actor_id)
    await db.commit()

    for notification in service.notifications:
        background_tasks.add_task(dispatch_notification, notifier, notification)
    return schedule


@router.get("/{schedule_id}", response_model=InterviewScheduleRead)
async def get_schedule(
    schedule_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ScheduleService(db)
    return await service.get_schedule(schedule_id)


@router.put("/{schedule_id}", response_model=InterviewScheduleRead)
async def reschedule(
    schedule_id: UUID,
    data: InterviewScheduleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Move a scheduled round or change its interviewers."""
    service = ScheduleService(db)
    schedule = await service.reschedule(schedule_id, data)
    await db.commit()
    return schedule


@router.post("/{schedule_id}/complete", response_model=InterviewScheduleRead)
async def complete_schedule(
    schedule_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ScheduleService(db)
    schedule = await service.complete_schedule(schedule_id)
    await db.commit()
    return schedule


@router.post("/{schedule_id}/cancel", response_model=InterviewScheduleRead)
async def cancel_schedule(
    schedule_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ScheduleService(db)
    schedule = await service.cancel_schedule(schedule_id)
    await db.commit()
    return schedule
