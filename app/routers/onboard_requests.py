"""
Onboard request router - offers and their approval.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_actor_id, get_db, get_notifier
from app.errors import InputValidationError
from app.models.enums import OnboardStatus
from app.schemas.codes import coerce_legacy_code
from app.schemas.onboard_request import (
    OnboardRequestCreate,
    OnboardRequestRead,
    OnboardRequestUpdate,
    OnboardStatusChange,
)
from app.services.notification_service import NotificationSender, dispatch_notification
from app.services.onboard_service import OnboardService

router = APIRouter(prefix="/request-onboards", tags=["request-onboards"])


def _parse_status(value: Optional[str]) -> Optional[OnboardStatus]:
    if value is None:
        return None
    try:
        return OnboardStatus(coerce_legacy_code(OnboardStatus, value))
    except ValueError as exc:
        raise InputValidationError("Unknown onboard status", {"status": value}) from exc


@router.get("", response_model=List[OnboardRequestRead])
async def list_requests(
    db: AsyncSession = Depends(get_db),
    candidate_id: Optional[UUID] = None,
    status: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """
    List onboard requests, newest first.

    Filters: candidate_id, status (name or legacy code).
    """
    service = OnboardService(db)
    return await service.list_requests(
        candidate_id=candidate_id,
        status=_parse_status(status),
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=OnboardRequestRead, status_code=status.HTTP_201_CREATED)
async def create_request(
    data: OnboardRequestCreate,
    actor_id: Optional[str] = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    service = OnboardService(db)
    request = await service.create_request(data, created_by=actor_id)
    await db.commit()
    return request


@router.get("/{request_id}", response_model=OnboardRequestRead)
async def get_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = OnboardService(db)
    return await service.get_request(request_id)


@router.put("/{request_id}", response_model=OnboardRequestRead)
async def update_offer(
    request_id: UUID,
    data: OnboardRequestUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Replace the offer terms of a pending request."""
    service = OnboardService(db)
    request = await service.update_offer(request_id, data)
    await db.commit()
    return request


@router.post("/{request_id}/status", response_model=OnboardRequestRead)
async def change_status(
    request_id: UUID,
    data: OnboardStatusChange,
    background_tasks: BackgroundTasks,
    actor_id: Optional[str] = Depends(get_actor_id),
    notifier: NotificationSender = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
):
    """Approve or reject; approval onboards the candidate."""
    service = OnboardService(db)
    request = await service.change_status(request_id, data.status, note=data.note, changed_by=actor_id)
    await db.commit()

    for notification in service.notifications:
        background_tasks.add_task(dispatch_notification, notifier, notification)
    return request
