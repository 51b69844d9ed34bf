"""
Interview process router - API endpoints for the stage catalog.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.interview_process import (
    InterviewProcessCreate,
    InterviewProcessRead,
    InterviewStageCreate,
    InterviewStageRead,
    InterviewStageUpdate,
)
from app.services.stage_catalog_service import StageCatalogService

router = APIRouter(tags=["interview-processes"])


@router.post("/interview-processes", response_model=InterviewProcessRead, status_code=status.HTTP_201_CREATED)
async def create_process(
    data: InterviewProcessCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an interview process (stages are added separately)."""
    service = StageCatalogService(db)
    process = await service.create_process(data)
    await db.commit()
    return process


@router.get("/interview-processes/{process_id}", response_model=InterviewProcessRead)
async def get_process(
    process_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a process with its stages in order."""
    service = StageCatalogService(db)
    return await service.get_process(process_id)


@router.post(
    "/interview-processes/{process_id}/stages",
    response_model=InterviewStageRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_stage(
    process_id: UUID,
    data: InterviewStageCreate,
    db: AsyncSession = Depends(get_db),
):
    service = StageCatalogService(db)
    stage = await service.add_stage(process_id, data)
    await db.commit()
    return stage


@router.patch("/interview-stages/{stage_id}", response_model=InterviewStageRead)
async def update_stage(
    stage_id: UUID,
    data: InterviewStageUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a stage.

    Changing stage_order is refused once the stage has been scheduled.
    """
    service = StageCatalogService(db)
    stage = await service.update_stage(stage_id, data)
    await db.commit()
    return stage
