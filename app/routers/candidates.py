"""
Candidate router - API endpoints for candidates.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.candidate import CandidateRead, CandidateReject
from app.schemas.interview_schedule import InterviewScheduleRead
from app.services.candidate_service import CandidateService
from app.services.schedule_service import ScheduleService

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get("/{candidate_id}", response_model=CandidateRead)
async def get_candidate(
    candidate_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = CandidateService(db)
    return await service.get_candidate(candidate_id)


@router.post("/{candidate_id}/reject", response_model=CandidateRead)
async def reject_candidate(
    candidate_id: UUID,
    data: CandidateReject,
    db: AsyncSession = Depends(get_db),
):
    """Explicit HR rejection of an active candidate."""
    service = CandidateService(db)
    candidate = await service.reject_candidate(candidate_id, data.reason)
    await db.commit()
    return candidate


@router.get("/{candidate_id}/schedules", response_model=List[InterviewScheduleRead])
async def get_schedule_history(
    candidate_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """All interview rounds of the candidate, by stage order then start time."""
    service = ScheduleService(db)
    return await service.list_history(candidate_id)
