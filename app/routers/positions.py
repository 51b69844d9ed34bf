"""
Position router - candidates of a position and slot suggestions.
"""

from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.schemas.candidate import CandidateCreate, CandidateRead, CandidateWithStage
from app.schemas.position import PositionRead
from app.schemas.suggestion import CandidatePlanRead, SuggestionRequest, SuggestionResponse
from app.services.candidate_service import CandidateService
from app.services.position_directory import SqlPositionDirectory
from app.services.suggestion_service import SuggestionService

router = APIRouter(prefix="/positions", tags=["positions"])


@router.get("", response_model=List[PositionRead])
async def list_positions(db: AsyncSession = Depends(get_db)):
    """Open positions."""
    return await SqlPositionDirectory(db).list_open_positions()


@router.get("/{position_id}/candidates", response_model=List[CandidateWithStage])
async def list_candidates(
    position_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Every candidate of the position with the stage they are at."""
    service = CandidateService(db)
    rows = await service.list_for_position(position_id)
    return [CandidateWithStage.from_candidate(candidate, stage) for candidate, stage in rows]


@router.post("/{position_id}/candidates", response_model=CandidateRead, status_code=status.HTTP_201_CREATED)
async def register_candidate(
    position_id: UUID,
    data: CandidateCreate,
    db: AsyncSession = Depends(get_db),
):
    """Resume intake: add a scored candidate to the position."""
    service = CandidateService(db)
    candidate = await service.register_candidate(position_id, data)
    await db.commit()
    return candidate


async def _suggest(db: AsyncSession, position_id: UUID, request: SuggestionRequest) -> SuggestionResponse:
    service = SuggestionService(db)
    position, plans = await service.suggest(position_id, request.days, held=request.held)
    return SuggestionResponse(
        position_id=position.id,
        total_candidates=len(plans),
        candidates=[CandidatePlanRead.model_validate(plan) for plan in plans],
    )


@router.get("/{position_id}/suggest-schedules", response_model=SuggestionResponse)
async def suggest_schedules(
    position_id: UUID,
    days: List[date] = Query(default=[]),
    db: AsyncSession = Depends(get_db),
):
    """
    Propose interview slots over the given days.

    Read-only: nothing is booked until a schedule is created.
    """
    return await _suggest(db, position_id, SuggestionRequest(days=days))


@router.post("/{position_id}/suggest-schedules", response_model=SuggestionResponse)
async def suggest_schedules_with_holds(
    position_id: UUID,
    data: SuggestionRequest,
    db: AsyncSession = Depends(get_db),
):
    """Same as GET, plus picks the recruiter is holding but has not confirmed."""
    return await _suggest(db, position_id, data)
