"""
Interview outcome router - feedback and Pass/Fail decisions.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_actor_id, get_db
from app.schemas.interview_outcome import (
    InterviewOutcomeCreate,
    InterviewOutcomeDecisionUpdate,
    InterviewOutcomeFeedbackUpdate,
    InterviewOutcomeRead,
)
from app.services.outcome_service import OutcomeService

router = APIRouter(tags=["interview-outcomes"])


@router.post("/interview-outcomes", response_model=InterviewOutcomeRead, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    data: InterviewOutcomeCreate,
    actor_id: Optional[str] = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Record feedback for a round; this completes the schedule."""
    service = OutcomeService(db)
    outcome = await service.submit_feedback(
        data.schedule_id,
        data.feedback,
        decision=data.decision,
        created_by=actor_id,
    )
    await db.commit()
    return outcome


@router.get("/interview-outcomes/{outcome_id}", response_model=InterviewOutcomeRead)
async def get_outcome(
    outcome_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = OutcomeService(db)
    return await service.get_outcome(outcome_id)


@router.get("/interview-schedules/{schedule_id}/outcome", response_model=InterviewOutcomeRead)
async def get_outcome_for_schedule(
    schedule_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = OutcomeService(db)
    return await service.get_outcome_for_schedule(schedule_id)


@router.patch("/interview-outcomes/{outcome_id}", response_model=InterviewOutcomeRead)
async def edit_feedback(
    outcome_id: UUID,
    data: InterviewOutcomeFeedbackUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit feedback text; the decision is unaffected."""
    service = OutcomeService(db)
    outcome = await service.edit_feedback(outcome_id, data.feedback)
    await db.commit()
    return outcome


@router.post("/interview-outcomes/{outcome_id}/change-status", response_model=InterviewOutcomeRead)
async def set_decision(
    outcome_id: UUID,
    data: InterviewOutcomeDecisionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Decide pass or fail.

    Only the first decision wins; later calls get 409 INVALID_STATE_TRANSITION.
    """
    service = OutcomeService(db)
    outcome = await service.set_decision(outcome_id, data.decision)
    await db.commit()
    return outcome
