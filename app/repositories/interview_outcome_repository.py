"""
InterviewOutcome repository - database operations for InterviewOutcome.
"""

from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import OutcomeDecision, ScheduleStatus
from app.models.interview_outcome import InterviewOutcome
from app.models.interview_process import InterviewStage
from app.models.interview_schedule import InterviewSchedule
from app.utils.time import utc_now


class InterviewOutcomeRepository:
    """Repository for InterviewOutcome database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, outcome_id: UUID) -> Optional[InterviewOutcome]:
        result = await self.db.execute(
            select(InterviewOutcome).where(InterviewOutcome.id == outcome_id)
        )
        return result.scalar_one_or_none()

    async def get_by_schedule(self, schedule_id: UUID) -> Optional[InterviewOutcome]:
        result = await self.db.execute(
            select(InterviewOutcome).where(InterviewOutcome.schedule_id == schedule_id)
        )
        return result.scalar_one_or_none()

    async def map_by_schedule(self, schedule_ids: List[UUID]) -> Dict[UUID, InterviewOutcome]:
        """Outcomes keyed by schedule id."""
        if not schedule_ids:
            return {}
        result = await self.db.execute(
            select(InterviewOutcome).where(InterviewOutcome.schedule_id.in_(schedule_ids))
        )
        return {outcome.schedule_id: outcome for outcome in result.scalars().all()}

    async def find_pass_for_stage(self, candidate_id: UUID, stage_id: UUID) -> Optional[InterviewOutcome]:
        """Pass outcome of a completed round of the candidate at the stage, if any."""
        result = await self.db.execute(
            select(InterviewOutcome)
            .join(InterviewSchedule, InterviewSchedule.id == InterviewOutcome.schedule_id)
            .where(
                InterviewSchedule.candidate_id == candidate_id,
                InterviewSchedule.stage_id == stage_id,
                InterviewSchedule.status == ScheduleStatus.COMPLETED.value,
                InterviewOutcome.decision == OutcomeDecision.PASS.value,
            )
            .order_by(InterviewOutcome.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def highest_passed_order(self, candidate_id: UUID) -> Optional[int]:
        """Greatest stage order the candidate has a completed, passed round for."""
        result = await self.db.execute(
            select(func.max(InterviewStage.stage_order))
            .select_from(InterviewSchedule)
            .join(InterviewStage, InterviewStage.id == InterviewSchedule.stage_id)
            .join(InterviewOutcome, InterviewOutcome.schedule_id == InterviewSchedule.id)
            .where(
                InterviewSchedule.candidate_id == candidate_id,
                InterviewSchedule.status == ScheduleStatus.COMPLETED.value,
                InterviewOutcome.decision == OutcomeDecision.PASS.value,
            )
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        schedule: InterviewSchedule,
        feedback: str,
        created_by: Optional[str],
    ) -> InterviewOutcome:
        outcome = InterviewOutcome(
            schedule_id=schedule.id,
            schedule=schedule,
            feedback=feedback,
            decision=OutcomeDecision.PENDING.value,
            created_by=created_by,
        )
        self.db.add(outcome)
        await self.db.flush()
        return outcome

    async def update_feedback(self, outcome: InterviewOutcome, feedback: str) -> InterviewOutcome:
        outcome.feedback = feedback
        await self.db.flush()
        return outcome

    async def set_decision_if_pending(
        self,
        outcome: InterviewOutcome,
        decision: OutcomeDecision,
    ) -> bool:
        """
        Compare-and-swap the decision.

        Only matches while the stored decision is still pending, so of two
        racing reviewers exactly one gets True.
        """
        result = await self.db.execute(
            update(InterviewOutcome)
            .where(
                InterviewOutcome.id == outcome.id,
                InterviewOutcome.decision == OutcomeDecision.PENDING.value,
            )
            .values(decision=decision.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.db.refresh(outcome)
        return True
