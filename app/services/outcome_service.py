"""
Outcome store business logic: interview feedback and Pass/Fail decisions.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.errors import (
    AlreadyExistsError,
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from app.models.enums import OutcomeDecision, ScheduleStatus
from app.models.interview_outcome import InterviewOutcome
from app.models.interview_schedule import InterviewSchedule
from app.repositories.interview_outcome_repository import InterviewOutcomeRepository
from app.services.candidate_service import CandidateService
from app.services.position_directory import PositionDirectory
from app.services.schedule_service import ScheduleService
from app.utils.time import as_utc, utc_now

logger = logging.getLogger(__name__)


class OutcomeService:
    """Service for interview outcome business logic."""

    def __init__(self, db: AsyncSession, directory: Optional[PositionDirectory] = None):
        self.db = db
        self.repository = InterviewOutcomeRepository(db)
        self.schedules = ScheduleService(db, directory=directory)
        self.candidates = CandidateService(db, directory=directory)

    async def get_outcome(self, outcome_id: UUID) -> InterviewOutcome:
        outcome = await self.repository.get_by_id(outcome_id)
        if outcome is None:
            raise NotFoundError("Interview outcome not found", {"outcome_id": str(outcome_id)})
        return outcome

    async def get_outcome_for_schedule(self, schedule_id: UUID) -> InterviewOutcome:
        schedule = await self.schedules.get_schedule(schedule_id)
        outcome = await self.repository.get_by_schedule(schedule.id)
        if outcome is None:
            raise NotFoundError("No outcome recorded for this schedule", {"schedule_id": str(schedule.id)})
        return outcome

    async def submit_feedback(
        self,
        schedule_id: UUID,
        feedback: str,
        decision: Optional[OutcomeDecision] = None,
        created_by: Optional[str] = None,
    ) -> InterviewOutcome:
        """
        Record the outcome of a round.

        Completes the schedule. The decision starts pending unless a pass/fail
        decision is supplied, which is then applied like ``set_decision``.
        """
        schedule = await self.schedules.get_schedule(schedule_id)
        if schedule.status == ScheduleStatus.CANCELED.value:
            raise InvalidStateTransitionError(
                "Cannot record feedback for a canceled schedule",
                {"schedule_id": str(schedule.id)},
            )
        if decision is not None and decision == OutcomeDecision.PENDING:
            decision = None

        existing = await self.repository.get_by_schedule(schedule.id)
        if existing is not None:
            raise AlreadyExistsError(
                "Feedback already submitted for this schedule",
                {"schedule_id": str(schedule.id), "outcome_id": str(existing.id)},
            )

        self._check_feedback_window(schedule)

        try:
            outcome = await self.repository.create(schedule, feedback, created_by)
        except IntegrityError as exc:
            raise AlreadyExistsError(
                "Feedback already submitted for this schedule",
                {"schedule_id": str(schedule.id)},
            ) from exc

        await self.schedules.complete_schedule(schedule.id)
        logger.info("Feedback recorded for schedule %s (outcome %s)", schedule.id, outcome.id)

        if decision is not None:
            await self._apply_decision(outcome, decision)
        return outcome

    async def edit_feedback(self, outcome_id: UUID, feedback: str) -> InterviewOutcome:
        """Rewrite the feedback text; the decision is left alone."""
        outcome = await self.get_outcome(outcome_id)
        return await self.repository.update_feedback(outcome, feedback)

    async def set_decision(self, outcome_id: UUID, decision: OutcomeDecision) -> InterviewOutcome:
        """
        Set pass/fail exactly once and apply it to the candidate.

        Both writes happen in the caller's transaction; if the candidate write
        fails the decision is rolled back with it.
        """
        if decision not in (OutcomeDecision.PASS, OutcomeDecision.FAIL):
            raise InputValidationError("Decision must be pass or fail", {"decision": decision.value})
        outcome = await self.get_outcome(outcome_id)
        return await self._apply_decision(outcome, decision)

    async def _apply_decision(self, outcome: InterviewOutcome, decision: OutcomeDecision) -> InterviewOutcome:
        changed = await self.repository.set_decision_if_pending(outcome, decision)
        if not changed:
            await self.db.refresh(outcome)
            raise InvalidStateTransitionError(
                "Decision has already been made",
                {"outcome_id": str(outcome.id), "decision": outcome.decision},
            )

        candidate_id = outcome.schedule.candidate_id
        if decision == OutcomeDecision.PASS:
            await self.candidates.advance_on_pass(candidate_id)
        else:
            await self.candidates.mark_failed(candidate_id)

        logger.info("Outcome %s decided %s for candidate %s", outcome.id, decision.value, candidate_id)
        return outcome

    @staticmethod
    def _check_feedback_window(schedule: InterviewSchedule) -> None:
        if settings.ALLOW_PRE_INTERVIEW_FEEDBACK:
            return
        opens_at = as_utc(schedule.start_time) - timedelta(minutes=settings.INTERVIEW_FEEDBACK_EARLY_MINUTES)
        if utc_now() < opens_at:
            raise PreconditionFailedError(
                "Feedback cannot be submitted before the interview",
                {"schedule_id": str(schedule.id), "opens_at": opens_at.isoformat()},
            )
