"""
Candidate registry business logic.
"""

import logging
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import InputValidationError, InvalidStateTransitionError, NotFoundError
from app.models.candidate import Candidate
from app.models.enums import CandidateStatus, ScheduleStatus
from app.models.interview_process import InterviewStage
from app.models.position import Position
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.interview_process_repository import InterviewProcessRepository
from app.repositories.interview_schedule_repository import InterviewScheduleRepository
from app.schemas.candidate import CandidateCreate
from app.services.position_directory import PositionDirectory, SqlPositionDirectory

logger = logging.getLogger(__name__)

ACTIVE_CANDIDATE_STATUSES = [s for s in CandidateStatus if not s.is_terminal]

# Schedules that count towards "where is this candidate now"
_PROGRESS_STATUSES = {ScheduleStatus.SCHEDULED.value, ScheduleStatus.COMPLETED.value}


class CandidateService:
    """Service for candidate registry business logic."""

    def __init__(self, db: AsyncSession, directory: Optional[PositionDirectory] = None):
        self.db = db
        self.repository = CandidateRepository(db)
        self.schedules = InterviewScheduleRepository(db)
        self.processes = InterviewProcessRepository(db)
        self.directory = directory or SqlPositionDirectory(db)

    async def get_position(self, position_id: UUID) -> Position:
        position = await self.directory.get_position(position_id)
        if position is None:
            raise NotFoundError("Position not found", {"position_id": str(position_id)})
        return position

    async def get_candidate(self, candidate_id: UUID) -> Candidate:
        candidate = await self.repository.get_by_id(candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate not found", {"candidate_id": str(candidate_id)})
        return candidate

    async def register_candidate(self, position_id: UUID, data: CandidateCreate) -> Candidate:
        """Intake a scored resume as a pending candidate."""
        position = await self.get_position(position_id)
        if data.score is not None and not 0 <= data.score <= 100:
            raise InputValidationError("Score must be between 0 and 100", {"score": data.score})

        candidate = await self.repository.create(
            position_id=position.id,
            full_name=data.full_name,
            email=data.email,
            score=data.score,
        )
        logger.info("Registered candidate %s for position %s", candidate.id, position.id)
        return candidate

    async def list_for_position(
        self,
        position_id: UUID,
    ) -> List[Tuple[Candidate, Optional[InterviewStage]]]:
        """
        Every candidate of the position with its current stage.

        The current stage is the highest-ordered stage among the candidate's
        completed or scheduled rounds, or the lowest-ordered stage of the
        process when it has none.
        """
        position = await self.get_position(position_id)
        candidates = await self.repository.list_by_position(position.id)
        first_stage = await self.processes.get_first_stage(position.process_id)

        reached: Dict[UUID, InterviewStage] = {}
        schedules = await self.schedules.list_by_candidates([c.id for c in candidates])
        for schedule in schedules:
            if schedule.status not in _PROGRESS_STATUSES:
                continue
            best = reached.get(schedule.candidate_id)
            if best is None or schedule.stage.stage_order > best.stage_order:
                reached[schedule.candidate_id] = schedule.stage

        return [(candidate, reached.get(candidate.id, first_stage)) for candidate in candidates]

    async def advance_on_pass(self, candidate_id: UUID) -> Candidate:
        """
        Record that the candidate passed a stage.

        The status itself stays where it is (pending until onboarding
        approval); the write only succeeds while the candidate is not
        terminal.
        """
        candidate = await self.get_candidate(candidate_id)
        current = CandidateStatus(candidate.status)
        moved = await self.repository.transition_status(
            candidate,
            current,
            allowed_from=ACTIVE_CANDIDATE_STATUSES,
        )
        if not moved:
            raise InvalidStateTransitionError(
                "Candidate is no longer active",
                {"candidate_id": str(candidate.id), "status": candidate.status},
            )
        logger.info("Candidate %s passed a stage", candidate.id)
        return candidate

    async def mark_failed(self, candidate_id: UUID) -> Candidate:
        return await self._finish(candidate_id, CandidateStatus.FAILED)

    async def mark_onboarded(self, candidate_id: UUID) -> Candidate:
        return await self._finish(candidate_id, CandidateStatus.ONBOARDED)

    async def reject_candidate(self, candidate_id: UUID, reason: Optional[str]) -> Candidate:
        """Explicit HR rejection."""
        return await self._finish(candidate_id, CandidateStatus.REJECTED, rejection_reason=reason)

    async def _finish(
        self,
        candidate_id: UUID,
        new_status: CandidateStatus,
        rejection_reason: Optional[str] = None,
    ) -> Candidate:
        candidate = await self.get_candidate(candidate_id)
        moved = await self.repository.transition_status(
            candidate,
            new_status,
            allowed_from=ACTIVE_CANDIDATE_STATUSES,
            rejection_reason=rejection_reason,
        )
        if not moved:
            await self.db.refresh(candidate)
            raise InvalidStateTransitionError(
                "Candidate is already in a terminal status",
                {"candidate_id": str(candidate.id), "status": candidate.status},
            )
        logger.info("Candidate %s -> %s", candidate.id, new_status.value)
        return candidate
