"""
Schedule store business logic.

Every write that books interviewers first takes their calendar locks, then
runs the overlap query, so two concurrent bookings of one person cannot both
succeed.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    ConflictError,
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from app.models.candidate import Candidate
from app.models.enums import ScheduleStatus
from app.models.interview_process import InterviewStage
from app.models.interview_schedule import InterviewSchedule, ScheduleInterviewer
from app.repositories.interview_outcome_repository import InterviewOutcomeRepository
from app.repositories.interview_process_repository import InterviewProcessRepository
from app.repositories.interview_schedule_repository import InterviewScheduleRepository
from app.schemas.interview_schedule import InterviewScheduleCreate, InterviewScheduleUpdate
from app.services.candidate_service import CandidateService
from app.services.notification_service import Notification
from app.services.position_directory import PositionDirectory
from app.utils.time import as_utc

logger = logging.getLogger(__name__)


def _clean_interviewers(interviewer_ids: Iterable[str]) -> List[str]:
    cleaned = sorted({str(i).strip() for i in interviewer_ids if str(i).strip()})
    if not cleaned:
        raise InputValidationError("At least one interviewer is required")
    return cleaned


def _check_window(start: datetime, end: datetime) -> None:
    if end <= start:
        raise InputValidationError(
            "end_time must be after start_time",
            {"start_time": start.isoformat(), "end_time": end.isoformat()},
        )


class ScheduleService:
    """Service for interview schedule business logic."""

    def __init__(self, db: AsyncSession, directory: Optional[PositionDirectory] = None):
        self.db = db
        self.repository = InterviewScheduleRepository(db)
        self.outcomes = InterviewOutcomeRepository(db)
        self.processes = InterviewProcessRepository(db)
        self.candidates = CandidateService(db, directory=directory)
        # Filled by writes; the router hands them to the sender after commit
        self.notifications: List[Notification] = []

    async def get_schedule(self, schedule_id: UUID) -> InterviewSchedule:
        schedule = await self.repository.get_by_id(schedule_id)
        if schedule is None:
            raise NotFoundError("Interview schedule not found", {"schedule_id": str(schedule_id)})
        return schedule

    async def list_history(self, candidate_id: UUID) -> List[InterviewSchedule]:
        """All rounds of a candidate ordered by stage order, then start."""
        candidate = await self.candidates.get_candidate(candidate_id)
        return await self.repository.list_by_candidate(candidate.id)

    async def create_schedule(
        self,
        data: InterviewScheduleCreate,
        created_by: Optional[str] = None,
    ) -> InterviewSchedule:
        """Confirm a new interview round."""
        start, end = as_utc(data.start_time), as_utc(data.end_time)
        _check_window(start, end)
        interviewer_ids = _clean_interviewers(data.interviewer_ids)

        candidate = await self.candidates.get_candidate(data.candidate_id)
        stage = await self.processes.get_stage(data.stage_id)
        if stage is None:
            raise NotFoundError("Interview stage not found", {"stage_id": str(data.stage_id)})

        position = await self.candidates.get_position(candidate.position_id)
        if stage.process_id != position.process_id:
            raise InputValidationError(
                "Stage does not belong to the candidate's interview process",
                {"stage_id": str(stage.id), "process_id": str(position.process_id)},
            )

        await self._check_stage_unlocked(candidate, stage)

        active = await self.repository.find_active_for_stage(candidate.id, stage.id)
        if active is not None:
            raise ConflictError(
                "Candidate already has a scheduled round for this stage",
                {"schedule_id": str(active.id), "stage_id": str(stage.id)},
            )

        await self.repository.lock_interviewers(interviewer_ids)
        await self._check_interviewers_free(interviewer_ids, start, end)

        schedule = InterviewSchedule(
            candidate_id=candidate.id,
            stage_id=stage.id,
            stage=stage,
            start_time=start,
            end_time=end,
            notes=data.notes,
            status=ScheduleStatus.SCHEDULED.value,
            created_by=created_by,
            interviewers=[ScheduleInterviewer(interviewer_id=i) for i in interviewer_ids],
        )
        try:
            await self.repository.create(schedule)
        except IntegrityError as exc:
            logger.info("Concurrent booking for candidate %s stage %s", candidate.id, stage.id)
            raise ConflictError(
                "Candidate already has a scheduled round for this stage",
                {"stage_id": str(stage.id)},
            ) from exc

        logger.info(
            "Scheduled candidate %s for stage %s (%s - %s) with %s",
            candidate.id,
            stage.stage_order,
            start.isoformat(),
            end.isoformat(),
            ", ".join(interviewer_ids),
        )
        self._queue_invitation(candidate, stage, schedule)
        return schedule

    async def reschedule(
        self,
        schedule_id: UUID,
        data: InterviewScheduleUpdate,
    ) -> InterviewSchedule:
        """Move a scheduled round and/or change its panel."""
        schedule = await self.get_schedule(schedule_id)
        self._require_status(schedule, ScheduleStatus.SCHEDULED, "reschedule")

        start = as_utc(data.start_time) if data.start_time is not None else as_utc(schedule.start_time)
        end = as_utc(data.end_time) if data.end_time is not None else as_utc(schedule.end_time)
        _check_window(start, end)
        interviewer_ids = _clean_interviewers(
            data.interviewer_ids if data.interviewer_ids is not None else schedule.interviewer_ids
        )

        await self.repository.lock_interviewers(interviewer_ids)
        await self.db.refresh(schedule)
        self._require_status(schedule, ScheduleStatus.SCHEDULED, "reschedule")
        await self._check_interviewers_free(interviewer_ids, start, end, exclude_schedule_id=schedule.id)

        schedule.start_time = start
        schedule.end_time = end
        if data.notes is not None:
            schedule.notes = data.notes
        await self.repository.replace_interviewers(schedule, interviewer_ids)

        logger.info("Rescheduled %s to %s - %s", schedule.id, start.isoformat(), end.isoformat())
        return schedule

    async def complete_schedule(self, schedule_id: UUID) -> InterviewSchedule:
        """Scheduled -> Completed; completing twice is a no-op."""
        return await self._move(schedule_id, ScheduleStatus.COMPLETED, forbidden=ScheduleStatus.CANCELED)

    async def cancel_schedule(self, schedule_id: UUID) -> InterviewSchedule:
        """Scheduled -> Canceled; canceling twice is a no-op."""
        return await self._move(schedule_id, ScheduleStatus.CANCELED, forbidden=ScheduleStatus.COMPLETED)

    async def _move(
        self,
        schedule_id: UUID,
        target: ScheduleStatus,
        forbidden: ScheduleStatus,
    ) -> InterviewSchedule:
        schedule = await self.get_schedule(schedule_id)
        if schedule.status == target.value:
            return schedule
        if schedule.status == forbidden.value:
            raise InvalidStateTransitionError(
                f"Cannot move a {forbidden.value} schedule to {target.value}",
                {"schedule_id": str(schedule.id), "status": schedule.status},
            )

        moved = await self.repository.transition_status(
            schedule,
            target,
            allowed_from=[ScheduleStatus.SCHEDULED],
        )
        if not moved:
            await self.db.refresh(schedule)
            if schedule.status == target.value:
                return schedule
            raise InvalidStateTransitionError(
                f"Cannot move a {schedule.status} schedule to {target.value}",
                {"schedule_id": str(schedule.id), "status": schedule.status},
            )

        logger.info("Schedule %s -> %s", schedule.id, target.value)
        return schedule

    async def _check_stage_unlocked(self, candidate: Candidate, stage: InterviewStage) -> None:
        if candidate.is_terminal:
            raise PreconditionFailedError(
                "Candidate is no longer in the pipeline",
                {"candidate_id": str(candidate.id), "status": candidate.status},
            )
        furthest = await self.outcomes.highest_passed_order(candidate.id)
        if furthest is not None and stage.stage_order <= furthest:
            raise PreconditionFailedError(
                "Candidate already passed this stage or a later one",
                {"candidate_id": str(candidate.id), "stage_order": stage.stage_order, "passed_order": furthest},
            )

        previous = await self.processes.get_previous_stage(stage.process_id, stage.stage_order)
        if previous is None:
            return
        passed = await self.outcomes.find_pass_for_stage(candidate.id, previous.id)
        if passed is None:
            raise PreconditionFailedError(
                "Previous stage has not been passed",
                {"candidate_id": str(candidate.id), "stage_order": stage.stage_order},
            )

    async def _check_interviewers_free(
        self,
        interviewer_ids: List[str],
        start: datetime,
        end: datetime,
        exclude_schedule_id: Optional[UUID] = None,
    ) -> None:
        clashes = await self.repository.find_overlapping(
            interviewer_ids,
            start,
            end,
            exclude_schedule_id=exclude_schedule_id,
        )
        if not clashes:
            return

        wanted = set(interviewer_ids)
        busy = sorted({i for clash in clashes for i in clash.interviewer_ids if i in wanted})
        logger.info("Interviewer conflict for %s between %s and %s", busy, start, end)
        raise ConflictError(
            "Interviewer already booked in this window",
            {
                "interviewer_ids": busy,
                "schedule_ids": [str(clash.id) for clash in clashes],
            },
        )

    @staticmethod
    def _require_status(schedule: InterviewSchedule, status: ScheduleStatus, action: str) -> None:
        if schedule.status != status.value:
            raise InvalidStateTransitionError(
                f"Cannot {action} a {schedule.status} schedule",
                {"schedule_id": str(schedule.id), "status": schedule.status},
            )

    def _queue_invitation(self, candidate: Candidate, stage: InterviewStage, schedule: InterviewSchedule) -> None:
        if not candidate.email:
            return
        self.notifications.append(
            Notification(
                event="interview_scheduled",
                recipients=[candidate.email],
                subject=f"Interview invitation: {stage.name}",
                payload={
                    "candidate_id": str(candidate.id),
                    "schedule_id": str(schedule.id),
                    "stage_name": stage.name,
                    "start_time": as_utc(schedule.start_time).isoformat(),
                    "end_time": as_utc(schedule.end_time).isoformat(),
                },
            )
        )
