"""
Loads one pipeline snapshot for a position and runs the suggestion engine.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.enums import ScheduleStatus
from app.models.position import Position
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.interview_outcome_repository import InterviewOutcomeRepository
from app.repositories.interview_process_repository import InterviewProcessRepository
from app.repositories.interview_schedule_repository import InterviewScheduleRepository
from app.schemas.suggestion import HeldSlot
from app.services.candidate_service import CandidateService
from app.services.position_directory import PositionDirectory, SqlPositionDirectory
from app.services.suggestion_engine import (
    BusyWindow,
    CandidatePlan,
    CandidateState,
    RoundRecord,
    StageSpec,
    suggest_slots,
)
from app.utils.time import as_utc, parse_hhmm, resolve_timezone, utc_now

logger = logging.getLogger(__name__)


class SuggestionService:
    """Builds the engine's snapshot from the stores."""

    def __init__(self, db: AsyncSession, directory: Optional[PositionDirectory] = None):
        self.db = db
        self.directory = directory or SqlPositionDirectory(db)
        self.candidates = CandidateService(db, directory=self.directory)
        self.candidate_repo = CandidateRepository(db)
        self.processes = InterviewProcessRepository(db)
        self.schedules = InterviewScheduleRepository(db)
        self.outcomes = InterviewOutcomeRepository(db)

    async def suggest(
        self,
        position_id: UUID,
        days: Iterable[date],
        held: Iterable[HeldSlot] = (),
        not_before: Optional[datetime] = None,
    ) -> Tuple[Position, List[CandidatePlan]]:
        position = await self.candidates.get_position(position_id)
        plan_days = sorted(set(days))
        if not plan_days:
            return position, []

        tz = resolve_timezone(settings.SCHEDULING_TIMEZONE)
        workday_start = parse_hhmm(settings.WORKDAY_START)
        workday_end = parse_hhmm(settings.WORKDAY_END)

        stages = [
            StageSpec(
                id=stage.id,
                name=stage.name,
                stage_order=stage.stage_order,
                duration_minutes=stage.duration_minutes,
                min_interviewers=stage.min_interviewers,
                max_interviewers=stage.max_interviewers,
                interviewer_pool=tuple(stage.interviewer_pool or ()),
            )
            for stage in await self.processes.list_stages(position.process_id)
        ]
        directory = [i.interviewer_id for i in await self.directory.list_interviewers(position.department_id)]

        candidates = await self.candidate_repo.list_by_position(position.id, exclude_terminal=True)
        rounds = await self._load_rounds([c.id for c in candidates])
        states = [
            CandidateState(
                id=c.id,
                full_name=c.full_name,
                email=c.email,
                score=c.score,
                is_terminal=c.is_terminal,
                rounds=tuple(rounds.get(c.id, ())),
            )
            for c in candidates
        ]

        window_start = datetime.combine(plan_days[0], time.min, tzinfo=tz) - timedelta(days=1)
        window_end = datetime.combine(plan_days[-1], time.max, tzinfo=tz) + timedelta(days=1)
        busy = [
            BusyWindow(
                candidate_id=s.candidate_id,
                start=as_utc(s.start_time),
                end=as_utc(s.end_time),
                interviewer_ids=tuple(s.interviewer_ids),
            )
            for s in await self.schedules.list_scheduled_between(
                as_utc(window_start), as_utc(window_end)
            )
        ]
        held_windows = [
            BusyWindow(
                candidate_id=h.candidate_id,
                start=as_utc(h.start_time),
                end=as_utc(h.end_time),
                interviewer_ids=tuple(h.interviewer_ids),
            )
            for h in held
        ]

        if not_before is None and settings.SUGGESTION_SKIP_PAST_SLOTS:
            not_before = utc_now()

        plans = suggest_slots(
            states,
            stages,
            plan_days,
            busy,
            directory,
            workday_start=workday_start,
            workday_end=workday_end,
            tz=tz,
            held=held_windows,
            not_before=not_before,
            limit_per_candidate=settings.SUGGESTION_LIMIT_PER_CANDIDATE,
        )
        logger.info(
            "Suggested slots for position %s over %s day(s): %s candidate(s), %s busy window(s)",
            position.id,
            len(plan_days),
            len(plans),
            len(busy),
        )
        return position, plans

    async def _load_rounds(self, candidate_ids: List[UUID]) -> Dict[UUID, List[RoundRecord]]:
        schedules = await self.schedules.list_by_candidates(candidate_ids)
        completed = [s.id for s in schedules if s.status == ScheduleStatus.COMPLETED.value]
        outcomes = await self.outcomes.map_by_schedule(completed)

        rounds: Dict[UUID, List[RoundRecord]] = {}
        for schedule in schedules:
            outcome = outcomes.get(schedule.id)
            rounds.setdefault(schedule.candidate_id, []).append(
                RoundRecord(
                    stage_order=schedule.stage.stage_order,
                    status=schedule.status,
                    decision=outcome.decision if outcome else None,
                )
            )
        return rounds
