"""
InterviewSchedule repository - database operations for interview rounds.
"""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import ScheduleStatus
from app.models.interview_process import InterviewStage
from app.models.interview_schedule import (
    InterviewerCalendar,
    InterviewSchedule,
    ScheduleInterviewer,
)
from app.utils.time import utc_now


class InterviewScheduleRepository:
    """Repository for InterviewSchedule database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, schedule_id: UUID) -> Optional[InterviewSchedule]:
        result = await self.db.execute(
            select(InterviewSchedule).where(InterviewSchedule.id == schedule_id)
        )
        return result.scalar_one_or_none()

    async def create(self, schedule: InterviewSchedule) -> InterviewSchedule:
        self.db.add(schedule)
        await self.db.flush()
        return schedule

    async def list_by_candidate(self, candidate_id: UUID) -> List[InterviewSchedule]:
        """Every round of a candidate, by stage order then start time."""
        result = await self.db.execute(
            select(InterviewSchedule)
            .join(InterviewStage, InterviewStage.id == InterviewSchedule.stage_id)
            .where(InterviewSchedule.candidate_id == candidate_id)
            .order_by(
                InterviewStage.stage_order.asc(),
                InterviewSchedule.start_time.asc(),
                InterviewSchedule.created_at.asc(),
            )
        )
        return list(result.scalars().all())

    async def list_by_candidates(self, candidate_ids: List[UUID]) -> List[InterviewSchedule]:
        if not candidate_ids:
            return []
        result = await self.db.execute(
            select(InterviewSchedule)
            .where(InterviewSchedule.candidate_id.in_(candidate_ids))
            .order_by(InterviewSchedule.start_time.asc(), InterviewSchedule.id.asc())
        )
        return list(result.scalars().all())

    async def find_active_for_stage(
        self,
        candidate_id: UUID,
        stage_id: UUID,
    ) -> Optional[InterviewSchedule]:
        result = await self.db.execute(
            select(InterviewSchedule).where(
                InterviewSchedule.candidate_id == candidate_id,
                InterviewSchedule.stage_id == stage_id,
                InterviewSchedule.status == ScheduleStatus.SCHEDULED.value,
            )
        )
        return result.scalars().first()

    async def find_overlapping(
        self,
        interviewer_ids: Iterable[str],
        start: datetime,
        end: datetime,
        exclude_schedule_id: Optional[UUID] = None,
    ) -> List[InterviewSchedule]:
        """Scheduled rounds of any of the interviewers intersecting [start, end)."""
        ids = sorted(set(interviewer_ids))
        if not ids:
            return []

        booked = (
            select(ScheduleInterviewer.schedule_id)
            .where(ScheduleInterviewer.interviewer_id.in_(ids))
        )
        query = select(InterviewSchedule).where(
            InterviewSchedule.id.in_(booked),
            InterviewSchedule.status == ScheduleStatus.SCHEDULED.value,
            InterviewSchedule.start_time < end,
            InterviewSchedule.end_time > start,
        )
        if exclude_schedule_id is not None:
            query = query.where(InterviewSchedule.id != exclude_schedule_id)

        result = await self.db.execute(query.order_by(InterviewSchedule.start_time.asc()))
        return list(result.scalars().all())

    async def list_scheduled_between(self, start: datetime, end: datetime) -> List[InterviewSchedule]:
        """All Scheduled rounds intersecting [start, end)."""
        result = await self.db.execute(
            select(InterviewSchedule)
            .where(
                InterviewSchedule.status == ScheduleStatus.SCHEDULED.value,
                InterviewSchedule.start_time < end,
                InterviewSchedule.end_time > start,
            )
            .order_by(InterviewSchedule.start_time.asc(), InterviewSchedule.id.asc())
        )
        return list(result.scalars().all())

    async def lock_interviewers(self, interviewer_ids: Iterable[str]) -> None:
        """
        Take the per-interviewer row locks for the rest of the transaction.

        Rows are created on first use, then locked FOR UPDATE in id order (a
        fixed order keeps two writers from deadlocking) and their version
        bumped so the lock is also a write on backends without row locks.
        """
        ids = sorted(set(interviewer_ids))
        if not ids:
            return

        dialect = self.db.get_bind().dialect.name
        rows = [{"interviewer_id": i, "version": 0, "updated_at": utc_now()} for i in ids]
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as dialect_insert
        else:
            dialect_insert = None

        if dialect_insert is not None:
            await self.db.execute(
                dialect_insert(InterviewerCalendar)
                .values(rows)
                .on_conflict_do_nothing(index_elements=["interviewer_id"])
            )
        else:
            existing = await self.db.execute(
                select(InterviewerCalendar.interviewer_id).where(
                    InterviewerCalendar.interviewer_id.in_(ids)
                )
            )
            known = set(existing.scalars().all())
            for row in rows:
                if row["interviewer_id"] not in known:
                    self.db.add(InterviewerCalendar(**row))
            await self.db.flush()

        await self.db.execute(
            select(InterviewerCalendar.interviewer_id)
            .where(InterviewerCalendar.interviewer_id.in_(ids))
            .order_by(InterviewerCalendar.interviewer_id.asc())
            .with_for_update()
        )
        await self.db.execute(
            update(InterviewerCalendar)
            .where(InterviewerCalendar.interviewer_id.in_(ids))
            .values(version=InterviewerCalendar.version + 1, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )

    async def replace_interviewers(self, schedule: InterviewSchedule, interviewer_ids: List[str]) -> None:
        wanted = set(interviewer_ids)
        current = {link.interviewer_id: link for link in schedule.interviewers}
        for interviewer_id, link in current.items():
            if interviewer_id not in wanted:
                schedule.interviewers.remove(link)
        for interviewer_id in sorted(wanted - set(current)):
            schedule.interviewers.append(ScheduleInterviewer(interviewer_id=interviewer_id))
        await self.db.flush()

    async def transition_status(
        self,
        schedule: InterviewSchedule,
        new_status: ScheduleStatus,
        allowed_from: Iterable[ScheduleStatus],
    ) -> bool:
        """Conditional status UPDATE; False when the stored status did not match."""
        result = await self.db.execute(
            update(InterviewSchedule)
            .where(
                InterviewSchedule.id == schedule.id,
                InterviewSchedule.status.in_([s.value for s in allowed_from]),
            )
            .values(status=new_status.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.db.refresh(schedule)
        return True
