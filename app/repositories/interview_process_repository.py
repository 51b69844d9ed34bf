"""
Interview process repository - database operations for processes and stages.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.interview_process import InterviewProcess, InterviewStage
from app.models.interview_schedule import InterviewSchedule


class InterviewProcessRepository:
    """Repository for InterviewProcess and InterviewStage database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_process(self, process_id: UUID) -> Optional[InterviewProcess]:
        """Get a process (stages are loaded with it)."""
        result = await self.db.execute(
            select(InterviewProcess).where(InterviewProcess.id == process_id)
        )
        return result.scalar_one_or_none()

    async def create_process(self, name: str, department_id: UUID) -> InterviewProcess:
        process = InterviewProcess(name=name, department_id=department_id, stages=[])
        self.db.add(process)
        await self.db.flush()
        return process

    async def get_stage(self, stage_id: UUID) -> Optional[InterviewStage]:
        result = await self.db.execute(
            select(InterviewStage).where(InterviewStage.id == stage_id)
        )
        return result.scalar_one_or_none()

    async def list_stages(self, process_id: UUID) -> List[InterviewStage]:
        """Stages of a process in ascending order."""
        result = await self.db.execute(
            select(InterviewStage)
            .where(InterviewStage.process_id == process_id)
            .order_by(InterviewStage.stage_order.asc())
        )
        return list(result.scalars().all())

    async def get_stage_by_order(self, process_id: UUID, stage_order: int) -> Optional[InterviewStage]:
        result = await self.db.execute(
            select(InterviewStage).where(
                InterviewStage.process_id == process_id,
                InterviewStage.stage_order == stage_order,
            )
        )
        return result.scalar_one_or_none()

    async def get_first_stage(self, process_id: UUID) -> Optional[InterviewStage]:
        """The stage with the lowest order."""
        result = await self.db.execute(
            select(InterviewStage)
            .where(InterviewStage.process_id == process_id)
            .order_by(InterviewStage.stage_order.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_previous_stage(self, process_id: UUID, stage_order: int) -> Optional[InterviewStage]:
        """The stage with the greatest order below ``stage_order``; orders may have gaps."""
        result = await self.db.execute(
            select(InterviewStage)
            .where(
                InterviewStage.process_id == process_id,
                InterviewStage.stage_order < stage_order,
            )
            .order_by(InterviewStage.stage_order.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_final_stage(self, process_id: UUID) -> Optional[InterviewStage]:
        """The stage with the greatest order."""
        result = await self.db.execute(
            select(InterviewStage)
            .where(InterviewStage.process_id == process_id)
            .order_by(InterviewStage.stage_order.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_stage(self, stage: InterviewStage) -> InterviewStage:
        self.db.add(stage)
        await self.db.flush()
        return stage

    async def is_stage_referenced(self, stage_id: UUID) -> bool:
        """True once any schedule (in any status) points at the stage."""
        result = await self.db.execute(
            select(exists().where(InterviewSchedule.stage_id == stage_id))
        )
        return bool(result.scalar())
