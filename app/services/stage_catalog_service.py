"""
Stage catalog business logic: interview processes and their ordered stages.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    ConflictError,
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
)
from app.models.interview_process import InterviewProcess, InterviewStage
from app.repositories.interview_process_repository import InterviewProcessRepository
from app.schemas.interview_process import (
    InterviewProcessCreate,
    InterviewStageCreate,
    InterviewStageUpdate,
)

logger = logging.getLogger(__name__)


def _check_stage_shape(
    stage_order: int,
    duration_minutes: int,
    min_interviewers: int,
    max_interviewers: int,
) -> None:
    if stage_order < 1:
        raise InputValidationError("Stage order must be >= 1", {"stage_order": stage_order})
    if duration_minutes <= 0:
        raise InputValidationError(
            "Stage duration must be positive",
            {"duration_minutes": duration_minutes},
        )
    if min_interviewers < 1:
        raise InputValidationError(
            "A stage needs at least one interviewer",
            {"min_interviewers": min_interviewers},
        )
    if max_interviewers < min_interviewers:
        raise InputValidationError(
            "max_interviewers must be >= min_interviewers",
            {"min_interviewers": min_interviewers, "max_interviewers": max_interviewers},
        )


def _clean_pool(pool: Optional[List[str]]) -> Optional[List[str]]:
    if not pool:
        return None
    return sorted({str(member).strip() for member in pool if str(member).strip()})


class StageCatalogService:
    """Service for interview processes and stages."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = InterviewProcessRepository(db)

    async def create_process(self, data: InterviewProcessCreate) -> InterviewProcess:
        process = await self.repository.create_process(data.name, data.department_id)
        logger.info("Created interview process %s (%s)", process.id, process.name)
        return process

    async def get_process(self, process_id: UUID) -> InterviewProcess:
        process = await self.repository.get_process(process_id)
        if process is None:
            raise NotFoundError("Interview process not found", {"process_id": str(process_id)})
        return process

    async def get_stage(self, stage_id: UUID) -> InterviewStage:
        stage = await self.repository.get_stage(stage_id)
        if stage is None:
            raise NotFoundError("Interview stage not found", {"stage_id": str(stage_id)})
        return stage

    async def list_stages(self, process_id: UUID) -> List[InterviewStage]:
        return await self.repository.list_stages(process_id)

    async def get_final_stage(self, process_id: UUID) -> Optional[InterviewStage]:
        return await self.repository.get_final_stage(process_id)

    async def add_stage(self, process_id: UUID, data: InterviewStageCreate) -> InterviewStage:
        """Append a stage to a process."""
        process = await self.get_process(process_id)

        max_interviewers = data.max_interviewers
        if max_interviewers is None:
            max_interviewers = data.min_interviewers
        _check_stage_shape(
            data.stage_order,
            data.duration_minutes,
            data.min_interviewers,
            max_interviewers,
        )

        existing = await self.repository.get_stage_by_order(process_id, data.stage_order)
        if existing is not None:
            raise ConflictError(
                "Stage order already used in this process",
                {"process_id": str(process_id), "stage_order": data.stage_order},
            )

        stage = InterviewStage(
            process_id=process.id,
            process=process,
            name=data.name,
            stage_order=data.stage_order,
            duration_minutes=data.duration_minutes,
            min_interviewers=data.min_interviewers,
            max_interviewers=max_interviewers,
            interviewer_pool=_clean_pool(data.interviewer_pool),
            interview_type=data.interview_type,
        )
        await self.repository.create_stage(stage)
        logger.info(
            "Added stage %s (order %s) to process %s",
            stage.name,
            stage.stage_order,
            process.id,
        )
        return stage

    async def update_stage(self, stage_id: UUID, data: InterviewStageUpdate) -> InterviewStage:
        """
        Edit a stage.

        Name, duration, panel bounds, pool and type may change at any time.
        The order is frozen once a schedule references the stage.
        """
        stage = await self.get_stage(stage_id)
        update_data = data.model_dump(exclude_unset=True)

        new_order = update_data.get("stage_order")
        if new_order is not None and new_order != stage.stage_order:
            if await self.repository.is_stage_referenced(stage.id):
                raise InvalidStateTransitionError(
                    "Stage order cannot change once a schedule references the stage",
                    {"stage_id": str(stage.id), "stage_order": stage.stage_order},
                )
            clash = await self.repository.get_stage_by_order(stage.process_id, new_order)
            if clash is not None:
                raise ConflictError(
                    "Stage order already used in this process",
                    {"process_id": str(stage.process_id), "stage_order": new_order},
                )

        def pick(field: str, current: int) -> int:
            value = update_data.get(field)
            return current if value is None else value

        min_interviewers = pick("min_interviewers", stage.min_interviewers)
        max_interviewers = pick("max_interviewers", max(stage.max_interviewers, min_interviewers))
        _check_stage_shape(
            pick("stage_order", stage.stage_order),
            pick("duration_minutes", stage.duration_minutes),
            min_interviewers,
            max_interviewers,
        )

        for field, value in update_data.items():
            if value is None:
                continue
            if field == "interviewer_pool":
                value = _clean_pool(value)
            setattr(stage, field, value)
        stage.min_interviewers = min_interviewers
        stage.max_interviewers = max_interviewers

        await self.db.flush()
        logger.info("Updated stage %s", stage.id)
        return stage
