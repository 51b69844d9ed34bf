"""
Shared test data: time helper, schema creation and the seeded pipeline.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base
from app.models import DepartmentInterviewer, InterviewProcess, InterviewStage, Position
from app.schemas.interview_process import InterviewProcessCreate, InterviewStageCreate
from app.services.stage_catalog_service import StageCatalogService

INTERVIEWERS = ["alice", "bob", "carol"]


def at(hour: int, minute: int = 0, day: int = 5) -> datetime:
    """A UTC instant on 2099-01-<day>; far enough ahead that no slot is in the past."""
    return datetime(2099, 1, day, hour, minute, tzinfo=timezone.utc)


@dataclass
class Pipeline:
    department_id: uuid.UUID
    process: InterviewProcess
    stages: List[InterviewStage]
    position: Position
    interviewers: List[str]


async def create_schema(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_position(db: AsyncSession, department_id: uuid.UUID, process: InterviewProcess, title: str) -> Position:
    """An open position on the process, staffed by INTERVIEWERS; the caller commits."""
    position = Position(
        department_id=department_id,
        title=title,
        total_slots=2,
        is_open=True,
        process_id=process.id,
    )
    db.add(position)
    for interviewer_id in INTERVIEWERS:
        db.add(
            DepartmentInterviewer(
                department_id=department_id,
                interviewer_id=interviewer_id,
                display_name=interviewer_id.title(),
                email=f"{interviewer_id}@example.com",
            )
        )
    return position


async def seed_pipeline(db: AsyncSession) -> Pipeline:
    """Screening (30m) -> Technical (60m, 1-2 interviewers) -> Final (45m)."""
    department_id = uuid.uuid4()
    catalog = StageCatalogService(db)
    process = await catalog.create_process(
        InterviewProcessCreate(name="Engineering", department_id=department_id)
    )
    screening = await catalog.add_stage(
        process.id, InterviewStageCreate(name="Screening", stage_order=1, duration_minutes=30)
    )
    technical = await catalog.add_stage(
        process.id,
        InterviewStageCreate(
            name="Technical",
            stage_order=2,
            duration_minutes=60,
            min_interviewers=1,
            max_interviewers=2,
        ),
    )
    final = await catalog.add_stage(
        process.id, InterviewStageCreate(name="Final", stage_order=3, duration_minutes=45)
    )

    position = await seed_position(db, department_id, process, "Backend Engineer")
    await db.commit()
    return Pipeline(
        department_id=department_id,
        process=process,
        stages=[screening, technical, final],
        position=position,
        interviewers=list(INTERVIEWERS),
    )
