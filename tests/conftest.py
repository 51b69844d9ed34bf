"""
Pytest configuration and shared fixtures.

Every test gets a fresh SQLite database (aiosqlite) with the schema created
from the models, plus a small seeded pipeline: one department, a three-stage
process and one open position.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./interview_pipeline_test.db")

from datetime import datetime, timedelta
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.models.candidate import Candidate
from app.models.enums import OutcomeDecision
from app.models.interview_process import InterviewStage
from app.models.interview_schedule import InterviewSchedule
from app.schemas.candidate import CandidateCreate
from app.schemas.interview_schedule import InterviewScheduleCreate
from app.services.candidate_service import CandidateService
from app.services.outcome_service import OutcomeService
from app.services.schedule_service import ScheduleService
from tests.helpers import Pipeline, create_schema, seed_pipeline


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pipeline.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def pipeline(db) -> Pipeline:
    return await seed_pipeline(db)


@pytest.fixture
def make_candidate(db, pipeline):
    """Register a candidate on the seeded position and commit."""

    async def _make(full_name: str = "Ada Lovelace", score: float = 90.0, email: Optional[str] = None) -> Candidate:
        if email is None:
            email = full_name.lower().replace(" ", ".") + "@example.com"
        candidate = await CandidateService(db).register_candidate(
            pipeline.position.id,
            CandidateCreate(full_name=full_name, email=email, score=score),
        )
        await db.commit()
        return candidate

    return _make


@pytest.fixture
def book(db):
    """Create and commit a schedule."""

    async def _book(
        candidate: Candidate,
        stage: InterviewStage,
        start: datetime,
        end: Optional[datetime] = None,
        interviewers: List[str] = ("alice",),
    ) -> InterviewSchedule:
        if end is None:
            end = start + timedelta(minutes=stage.duration_minutes)
        schedule = await ScheduleService(db).create_schedule(
            InterviewScheduleCreate(
                candidate_id=candidate.id,
                stage_id=stage.id,
                start_time=start,
                end_time=end,
                interviewer_ids=list(interviewers),
            )
        )
        await db.commit()
        return schedule

    return _book


@pytest.fixture
def pass_stage(db, book):
    """Book a round, record feedback with a pass decision, and commit."""

    async def _pass(candidate: Candidate, stage: InterviewStage, start: datetime, interviewers=("alice",)):
        schedule = await book(candidate, stage, start, interviewers=interviewers)
        outcome = await OutcomeService(db).submit_feedback(
            schedule.id,
            "Solid answers",
            decision=OutcomeDecision.PASS,
        )
        await db.commit()
        return schedule, outcome

    return _pass
