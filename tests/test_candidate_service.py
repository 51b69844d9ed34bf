import uuid

import pytest

from app.errors import InputValidationError, InvalidStateTransitionError, NotFoundError
from app.models.enums import CandidateStatus
from app.schemas.candidate import CandidateCreate
from app.services.candidate_service import CandidateService
from tests.helpers import at


@pytest.mark.asyncio
async def test_register_validates_score_and_position(db, pipeline):
    service = CandidateService(db)

    with pytest.raises(InputValidationError):
        await service.register_candidate(pipeline.position.id, CandidateCreate(full_name="Too High", score=101))
    with pytest.raises(NotFoundError):
        await service.register_candidate(uuid.uuid4(), CandidateCreate(full_name="Nowhere", score=50))

    candidate = await service.register_candidate(pipeline.position.id, CandidateCreate(full_name="Ada", score=0))
    assert candidate.status == CandidateStatus.PENDING.value


@pytest.mark.asyncio
async def test_list_for_position_reports_current_stage(db, pipeline, make_candidate, pass_stage, book):
    screening, technical, _ = pipeline.stages
    fresh = await make_candidate("Fresh Face", score=70)
    moving = await make_candidate("Moving Along", score=95)
    await pass_stage(moving, screening, at(8))
    await book(moving, technical, at(10), interviewers=["bob"])

    rows = await CandidateService(db).list_for_position(pipeline.position.id)

    assert [c.full_name for c, _ in rows] == ["Moving Along", "Fresh Face"]
    stages = {c.id: stage for c, stage in rows}
    assert stages[moving.id].name == "Technical"
    assert stages[fresh.id].name == "Screening"


@pytest.mark.asyncio
async def test_list_for_unknown_position(db, pipeline):
    with pytest.raises(NotFoundError):
        await CandidateService(db).list_for_position(uuid.uuid4())


@pytest.mark.asyncio
async def test_terminal_candidates_cannot_move(db, pipeline, make_candidate):
    service = CandidateService(db)
    candidate = await make_candidate()

    failed = await service.mark_failed(candidate.id)
    assert failed.status == CandidateStatus.FAILED.value

    with pytest.raises(InvalidStateTransitionError):
        await service.mark_failed(candidate.id)
    with pytest.raises(InvalidStateTransitionError):
        await service.advance_on_pass(candidate.id)
    with pytest.raises(InvalidStateTransitionError):
        await service.reject_candidate(candidate.id, "late")


@pytest.mark.asyncio
async def test_advance_on_pass_keeps_status_pending(db, pipeline, make_candidate):
    candidate = await make_candidate()

    advanced = await CandidateService(db).advance_on_pass(candidate.id)

    assert advanced.status == CandidateStatus.PENDING.value


@pytest.mark.asyncio
async def test_reject_records_reason(db, pipeline, make_candidate):
    candidate = await make_candidate()

    rejected = await CandidateService(db).reject_candidate(candidate.id, "Position filled")
    await db.commit()

    assert rejected.status == CandidateStatus.REJECTED.value
    assert rejected.rejection_reason == "Position filled"
