import uuid

import pytest

from app.core.config import settings
from app.errors import (
    AlreadyExistsError,
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from app.models.enums import CandidateStatus, OutcomeDecision, ScheduleStatus
from app.schemas.interview_schedule import InterviewScheduleCreate
from app.services.candidate_service import CandidateService
from app.services.outcome_service import OutcomeService
from app.services.schedule_service import ScheduleService
from tests.helpers import at


@pytest.mark.asyncio
async def test_feedback_completes_schedule(db, pipeline, make_candidate, book):
    candidate = await make_candidate()
    schedule = await book(candidate, pipeline.stages[0], at(9))

    outcome = await OutcomeService(db).submit_feedback(schedule.id, "Good communicator", created_by="iv-1")
    await db.commit()

    assert outcome.decision == OutcomeDecision.PENDING.value
    assert outcome.created_by == "iv-1"
    refreshed = await ScheduleService(db).get_schedule(schedule.id)
    assert refreshed.status == ScheduleStatus.COMPLETED.value


@pytest.mark.asyncio
async def test_feedback_rules(db, pipeline, make_candidate, book):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    service = OutcomeService(db)

    with pytest.raises(NotFoundError):
        await service.submit_feedback(uuid.uuid4(), "nothing to see")

    canceled = await book(first, pipeline.stages[0], at(9))
    await ScheduleService(db).cancel_schedule(canceled.id)
    await db.commit()
    with pytest.raises(InvalidStateTransitionError):
        await service.submit_feedback(canceled.id, "too late")

    schedule = await book(second, pipeline.stages[0], at(10))
    await service.submit_feedback(schedule.id, "first")
    await db.commit()
    with pytest.raises(AlreadyExistsError):
        await service.submit_feedback(schedule.id, "second")


@pytest.mark.asyncio
async def test_feedback_window_when_early_feedback_disallowed(db, pipeline, make_candidate, book, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_PRE_INTERVIEW_FEEDBACK", False)
    monkeypatch.setattr(settings, "INTERVIEW_FEEDBACK_EARLY_MINUTES", 15)
    candidate = await make_candidate()
    schedule = await book(candidate, pipeline.stages[0], at(9))

    with pytest.raises(PreconditionFailedError):
        await OutcomeService(db).submit_feedback(schedule.id, "before the interview")


@pytest.mark.asyncio
async def test_edit_feedback_keeps_decision(db, pipeline, make_candidate, pass_stage):
    candidate = await make_candidate()
    _, outcome = await pass_stage(candidate, pipeline.stages[0], at(9))
    service = OutcomeService(db)

    edited = await service.edit_feedback(outcome.id, "Strong on fundamentals")
    await db.commit()

    assert edited.feedback == "Strong on fundamentals"
    assert edited.decision == OutcomeDecision.PASS.value
    assert (await service.get_outcome_for_schedule(outcome.schedule_id)).id == outcome.id


@pytest.mark.asyncio
async def test_decision_is_one_way(db, pipeline, make_candidate, book):
    candidate = await make_candidate()
    schedule = await book(candidate, pipeline.stages[0], at(9))
    service = OutcomeService(db)
    outcome = await service.submit_feedback(schedule.id, "ok")

    with pytest.raises(InputValidationError):
        await service.set_decision(outcome.id, OutcomeDecision.PENDING)

    decided = await service.set_decision(outcome.id, OutcomeDecision.PASS)
    await db.commit()
    assert decided.decision == OutcomeDecision.PASS.value

    with pytest.raises(InvalidStateTransitionError):
        await service.set_decision(outcome.id, OutcomeDecision.FAIL)


@pytest.mark.asyncio
async def test_fail_decision_blocks_next_stage(db, pipeline, make_candidate, book):
    screening, technical, _ = pipeline.stages
    candidate = await make_candidate()
    schedule = await book(candidate, screening, at(9))
    service = OutcomeService(db)
    outcome = await service.submit_feedback(schedule.id, "not a fit")
    await service.set_decision(outcome.id, OutcomeDecision.FAIL)
    await db.commit()

    failed = await CandidateService(db).get_candidate(candidate.id)
    assert failed.status == CandidateStatus.FAILED.value

    with pytest.raises(PreconditionFailedError):
        await ScheduleService(db).create_schedule(
            InterviewScheduleCreate(
                candidate_id=candidate.id,
                stage_id=technical.id,
                start_time=at(11),
                end_time=at(12),
                interviewer_ids=["bob"],
            )
        )


@pytest.mark.asyncio
async def test_concurrent_decisions_only_one_wins(session_factory, pipeline, make_candidate, book):
    candidate = await make_candidate()
    schedule = await book(candidate, pipeline.stages[0], at(9))

    async with session_factory() as setup:
        outcome = await OutcomeService(setup).submit_feedback(schedule.id, "split panel")
        await setup.commit()

    async with session_factory() as session_a, session_factory() as session_b:
        reviewer_a = OutcomeService(session_a)
        reviewer_b = OutcomeService(session_b)
        # both reviewers have read the outcome while it was still pending
        await reviewer_a.get_outcome(outcome.id)
        await reviewer_b.get_outcome(outcome.id)

        await reviewer_a.set_decision(outcome.id, OutcomeDecision.PASS)
        await session_a.commit()

        with pytest.raises(InvalidStateTransitionError):
            await reviewer_b.set_decision(outcome.id, OutcomeDecision.FAIL)
        await session_b.rollback()

    async with session_factory() as check:
        stored = await OutcomeService(check).get_outcome(outcome.id)
        assert stored.decision == OutcomeDecision.PASS.value
        current = await CandidateService(check).get_candidate(candidate.id)
        assert current.status == CandidateStatus.PENDING.value


@pytest.mark.asyncio
async def test_decision_on_terminal_candidate_rolls_back(session_factory, pipeline, make_candidate, book):
    candidate = await make_candidate()
    schedule = await book(candidate, pipeline.stages[0], at(9))

    async with session_factory() as session:
        service = OutcomeService(session)
        outcome = await service.submit_feedback(schedule.id, "fine")
        outcome_id = outcome.id
        await CandidateService(session).reject_candidate(candidate.id, "withdrew")
        await session.commit()

        with pytest.raises(InvalidStateTransitionError):
            await service.set_decision(outcome_id, OutcomeDecision.PASS)
        await session.rollback()

    async with session_factory() as check:
        stored = await OutcomeService(check).get_outcome(outcome_id)
        assert stored.decision == OutcomeDecision.PENDING.value
