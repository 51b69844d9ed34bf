import uuid
from datetime import date

import pytest

from app.errors import (
    ConflictError,
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from app.models.enums import ScheduleStatus
from app.schemas.candidate import CandidateCreate
from app.schemas.interview_process import InterviewProcessCreate, InterviewStageCreate
from app.schemas.interview_schedule import InterviewScheduleCreate, InterviewScheduleUpdate
from app.services.candidate_service import CandidateService
from app.services.schedule_service import ScheduleService
from app.services.stage_catalog_service import StageCatalogService
from app.services.suggestion_service import SuggestionService
from tests.helpers import at, seed_position


def _request(candidate, stage, start, end, interviewers=("alice",)):
    return InterviewScheduleCreate(
        candidate_id=candidate.id,
        stage_id=stage.id,
        start_time=start,
        end_time=end,
        interviewer_ids=list(interviewers),
    )


@pytest.mark.asyncio
async def test_create_first_stage(db, pipeline, make_candidate):
    candidate = await make_candidate()
    service = ScheduleService(db)

    schedule = await service.create_schedule(
        _request(candidate, pipeline.stages[0], at(9), at(9, 30), ["bob", "alice", "bob"]),
        created_by="recruiter-1",
    )
    await db.commit()

    assert schedule.status == ScheduleStatus.SCHEDULED.value
    assert schedule.interviewer_ids == ["alice", "bob"]
    assert schedule.stage_order == 1
    assert schedule.created_by == "recruiter-1"
    assert [n.event for n in service.notifications] == ["interview_scheduled"]
    assert service.notifications[0].recipients == [candidate.email]


@pytest.mark.asyncio
async def test_create_validates_input(db, pipeline, make_candidate):
    candidate = await make_candidate()
    service = ScheduleService(db)
    screening = pipeline.stages[0]

    with pytest.raises(InputValidationError):
        await service.create_schedule(_request(candidate, screening, at(10), at(10)))
    with pytest.raises(InputValidationError):
        await service.create_schedule(_request(candidate, screening, at(10), at(11), []))

    catalog = StageCatalogService(db)
    other = await catalog.create_process(
        InterviewProcessCreate(name="Sales", department_id=pipeline.department_id)
    )
    foreign_stage = await catalog.add_stage(
        other.id, InterviewStageCreate(name="Pitch", stage_order=1, duration_minutes=30)
    )
    with pytest.raises(InputValidationError):
        await service.create_schedule(_request(candidate, foreign_stage, at(10), at(10, 30)))


@pytest.mark.asyncio
async def test_later_stage_requires_pass_of_previous(db, pipeline, make_candidate, book, pass_stage):
    screening, technical, _ = pipeline.stages
    candidate = await make_candidate()
    service = ScheduleService(db)

    with pytest.raises(PreconditionFailedError):
        await service.create_schedule(_request(candidate, technical, at(10), at(11)))

    # completed but still undecided is not enough
    await book(candidate, screening, at(8))
    with pytest.raises(PreconditionFailedError):
        await service.create_schedule(_request(candidate, technical, at(10), at(11)))

    other = await make_candidate("Grace Hopper")
    await pass_stage(other, screening, at(8, 30))
    schedule = await service.create_schedule(_request(other, technical, at(10), at(11)))
    assert schedule.stage_order == 2


@pytest.mark.asyncio
async def test_terminal_candidate_cannot_be_scheduled(db, pipeline, make_candidate):
    candidate = await make_candidate()
    await CandidateService(db).reject_candidate(candidate.id, "withdrew")
    await db.commit()

    with pytest.raises(PreconditionFailedError):
        await ScheduleService(db).create_schedule(
            _request(candidate, pipeline.stages[0], at(9), at(9, 30))
        )


@pytest.mark.asyncio
async def test_second_live_round_for_same_stage_conflicts(db, pipeline, make_candidate, book):
    candidate = await make_candidate()
    await book(candidate, pipeline.stages[0], at(9))

    with pytest.raises(ConflictError):
        await ScheduleService(db).create_schedule(
            _request(candidate, pipeline.stages[0], at(11), at(11, 30), ["bob"])
        )


@pytest.mark.asyncio
async def test_interviewer_double_booking(db, pipeline, make_candidate, book):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    screening = pipeline.stages[0]
    service = ScheduleService(db)
    await book(first, screening, at(9), interviewers=["alice"])

    with pytest.raises(ConflictError) as exc_info:
        await service.create_schedule(_request(second, screening, at(9, 15), at(9, 45), ["alice", "bob"]))
    assert exc_info.value.details["interviewer_ids"] == ["alice"]

    # touching windows do not overlap
    adjacent = await service.create_schedule(_request(second, screening, at(9, 30), at(10), ["alice"]))
    assert adjacent.start_time == at(9, 30)


@pytest.mark.asyncio
async def test_canceled_round_frees_interviewer(db, pipeline, make_candidate, book):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    screening = pipeline.stages[0]
    service = ScheduleService(db)
    schedule = await book(first, screening, at(9))

    await service.cancel_schedule(schedule.id)
    await db.commit()

    replacement = await service.create_schedule(_request(second, screening, at(9), at(9, 30)))
    assert replacement.interviewer_ids == ["alice"]


@pytest.mark.asyncio
async def test_complete_and_cancel_transitions(db, pipeline, make_candidate, book):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    service = ScheduleService(db)
    done = await book(first, pipeline.stages[0], at(9))
    dropped = await book(second, pipeline.stages[0], at(10))

    assert (await service.complete_schedule(done.id)).status == ScheduleStatus.COMPLETED.value
    assert (await service.complete_schedule(done.id)).status == ScheduleStatus.COMPLETED.value
    with pytest.raises(InvalidStateTransitionError):
        await service.cancel_schedule(done.id)

    assert (await service.cancel_schedule(dropped.id)).status == ScheduleStatus.CANCELED.value
    assert (await service.cancel_schedule(dropped.id)).status == ScheduleStatus.CANCELED.value
    with pytest.raises(InvalidStateTransitionError):
        await service.complete_schedule(dropped.id)


@pytest.mark.asyncio
async def test_reschedule(db, pipeline, make_candidate, book):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    screening = pipeline.stages[0]
    service = ScheduleService(db)
    mine = await book(first, screening, at(9))
    await book(second, screening, at(11), interviewers=["bob"])

    # overlapping its own old window is fine
    moved = await service.reschedule(mine.id, InterviewScheduleUpdate(start_time=at(9, 15), end_time=at(9, 45)))
    assert moved.start_time == at(9, 15)

    with pytest.raises(ConflictError):
        await service.reschedule(mine.id, InterviewScheduleUpdate(start_time=at(11), end_time=at(11, 30), interviewer_ids=["bob"]))
    with pytest.raises(InputValidationError):
        await service.reschedule(mine.id, InterviewScheduleUpdate(end_time=at(8)))

    moved = await service.reschedule(mine.id, InterviewScheduleUpdate(interviewer_ids=["carol"], notes="moved"))
    assert moved.interviewer_ids == ["carol"]
    assert moved.notes == "moved"
    await db.commit()

    await service.complete_schedule(mine.id)
    with pytest.raises(InvalidStateTransitionError):
        await service.reschedule(mine.id, InterviewScheduleUpdate(start_time=at(14), end_time=at(14, 30)))


@pytest.mark.asyncio
async def test_history_is_ordered_by_stage_then_start(db, pipeline, make_candidate, book, pass_stage):
    screening, technical, _ = pipeline.stages
    candidate = await make_candidate()
    first = await book(candidate, screening, at(9))
    await ScheduleService(db).cancel_schedule(first.id)
    await db.commit()
    passed, _ = await pass_stage(candidate, screening, at(8))
    late = await book(candidate, technical, at(8, day=6))

    history = await ScheduleService(db).list_history(candidate.id)

    assert [s.id for s in history] == [passed.id, first.id, late.id]

    with pytest.raises(NotFoundError):
        await ScheduleService(db).list_history(uuid.uuid4())


@pytest.mark.asyncio
async def test_booking_from_two_sessions(session_factory, pipeline, make_candidate):
    first = await make_candidate("Ada Lovelace")
    second = await make_candidate("Grace Hopper")
    screening = pipeline.stages[0]

    async with session_factory() as session_a, session_factory() as session_b:
        await ScheduleService(session_a).create_schedule(_request(first, screening, at(13), at(13, 30)))
        await session_a.commit()

        with pytest.raises(ConflictError):
            await ScheduleService(session_b).create_schedule(_request(second, screening, at(13, 10), at(13, 40)))
        await session_b.rollback()


@pytest.mark.asyncio
async def test_stage_orders_with_gaps(db, pass_stage):
    department_id = uuid.uuid4()
    catalog = StageCatalogService(db)
    process = await catalog.create_process(InterviewProcessCreate(name="Design", department_id=department_id))
    intro = await catalog.add_stage(process.id, InterviewStageCreate(name="Intro", stage_order=2, duration_minutes=30))
    portfolio = await catalog.add_stage(
        process.id, InterviewStageCreate(name="Portfolio", stage_order=5, duration_minutes=60)
    )
    position = await seed_position(db, department_id, process, "Product Designer")
    await db.commit()
    candidates = CandidateService(db)
    candidate = await candidates.register_candidate(
        position.id, CandidateCreate(full_name="Ada Lovelace", email="ada@example.com")
    )
    await db.commit()

    # no order 1: the lowest order is the first stage
    rows = await candidates.list_for_position(position.id)
    assert rows[0][1].id == intro.id
    _, plans = await SuggestionService(db).suggest(position.id, [date(2099, 1, 5)])
    assert plans[0].next_stage.id == intro.id

    await pass_stage(candidate, intro, at(8))

    _, plans = await SuggestionService(db).suggest(position.id, [date(2099, 1, 6)])
    proposal = plans[0].proposals[0]
    assert proposal.next_stage_id == portfolio.id

    schedule = await ScheduleService(db).create_schedule(
        InterviewScheduleCreate(
            candidate_id=candidate.id,
            stage_id=proposal.next_stage_id,
            start_time=proposal.start_time,
            end_time=proposal.end_time,
            interviewer_ids=proposal.interviewer_ids,
        )
    )
    assert schedule.stage_order == 5


@pytest.mark.asyncio
async def test_passed_stages_cannot_be_booked_again(db, pipeline, make_candidate, pass_stage):
    screening, technical, final = pipeline.stages
    candidate = await make_candidate()
    await pass_stage(candidate, screening, at(8))
    await pass_stage(candidate, technical, at(8, day=6))
    service = ScheduleService(db)

    with pytest.raises(PreconditionFailedError) as exc_info:
        await service.create_schedule(_request(candidate, screening, at(9, day=7), at(9, 30, day=7)))
    assert exc_info.value.details["passed_order"] == 2
    with pytest.raises(PreconditionFailedError):
        await service.create_schedule(_request(candidate, technical, at(10, day=7), at(11, day=7)))

    booked = await service.create_schedule(_request(candidate, final, at(12, day=7), at(12, 45, day=7)))
    assert booked.stage_order == 3
