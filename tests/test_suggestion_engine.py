import uuid
from datetime import date, datetime, time, timezone

import pytest

from app.services.suggestion_engine import (
    BusyWindow,
    CandidateState,
    RoundRecord,
    StageSpec,
    day_slots,
    next_stage_for,
    suggest_slots,
)

DAY = date(2099, 1, 5)


def _at(hour, minute=0, day=DAY):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def _stages():
    return [
        StageSpec(id=uuid.UUID(int=1), name="Screening", stage_order=1, duration_minutes=30),
        StageSpec(
            id=uuid.UUID(int=2),
            name="Technical",
            stage_order=2,
            duration_minutes=60,
            min_interviewers=1,
            max_interviewers=2,
        ),
    ]


@pytest.mark.unit
def test_busy_interviewer_leaves_only_morning_slots():
    stage = StageSpec(
        id=uuid.uuid4(),
        name="Screening",
        stage_order=1,
        duration_minutes=30,
        interviewer_pool=("alice",),
    )
    candidate = CandidateState(id=uuid.uuid4(), full_name="Ada")
    other = uuid.uuid4()
    busy = [BusyWindow(candidate_id=other, start=_at(9), end=_at(18), interviewer_ids=("alice",))]

    plans = suggest_slots([candidate], [stage], [DAY], busy, directory=["alice"])

    assert len(plans) == 1
    slots = [(p.start_time, p.end_time) for p in plans[0].proposals]
    assert slots == [(_at(8), _at(8, 30)), (_at(8, 30), _at(9))]
    assert [p.time_slot for p in plans[0].proposals] == ["08:00 - 08:30", "08:30 - 09:00"]
    assert all(p.interviewer_ids == ["alice"] for p in plans[0].proposals)


@pytest.mark.unit
def test_same_slot_offered_to_two_candidates_without_holds():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=60)
    first = CandidateState(id=uuid.uuid4(), full_name="Ada")
    second = CandidateState(id=uuid.uuid4(), full_name="Grace")

    plans = suggest_slots([first, second], [stage], [DAY], [], directory=["alice"])

    assert [p.candidate_id for p in plans] == [first.id, second.id]
    assert plans[0].proposals[0].start_time == _at(8)
    assert plans[1].proposals[0].start_time == _at(8)


@pytest.mark.unit
def test_held_pick_blocks_other_candidates_only():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=60)
    first = CandidateState(id=uuid.uuid4(), full_name="Ada")
    second = CandidateState(id=uuid.uuid4(), full_name="Grace")
    held = [BusyWindow(candidate_id=first.id, start=_at(8), end=_at(9), interviewer_ids=("alice",))]

    plans = suggest_slots([first, second], [stage], [DAY], [], directory=["alice"], held=held)

    assert plans[0].proposals[0].start_time == _at(8)
    assert plans[1].proposals[0].start_time == _at(9)


@pytest.mark.unit
def test_panel_sizes_follow_min_and_max_and_prefer_low_load():
    stages = _stages()
    candidate = CandidateState(
        id=uuid.uuid4(),
        full_name="Ada",
        rounds=(RoundRecord(stage_order=1, status="completed", decision="pass"),),
    )
    # alice carries one booking on another day, so bob is picked first
    busy = [
        BusyWindow(
            candidate_id=uuid.uuid4(),
            start=_at(8, day=date(2099, 1, 6)),
            end=_at(9, day=date(2099, 1, 6)),
            interviewer_ids=("alice",),
        )
    ]

    plans = suggest_slots([candidate], stages, [DAY], busy, directory=["alice", "bob"])

    proposals = plans[0].proposals
    assert plans[0].next_stage.name == "Technical"
    assert plans[0].current_stage.name == "Screening"
    assert proposals[0].interviewer_ids == ["bob"]
    assert proposals[1].interviewer_ids == ["bob", "alice"]
    assert proposals[0].start_time == proposals[1].start_time
    assert proposals[0].current_stage_name == "Screening"
    assert proposals[0].next_stage_name == "Technical"
    # ten one-hour slots, two panel sizes each
    assert len(proposals) == 20


@pytest.mark.unit
def test_candidate_own_schedule_blocks_slot():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=60)
    candidate = CandidateState(id=uuid.uuid4(), full_name="Ada")
    busy = [BusyWindow(candidate_id=candidate.id, start=_at(8), end=_at(9), interviewer_ids=("zoe",))]

    plans = suggest_slots([candidate], [stage], [DAY], busy, directory=["alice"])

    assert plans[0].proposals[0].start_time == _at(9)


@pytest.mark.unit
def test_days_are_deduplicated_and_sorted():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=600)
    candidate = CandidateState(id=uuid.uuid4(), full_name="Ada")
    later = date(2099, 1, 7)

    plans = suggest_slots([candidate], [stage], [later, DAY, later], [], directory=["alice"])

    assert [p.date for p in plans[0].proposals] == [DAY, later]


@pytest.mark.unit
def test_identical_inputs_give_identical_output():
    stages = _stages()
    candidates = [CandidateState(id=uuid.UUID(int=i), full_name=f"C{i}") for i in range(3)]
    busy = [BusyWindow(candidate_id=uuid.uuid4(), start=_at(10), end=_at(12), interviewer_ids=("bob",))]

    first = suggest_slots(candidates, stages, [DAY], busy, directory=["alice", "bob"])
    second = suggest_slots(candidates, stages, [DAY], busy, directory=["alice", "bob"])

    assert first == second


@pytest.mark.unit
def test_empty_inputs():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=30)
    candidate = CandidateState(id=uuid.uuid4(), full_name="Ada")

    assert suggest_slots([candidate], [stage], [], [], directory=["alice"]) == []
    assert suggest_slots([], [stage], [DAY], [], directory=["alice"]) == []

    no_people = suggest_slots([candidate], [stage], [DAY], [], directory=[])
    assert len(no_people) == 1
    assert no_people[0].proposals == []


@pytest.mark.unit
def test_not_before_and_limit():
    stage = StageSpec(id=uuid.uuid4(), name="Screening", stage_order=1, duration_minutes=60)
    candidate = CandidateState(id=uuid.uuid4(), full_name="Ada")

    plans = suggest_slots(
        [candidate],
        [stage],
        [DAY],
        [],
        directory=["alice"],
        not_before=_at(15),
        limit_per_candidate=2,
    )

    assert [p.start_time for p in plans[0].proposals] == [_at(15), _at(16)]


@pytest.mark.unit
def test_eligibility_rules():
    stages = _stages()
    fresh = CandidateState(id=uuid.uuid4(), full_name="Fresh")
    live = CandidateState(
        id=uuid.uuid4(),
        full_name="Live",
        rounds=(RoundRecord(stage_order=1, status="scheduled"),),
    )
    awaiting = CandidateState(
        id=uuid.uuid4(),
        full_name="Awaiting",
        rounds=(RoundRecord(stage_order=1, status="completed", decision="pending"),),
    )
    finished = CandidateState(
        id=uuid.uuid4(),
        full_name="Finished",
        rounds=(
            RoundRecord(stage_order=1, status="completed", decision="pass"),
            RoundRecord(stage_order=2, status="completed", decision="pass"),
        ),
    )
    canceled = CandidateState(
        id=uuid.uuid4(),
        full_name="Canceled",
        rounds=(RoundRecord(stage_order=1, status="canceled"),),
    )
    terminal = CandidateState(id=uuid.uuid4(), full_name="Gone", is_terminal=True)

    assert next_stage_for(fresh, stages).stage_order == 1
    assert next_stage_for(live, stages) is None
    assert next_stage_for(awaiting, stages) is None
    assert next_stage_for(finished, stages) is None
    assert next_stage_for(canceled, stages).stage_order == 1
    assert next_stage_for(terminal, stages) is None


@pytest.mark.unit
def test_day_slots_respect_workday_end():
    slots = day_slots(DAY, 45, time(8, 0), time(10, 0))

    assert slots == [(_at(8), _at(8, 45)), (_at(8, 45), _at(9, 30))]
