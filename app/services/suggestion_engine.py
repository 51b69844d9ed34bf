"""
Interview slot suggestion engine.

A pure function over one snapshot of the pipeline: it never touches the
database and identical inputs always give identical output. Proposals are
advisory; nothing is booked until a schedule is created through
``ScheduleService``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from app.utils.time import overlaps


@dataclass(frozen=True)
class StageSpec:
    id: UUID
    name: str
    stage_order: int
    duration_minutes: int
    min_interviewers: int = 1
    max_interviewers: int = 1
    interviewer_pool: Sequence[str] = ()


@dataclass(frozen=True)
class RoundRecord:
    """One persisted round of a candidate, with its outcome decision if any."""

    stage_order: int
    status: str
    decision: Optional[str] = None


@dataclass(frozen=True)
class CandidateState:
    id: UUID
    full_name: str
    email: Optional[str] = None
    score: Optional[float] = None
    is_terminal: bool = False
    rounds: Sequence[RoundRecord] = ()


@dataclass(frozen=True)
class BusyWindow:
    """A Scheduled round (or a held pick) occupying people between start and end."""

    candidate_id: UUID
    start: datetime
    end: datetime
    interviewer_ids: Sequence[str]


@dataclass(frozen=True)
class SlotProposal:
    date: date
    start_time: datetime
    end_time: datetime
    time_slot: str
    next_stage_id: UUID
    next_stage_name: str
    current_stage_id: Optional[UUID]
    current_stage_name: Optional[str]
    interviewer_ids: List[str]


@dataclass
class CandidatePlan:
    candidate_id: UUID
    full_name: str
    email: Optional[str]
    score: Optional[float]
    current_stage: Optional[StageSpec]
    next_stage: StageSpec
    duration_minutes: int
    proposals: List[SlotProposal] = field(default_factory=list)


def next_stage_for(candidate: CandidateState, stages: Sequence[StageSpec]) -> Optional[StageSpec]:
    """
    The stage the candidate should be scheduled for next, or None.

    Stage 1 when nothing was scheduled yet; stage N+1 once stage N was
    completed with a pass and nothing is live or awaiting a decision.
    """
    if candidate.is_terminal or not stages:
        return None

    by_order = {stage.stage_order: stage for stage in stages}
    first = min(by_order)
    if not candidate.rounds:
        return by_order[first]

    for record in candidate.rounds:
        if record.status == "scheduled":
            return None
        if record.status == "completed" and record.decision in (None, "pending"):
            return None

    passed = [
        r.stage_order
        for r in candidate.rounds
        if r.status == "completed" and r.decision == "pass"
    ]
    if not passed:
        # Only canceled rounds so far: the first stage is open again
        if all(r.status == "canceled" for r in candidate.rounds):
            return by_order[first]
        return None

    following = [order for order in by_order if order > max(passed)]
    if not following:
        return None
    return by_order[min(following)]


def current_stage_for(candidate: CandidateState, stages: Sequence[StageSpec]) -> Optional[StageSpec]:
    """Highest-ordered stage among completed/scheduled rounds."""
    by_order = {stage.stage_order: stage for stage in stages}
    reached = [
        r.stage_order
        for r in candidate.rounds
        if r.status in ("completed", "scheduled") and r.stage_order in by_order
    ]
    if not reached:
        return None
    return by_order[max(reached)]


def day_slots(
    day: date,
    duration_minutes: int,
    workday_start: time,
    workday_end: time,
    tz: tzinfo = timezone.utc,
) -> List[tuple]:
    """Back-to-back (start, end) slots of the workday, as UTC datetimes."""
    opens = datetime.combine(day, workday_start, tzinfo=tz)
    closes = datetime.combine(day, workday_end, tzinfo=tz)
    step = timedelta(minutes=duration_minutes)

    slots = []
    start = opens
    while start + step <= closes:
        end = start + step
        slots.append((start.astimezone(timezone.utc), end.astimezone(timezone.utc)))
        start = end
    return slots


def _format_slot(start: datetime, end: datetime, tz: tzinfo) -> str:
    return f"{start.astimezone(tz):%H:%M} - {end.astimezone(tz):%H:%M}"


def suggest_slots(
    candidates: Iterable[CandidateState],
    stages: Sequence[StageSpec],
    days: Iterable[date],
    busy: Sequence[BusyWindow],
    directory: Sequence[str],
    workday_start: time = time(8, 0),
    workday_end: time = time(18, 0),
    tz: tzinfo = timezone.utc,
    held: Sequence[BusyWindow] = (),
    not_before: Optional[datetime] = None,
    limit_per_candidate: Optional[int] = None,
) -> List[CandidatePlan]:
    """
    Propose conflict-free slots for every eligible candidate.

    A slot is offered with a panel S when no member of S has a scheduled
    window, or a held pick for a different candidate, overlapping it, and the
    candidate has no scheduled window of its own there. The pool is ordered
    by current load then id and S takes its first free members, from
    min_interviewers up to max_interviewers people.

    Candidates come back in input order; proposals by date, time, then
    panel size.
    """
    plan_days = sorted(set(days))
    if not plan_days:
        return []

    load: Dict[str, int] = {}
    for window in busy:
        for interviewer_id in window.interviewer_ids:
            load[interviewer_id] = load.get(interviewer_id, 0) + 1

    plans: List[CandidatePlan] = []
    for candidate in candidates:
        stage = next_stage_for(candidate, stages)
        if stage is None:
            continue
        current = current_stage_for(candidate, stages)

        pool = sorted(set(stage.interviewer_pool or directory), key=lambda i: (load.get(i, 0), i))
        own_windows = [w for w in busy if w.candidate_id == candidate.id]
        blocking = list(busy) + [w for w in held if w.candidate_id != candidate.id]

        proposals: List[SlotProposal] = []
        for day in plan_days:
            for start, end in day_slots(day, stage.duration_minutes, workday_start, workday_end, tz):
                if not_before is not None and start < not_before:
                    continue
                if any(overlaps(start, end, w.start, w.end) for w in own_windows):
                    continue

                taken = set()
                for window in blocking:
                    if overlaps(start, end, window.start, window.end):
                        taken.update(window.interviewer_ids)
                free = [i for i in pool if i not in taken]

                for size in range(stage.min_interviewers, min(stage.max_interviewers, len(free)) + 1):
                    proposals.append(
                        SlotProposal(
                            date=day,
                            start_time=start,
                            end_time=end,
                            time_slot=_format_slot(start, end, tz),
                            next_stage_id=stage.id,
                            next_stage_name=stage.name,
                            current_stage_id=current.id if current else None,
                            current_stage_name=current.name if current else None,
                            interviewer_ids=list(free[:size]),
                        )
                    )

        if limit_per_candidate is not None:
            proposals = proposals[:limit_per_candidate]

        plans.append(
            CandidatePlan(
                candidate_id=candidate.id,
                full_name=candidate.full_name,
                email=candidate.email,
                score=candidate.score,
                current_stage=current,
                next_stage=stage,
                duration_minutes=stage.duration_minutes,
                proposals=proposals,
            )
        )
    return plans
