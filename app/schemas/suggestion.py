"""
Schedule suggestion Pydantic schemas.

Suggestions are advisory and never persisted; the response mirrors the
engine's dataclasses.
"""

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import UtcDatetime
from app.schemas.interview_process import StageRef


class HeldSlot(BaseModel):
    """A pick the recruiter has staged for a candidate but not confirmed yet."""

    candidate_id: UUID
    start_time: UtcDatetime
    end_time: UtcDatetime
    interviewer_ids: List[str]


class SuggestionRequest(BaseModel):
    days: List[dt.date] = Field(default_factory=list)
    held: List[HeldSlot] = Field(default_factory=list)


class SlotProposalRead(BaseModel):
    date: dt.date
    start_time: UtcDatetime
    end_time: UtcDatetime
    time_slot: str
    next_stage_id: UUID
    next_stage_name: str
    current_stage_id: Optional[UUID] = None
    current_stage_name: Optional[str] = None
    interviewer_ids: List[str]

    model_config = ConfigDict(from_attributes=True)


class CandidatePlanRead(BaseModel):
    candidate_id: UUID
    full_name: str
    email: Optional[str] = None
    score: Optional[float] = None
    current_stage: Optional[StageRef] = None
    next_stage: StageRef
    duration_minutes: int
    proposals: List[SlotProposalRead]

    model_config = ConfigDict(from_attributes=True)


class SuggestionResponse(BaseModel):
    position_id: UUID
    total_candidates: int
    candidates: List[CandidatePlanRead]
