"""
InterviewSchedule Pydantic schemas.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from app.models.enums import ScheduleStatus
from app.schemas.base import ORMRead, UtcDatetime


class InterviewScheduleCreate(BaseModel):
    """Schema for confirming a new interview round."""

    candidate_id: UUID
    stage_id: UUID
    start_time: UtcDatetime
    end_time: UtcDatetime
    interviewer_ids: List[str]
    notes: Optional[str] = None


class InterviewScheduleUpdate(BaseModel):
    """Reschedule: omitted fields keep their current value."""

    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    interviewer_ids: Optional[List[str]] = None
    notes: Optional[str] = None


class InterviewScheduleRead(ORMRead):
    """Schema for reading schedule data (API response)."""

    candidate_id: UUID
    stage_id: UUID
    stage_order: int
    start_time: UtcDatetime
    end_time: UtcDatetime
    interviewer_ids: List[str]
    notes: Optional[str] = None
    status: ScheduleStatus
    created_by: Optional[str] = None
