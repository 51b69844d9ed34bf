"""
Interview process / stage Pydantic schemas.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import ORMRead


class InterviewProcessCreate(BaseModel):
    """Schema for creating a new interview process."""

    name: str = Field(min_length=1, max_length=200)
    department_id: UUID


class InterviewStageCreate(BaseModel):
    """Schema for adding a stage to a process."""

    name: str = Field(min_length=1, max_length=200)
    stage_order: int
    duration_minutes: int
    min_interviewers: int = 1
    max_interviewers: Optional[int] = None
    interviewer_pool: Optional[List[str]] = None
    interview_type: Optional[str] = None


class InterviewStageUpdate(BaseModel):
    """Schema for updating a stage. All fields optional."""

    name: Optional[str] = None
    stage_order: Optional[int] = None
    duration_minutes: Optional[int] = None
    min_interviewers: Optional[int] = None
    max_interviewers: Optional[int] = None
    interviewer_pool: Optional[List[str]] = None
    interview_type: Optional[str] = None


class InterviewStageRead(ORMRead):
    """Schema for reading stage data (API response)."""

    process_id: UUID
    name: str
    stage_order: int
    duration_minutes: int
    min_interviewers: int
    max_interviewers: int
    interviewer_pool: Optional[List[str]] = None
    interview_type: Optional[str] = None


class StageRef(BaseModel):
    """Compact stage reference embedded in other responses."""

    id: UUID
    name: str
    stage_order: int

    model_config = ConfigDict(from_attributes=True)


class InterviewProcessRead(ORMRead):
    """Process with its stages in order."""

    name: str
    department_id: UUID
    stages: List[InterviewStageRead] = []
