"""
Candidate Pydantic schemas.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, computed_field, field_validator

from app.models.enums import CandidateStatus
from app.schemas.base import ORMRead
from app.schemas.codes import coerce_legacy_code, to_legacy_code
from app.schemas.interview_process import StageRef


class CandidateCreate(BaseModel):
    """Candidate produced by the resume intake collaborator."""

    full_name: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None
    score: Optional[float] = None


class CandidateReject(BaseModel):
    """Explicit HR rejection."""

    reason: Optional[str] = None


class CandidateRead(ORMRead):
    """Schema for reading candidate data (API response)."""

    position_id: UUID
    full_name: str
    email: Optional[str] = None
    score: Optional[float] = None
    status: CandidateStatus
    rejection_reason: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        return coerce_legacy_code(CandidateStatus, value)

    @computed_field
    @property
    def status_code(self) -> int:
        return to_legacy_code(self.status)


class CandidateWithStage(CandidateRead):
    """Candidate annotated with the stage it is currently at."""

    current_stage: Optional[StageRef] = None

    @classmethod
    def from_candidate(cls, candidate, stage=None) -> "CandidateWithStage":
        data = CandidateRead.model_validate(candidate).model_dump(exclude={"status_code"})
        if stage is not None:
            data["current_stage"] = StageRef(id=stage.id, name=stage.name, stage_order=stage.stage_order)
        return cls(**data)
