"""
InterviewOutcome Pydantic schemas.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from app.models.enums import OutcomeDecision
from app.schemas.base import ORMRead
from app.schemas.codes import coerce_legacy_code


class InterviewOutcomeCreate(BaseModel):
    """Feedback submission; decision may be given right away."""

    schedule_id: UUID
    feedback: str = ""
    decision: Optional[OutcomeDecision] = None

    @field_validator("decision", mode="before")
    @classmethod
    def _coerce_decision(cls, value):
        return coerce_legacy_code(OutcomeDecision, value)


class InterviewOutcomeFeedbackUpdate(BaseModel):
    feedback: str


class InterviewOutcomeDecisionUpdate(BaseModel):
    """Accepts "pass"/"fail" or the legacy codes 1/2."""

    decision: OutcomeDecision

    @field_validator("decision", mode="before")
    @classmethod
    def _coerce_decision(cls, value):
        return coerce_legacy_code(OutcomeDecision, value)


class InterviewOutcomeRead(ORMRead):
    """Schema for reading outcome data (API response)."""

    schedule_id: UUID
    feedback: str
    decision: OutcomeDecision
    created_by: Optional[str] = None
