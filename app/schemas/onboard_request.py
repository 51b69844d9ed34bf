"""
OnboardRequest Pydantic schemas.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.enums import OnboardStatus, SalaryType
from app.schemas.base import ORMRead, UtcDatetime
from app.schemas.codes import coerce_legacy_code


class _OfferFields(BaseModel):
    proposed_salary: Decimal
    salary_type: SalaryType
    proposed_start_date: date

    @field_validator("salary_type", mode="before")
    @classmethod
    def _coerce_salary_type(cls, value):
        return coerce_legacy_code(SalaryType, value)


class OnboardRequestCreate(_OfferFields):
    """Schema for proposing an offer to a candidate."""

    candidate_id: UUID


class OnboardRequestUpdate(_OfferFields):
    """Replace the offer terms of a pending request."""


class OnboardStatusChange(BaseModel):
    """Approve or reject; accepts the legacy codes 1/2 as well."""

    status: OnboardStatus
    note: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value):
        return coerce_legacy_code(OnboardStatus, value)


class OnboardRequestHistoryRead(BaseModel):
    sequence: int
    from_status: OnboardStatus
    to_status: OnboardStatus
    note: Optional[str] = None
    changed_by: Optional[str] = None
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class OnboardRequestRead(ORMRead):
    """Schema for reading an onboard request with its history."""

    candidate_id: UUID
    outcome_id: Optional[UUID] = None
    proposed_salary: Decimal
    salary_type: SalaryType
    proposed_start_date: date
    status: OnboardStatus
    created_by: Optional[str] = None
    history: List[OnboardRequestHistoryRead] = []
