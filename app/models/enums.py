"""
Canonical status enums for every pipeline entity.

Values are what gets stored; legacy numeric codes are converted in
``app.schemas.codes`` and never reach the services.
"""

import enum


class CandidateStatus(str, enum.Enum):
    PENDING = "pending"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    FAILED = "failed"
    ONBOARDED = "onboarded"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_CANDIDATE_STATUSES


TERMINAL_CANDIDATE_STATUSES = frozenset(
    {CandidateStatus.REJECTED, CandidateStatus.FAILED, CandidateStatus.ONBOARDED}
)


class ScheduleStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"


class OutcomeDecision(str, enum.Enum):
    PENDING = "pending"
    PASS = "pass"
    FAIL = "fail"


class OnboardStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SalaryType(str, enum.Enum):
    HOURLY = "hourly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
