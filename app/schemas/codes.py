"""
Legacy numeric status codes.

Older clients send statuses as small integers. This module is the only place
those codes are understood: request schemas run incoming values through
``coerce_legacy_code`` so services only ever see the canonical enums.
"""

from enum import Enum
from typing import Any, Dict, Type

from app.models.enums import (
    CandidateStatus,
    OnboardStatus,
    OutcomeDecision,
    SalaryType,
)

CANDIDATE_STATUS_CODES: Dict[int, CandidateStatus] = {
    0: CandidateStatus.PENDING,
    1: CandidateStatus.REJECTED,
    2: CandidateStatus.ACCEPTED,
    3: CandidateStatus.FAILED,
    4: CandidateStatus.ONBOARDED,
}

OUTCOME_DECISION_CODES: Dict[int, OutcomeDecision] = {
    0: OutcomeDecision.PENDING,
    1: OutcomeDecision.PASS,
    2: OutcomeDecision.FAIL,
}

ONBOARD_STATUS_CODES: Dict[int, OnboardStatus] = {
    0: OnboardStatus.PENDING,
    1: OnboardStatus.APPROVED,
    2: OnboardStatus.REJECTED,
}

SALARY_TYPE_CODES: Dict[int, SalaryType] = {
    0: SalaryType.HOURLY,
    1: SalaryType.MONTHLY,
    2: SalaryType.YEARLY,
}

_CODE_TABLES: Dict[Type[Enum], Dict[int, Enum]] = {
    CandidateStatus: CANDIDATE_STATUS_CODES,
    OutcomeDecision: OUTCOME_DECISION_CODES,
    OnboardStatus: ONBOARD_STATUS_CODES,
    SalaryType: SALARY_TYPE_CODES,
}


def coerce_legacy_code(enum_cls: Type[Enum], value: Any) -> Any:
    """
    Map a legacy integer (or digit string) to its enum member.

    Strings are matched case-insensitively against enum values. Anything
    unrecognised is returned untouched so normal validation reports it.
    """
    table = _CODE_TABLES[enum_cls]
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return table.get(value, value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return table.get(int(stripped), value)
        return stripped.lower()
    return value


def to_legacy_code(member: Enum) -> int:
    """Reverse lookup for clients that still display numeric codes."""
    table = _CODE_TABLES[type(member)]
    for code, candidate in table.items():
        if candidate == member:
            return code
    raise KeyError(member)
