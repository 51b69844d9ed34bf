"""
Pydantic schemas for request/response validation.
"""

from app.schemas.candidate import CandidateCreate, CandidateRead, CandidateReject, CandidateWithStage
from app.schemas.interview_outcome import (
    InterviewOutcomeCreate,
    InterviewOutcomeDecisionUpdate,
    InterviewOutcomeFeedbackUpdate,
    InterviewOutcomeRead,
)
from app.schemas.interview_process import (
    InterviewProcessCreate,
    InterviewProcessRead,
    InterviewStageCreate,
    InterviewStageRead,
    InterviewStageUpdate,
    StageRef,
)
from app.schemas.interview_schedule import (
    InterviewScheduleCreate,
    InterviewScheduleRead,
    InterviewScheduleUpdate,
)
from app.schemas.onboard_request import (
    OnboardRequestCreate,
    OnboardRequestRead,
    OnboardRequestUpdate,
    OnboardStatusChange,
)
from app.schemas.position import PositionRead
from app.schemas.suggestion import SuggestionRequest, SuggestionResponse

__all__ = [
    "CandidateCreate",
    "CandidateRead",
    "CandidateReject",
    "CandidateWithStage",
    "InterviewOutcomeCreate",
    "InterviewOutcomeDecisionUpdate",
    "InterviewOutcomeFeedbackUpdate",
    "InterviewOutcomeRead",
    "InterviewProcessCreate",
    "InterviewProcessRead",
    "InterviewStageCreate",
    "InterviewStageRead",
    "InterviewStageUpdate",
    "StageRef",
    "InterviewScheduleCreate",
    "InterviewScheduleRead",
    "InterviewScheduleUpdate",
    "OnboardRequestCreate",
    "OnboardRequestRead",
    "OnboardRequestUpdate",
    "OnboardStatusChange",
    "PositionRead",
    "SuggestionRequest",
    "SuggestionResponse",
]
