"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.interview_process import InterviewProcess, InterviewStage
from app.models.position import Position, DepartmentInterviewer
from app.models.candidate import Candidate
from app.models.interview_schedule import InterviewSchedule, ScheduleInterviewer, InterviewerCalendar
from app.models.interview_outcome import InterviewOutcome
from app.models.onboard_request import OnboardRequest, OnboardRequestHistory

# Export all models
__all__ = [
    "InterviewProcess",
    "InterviewStage",
    "Position",
    "DepartmentInterviewer",
    "Candidate",
    "InterviewSchedule",
    "ScheduleInterviewer",
    "InterviewerCalendar",
    "InterviewOutcome",
    "OnboardRequest",
    "OnboardRequestHistory",
]
