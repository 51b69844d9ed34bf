"""
InterviewOutcome model.

The interviewer's feedback and Pass/Fail decision for exactly one schedule.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base_model import TimestampedModel
from app.models.enums import OutcomeDecision
from app.models.interview_schedule import InterviewSchedule


class InterviewOutcome(TimestampedModel):
    """
    Outcome table.

    decision moves pending -> pass or pending -> fail exactly once;
    feedback may be edited any number of times (updated_at records the last edit).
    """

    __tablename__ = "interview_outcome"

    schedule_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("interview_schedule.id"),
        nullable=False,
        unique=True,
    )

    feedback: Mapped[str] = mapped_column(Text, nullable=False, default="")

    decision: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OutcomeDecision.PENDING.value,
    )

    created_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    schedule: Mapped[InterviewSchedule] = relationship("InterviewSchedule", lazy="selectin")
