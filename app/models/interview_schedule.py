"""
Interview schedule models.

One InterviewSchedule row is one interview round for one candidate at one
stage. Interviewer membership lives in schedule_interviewer so overlap checks
can be answered with a single indexed query.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base_model import TimestampedModel
from app.models.enums import ScheduleStatus
from app.models.interview_process import InterviewStage
from app.utils.time import utc_now

ACTIVE_SCHEDULE_CLAUSE = text("status = 'scheduled'")


class InterviewSchedule(TimestampedModel):
    """One interview-round instance."""

    __tablename__ = "interview_schedule"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("candidate.id"),
        nullable=False,
        index=True,
    )

    stage_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("interview_stage.id"),
        nullable=False,
        index=True,
    )

    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ScheduleStatus.SCHEDULED.value,
        index=True,
    )

    created_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    stage: Mapped[InterviewStage] = relationship("InterviewStage", lazy="selectin")

    interviewers: Mapped[List["ScheduleInterviewer"]] = relationship(
        "ScheduleInterviewer",
        back_populates="schedule",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        # At most one live round per (candidate, stage)
        Index(
            "uq_interview_schedule_active_stage",
            "candidate_id",
            "stage_id",
            unique=True,
            postgresql_where=ACTIVE_SCHEDULE_CLAUSE,
            sqlite_where=ACTIVE_SCHEDULE_CLAUSE,
        ),
    )

    @property
    def interviewer_ids(self) -> List[str]:
        return sorted(link.interviewer_id for link in self.interviewers)

    @property
    def stage_order(self) -> int:
        return self.stage.stage_order


class ScheduleInterviewer(Base):
    """Interviewer assigned to a schedule."""

    __tablename__ = "schedule_interviewer"

    schedule_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("interview_schedule.id", ondelete="CASCADE"),
        primary_key=True,
    )

    interviewer_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    schedule: Mapped["InterviewSchedule"] = relationship(
        "InterviewSchedule",
        back_populates="interviewers",
    )

    __table_args__ = (
        Index("ix_schedule_interviewer_interviewer", "interviewer_id"),
    )


class InterviewerCalendar(Base):
    """
    Per-interviewer lock row.

    Writers that book an interviewer lock this row FOR UPDATE before checking
    for overlaps, so two bookings for the same person are serialized.
    """

    __tablename__ = "interviewer_calendar"

    interviewer_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
