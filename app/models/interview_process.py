"""
Interview process and stage models (the stage catalog).

A process is the ordered list of interview stages a department runs,
e.g. Screening -> Technical -> Final.
"""

import uuid
from typing import List, Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base_model import TimestampedModel


class InterviewProcess(TimestampedModel):
    """Interview process configured for a department."""

    __tablename__ = "interview_process"

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Owning department (external reference data)
    department_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    stages: Mapped[List["InterviewStage"]] = relationship(
        "InterviewStage",
        back_populates="process",
        order_by="InterviewStage.stage_order",
        lazy="selectin",
    )


class InterviewStage(TimestampedModel):
    """
    One ordered step of an interview process.

    stage_order starts at 1 and is unique within a process. It is frozen once
    any schedule references the stage.
    """

    __tablename__ = "interview_stage"

    process_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("interview_process.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    stage_order: Mapped[int] = mapped_column(Integer, nullable=False)

    # Length of one interview round for this stage
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    # Panel size bounds used by the suggestion engine
    min_interviewers: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    max_interviewers: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Employee ids allowed to interview for this stage; empty means the whole
    # department directory
    interviewer_pool: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    interview_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    process: Mapped["InterviewProcess"] = relationship(
        "InterviewProcess",
        back_populates="stages",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("process_id", "stage_order", name="uq_interview_stage_process_order"),
    )
