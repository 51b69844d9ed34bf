"""
Reference data owned by external collaborators.

Positions come from the campaign provider and interviewers from the
department directory. The pipeline only reads these tables.
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.base_model import TimestampedModel


class Position(TimestampedModel):
    """Open position within a recruitment campaign."""

    __tablename__ = "position"

    department_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    total_slots: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    process_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("interview_process.id"),
        nullable=False,
        index=True,
    )


class DepartmentInterviewer(Base):
    """Employee eligible to interview for a department."""

    __tablename__ = "department_interviewer"

    department_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    interviewer_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
