"""
Candidate model.

Represents one person's application to one open position.
"""

import uuid
from typing import Optional

from sqlalchemy import Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import TimestampedModel
from app.models.enums import CandidateStatus


class Candidate(TimestampedModel):
    """
    Candidate table - one application to one position.

    Rows are never deleted; terminal statuses keep them for audit.
    """

    __tablename__ = "candidate"

    position_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("position.id"),
        nullable=False,
        index=True,
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Resume score from the intake collaborator (0-100)
    score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CandidateStatus.PENDING.value,
        index=True,
    )

    # Set on explicit HR rejection
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def is_terminal(self) -> bool:
        return CandidateStatus(self.status).is_terminal
