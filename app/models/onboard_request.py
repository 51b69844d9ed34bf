"""
Onboard request models.

The offer/approval record created once a candidate passes the final stage,
with an append-only history of status changes.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base_model import TimestampedModel
from app.models.enums import OnboardStatus
from app.utils.time import utc_now

PENDING_ONBOARD_CLAUSE = text("status = 'pending'")


class OnboardRequest(TimestampedModel):
    """Offer proposal moving through pending -> approved | rejected."""

    __tablename__ = "onboard_request"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("candidate.id"),
        nullable=False,
        index=True,
    )

    # Final-stage outcome that unlocked this request
    outcome_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("interview_outcome.id"),
        nullable=True,
    )

    proposed_salary: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    salary_type: Mapped[str] = mapped_column(String(20), nullable=False)

    proposed_start_date: Mapped[date] = mapped_column(Date, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OnboardStatus.PENDING.value,
        index=True,
    )

    created_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    history: Mapped[List["OnboardRequestHistory"]] = relationship(
        "OnboardRequestHistory",
        back_populates="request",
        order_by="OnboardRequestHistory.sequence",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        # At most one open request per candidate
        Index(
            "uq_onboard_request_pending_candidate",
            "candidate_id",
            unique=True,
            postgresql_where=PENDING_ONBOARD_CLAUSE,
            sqlite_where=PENDING_ONBOARD_CLAUSE,
        ),
    )


class OnboardRequestHistory(Base):
    """Immutable record of one status change."""

    __tablename__ = "onboard_request_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("onboard_request.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Position within the request's history, starting at 1
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    from_status: Mapped[str] = mapped_column(String(20), nullable=False)
    to_status: Mapped[str] = mapped_column(String(20), nullable=False)

    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    changed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    request: Mapped["OnboardRequest"] = relationship("OnboardRequest", back_populates="history")
