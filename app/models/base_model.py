"""
Base model with common fields.

All pipeline tables inherit from this to get:
- id (UUID primary key)
- created_at (when the record was created)
- updated_at (when the record was last modified)
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.utils.time import utc_now


class TimestampedModel(Base):
    """
    Abstract base class for all pipeline models.

    This is not a real table - it's a template that other models inherit from.
    Timestamps are filled in Python so they never have to be re-fetched
    after a flush.
    """

    __abstract__ = True  # This means: don't create a table for this class

    # Primary key - UUID (universally unique identifier)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Timestamps - automatically set when records are created/updated
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
        nullable=False,
    )
