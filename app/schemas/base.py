"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict

from app.utils.time import as_utc

# Datetimes always leave the API as aware UTC values
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class ORMRead(BaseModel):
    """
    Base schema for reading pipeline records.

    Includes all the auto-generated fields like id, timestamps, etc.
    """

    id: UUID
    created_at: UtcDatetime
    updated_at: UtcDatetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)
