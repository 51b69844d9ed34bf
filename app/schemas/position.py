"""
Position Pydantic schemas (read-only reference data).
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PositionRead(BaseModel):
    id: UUID
    department_id: UUID
    title: str
    total_slots: Optional[int] = None
    is_open: bool
    process_id: UUID

    model_config = ConfigDict(from_attributes=True)
