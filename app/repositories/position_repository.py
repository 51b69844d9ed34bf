"""
Position repository - read access to position and interviewer reference data.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.position import DepartmentInterviewer, Position


class PositionRepository:
    """Repository for Position and DepartmentInterviewer reads."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, position_id: UUID) -> Optional[Position]:
        result = await self.db.execute(
            select(Position).where(Position.id == position_id)
        )
        return result.scalar_one_or_none()

    async def list_open(self) -> List[Position]:
        result = await self.db.execute(
            select(Position)
            .where(Position.is_open.is_(True))
            .order_by(Position.created_at.asc(), Position.id.asc())
        )
        return list(result.scalars().all())

    async def list_interviewers(self, department_id: UUID) -> List[DepartmentInterviewer]:
        result = await self.db.execute(
            select(DepartmentInterviewer)
            .where(DepartmentInterviewer.department_id == department_id)
            .order_by(DepartmentInterviewer.interviewer_id.asc())
        )
        return list(result.scalars().all())
