"""
Reference-data boundary for positions and the interviewer directory.

Positions belong to the campaign provider and interviewers to the department
directory. The pipeline reads them through this small interface.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.position import DepartmentInterviewer, Position
from app.repositories.position_repository import PositionRepository


class PositionDirectory(Protocol):
    """Interface for position and interviewer lookups."""

    async def get_position(self, position_id: UUID) -> Optional[Position]:
        ...

    async def list_open_positions(self) -> List[Position]:
        ...

    async def list_interviewers(self, department_id: UUID) -> List[DepartmentInterviewer]:
        ...


class SqlPositionDirectory:
    """PositionDirectory over the local reference tables."""

    def __init__(self, db: AsyncSession):
        self.repository = PositionRepository(db)

    async def get_position(self, position_id: UUID) -> Optional[Position]:
        return await self.repository.get_by_id(position_id)

    async def list_open_positions(self) -> List[Position]:
        return await self.repository.list_open()

    async def list_interviewers(self, department_id: UUID) -> List[DepartmentInterviewer]:
        return await self.repository.list_interviewers(department_id)
