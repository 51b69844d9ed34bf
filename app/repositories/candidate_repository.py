"""
Candidate repository - database operations for Candidate.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.candidate import Candidate
from app.models.enums import CandidateStatus, TERMINAL_CANDIDATE_STATUSES
from app.utils.time import utc_now


class CandidateRepository:
    """Repository for Candidate database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, candidate_id: UUID) -> Optional[Candidate]:
        result = await self.db.execute(
            select(Candidate).where(Candidate.id == candidate_id)
        )
        return result.scalar_one_or_none()

    async def list_by_position(
        self,
        position_id: UUID,
        exclude_terminal: bool = False,
    ) -> List[Candidate]:
        """Candidates of a position, best score first."""
        query = select(Candidate).where(Candidate.position_id == position_id)
        if exclude_terminal:
            query = query.where(
                Candidate.status.not_in([s.value for s in TERMINAL_CANDIDATE_STATUSES])
            )
        query = query.order_by(
            Candidate.score.desc().nulls_last(),
            Candidate.full_name.asc(),
            Candidate.id.asc(),
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(
        self,
        position_id: UUID,
        full_name: str,
        email: Optional[str],
        score: Optional[float],
    ) -> Candidate:
        candidate = Candidate(
            position_id=position_id,
            full_name=full_name,
            email=email,
            score=score,
            status=CandidateStatus.PENDING.value,
        )
        self.db.add(candidate)
        await self.db.flush()
        return candidate

    async def transition_status(
        self,
        candidate: Candidate,
        new_status: CandidateStatus,
        allowed_from: Iterable[CandidateStatus],
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """
        Conditionally move a candidate to new_status.

        The UPDATE only matches while the stored status is still one of
        allowed_from, so a concurrent terminal transition wins cleanly.
        Returns False when nothing was updated.
        """
        values = {"status": new_status.value, "updated_at": utc_now()}
        if rejection_reason is not None:
            values["rejection_reason"] = rejection_reason

        result = await self.db.execute(
            update(Candidate)
            .where(
                Candidate.id == candidate.id,
                Candidate.status.in_([s.value for s in allowed_from]),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.db.refresh(candidate)
        return True
