"""
OnboardRequest repository - database operations for offers and their history.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import OnboardStatus, SalaryType
from app.models.onboard_request import OnboardRequest, OnboardRequestHistory
from app.utils.time import utc_now


class OnboardRequestRepository:
    """Repository for OnboardRequest database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, request_id: UUID) -> Optional[OnboardRequest]:
        result = await self.db.execute(
            select(OnboardRequest).where(OnboardRequest.id == request_id)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        candidate_id: Optional[UUID] = None,
        status: Optional[OnboardStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[OnboardRequest]:
        """List requests, newest first."""
        query = select(OnboardRequest)
        if candidate_id is not None:
            query = query.where(OnboardRequest.candidate_id == candidate_id)
        if status is not None:
            query = query.where(OnboardRequest.status == status.value)

        query = query.order_by(OnboardRequest.created_at.desc(), OnboardRequest.id.asc())
        query = query.limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_pending_for_candidate(self, candidate_id: UUID) -> Optional[OnboardRequest]:
        result = await self.db.execute(
            select(OnboardRequest).where(
                OnboardRequest.candidate_id == candidate_id,
                OnboardRequest.status == OnboardStatus.PENDING.value,
            )
        )
        return result.scalars().first()

    async def create(
        self,
        candidate_id: UUID,
        outcome_id: Optional[UUID],
        proposed_salary: Decimal,
        salary_type: SalaryType,
        proposed_start_date: date,
        created_by: Optional[str],
    ) -> OnboardRequest:
        request = OnboardRequest(
            candidate_id=candidate_id,
            outcome_id=outcome_id,
            proposed_salary=proposed_salary,
            salary_type=salary_type.value,
            proposed_start_date=proposed_start_date,
            status=OnboardStatus.PENDING.value,
            created_by=created_by,
            history=[],
        )
        self.db.add(request)
        await self.db.flush()
        return request

    async def update_offer(
        self,
        request: OnboardRequest,
        proposed_salary: Decimal,
        salary_type: SalaryType,
        proposed_start_date: date,
    ) -> bool:
        """Rewrite offer terms; guarded on the request still being pending."""
        result = await self.db.execute(
            update(OnboardRequest)
            .where(
                OnboardRequest.id == request.id,
                OnboardRequest.status == OnboardStatus.PENDING.value,
            )
            .values(
                proposed_salary=proposed_salary,
                salary_type=salary_type.value,
                proposed_start_date=proposed_start_date,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.db.refresh(request)
        return True

    async def transition_status(
        self,
        request: OnboardRequest,
        new_status: OnboardStatus,
        note: Optional[str],
        changed_by: Optional[str],
    ) -> bool:
        """
        Move a pending request to new_status and append one history entry.

        Returns False (and writes nothing) when the request is no longer pending.
        """
        result = await self.db.execute(
            update(OnboardRequest)
            .where(
                OnboardRequest.id == request.id,
                OnboardRequest.status == OnboardStatus.PENDING.value,
            )
            .values(status=new_status.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        self.db.add(
            OnboardRequestHistory(
                request_id=request.id,
                sequence=len(request.history) + 1,
                from_status=OnboardStatus.PENDING.value,
                to_status=new_status.value,
                note=note,
                changed_by=changed_by,
            )
        )
        await self.db.flush()
        await self.db.refresh(request)
        return True
