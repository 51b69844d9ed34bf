"""
Onboard workflow business logic: offers, approval, and their history.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    InputValidationError,
    InvalidStateTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from app.models.candidate import Candidate
from app.models.enums import OnboardStatus
from app.models.onboard_request import OnboardRequest
from app.repositories.interview_outcome_repository import InterviewOutcomeRepository
from app.repositories.interview_process_repository import InterviewProcessRepository
from app.repositories.onboard_request_repository import OnboardRequestRepository
from app.schemas.onboard_request import OnboardRequestCreate, OnboardRequestUpdate
from app.services.candidate_service import CandidateService
from app.services.notification_service import Notification
from app.services.position_directory import PositionDirectory

logger = logging.getLogger(__name__)


def _check_salary(salary) -> None:
    if salary < 0:
        raise InputValidationError("Proposed salary cannot be negative", {"proposed_salary": str(salary)})


class OnboardService:
    """Service for onboard request business logic."""

    def __init__(self, db: AsyncSession, directory: Optional[PositionDirectory] = None):
        self.db = db
        self.repository = OnboardRequestRepository(db)
        self.outcomes = InterviewOutcomeRepository(db)
        self.processes = InterviewProcessRepository(db)
        self.candidates = CandidateService(db, directory=directory)
        self.notifications: List[Notification] = []

    async def get_request(self, request_id: UUID) -> OnboardRequest:
        request = await self.repository.get_by_id(request_id)
        if request is None:
            raise NotFoundError("Onboard request not found", {"request_id": str(request_id)})
        return request

    async def list_requests(
        self,
        candidate_id: Optional[UUID] = None,
        status: Optional[OnboardStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[OnboardRequest]:
        return await self.repository.list(candidate_id=candidate_id, status=status, limit=limit, offset=offset)

    async def create_request(
        self,
        data: OnboardRequestCreate,
        created_by: Optional[str] = None,
    ) -> OnboardRequest:
        """
        Propose an offer.

        Allowed only for an active candidate who passed the final stage and
        has no other pending request.
        """
        _check_salary(data.proposed_salary)
        candidate = await self.candidates.get_candidate(data.candidate_id)
        if candidate.is_terminal:
            raise PreconditionFailedError(
                "Candidate is no longer in the pipeline",
                {"candidate_id": str(candidate.id), "status": candidate.status},
            )

        position = await self.candidates.get_position(candidate.position_id)
        final_stage = await self.processes.get_final_stage(position.process_id)
        outcome = None
        if final_stage is not None:
            outcome = await self.outcomes.find_pass_for_stage(candidate.id, final_stage.id)
        if outcome is None:
            raise PreconditionFailedError(
                "Candidate has not passed the final interview stage",
                {"candidate_id": str(candidate.id)},
            )

        pending = await self.repository.find_pending_for_candidate(candidate.id)
        if pending is not None:
            raise PreconditionFailedError(
                "Candidate already has a pending onboard request",
                {"candidate_id": str(candidate.id), "request_id": str(pending.id)},
            )

        try:
            request = await self.repository.create(
                candidate_id=candidate.id,
                outcome_id=outcome.id,
                proposed_salary=data.proposed_salary,
                salary_type=data.salary_type,
                proposed_start_date=data.proposed_start_date,
                created_by=created_by,
            )
        except IntegrityError as exc:
            raise PreconditionFailedError(
                "Candidate already has a pending onboard request",
                {"candidate_id": str(candidate.id)},
            ) from exc

        logger.info("Onboard request %s created for candidate %s", request.id, candidate.id)
        return request

    async def update_offer(self, request_id: UUID, data: OnboardRequestUpdate) -> OnboardRequest:
        """Replace the offer terms while the request is pending."""
        _check_salary(data.proposed_salary)
        request = await self.get_request(request_id)
        self._require_pending(request)

        updated = await self.repository.update_offer(
            request,
            proposed_salary=data.proposed_salary,
            salary_type=data.salary_type,
            proposed_start_date=data.proposed_start_date,
        )
        if not updated:
            await self.db.refresh(request)
            self._require_pending(request)
        return request

    async def change_status(
        self,
        request_id: UUID,
        new_status: OnboardStatus,
        note: Optional[str] = None,
        changed_by: Optional[str] = None,
    ) -> OnboardRequest:
        """
        Approve or reject a pending request.

        Approval onboards the candidate in the same transaction and queues
        the candidate notification for after commit.
        """
        if new_status not in (OnboardStatus.APPROVED, OnboardStatus.REJECTED):
            raise InputValidationError(
                "Status must be approved or rejected",
                {"status": new_status.value},
            )
        request = await self.get_request(request_id)
        self._require_pending(request)

        changed = await self.repository.transition_status(request, new_status, note, changed_by)
        if not changed:
            await self.db.refresh(request)
            raise InvalidStateTransitionError(
                "Onboard request is no longer pending",
                {"request_id": str(request.id), "status": request.status},
            )

        logger.info("Onboard request %s -> %s", request.id, new_status.value)
        if new_status == OnboardStatus.APPROVED:
            candidate = await self.candidates.mark_onboarded(request.candidate_id)
            self._queue_welcome(candidate, request)
        return request

    @staticmethod
    def _require_pending(request: OnboardRequest) -> None:
        if request.status != OnboardStatus.PENDING.value:
            raise InvalidStateTransitionError(
                "Onboard request is no longer pending",
                {"request_id": str(request.id), "status": request.status},
            )

    def _queue_welcome(self, candidate: Candidate, request: OnboardRequest) -> None:
        if not candidate.email:
            logger.info("Candidate %s has no e-mail; skipping onboarding notification", candidate.id)
            return
        self.notifications.append(
            Notification(
                event="onboard_approved",
                recipients=[candidate.email],
                subject="Your offer has been approved",
                payload={
                    "candidate_id": str(candidate.id),
                    "request_id": str(request.id),
                    "proposed_start_date": request.proposed_start_date.isoformat(),
                    "salary_type": request.salary_type,
                },
            )
        )
