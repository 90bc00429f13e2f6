"""Loan application service for submission, listing and manual approval."""

import logging
import math
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from loanapp.core.enums import LoanStatus
from loanapp.core.exceptions import (
    ApplicantNotFoundError,
    DuplicateApplicantError,
    RequestValidationFailed,
    UnprocessableApplicationError,
)
from loanapp.models.domain.applicant import Applicant
from loanapp.models.domain.events import ApproveLoanEvent
from loanapp.models.schemas.applicant import (
    ApplicantLoanRequest,
    ApplicantPage,
    ApplicantResponse,
    GenericMessage,
)
from loanapp.repositories.applicant_repository import ApplicantRepository
from loanapp.services.event_bus import EventPublisher
from loanapp.services.rule_engine import (
    INELIGIBLE_REASON,
    apply_approval_decision,
    is_eligible,
)
from loanapp.services.validation import validate_loan_request

logger = logging.getLogger(__name__)


class LoanApplicationService:
    """
    Service managing the lifecycle of loan applicants.

    Submissions are screened and stored as drafts; the approval decision
    itself runs after commit through the published ApproveLoanEvent, or
    on demand through approve_loan.
    """

    def __init__(self, db: AsyncSession, publisher: EventPublisher):
        """
        Initialize the loan application service.

        Args:
            db: Async database session
            publisher: Publisher for post-commit events
        """
        self.db = db
        self.repo = ApplicantRepository(db)
        self.publisher = publisher

    async def submit_application(self, request: ApplicantLoanRequest) -> GenericMessage:
        """
        Register a new applicant and schedule the approval decision.

        Args:
            request: Loan request submitted by the applicant

        Returns:
            Confirmation message; the final status is decided asynchronously

        Raises:
            RequestValidationFailed: If required fields are missing or invalid
            DuplicateApplicantError: If the email is already registered
            UnprocessableApplicationError: If income is not above 3x the installment
        """
        errors = validate_loan_request(request)
        if errors:
            raise RequestValidationFailed(errors)

        if await self.repo.exists_by_email(request.email):
            raise DuplicateApplicantError("You are an already registered applicant")

        if not is_eligible(request.monthly_income, request.monthly_payment):
            raise UnprocessableApplicationError(INELIGIBLE_REASON)

        applicant = Applicant(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            monthly_income=request.monthly_income,
            request_loan_amount=request.loan_amount,
            monthly_payment=request.monthly_payment,
            tenor=request.tenor,
            status=LoanStatus.DRAFT,
            credit_check=False,
            loan=None,
        )
        await self.repo.save(applicant)

        self.publisher.publish(ApproveLoanEvent(request.email, request.loan_amount))
        await self.db.commit()

        logger.info(f"Application submitted for {request.email}")
        return GenericMessage(message="Application submitted successfully")

    async def list_applicants(self, page: int = 0, size: int = 100) -> ApplicantPage:
        """
        Retrieve one page of applicants, oldest first.

        Args:
            page: Zero-based page index
            size: Number of applicants per page

        Returns:
            Page of applicant summaries with paging metadata
        """
        applicants, total = await self.repo.find_page(offset=page * size, limit=size)

        return ApplicantPage(
            items=[ApplicantResponse.from_applicant(a) for a in applicants],
            total=total,
            page=page,
            size=size,
            total_pages=math.ceil(total / size) if total else 0,
        )

    async def approve_loan(self, applicant_id: UUID) -> LoanStatus:
        """
        Decide the loan of an applicant on demand.

        Args:
            applicant_id: Public UUID of the applicant

        Returns:
            Status after the decision

        Raises:
            ApplicantNotFoundError: If the applicant does not exist
            ConcurrentUpdateError: If the applicant changed while being decided
        """
        applicant = await self.repo.find_by_id(applicant_id)
        if applicant is None:
            raise ApplicantNotFoundError("Applicant not found")

        if applicant.status.is_terminal:
            return applicant.status

        apply_approval_decision(applicant, applicant.request_loan_amount)
        await self.repo.save(applicant)
        await self.db.commit()

        return applicant.status
