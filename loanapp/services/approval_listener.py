"""Listener applying the approval decision once a submission has committed."""

import logging

from loanapp.core.exceptions import ApplicantNotFoundError
from loanapp.models.domain.events import ApproveLoanEvent
from loanapp.repositories.applicant_repository import ApplicantRepository
from loanapp.services.rule_engine import apply_approval_decision

logger = logging.getLogger(__name__)


class LoanApprovalListener:
    """
    Handles ApproveLoanEvent deliveries.

    Delivery is at-least-once, so the handler may see the same event more
    than once or lose a race against a manual approval; an applicant that
    already reached a terminal status is left untouched.
    """

    def __init__(self, repo: ApplicantRepository):
        self.repo = repo

    async def handle(self, event: ApproveLoanEvent) -> None:
        """
        Decide the loan for the applicant named by the event.

        Args:
            event: Event published by the submission workflow

        Raises:
            ApplicantNotFoundError: If no applicant is registered under the email
            ConcurrentUpdateError: If the applicant changed while being decided
        """
        applicant = await self.repo.find_by_email(event.applicant_email)
        if applicant is None:
            raise ApplicantNotFoundError(
                f"Applicant not found for email: {event.applicant_email}"
            )

        if applicant.status.is_terminal:
            logger.info(
                f"Skipping approval for {event.applicant_email}: "
                f"already {applicant.status.value}"
            )
            return

        apply_approval_decision(applicant, event.amount_requested)
        await self.repo.save(applicant)
