"""Service layer for business logic."""

from loanapp.services.approval_listener import LoanApprovalListener
from loanapp.services.event_bus import ApprovalEventDispatcher, EventPublisher
from loanapp.services.loan_application_service import LoanApplicationService

__all__ = [
    "ApprovalEventDispatcher",
    "EventPublisher",
    "LoanApplicationService",
    "LoanApprovalListener",
]
