"""Domain models for the application."""

from loanapp.models.domain.applicant import Applicant, Loan
from loanapp.models.domain.events import ApproveLoanEvent

__all__ = [
    "Applicant",
    "Loan",
    "ApproveLoanEvent",
]
