"""Pydantic schemas for API validation and serialization."""

from loanapp.models.schemas.applicant import (
    ApplicantLoanRequest,
    ApplicantPage,
    ApplicantResponse,
    ApprovalRequest,
    GenericMessage,
)

__all__ = [
    "ApplicantLoanRequest",
    "ApplicantPage",
    "ApplicantResponse",
    "ApprovalRequest",
    "GenericMessage",
]
