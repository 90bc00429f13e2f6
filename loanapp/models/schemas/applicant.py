"""Pydantic schemas for applicant-related requests and responses."""

from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from loanapp.core.enums import LoanStatus
from loanapp.models.domain.applicant import Applicant


# ==================== Request Schemas ====================


class ApplicantLoanRequest(BaseModel):
    """
    Loan application submitted by a prospective applicant.

    Fields are optional at the schema level so that missing values are
    reported together, with readable messages, by the submission
    validation step.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    loan_amount: Optional[Decimal] = None
    tenor: Optional[int] = None
    monthly_income: Optional[Decimal] = None
    monthly_payment: Optional[Decimal] = None

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def strip_blank(cls, v: Any) -> Any:
        """Trim surrounding whitespace; blank strings become None."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class ApprovalRequest(BaseModel):
    """Body of a manual approval request; the decision is computed, not taken from it."""

    status: Optional[LoanStatus] = None


# ==================== Response Schemas ====================


class GenericMessage(BaseModel):
    """Plain confirmation message."""

    message: str


class ApplicantResponse(BaseModel):
    """Applicant summary as shown in listings."""

    id: UUID
    name: str
    monthly_income: Optional[Decimal] = None
    tenor: int
    email: str
    request_loan: Optional[Decimal] = None
    loan_status: LoanStatus
    amount_credited: Optional[Decimal] = None

    @classmethod
    def from_applicant(cls, applicant: Applicant) -> "ApplicantResponse":
        return cls(
            id=applicant.id,
            name=applicant.full_name,
            monthly_income=applicant.monthly_income,
            tenor=applicant.tenor,
            email=applicant.email,
            request_loan=applicant.request_loan_amount,
            loan_status=applicant.status,
            amount_credited=applicant.balance,
        )


class ApplicantPage(BaseModel):
    """Schema for a page of applicants, ordered oldest first."""

    items: list[ApplicantResponse]
    total: int
    page: int = Field(..., ge=0, description="Zero-based page index")
    size: int
    total_pages: int
