"""Loan application endpoints."""

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from loanapp.config import settings
from loanapp.core.enums import LoanStatus
from loanapp.deps import get_loan_service
from loanapp.models.schemas.applicant import (
    ApplicantLoanRequest,
    ApplicantPage,
    ApprovalRequest,
    GenericMessage,
)
from loanapp.services.loan_application_service import LoanApplicationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/apply",
    response_model=GenericMessage,
    status_code=status.HTTP_201_CREATED,
    summary="Apply for a loan",
    description="Register an applicant; the approval decision follows asynchronously",
)
async def apply_for_loan(
    request: ApplicantLoanRequest,
    service: Annotated[LoanApplicationService, Depends(get_loan_service)],
) -> GenericMessage:
    """
    Submit a loan application.

    Fails with 400 on missing or invalid fields, 409 when the email is
    already registered and 422 when monthly income is not above three
    monthly installments.
    """
    return await service.submit_application(request)


@router.get(
    "/applicants",
    response_model=ApplicantPage,
    summary="List applicants",
    description="Retrieve applicants ordered by creation time, oldest first",
)
async def list_applicants(
    service: Annotated[LoanApplicationService, Depends(get_loan_service)],
    page: Annotated[int, Query(ge=0, description="Page number (0-indexed)")] = 0,
    size: Annotated[
        int, Query(ge=1, le=1000, description="Number of items per page")
    ] = settings.DEFAULT_PAGE_SIZE,
) -> ApplicantPage:
    """List applicants with pagination."""
    return await service.list_applicants(page=page, size=size)


@router.post(
    "/approve/{applicant_id}",
    response_model=LoanStatus,
    summary="Approve a loan",
    description="Run the approval decision for an applicant and return the resulting status",
)
async def approve_loan(
    applicant_id: UUID,
    service: Annotated[LoanApplicationService, Depends(get_loan_service)],
    approval: Annotated[Optional[ApprovalRequest], Body()] = None,
) -> LoanStatus:
    """
    Approve a loan on demand.

    The body is accepted for compatibility; the outcome is always computed
    from the applicant's stored figures. Approving an already decided
    applicant returns its status unchanged.
    """
    if approval is not None and approval.status is not None:
        logger.debug(f"Ignoring requested status {approval.status.value} for {applicant_id}")
    return await service.approve_loan(applicant_id)
