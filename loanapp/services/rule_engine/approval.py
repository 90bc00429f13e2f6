"""Approval decision applied to a draft applicant."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from loanapp.core.enums import LoanStatus
from loanapp.models.domain.applicant import Applicant, Loan
from loanapp.services.rule_engine.eligibility import is_eligible

logger = logging.getLogger(__name__)

LOAN_DURATION_MONTHS = 12


def create_loan(amount: Decimal, now: Optional[datetime] = None) -> Loan:
    """
    Build the loan credited on approval.

    The due date is LOAN_DURATION_MONTHS calendar months after `now`,
    clamped to the last day of the month when the day does not exist.
    """
    issued_at = now or datetime.now(timezone.utc)
    return Loan(
        credited=amount,
        due_date=issued_at + relativedelta(months=LOAN_DURATION_MONTHS),
    )


def apply_approval_decision(
    applicant: Applicant,
    requested_amount: Decimal,
    now: Optional[datetime] = None,
) -> None:
    """
    Approve or reject a draft applicant in place.

    Eligibility is judged on the applicant's stored income and installment;
    the requested amount only determines what gets credited. Callers are
    expected to skip applicants already in a terminal status.

    Args:
        applicant: Applicant in DRAFT status
        requested_amount: Amount to credit when approved
        now: Approval time, defaults to the current UTC time
    """
    if is_eligible(applicant.monthly_income, applicant.monthly_payment):
        applicant.loan = create_loan(requested_amount, now)
        applicant.status = LoanStatus.APPROVED
        applicant.balance = requested_amount
        applicant.credit_check = True
    else:
        applicant.status = LoanStatus.REJECTED
        applicant.credit_check = False

    logger.info(
        f"Approval decision for applicant {applicant.email}: {applicant.status.value}"
    )
