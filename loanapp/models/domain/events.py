"""Transient domain events exchanged between the workflow and its listeners."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ApproveLoanEvent:
    """Request to run the approval decision for a freshly submitted applicant."""

    applicant_email: str
    amount_requested: Decimal
