"""Core enums for type safety across the application."""

from enum import Enum


class LoanStatus(str, Enum):
    """Applicant loan workflow states."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        """APPROVED and REJECTED admit no further transitions."""
        return self in (LoanStatus.APPROVED, LoanStatus.REJECTED)
