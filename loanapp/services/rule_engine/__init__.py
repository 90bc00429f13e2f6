"""Rule engine for deciding loan applications."""

from .approval import apply_approval_decision, create_loan
from .eligibility import INELIGIBLE_REASON, is_eligible

__all__ = [
    "INELIGIBLE_REASON",
    "apply_approval_decision",
    "create_loan",
    "is_eligible",
]
