"""Affordability rule: monthly income must exceed three monthly installments."""

from decimal import Decimal
from typing import Optional, Union

Amount = Union[Decimal, int, float, str]

INCOME_TO_PAYMENT_RATIO = Decimal("3")

INELIGIBLE_REASON = (
    "To qualify for a loan, your monthly income must be three(3) times "
    "more than your monthly installments"
)


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_eligible(
    monthly_income: Optional[Amount],
    monthly_payment: Optional[Amount],
) -> bool:
    """
    Evaluate the income-to-installment affordability rule.

    A missing figure makes the applicant ineligible rather than raising.
    Exactly three times the installment is not enough; income has to be
    strictly greater.

    Args:
        monthly_income: Applicant's monthly income
        monthly_payment: Monthly installment of the requested loan

    Returns:
        True if monthly_income > monthly_payment * 3, False otherwise
    """
    if monthly_income is None or monthly_payment is None:
        return False

    threshold = _to_decimal(monthly_payment) * INCOME_TO_PAYMENT_RATIO
    return _to_decimal(monthly_income) > threshold
