"""Submission validation producing field-level messages."""

from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from loanapp.core.exceptions import FieldError
from loanapp.models.schemas.applicant import ApplicantLoanRequest

MIN_TENOR = 1
MAX_TENOR = 12

# Amounts are stored as Numeric(15, 2)
AMOUNT_INTEGER_DIGITS = 13
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_PRECISION_MESSAGE = (
    f"must have at most {AMOUNT_INTEGER_DIGITS} integer digits "
    f"and {AMOUNT_DECIMAL_PLACES} decimal places"
)

_email_adapter = TypeAdapter(EmailStr)


def _is_valid_email(email: str) -> bool:
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


def _fits_amount_column(value: Decimal) -> bool:
    """Whether the amount can be stored without rounding or overflow."""
    normalized = value.normalize()
    decimal_places = max(0, -normalized.as_tuple().exponent)
    integer_digits = max(0, normalized.adjusted() + 1)
    return (
        decimal_places <= AMOUNT_DECIMAL_PLACES
        and integer_digits <= AMOUNT_INTEGER_DIGITS
    )


def _check_amount(
    errors: List[FieldError],
    field: str,
    value: Optional[Decimal],
    null_message: str,
    range_message: str,
    allow_zero: bool = False,
) -> None:
    if value is None:
        errors.append(FieldError(field, null_message))
    elif value < 0 or (value == 0 and not allow_zero):
        errors.append(FieldError(field, range_message))
    elif not _fits_amount_column(value):
        errors.append(FieldError(field, AMOUNT_PRECISION_MESSAGE))


def validate_loan_request(request: ApplicantLoanRequest) -> List[FieldError]:
    """
    Check a loan request for missing and out-of-range values.

    Every problem is collected instead of stopping at the first one, so a
    client can fix the whole request in one round trip. Amounts must be
    storable exactly, since eligibility is decided again on the stored copy.

    Args:
        request: Submitted loan request

    Returns:
        List of field errors, empty when the request is valid
    """
    errors: List[FieldError] = []

    if not request.first_name:
        errors.append(FieldError("first_name", "First name is required"))
    if not request.last_name:
        errors.append(FieldError("last_name", "Last name is required"))

    if not request.email:
        errors.append(FieldError("email", "Email is required"))
    elif not _is_valid_email(request.email):
        errors.append(FieldError("email", "should be a valid email"))

    _check_amount(
        errors,
        "loan_amount",
        request.loan_amount,
        "Loan amount can't be null",
        "Loan amount must be greater than 0",
    )

    if request.tenor is None or not MIN_TENOR <= request.tenor <= MAX_TENOR:
        errors.append(
            FieldError("tenor", f"must be between {MIN_TENOR} and {MAX_TENOR}")
        )

    _check_amount(
        errors,
        "monthly_income",
        request.monthly_income,
        "Monthly income can't be null",
        "Monthly income can't be negative",
        allow_zero=True,
    )
    _check_amount(
        errors,
        "monthly_payment",
        request.monthly_payment,
        "Monthly payment can't be null",
        "Monthly payment must be greater than 0",
    )

    return errors
