"""Domain exceptions translated into problem-detail responses at the API boundary."""

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation message."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class LoanApplicationError(Exception):
    """Base class for errors raised by the loan application domain."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RequestValidationFailed(LoanApplicationError):
    """The request is missing required fields or carries malformed values."""

    status_code = 400

    def __init__(self, errors: Sequence[FieldError]):
        self.errors: List[FieldError] = list(errors)
        super().__init__(", ".join(str(error) for error in self.errors))


class DuplicateApplicantError(LoanApplicationError):
    """An applicant with the same email is already registered."""

    status_code = 409


class ApplicantNotFoundError(LoanApplicationError):
    """No applicant matches the given id or email."""

    status_code = 404


class UnprocessableApplicationError(LoanApplicationError):
    """The application fails the eligibility pre-screen."""

    status_code = 422


class ConcurrentUpdateError(LoanApplicationError):
    """The row changed since it was read; the read-decide-write must be retried."""

    status_code = 409
