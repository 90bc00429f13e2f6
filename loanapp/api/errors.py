"""Translation of errors into problem-detail responses."""

import logging
from http import HTTPStatus
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from loanapp.core.exceptions import FieldError, LoanApplicationError

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"

# Location prefixes FastAPI puts in front of the offending field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def problem_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Build a problem-detail response for the given status and detail."""
    status_code = int(status_code)
    return JSONResponse(
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        content={
            "type": "about:blank",
            "title": HTTPStatus(status_code).phrase,
            "status": status_code,
            "detail": detail,
            "instance": request.url.path,
        },
    )


def _field_errors(errors: Iterable[dict]) -> list[FieldError]:
    field_errors = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field_errors.append(FieldError(".".join(loc) or "request", error.get("msg", "")))
    return field_errors


async def loan_application_error_handler(
    request: Request, exc: LoanApplicationError
) -> JSONResponse:
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return problem_response(request, exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _field_errors(exc.errors())
    logger.warning(f"Validation error on {request.url.path}: {[str(e) for e in errors]}")
    return problem_response(
        request,
        HTTPStatus.BAD_REQUEST,
        ", ".join(str(error) for error in errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return problem_response(
        request,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the problem-detail handlers on the application."""
    app.add_exception_handler(LoanApplicationError, loan_application_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
