"""Dependency injection for FastAPI endpoints."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from loanapp.db.session import get_db
from loanapp.services.event_bus import ApprovalEventDispatcher, EventPublisher
from loanapp.services.loan_application_service import LoanApplicationService

__all__ = ["get_db", "get_session", "get_event_dispatcher", "get_loan_service"]


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    This is an alias for get_db for clarity in endpoint signatures.
    """
    async for session in get_db():
        yield session


def get_event_dispatcher(request: Request) -> ApprovalEventDispatcher:
    """Dispatcher started by the application lifespan."""
    return request.app.state.event_dispatcher


def get_loan_service(
    db: Annotated[AsyncSession, Depends(get_session)],
    dispatcher: Annotated[ApprovalEventDispatcher, Depends(get_event_dispatcher)],
) -> LoanApplicationService:
    """Loan application service bound to the request's session."""
    return LoanApplicationService(db, EventPublisher(db, dispatcher))
