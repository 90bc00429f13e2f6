"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from loanapp.deps import get_session

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """
    Health check endpoint.

    Verifies that the API is running, the database is accessible and
    reports how many approval events are waiting to be handled.

    Returns:
        dict: Health status with API and database status
    """
    # Check database connectivity
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {str(e)}"

    dispatcher = getattr(request.app.state, "event_dispatcher", None)

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "api": "healthy",
        "database": db_status,
        "pending_approvals": dispatcher.pending if dispatcher else 0,
    }
