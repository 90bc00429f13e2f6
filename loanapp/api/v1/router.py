"""API v1 router configuration."""

from fastapi import APIRouter

from loanapp.api.v1.endpoints import health, loans

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    loans.router,
    prefix="/loan",
    tags=["loans"],
)
