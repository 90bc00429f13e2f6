"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loanapp.api.errors import register_exception_handlers
from loanapp.api.v1.router import api_router
from loanapp.config import settings
from loanapp.core.logging_config import configure_logging
from loanapp.db.session import SessionLocal, init_db
from loanapp.services.event_bus import ApprovalEventDispatcher

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    dispatcher = ApprovalEventDispatcher(SessionLocal)
    app.state.event_dispatcher = dispatcher
    dispatcher.start()
    yield
    await dispatcher.stop()


# Create FastAPI application
app = FastAPI(
    title="Loan Application API",
    description="API for submitting loan applications and deciding their approval",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router with v1 prefix
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": "Loan Application API",
        "version": "1.0.0",
        "docs": "/api/docs",
    }
