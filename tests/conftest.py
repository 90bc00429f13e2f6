import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./loanapp_test.db")
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import loanapp.models.domain  # noqa: F401
from loanapp.core.enums import LoanStatus
from loanapp.db.base import Base
from loanapp.models.domain.applicant import Applicant
from loanapp.models.schemas.applicant import ApplicantLoanRequest
from loanapp.services.event_bus import ApprovalEventDispatcher


class RecordingPublisher:
    """Publisher stand-in that keeps published events in memory."""

    def __init__(self):
        self.events = []

    def publish(self, approve_event):
        self.events.append(approve_event)


def make_applicant(**overrides) -> Applicant:
    fields = {
        "first_name": "Ada",
        "last_name": "Obi",
        "email": "ada@example.com",
        "monthly_income": Decimal("5000"),
        "request_loan_amount": Decimal("10000"),
        "monthly_payment": Decimal("1000"),
        "tenor": 12,
        "status": LoanStatus.DRAFT,
        "credit_check": False,
    }
    fields.update(overrides)
    return Applicant(**fields)


def make_request(**overrides) -> ApplicantLoanRequest:
    fields = {
        "first_name": "Ada",
        "last_name": "Obi",
        "email": "ada@example.com",
        "loan_amount": Decimal("10000"),
        "tenor": 12,
        "monthly_income": Decimal("5000"),
        "monthly_payment": Decimal("1000"),
    }
    fields.update(overrides)
    return ApplicantLoanRequest(**fields)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'loanapp.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
async def dispatcher(session_factory):
    dispatcher = ApprovalEventDispatcher(session_factory, max_retries=3, retry_delay=0)
    dispatcher.start()
    yield dispatcher
    await dispatcher.stop()
