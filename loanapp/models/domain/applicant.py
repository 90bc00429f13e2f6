"""Applicant and loan domain models."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from loanapp.core.enums import LoanStatus
from loanapp.db.base import Base, TimestampMixin


class Loan(TimestampMixin, Base):
    """Credited loan, created only as the outcome of a successful approval."""

    __tablename__ = "loans"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    credited: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Loan(pk={self.pk}, credited={self.credited}, due_date={self.due_date})>"


class Applicant(TimestampMixin, Base):
    """Loan applicant with the requested loan and its approval outcome."""

    __tablename__ = "applicants"
    __table_args__ = (
        CheckConstraint("tenor >= 1 AND tenor <= 12", name="ck_applicants_tenor"),
        Index("ix_applicants_created_at", "created_at"),
    )

    # Identification
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4, index=True
    )

    # Personal Information
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Financials
    monthly_income: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)
    request_loan_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(15, 2), nullable=True
    )
    monthly_payment: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)
    tenor: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Outcome
    status: Mapped[LoanStatus] = mapped_column(
        SQLEnum(LoanStatus, name="loan_status"),
        default=LoanStatus.DRAFT,
        nullable=False,
        index=True,
    )
    credit_check: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    balance: Mapped[Optional[Decimal]] = mapped_column(Numeric(15, 2), nullable=True)

    loan_pk: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("loans.pk", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
    loan: Mapped[Optional["Loan"]] = relationship(
        "Loan",
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="selectin",
    )

    # Optimistic locking
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        """Return full name of applicant."""
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return (
            f"<Applicant(id={self.id}, email={self.email!r}, "
            f"status={self.status.value}, version={self.version})>"
        )
