"""Tests for the affordability rule and the approval decision."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from conftest import make_applicant
from loanapp.core.enums import LoanStatus
from loanapp.services.rule_engine import apply_approval_decision, create_loan, is_eligible


class TestIsEligible:
    @pytest.mark.parametrize(
        "income, payment",
        [
            (Decimal("3000.01"), Decimal("1000")),
            (Decimal("5000"), Decimal("1000")),
            (Decimal("1"), Decimal("0")),
        ],
    )
    def test_income_above_three_installments(self, income, payment):
        assert is_eligible(income, payment) is True

    def test_exactly_three_installments_is_not_enough(self):
        assert is_eligible(Decimal("3000"), Decimal("1000")) is False
        assert is_eligible(Decimal("0.30"), Decimal("0.10")) is False

    def test_below_three_installments(self):
        assert is_eligible(Decimal("2000"), Decimal("1000")) is False

    @pytest.mark.parametrize(
        "income, payment",
        [(None, Decimal("1000")), (Decimal("5000"), None), (None, None)],
    )
    def test_missing_figure_fails_closed(self, income, payment):
        assert is_eligible(income, payment) is False

    def test_decimal_arithmetic_has_no_float_rounding(self):
        # 0.1 * 3 == 0.30000000000000004 in binary floating point
        assert is_eligible("0.3", "0.1") is False
        assert is_eligible(0.3, 0.1) is False


class TestCreateLoan:
    def test_due_date_is_twelve_calendar_months_out(self):
        now = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
        loan = create_loan(Decimal("10000"), now)

        assert loan.credited == Decimal("10000")
        assert loan.due_date == datetime(2027, 10, 19, 9, 30, tzinfo=timezone.utc)

    def test_leap_day_clamps_to_end_of_february(self):
        now = datetime(2024, 2, 29, tzinfo=timezone.utc)
        loan = create_loan(Decimal("500"), now)

        assert loan.due_date == datetime(2025, 2, 28, tzinfo=timezone.utc)


class TestApplyApprovalDecision:
    def test_eligible_applicant_is_approved_with_loan(self):
        applicant = make_applicant(
            monthly_income=Decimal("5000"), monthly_payment=Decimal("1000")
        )
        now = datetime(2026, 1, 15, tzinfo=timezone.utc)

        apply_approval_decision(applicant, Decimal("10000"), now=now)

        assert applicant.status == LoanStatus.APPROVED
        assert applicant.credit_check is True
        assert applicant.balance == Decimal("10000")
        assert applicant.loan is not None
        assert applicant.loan.credited == Decimal("10000")
        assert applicant.loan.due_date == datetime(2027, 1, 15, tzinfo=timezone.utc)

    def test_ineligible_applicant_is_rejected_without_loan(self):
        applicant = make_applicant(
            monthly_income=Decimal("2000"), monthly_payment=Decimal("1000")
        )

        apply_approval_decision(applicant, Decimal("10000"))

        assert applicant.status == LoanStatus.REJECTED
        assert applicant.credit_check is False
        assert applicant.loan is None
        assert applicant.balance is None

    def test_requested_amount_does_not_affect_eligibility(self):
        applicant = make_applicant(
            monthly_income=Decimal("5000"),
            monthly_payment=Decimal("1000"),
            request_loan_amount=Decimal("100"),
        )

        apply_approval_decision(applicant, Decimal("1000000"))

        assert applicant.status == LoanStatus.APPROVED
        assert applicant.balance == Decimal("1000000")

    def test_default_due_date_is_about_a_year_from_now(self):
        applicant = make_applicant()
        before = datetime.now(timezone.utc)

        apply_approval_decision(applicant, Decimal("10000"))

        days = (applicant.loan.due_date - before).days
        assert 364 <= days <= 366
