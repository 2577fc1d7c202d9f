"""Tests for debtwise.financial.models."""

from datetime import date

import pytest

from debtwise.core.exceptions import InvalidInputError
from debtwise.financial.models import (
    Loan,
    LoanType,
    PaymentRecord,
    total_balance,
    validate_loan_snapshot,
)


def _loan(**overrides):
    data = {
        "loan_id": "1",
        "name": "Car Loan",
        "loan_type": "auto",
        "balance": 22_500,
        "interest_rate": 4.5,
        "monthly_payment": 520,
    }
    data.update(overrides)
    return Loan(**data)


class TestLoanValidation:
    def test_valid_loan(self):
        loan = _loan()
        assert loan.is_active
        assert loan.due_date is None

    @pytest.mark.parametrize(
        "field,value",
        [
            ("loan_id", ""),
            ("name", ""),
            ("loan_type", ""),
            ("balance", -1),
            ("interest_rate", -0.1),
            ("monthly_payment", 0),
            ("monthly_payment", float("nan")),
            ("remaining_term", 0),
            ("term", 12.5),
            ("credit_limit", -100),
        ],
    )
    def test_rejects_bad_field(self, field, value):
        with pytest.raises(InvalidInputError):
            _loan(**{field: value})

    def test_frozen(self):
        loan = _loan()
        with pytest.raises(AttributeError):
            loan.balance = 0

    def test_other_loan_types_allowed(self):
        assert _loan(loan_type="student").loan_type == "student"


class TestLoanProperties:
    def test_min_payment_falls_back(self):
        assert _loan().min_payment == 520
        assert _loan(minimum_payment=100).min_payment == 100

    def test_utilization(self):
        card = _loan(loan_type=LoanType.CREDIT_CARD.value, balance=8_500, credit_limit=10_000)
        assert card.is_credit_card
        assert card.utilization == pytest.approx(85)

    def test_utilization_none_without_limit(self):
        assert _loan(loan_type="credit_card").utilization is None
        assert _loan(credit_limit=10_000).utilization is None

    def test_progress(self):
        assert _loan(original_amount=35_000).progress == pytest.approx((35_000 - 22_500) / 35_000 * 100)
        assert _loan().progress == 0

    def test_horizon(self):
        assert _loan().horizon() == 360
        assert _loan().horizon(120) == 120
        assert _loan(remaining_term=48).horizon() == 48


class TestLoanFromDict:
    def test_short_aliases_and_dates(self):
        loan = Loan.from_dict(
            {
                "id": 7,
                "name": "Mortgage",
                "type": "mortgage",
                "balance": 285_000,
                "interest_rate": 3.25,
                "monthly_payment": 1_392.5,
                "due_date": "2024-01-15",
            }
        )
        assert loan.loan_id == "7"
        assert loan.loan_type == "mortgage"
        assert loan.due_date == date(2024, 1, 15)

    def test_accepts_date_objects(self):
        data = _loan().to_dict()
        data["start_date"] = date(2020, 6, 1)
        assert Loan.from_dict(data).start_date == date(2020, 6, 1)

    def test_unknown_field(self):
        data = _loan().to_dict()
        data["colour"] = "red"
        with pytest.raises(InvalidInputError, match="colour"):
            Loan.from_dict(data)

    def test_missing_field(self):
        data = _loan().to_dict()
        del data["monthly_payment"]
        with pytest.raises(InvalidInputError, match="monthly_payment"):
            Loan.from_dict(data)

    def test_bad_date(self):
        data = _loan().to_dict()
        data["due_date"] = "15/01/2024"
        with pytest.raises(InvalidInputError, match="ISO date"):
            Loan.from_dict(data)

    def test_not_a_mapping(self):
        with pytest.raises(InvalidInputError):
            Loan.from_dict(["1", "Car"])

    def test_to_dict_uses_iso_dates(self):
        loan = _loan(due_date=date(2024, 1, 20), loan_type=LoanType.AUTO)
        data = loan.to_dict()
        assert data["due_date"] == "2024-01-20"
        assert data["loan_type"] == "auto"
        assert Loan.from_dict(data).due_date == loan.due_date


class TestPaymentRecord:
    def test_positive_amount_required(self):
        with pytest.raises(InvalidInputError):
            PaymentRecord(loan_id="1", amount=0, paid_on=date(2024, 1, 1))


class TestHelpers:
    def test_total_balance(self, sample_loans):
        assert total_balance(sample_loans) == pytest.approx(328_000)

    def test_snapshot_is_tuple(self, sample_loans):
        assert validate_loan_snapshot(list(sample_loans)) == sample_loans

    def test_snapshot_rejects_non_loans(self):
        with pytest.raises(InvalidInputError):
            validate_loan_snapshot([_loan(), "not a loan"])
