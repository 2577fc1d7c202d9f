"""Tests for debtwise.financial.calculators.scenarios."""

import pytest

from debtwise.core.exceptions import InvalidInputError
from debtwise.financial.calculators.amortization import calculate_monthly_payment
from debtwise.financial.calculators.scenarios import (
    InterestModel,
    ScenarioEngine,
    ScenarioKind,
    ScenarioParameters,
)
from debtwise.financial.models import Loan


@pytest.fixture
def engine():
    return ScenarioEngine()


@pytest.fixture
def card():
    return Loan(
        loan_id="2",
        name="Chase Sapphire",
        loan_type="credit_card",
        balance=8_500,
        interest_rate=18.99,
        monthly_payment=255,
        credit_limit=10_000,
    )


class TestAdjustedRate:
    def test_rate_increase(self, engine, card):
        params = ScenarioParameters(rate_change=1.5)
        assert engine.adjusted_rate(card, ScenarioKind.RATE_INCREASE, params) == pytest.approx(20.49)

    def test_rate_decrease_uses_absolute_change(self, engine, card):
        params = ScenarioParameters(rate_change=-2)
        assert engine.adjusted_rate(card, ScenarioKind.RATE_DECREASE, params) == pytest.approx(16.99)

    def test_rate_decrease_floor(self, engine):
        loan = Loan(loan_id="z", name="Promo", loan_type="personal", balance=1_000, interest_rate=0.5, monthly_payment=50)
        assert engine.adjusted_rate(loan, ScenarioKind.RATE_DECREASE, ScenarioParameters(rate_change=2)) == 0.1

    def test_refinance_default_drops_one_point(self, engine, card):
        assert engine.adjusted_rate(card, ScenarioKind.REFINANCE, ScenarioParameters()) == pytest.approx(17.99)

    def test_refinance_default_rate_floor(self, engine):
        loan = Loan(loan_id="z", name="Promo", loan_type="personal", balance=1_000, interest_rate=0.5, monthly_payment=50)
        assert engine.adjusted_rate(loan, ScenarioKind.REFINANCE, ScenarioParameters()) == 0.1

    def test_refinance_zero_rate_is_honoured(self, engine, card):
        params = ScenarioParameters(refinance_rate=0)
        assert engine.adjusted_rate(card, ScenarioKind.REFINANCE, params) == 0

    def test_economic_stress(self, engine, card):
        assert engine.adjusted_rate(card, ScenarioKind.ECONOMIC_STRESS, ScenarioParameters()) == pytest.approx(20.99)


class TestRun:
    def test_current_uses_contractual_payment(self, engine, card):
        result = engine.run([card], ScenarioKind.CURRENT)
        loan = result.loan("2")
        assert loan.adjusted_payment == 255
        assert loan.monthly_savings == 0
        assert loan.months_to_payoff == 48
        assert loan.baseline_interest == pytest.approx(loan.total_interest)
        assert loan.interest_savings == pytest.approx(0)

    def test_accepts_kind_string(self, engine, card):
        assert engine.run([card], "current").kind == ScenarioKind.CURRENT

    def test_unknown_kind(self, engine, card):
        with pytest.raises(ValueError):
            engine.run([card], "recession")

    def test_rate_increase_recomputes_annuity(self, engine, sample_loans):
        result = engine.run(sample_loans, ScenarioKind.RATE_INCREASE, ScenarioParameters(rate_change=2))
        auto = result.loan("3")
        assert auto.adjusted_rate == pytest.approx(6.5)
        assert auto.adjusted_payment == pytest.approx(calculate_monthly_payment(22_500, 6.5, 48))
        assert auto.months_to_payoff == 48

    def test_rate_increase_never_costs_less(self, engine, sample_loans):
        current = engine.run(sample_loans, ScenarioKind.CURRENT)
        increased = engine.run(sample_loans, ScenarioKind.RATE_INCREASE, ScenarioParameters(rate_change=2))
        for before, after in zip(current.loans, increased.loans):
            assert after.total_interest >= before.total_interest
        assert increased.summary.total_interest >= current.summary.total_interest

    def test_rate_increase_costs_more_when_payment_lags_term(self, engine):
        # $100/mo would take 130 months; the loan has 12 left
        loan = Loan(
            loan_id="s",
            name="Short Note",
            loan_type="personal",
            balance=10_000,
            interest_rate=5,
            monthly_payment=100,
            remaining_term=12,
        )
        current = engine.run([loan], ScenarioKind.CURRENT).loan("s")
        increased = engine.run([loan], ScenarioKind.RATE_INCREASE, ScenarioParameters(rate_change=2)).loan("s")
        assert current.adjusted_payment == pytest.approx(calculate_monthly_payment(10_000, 5, 12))
        assert current.months_to_payoff == 12
        assert increased.months_to_payoff == 12
        assert increased.total_interest > current.total_interest
        assert increased.interest_savings < 0

    def test_extra_payments_split_evenly(self, engine, sample_loans):
        params = ScenarioParameters(extra_budget=400)
        result = engine.run(sample_loans, ScenarioKind.EXTRA_PAYMENTS, params)
        assert all(r.extra_payment == pytest.approx(100) for r in result.loans)
        # the personal loan's $450 falls short of its 28-month annuity and is raised to it
        personal = calculate_monthly_payment(12_000, 12.5, 28)
        assert result.loan("4").adjusted_payment == pytest.approx(personal)
        assert result.summary.total_monthly_payment == pytest.approx(1_392.50 + 255 + 520 + personal + 400)

    def test_extra_payments_end_to_end(self, engine, card):
        current = engine.run([card], ScenarioKind.CURRENT)
        extra = engine.run([card], ScenarioKind.EXTRA_PAYMENTS, ScenarioParameters(extra_budget=255))
        loan = extra.loan("2")
        assert loan.total_payment == 510
        assert loan.months_to_payoff == 20
        assert loan.total_interest < current.loan("2").total_interest
        assert extra.summary.total_interest_savings > current.summary.total_interest_savings

    def test_refinance_lowers_payment(self, engine, sample_loans):
        result = engine.run(sample_loans, ScenarioKind.REFINANCE)
        personal = result.loan("4")
        assert personal.adjusted_rate == pytest.approx(11.5)
        assert personal.adjusted_payment == pytest.approx(calculate_monthly_payment(12_000, 11.5, 28))

    def test_economic_stress_can_stop_amortizing(self, engine, card):
        result = engine.run([card], ScenarioKind.ECONOMIC_STRESS)
        loan = result.loan("2")
        assert loan.adjusted_payment == pytest.approx(calculate_monthly_payment(8_500, 20.99, 360) * 0.9)
        assert loan.months_to_payoff is None
        assert loan.total_paid is None
        assert result.summary.max_payoff_time is None

    def test_summary_aggregates(self, engine, sample_loans):
        result = engine.run(sample_loans, ScenarioKind.CURRENT)
        assert result.summary.total_interest == pytest.approx(sum(r.total_interest for r in result.loans))
        assert result.summary.max_payoff_time == max(r.months_to_payoff for r in result.loans)

    def test_empty_loan_set(self, engine):
        result = engine.run([], ScenarioKind.EXTRA_PAYMENTS, ScenarioParameters(extra_budget=500))
        assert result.loans == ()
        assert result.summary.total_interest == 0
        assert result.summary.max_payoff_time == 0

    def test_idempotent(self, engine, sample_loans):
        params = ScenarioParameters(rate_change=1)
        assert engine.run(sample_loans, "rate_decrease", params) == engine.run(sample_loans, "rate_decrease", params)


class TestFlatModel:
    def test_flat_months_and_interest(self, card):
        engine = ScenarioEngine(interest_model="flat")
        loan = engine.run([card], ScenarioKind.CURRENT).loan("2")
        assert engine.interest_model == InterestModel.FLAT
        assert loan.months_to_payoff == 34
        assert loan.total_interest == pytest.approx(170)

    def test_flat_baseline_is_contractual_over_horizon(self, card):
        engine = ScenarioEngine(interest_model="flat")
        loan = engine.run([card], ScenarioKind.CURRENT).loan("2")
        # 255 * 360 - 8500
        assert loan.baseline_interest == pytest.approx(83_300)
        assert loan.adjusted_payment == 255


class TestParameters:
    def test_negative_budget_rejected(self):
        with pytest.raises(InvalidInputError):
            ScenarioParameters(extra_budget=-100)

    def test_negative_refinance_rate_rejected(self):
        with pytest.raises(InvalidInputError):
            ScenarioParameters(refinance_rate=-1)

    def test_non_numeric_rate_change_rejected(self):
        with pytest.raises(InvalidInputError):
            ScenarioParameters(rate_change="2")


class TestRunAll:
    def test_runs_every_kind(self, engine, sample_loans):
        results = engine.run_all(sample_loans)
        assert set(results) == set(ScenarioKind)

    def test_default_refinance_rate(self, engine, sample_loans):
        params = engine.default_parameters(sample_loans, ScenarioKind.REFINANCE)
        assert params.refinance_rate == pytest.approx(18.99 - 1.5)

    def test_default_parameters(self, engine, sample_loans):
        assert engine.default_parameters(sample_loans, ScenarioKind.RATE_DECREASE).rate_change == 1.0
        assert engine.default_parameters(sample_loans, ScenarioKind.EXTRA_PAYMENTS, extra_budget=300).extra_budget == 300
        assert engine.default_parameters([], ScenarioKind.REFINANCE).refinance_rate is None


class TestCompare:
    def test_rate_increase_costs_more(self, engine, sample_loans):
        comparison = engine.compare(sample_loans, ScenarioKind.RATE_INCREASE)
        assert comparison.baseline.kind == ScenarioKind.CURRENT
        assert comparison.interest_delta > 0

    def test_payoff_delta_none_when_scenario_never_finishes(self, engine, card):
        comparison = engine.compare([card], ScenarioKind.ECONOMIC_STRESS)
        assert comparison.payoff_delta is None
