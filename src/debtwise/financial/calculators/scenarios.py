"""Scenario simulator — what happens to a loan set under changed assumptions.

Each scenario is a pure transform of every loan's (rate, payment) pair:

    current          rate unchanged      contractual payment
    rate_increase    rate + delta        annuity over the horizon
    rate_decrease    max(0.1, rate - |delta|)
    extra_payments   rate unchanged      contractual + extra_budget / loan count
    refinance        target rate, default max(0.1, rate - 1)
    economic_stress  rate + 2            annuity over the horizon * 0.9

The horizon is a loan's remaining_term (360 months when unknown).

Two interest models are supported:
- AMORTIZED: runs the real amortization with the scenario payment. The
  contractual payment is topped up to the horizon annuity when it is too low
  to retire the loan by its remaining term, and savings are measured against
  the amortized current-state interest. With both in place a higher rate
  always costs at least as much interest as the current one.
- FLAT: the ceil(balance / payment) estimate the strategy planner uses, with
  savings measured against payment * horizon - balance.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from debtwise.financial.calculators.amortization import (
    ScheduleStatus,
    calculate_monthly_payment,
    estimate_flat_payoff,
    generate_schedule,
)
from debtwise.financial.models import DEFAULT_REMAINING_TERM, Loan, validate_loan_snapshot
from debtwise.financial.validation import require_non_negative, require_number

# === Scenario Constants ===

MIN_SCENARIO_RATE = 0.1  # floor for lowered rates, in percent
DEFAULT_RATE_CHANGE = 2.0
REFINANCE_RATE_DROP = 1.0  # default refinance target: current rate minus this
STRESS_RATE_SHOCK = 2.0
STRESS_PAYMENT_FACTOR = 0.9  # 10% income loss
DEFAULT_MAX_PROJECTION_MONTHS = 1200


class ScenarioKind(Enum):
    """Named scenario transforms."""

    CURRENT = "current"
    RATE_INCREASE = "rate_increase"
    RATE_DECREASE = "rate_decrease"
    EXTRA_PAYMENTS = "extra_payments"
    REFINANCE = "refinance"
    ECONOMIC_STRESS = "economic_stress"


class InterestModel(Enum):
    """How months-to-payoff and interest are estimated."""

    AMORTIZED = "amortized"
    FLAT = "flat"


# Kinds whose payment is re-derived from the adjusted rate
_RECOMPUTED_PAYMENT_KINDS = {
    ScenarioKind.RATE_INCREASE,
    ScenarioKind.RATE_DECREASE,
    ScenarioKind.REFINANCE,
    ScenarioKind.ECONOMIC_STRESS,
}


@dataclass(frozen=True)
class ScenarioParameters:
    """Caller-supplied knobs.

    Attributes:
        rate_change: Percentage points added (rate_increase) or removed
            (rate_decrease, absolute value used).
        extra_budget: Monthly amount split evenly across loans (extra_payments).
        refinance_rate: Target rate for refinance; None means current rate - 1.
    """

    rate_change: float = DEFAULT_RATE_CHANGE
    extra_budget: float = 0.0
    refinance_rate: float | None = None

    def __post_init__(self):
        require_number("rate change", self.rate_change)
        require_non_negative("extra budget", self.extra_budget)
        if self.refinance_rate is not None:
            require_non_negative("refinance rate", self.refinance_rate)


@dataclass(frozen=True)
class LoanScenarioResult:
    """One loan under one scenario.

    ``months_to_payoff`` and ``total_paid`` are None when the scenario
    payment never retires the balance within the projection window.
    """

    loan_id: str
    loan_name: str
    original_rate: float
    adjusted_rate: float
    adjusted_payment: float
    extra_payment: float
    total_payment: float
    months_to_payoff: int | None
    total_paid: float | None
    total_interest: float
    baseline_interest: float
    monthly_savings: float
    interest_savings: float

    @property
    def pays_off(self) -> bool:
        return self.months_to_payoff is not None


@dataclass(frozen=True)
class ScenarioSummary:
    total_interest: float
    total_monthly_payment: float
    max_payoff_time: int | None
    total_interest_savings: float


@dataclass(frozen=True)
class ScenarioResult:
    kind: ScenarioKind
    parameters: ScenarioParameters
    interest_model: InterestModel
    loans: tuple[LoanScenarioResult, ...]
    summary: ScenarioSummary

    def loan(self, loan_id: str) -> LoanScenarioResult:
        for result in self.loans:
            if result.loan_id == loan_id:
                return result
        raise KeyError(loan_id)


@dataclass(frozen=True)
class ScenarioComparison:
    """A scenario measured against the current situation (positive delta = scenario costs more)."""

    baseline: ScenarioResult
    scenario: ScenarioResult
    interest_delta: float
    monthly_payment_delta: float
    payoff_delta: int | None


class ScenarioEngine:
    """Runs scenario transforms over loan snapshots."""

    def __init__(
        self,
        interest_model: InterestModel | str = InterestModel.AMORTIZED,
        default_remaining_term: int = DEFAULT_REMAINING_TERM,
        max_projection_months: int = DEFAULT_MAX_PROJECTION_MONTHS,
    ):
        self.interest_model = InterestModel(interest_model)
        self.default_remaining_term = default_remaining_term
        self.max_projection_months = max_projection_months

    @classmethod
    def from_config(cls, config) -> "ScenarioEngine":
        """Build from a validated ``DebtwiseConfig``."""
        return cls(
            interest_model=config.scenarios.interest_model,
            default_remaining_term=config.calculator.default_remaining_term,
            max_projection_months=config.calculator.max_projection_months,
        )

    def adjusted_rate(self, loan: Loan, kind: ScenarioKind, params: ScenarioParameters) -> float:
        rate = loan.interest_rate
        if kind == ScenarioKind.RATE_INCREASE:
            return rate + params.rate_change
        if kind == ScenarioKind.RATE_DECREASE:
            return max(MIN_SCENARIO_RATE, rate - abs(params.rate_change))
        if kind == ScenarioKind.REFINANCE:
            if params.refinance_rate is not None:
                return params.refinance_rate
            return max(MIN_SCENARIO_RATE, rate - REFINANCE_RATE_DROP)
        if kind == ScenarioKind.ECONOMIC_STRESS:
            return rate + STRESS_RATE_SHOCK
        return rate

    def _project(self, balance: float, rate: float, payment: float) -> tuple[int | None, float | None, float]:
        """Return (months, total_paid, interest) for paying ``payment`` monthly."""
        if self.interest_model == InterestModel.FLAT:
            payoff = estimate_flat_payoff(balance, payment)
            return payoff.months, payoff.total_paid, payoff.interest or 0.0

        if balance <= 0:
            return 0, 0.0, 0.0
        if payment <= 0:
            return None, None, 0.0
        schedule = generate_schedule(balance, rate, self.max_projection_months, payment=payment)
        if schedule.status != ScheduleStatus.PAID_OFF:
            return None, None, schedule.total_interest
        return schedule.total_payments, schedule.total_paid, schedule.total_interest

    def base_payment(self, loan: Loan, horizon: int) -> float:
        """The current-state payment before any scenario adjustment.

        Under the amortized model a contractual payment below the horizon
        annuity is raised to it, so the loan still finishes by its remaining term.
        """
        if self.interest_model == InterestModel.FLAT:
            return loan.monthly_payment
        return max(loan.monthly_payment, calculate_monthly_payment(loan.balance, loan.interest_rate, horizon))

    def baseline_interest(self, loan: Loan, horizon: int) -> float:
        """Interest of the current-state projection, measured in the engine's model."""
        if self.interest_model == InterestModel.FLAT:
            return loan.monthly_payment * horizon - loan.balance
        _, _, interest = self._project(loan.balance, loan.interest_rate, self.base_payment(loan, horizon))
        return interest

    def _run_loan(self, loan: Loan, kind: ScenarioKind, params: ScenarioParameters, loan_count: int):
        horizon = loan.horizon(self.default_remaining_term)
        new_rate = self.adjusted_rate(loan, kind, params)
        base = self.base_payment(loan, horizon)

        if kind in _RECOMPUTED_PAYMENT_KINDS:
            payment = calculate_monthly_payment(loan.balance, new_rate, horizon)
            if kind == ScenarioKind.ECONOMIC_STRESS:
                payment *= STRESS_PAYMENT_FACTOR
        else:
            payment = base
            if base > loan.monthly_payment:
                logger.debug(f"{loan.name}: payment raised to ${base:,.2f} to finish within {horizon} months")

        extra = params.extra_budget / loan_count if kind == ScenarioKind.EXTRA_PAYMENTS else 0.0
        total_payment = payment + extra

        months, total_paid, interest = self._project(loan.balance, new_rate, total_payment)
        if months is None:
            logger.warning(f"{loan.name} never pays off under {kind.value} at ${total_payment:,.2f}/mo")

        baseline_interest = self.baseline_interest(loan, horizon)
        return LoanScenarioResult(
            loan_id=loan.loan_id,
            loan_name=loan.name,
            original_rate=loan.interest_rate,
            adjusted_rate=new_rate,
            adjusted_payment=payment,
            extra_payment=extra,
            total_payment=total_payment,
            months_to_payoff=months,
            total_paid=total_paid,
            total_interest=interest,
            baseline_interest=baseline_interest,
            monthly_savings=base - payment,
            interest_savings=baseline_interest - interest,
        )

    def run(
        self,
        loans: Iterable[Loan],
        kind: ScenarioKind | str,
        params: ScenarioParameters | None = None,
    ) -> ScenarioResult:
        """Apply one scenario to every loan and aggregate the results."""
        kind = ScenarioKind(kind)
        params = params or ScenarioParameters()
        snapshot = validate_loan_snapshot(loans)

        results = tuple(self._run_loan(loan, kind, params, len(snapshot)) for loan in snapshot)

        if any(not r.pays_off for r in results):
            max_payoff = None
        else:
            max_payoff = max((r.months_to_payoff for r in results), default=0)

        summary = ScenarioSummary(
            total_interest=sum(r.total_interest for r in results),
            total_monthly_payment=sum(r.total_payment for r in results),
            max_payoff_time=max_payoff,
            total_interest_savings=sum(r.interest_savings for r in results),
        )
        logger.debug(
            f"Scenario {kind.value} ({self.interest_model.value}): "
            f"${summary.total_interest:,.2f} interest, {summary.max_payoff_time} months"
        )
        return ScenarioResult(
            kind=kind,
            parameters=params,
            interest_model=self.interest_model,
            loans=results,
            summary=summary,
        )

    def default_parameters(
        self,
        loans: Iterable[Loan],
        kind: ScenarioKind,
        rate_change: float = DEFAULT_RATE_CHANGE,
        extra_budget: float = 500.0,
    ) -> ScenarioParameters:
        """Inputs used when every scenario is run at once.

        Increase by ``rate_change``, decrease by 1 point, split ``extra_budget``,
        refinance every loan at the highest current rate minus 1.5.
        """
        kind = ScenarioKind(kind)
        if kind == ScenarioKind.RATE_INCREASE:
            return ScenarioParameters(rate_change=rate_change)
        if kind == ScenarioKind.RATE_DECREASE:
            return ScenarioParameters(rate_change=1.0)
        if kind == ScenarioKind.EXTRA_PAYMENTS:
            return ScenarioParameters(extra_budget=extra_budget)
        if kind == ScenarioKind.REFINANCE:
            rates = [loan.interest_rate for loan in loans]
            if not rates:
                return ScenarioParameters()
            return ScenarioParameters(refinance_rate=max(MIN_SCENARIO_RATE, max(rates) - 1.5))
        return ScenarioParameters()

    def run_all(
        self,
        loans: Iterable[Loan],
        rate_change: float = DEFAULT_RATE_CHANGE,
        extra_budget: float = 500.0,
    ) -> dict[ScenarioKind, ScenarioResult]:
        """Run every scenario kind with its default inputs."""
        snapshot = validate_loan_snapshot(loans)
        return {
            kind: self.run(snapshot, kind, self.default_parameters(snapshot, kind, rate_change, extra_budget))
            for kind in ScenarioKind
        }

    def compare(
        self,
        loans: Iterable[Loan],
        kind: ScenarioKind | str,
        params: ScenarioParameters | None = None,
    ) -> ScenarioComparison:
        """Run ``kind`` and the current situation on the same snapshot."""
        snapshot = validate_loan_snapshot(loans)
        baseline = self.run(snapshot, ScenarioKind.CURRENT)
        scenario = self.run(snapshot, kind, params)

        if baseline.summary.max_payoff_time is None or scenario.summary.max_payoff_time is None:
            payoff_delta = None
        else:
            payoff_delta = scenario.summary.max_payoff_time - baseline.summary.max_payoff_time

        return ScenarioComparison(
            baseline=baseline,
            scenario=scenario,
            interest_delta=scenario.summary.total_interest - baseline.summary.total_interest,
            monthly_payment_delta=scenario.summary.total_monthly_payment - baseline.summary.total_monthly_payment,
            payoff_delta=payoff_delta,
        )
