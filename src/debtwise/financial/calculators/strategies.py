"""Repayment strategy planner — avalanche, snowball and hybrid.

Every loan keeps paying its contractual monthly payment; a shared extra
budget is layered on top according to the chosen policy:
- Avalanche: all of it to the highest-rate loan.
- Snowball: all of it to the smallest-balance loan.
- Hybrid: 60% to the highest-rate loan and 40% to the smallest balance
  (100% when both are the same loan).

Ties keep the caller's loan order (sorts are stable). Per-loan figures use
the flat payoff estimate from ``amortization.estimate_flat_payoff``.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from debtwise.financial.calculators.amortization import estimate_flat_payoff
from debtwise.financial.models import Loan, validate_loan_snapshot
from debtwise.financial.validation import require_non_negative

HYBRID_INTEREST_SHARE = 0.6  # share of the extra budget sent to the highest-rate loan


class Strategy(Enum):
    """Extra-budget allocation policies."""

    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class PaymentPlanEntry:
    """One loan's line in a payment plan.

    ``months_to_payoff``, ``interest_paid`` and ``total_paid`` are None when
    the effective payment can never retire the balance.
    """

    loan_id: str
    loan_name: str
    monthly_payment: float
    months_to_payoff: int | None
    interest_paid: float | None
    total_paid: float | None
    extra_payment: float

    @property
    def pays_off(self) -> bool:
        return self.months_to_payoff is not None


@dataclass(frozen=True)
class PaymentPlan:
    """A strategy applied to a loan set.

    Attributes:
        total_months: Months until the slowest loan is paid off, or None if
            any loan never pays off.
        total_interest: Sum of interest over loans that pay off.
    """

    strategy: Strategy
    extra_budget: float
    entries: tuple[PaymentPlanEntry, ...]
    total_months: int | None
    total_interest: float

    @property
    def pays_off(self) -> bool:
        return self.total_months is not None

    def entry_for(self, loan_id: str) -> PaymentPlanEntry:
        for entry in self.entries:
            if entry.loan_id == loan_id:
                return entry
        raise KeyError(loan_id)


@dataclass(frozen=True)
class StrategyComparison:
    """All strategies side by side for the same loans and budget."""

    plans: dict[Strategy, PaymentPlan]

    @property
    def best(self) -> PaymentPlan:
        """Lowest total interest; the first strategy wins ties."""
        return _first_min(self.plans.values(), key=lambda p: p.total_interest)

    @property
    def fastest(self) -> PaymentPlan:
        """Fewest months to debt-free; plans that never finish come last."""
        return _first_min(
            self.plans.values(),
            key=lambda p: (p.total_months is None, p.total_months or 0),
        )


def _first_min(items, key):
    best = None
    best_key = None
    for item in items:
        k = key(item)
        if best is None or k < best_key:
            best, best_key = item, k
    return best


def _plan_entry(loan: Loan, extra: float) -> PaymentPlanEntry:
    payment = loan.monthly_payment + extra
    payoff = estimate_flat_payoff(loan.balance, payment)
    if not payoff.pays_off:
        logger.warning(f"{loan.name}: payment of ${payment:,.2f} never retires the balance")
    return PaymentPlanEntry(
        loan_id=loan.loan_id,
        loan_name=loan.name,
        monthly_payment=payment,
        months_to_payoff=payoff.months,
        interest_paid=payoff.interest,
        total_paid=payoff.total_paid,
        extra_payment=extra,
    )


def _summarize(strategy: Strategy, extra_budget: float, entries: list[PaymentPlanEntry]) -> PaymentPlan:
    if any(not e.pays_off for e in entries):
        total_months = None
    else:
        total_months = max((e.months_to_payoff for e in entries), default=0)
    total_interest = sum(e.interest_paid for e in entries if e.interest_paid is not None)
    return PaymentPlan(
        strategy=strategy,
        extra_budget=extra_budget,
        entries=tuple(entries),
        total_months=total_months,
        total_interest=total_interest,
    )


def highest_rate_loan(loans: Iterable[Loan]) -> Loan | None:
    """First loan with the highest interest rate."""
    ordered = sorted(loans, key=lambda loan: -loan.interest_rate)
    return ordered[0] if ordered else None


def smallest_balance_loan(loans: Iterable[Loan]) -> Loan | None:
    """First loan with the smallest balance."""
    ordered = sorted(loans, key=lambda loan: loan.balance)
    return ordered[0] if ordered else None


class StrategyEngine:
    """Builds and compares payment plans."""

    def __init__(self, hybrid_interest_share: float = HYBRID_INTEREST_SHARE):
        self.hybrid_interest_share = hybrid_interest_share

    @classmethod
    def from_config(cls, config) -> "StrategyEngine":
        """Build from a validated ``DebtwiseConfig``."""
        return cls(hybrid_interest_share=config.strategies.hybrid_interest_share)

    def build_plan(self, loans: Iterable[Loan], extra_budget: float, strategy: Strategy) -> PaymentPlan:
        """Allocate ``extra_budget`` across ``loans`` under ``strategy``.

        Raises:
            InvalidInputError: If extra_budget is negative or non-numeric.
        """
        extra_budget = require_non_negative("extra budget", extra_budget)
        snapshot = validate_loan_snapshot(loans)
        strategy = Strategy(strategy)

        if strategy == Strategy.HYBRID:
            entries = self._hybrid_entries(snapshot, extra_budget)
        else:
            if strategy == Strategy.AVALANCHE:
                ordered = sorted(snapshot, key=lambda loan: -loan.interest_rate)
            else:
                ordered = sorted(snapshot, key=lambda loan: loan.balance)
            entries = [_plan_entry(loan, extra_budget if i == 0 else 0.0) for i, loan in enumerate(ordered)]

        plan = _summarize(strategy, extra_budget, entries)
        logger.debug(
            f"{strategy.value} plan over {len(snapshot)} loans: "
            f"{plan.total_months} months, ${plan.total_interest:,.2f} interest"
        )
        return plan

    def _hybrid_entries(self, loans: tuple[Loan, ...], extra_budget: float) -> list[PaymentPlanEntry]:
        target_rate = highest_rate_loan(loans)
        target_balance = smallest_balance_loan(loans)

        entries = []
        for loan in loans:
            if target_rate is not None and loan is target_rate and loan is target_balance:
                extra = extra_budget
            elif loan is target_rate:
                extra = extra_budget * self.hybrid_interest_share
            elif loan is target_balance:
                extra = extra_budget * (1 - self.hybrid_interest_share)
            else:
                extra = 0.0
            entries.append(_plan_entry(loan, extra))
        return entries

    def compare(self, loans: Iterable[Loan], extra_budget: float) -> StrategyComparison:
        """Run every strategy against the same loan snapshot."""
        snapshot = validate_loan_snapshot(loans)
        return StrategyComparison(
            plans={strategy: self.build_plan(snapshot, extra_budget, strategy) for strategy in Strategy}
        )


def compute_avalanche_plan(loans: Iterable[Loan], extra_budget: float) -> PaymentPlan:
    return StrategyEngine().build_plan(loans, extra_budget, Strategy.AVALANCHE)


def compute_snowball_plan(loans: Iterable[Loan], extra_budget: float) -> PaymentPlan:
    return StrategyEngine().build_plan(loans, extra_budget, Strategy.SNOWBALL)


def compute_hybrid_plan(loans: Iterable[Loan], extra_budget: float) -> PaymentPlan:
    return StrategyEngine().build_plan(loans, extra_budget, Strategy.HYBRID)
