"""Savings analysis — fixed parameter sweeps over the whole loan set.

Two sweeps are run against a contractual baseline (payment * horizon - balance):
- Extra monthly payment ($200 / $500 / $1000 by default), split evenly across
  loans, with the flat payoff estimate for the new term and interest.
- Rate reduction (0.5 / 1.0 / 2.0 points by default), with the payment
  re-derived by the annuity formula over each loan's horizon.

The best point of each sweep is the one saving the most interest; the first
point wins ties.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from loguru import logger

from debtwise.financial.calculators.amortization import calculate_monthly_payment, estimate_flat_payoff
from debtwise.financial.models import DEFAULT_REMAINING_TERM, Loan, validate_loan_snapshot
from debtwise.financial.validation import require_non_negative

EXTRA_PAYMENT_SWEEP = (200.0, 500.0, 1000.0)
RATE_REDUCTION_SWEEP = (0.5, 1.0, 2.0)
MIN_REFINANCE_RATE = 0.1


@dataclass(frozen=True)
class LoanBaseline:
    loan_id: str
    loan_name: str
    monthly_payment: float
    total_payments: int
    total_paid: float
    total_interest: float


@dataclass(frozen=True)
class ExtraPaymentLoanResult:
    loan_id: str
    loan_name: str
    extra_payment: float
    new_monthly_payment: float
    new_term: int | None
    new_total_paid: float | None
    new_interest: float | None
    interest_saved: float
    time_saved: int


@dataclass(frozen=True)
class ExtraPaymentSweepPoint:
    """Outcome of adding ``extra_amount`` per month across all loans.

    ``total_time_saved`` is the largest per-loan saving, not the sum: the
    portfolio is only debt-free when its slowest loan is.
    """

    extra_amount: float
    loans: tuple[ExtraPaymentLoanResult, ...]
    total_interest_saved: float
    total_time_saved: int


@dataclass(frozen=True)
class RefinanceLoanResult:
    loan_id: str
    loan_name: str
    new_rate: float
    new_monthly_payment: float
    new_total_paid: float
    new_interest: float
    interest_saved: float
    monthly_saved: float


@dataclass(frozen=True)
class RefinanceSweepPoint:
    rate_reduction: float
    loans: tuple[RefinanceLoanResult, ...]
    total_interest_saved: float
    total_monthly_saved: float


@dataclass(frozen=True)
class SavingsAnalysis:
    """Both sweeps plus the winning point of each."""

    baseline: tuple[LoanBaseline, ...]
    extra_payment: tuple[ExtraPaymentSweepPoint, ...]
    refinance: tuple[RefinanceSweepPoint, ...]
    best_extra_payment: ExtraPaymentSweepPoint | None
    best_refinance: RefinanceSweepPoint | None

    @property
    def baseline_total_interest(self) -> float:
        return sum(b.total_interest for b in self.baseline)


def select_best(points: Sequence):
    """Point with the highest ``total_interest_saved``; first occurrence wins ties."""
    best = None
    for point in points:
        if best is None or point.total_interest_saved > best.total_interest_saved:
            best = point
    return best


class SavingsAnalyzer:
    """Runs the extra-payment and refinance sweeps."""

    def __init__(
        self,
        extra_amounts: Iterable[float] = EXTRA_PAYMENT_SWEEP,
        rate_reductions: Iterable[float] = RATE_REDUCTION_SWEEP,
        default_remaining_term: int = DEFAULT_REMAINING_TERM,
    ):
        self.extra_amounts = tuple(require_non_negative("extra amount", v) for v in extra_amounts)
        self.rate_reductions = tuple(require_non_negative("rate reduction", v) for v in rate_reductions)
        self.default_remaining_term = default_remaining_term

    @classmethod
    def from_config(cls, config) -> "SavingsAnalyzer":
        """Build from a validated ``DebtwiseConfig``."""
        return cls(
            extra_amounts=config.savings.extra_amounts,
            rate_reductions=config.savings.rate_reductions,
            default_remaining_term=config.calculator.default_remaining_term,
        )

    def baseline(self, loans: Iterable[Loan]) -> tuple[LoanBaseline, ...]:
        """Contractual payment over each loan's horizon."""
        rows = []
        for loan in loans:
            horizon = loan.horizon(self.default_remaining_term)
            total_paid = loan.monthly_payment * horizon
            rows.append(
                LoanBaseline(
                    loan_id=loan.loan_id,
                    loan_name=loan.name,
                    monthly_payment=loan.monthly_payment,
                    total_payments=horizon,
                    total_paid=total_paid,
                    total_interest=total_paid - loan.balance,
                )
            )
        return tuple(rows)

    def extra_payment_point(
        self,
        loans: Sequence[Loan],
        baseline: Sequence[LoanBaseline],
        extra_amount: float,
    ) -> ExtraPaymentSweepPoint:
        share = extra_amount / len(loans) if loans else 0.0
        results = []
        for loan, base in zip(loans, baseline):
            new_payment = loan.monthly_payment + share
            payoff = estimate_flat_payoff(loan.balance, new_payment)
            results.append(
                ExtraPaymentLoanResult(
                    loan_id=loan.loan_id,
                    loan_name=loan.name,
                    extra_payment=share,
                    new_monthly_payment=new_payment,
                    new_term=payoff.months,
                    new_total_paid=payoff.total_paid,
                    new_interest=payoff.interest,
                    interest_saved=base.total_interest - (payoff.interest or 0.0),
                    time_saved=base.total_payments - (payoff.months or 0),
                )
            )

        return ExtraPaymentSweepPoint(
            extra_amount=extra_amount,
            loans=tuple(results),
            total_interest_saved=sum(r.interest_saved for r in results),
            total_time_saved=max((r.time_saved for r in results), default=0),
        )

    def refinance_point(
        self,
        loans: Sequence[Loan],
        baseline: Sequence[LoanBaseline],
        rate_reduction: float,
    ) -> RefinanceSweepPoint:
        results = []
        for loan, base in zip(loans, baseline):
            new_rate = max(MIN_REFINANCE_RATE, loan.interest_rate - rate_reduction)
            horizon = base.total_payments
            new_payment = calculate_monthly_payment(loan.balance, new_rate, horizon)
            new_total_paid = new_payment * horizon
            new_interest = new_total_paid - loan.balance
            results.append(
                RefinanceLoanResult(
                    loan_id=loan.loan_id,
                    loan_name=loan.name,
                    new_rate=new_rate,
                    new_monthly_payment=new_payment,
                    new_total_paid=new_total_paid,
                    new_interest=new_interest,
                    interest_saved=base.total_interest - new_interest,
                    monthly_saved=loan.monthly_payment - new_payment,
                )
            )

        return RefinanceSweepPoint(
            rate_reduction=rate_reduction,
            loans=tuple(results),
            total_interest_saved=sum(r.interest_saved for r in results),
            total_monthly_saved=sum(r.monthly_saved for r in results),
        )

    def analyze(self, loans: Iterable[Loan]) -> SavingsAnalysis:
        """Run both sweeps over one loan snapshot."""
        snapshot = validate_loan_snapshot(loans)
        baseline = self.baseline(snapshot)

        extra_points = tuple(self.extra_payment_point(snapshot, baseline, amount) for amount in self.extra_amounts)
        refinance_points = tuple(
            self.refinance_point(snapshot, baseline, reduction) for reduction in self.rate_reductions
        )

        analysis = SavingsAnalysis(
            baseline=baseline,
            extra_payment=extra_points,
            refinance=refinance_points,
            best_extra_payment=select_best(extra_points),
            best_refinance=select_best(refinance_points),
        )
        if analysis.best_extra_payment is not None:
            logger.debug(
                f"Best extra payment: ${analysis.best_extra_payment.extra_amount:,.0f}/mo saves "
                f"${analysis.best_extra_payment.total_interest_saved:,.2f}"
            )
        return analysis
