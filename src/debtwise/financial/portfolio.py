"""Portfolio-level summary of a loan set."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from debtwise.financial.calculators.strategies import highest_rate_loan, smallest_balance_loan
from debtwise.financial.models import Loan, total_balance


@dataclass(frozen=True)
class TypeBreakdown:
    count: int
    balance: float
    monthly_payment: float


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals across all loans.

    Attributes:
        total_original: Sum of original amounts, using the balance where unknown.
        principal_repaid: total_original - total_debt.
        total_progress: principal_repaid as a percentage of total_original.
    """

    loan_count: int
    active_loans: int
    total_debt: float
    total_original: float
    total_monthly_payments: float
    principal_repaid: float
    average_interest_rate: float
    total_progress: float
    by_type: dict[str, TypeBreakdown] = field(default_factory=dict)
    highest_interest_loan: str | None = None
    smallest_balance_loan: str | None = None


def summarize_portfolio(loans: Iterable[Loan]) -> PortfolioSummary:
    """Summarize a loan snapshot. An empty set gives an all-zero summary."""
    snapshot = tuple(loans)
    total_debt = total_balance(snapshot)
    total_original = sum(loan.original_amount or loan.balance for loan in snapshot)
    principal_repaid = total_original - total_debt

    by_type: dict[str, TypeBreakdown] = {}
    for loan in snapshot:
        key = str(getattr(loan.loan_type, "value", loan.loan_type))
        current = by_type.get(key, TypeBreakdown(0, 0.0, 0.0))
        by_type[key] = TypeBreakdown(
            count=current.count + 1,
            balance=current.balance + loan.balance,
            monthly_payment=current.monthly_payment + loan.monthly_payment,
        )

    highest = highest_rate_loan(snapshot)
    smallest = smallest_balance_loan(snapshot)

    return PortfolioSummary(
        loan_count=len(snapshot),
        active_loans=sum(1 for loan in snapshot if loan.is_active),
        total_debt=total_debt,
        total_original=total_original,
        total_monthly_payments=sum(loan.monthly_payment for loan in snapshot),
        principal_repaid=principal_repaid,
        average_interest_rate=(sum(loan.interest_rate for loan in snapshot) / len(snapshot)) if snapshot else 0.0,
        total_progress=(principal_repaid / total_original * 100) if total_original else 0.0,
        by_type=by_type,
        highest_interest_loan=highest.loan_id if highest else None,
        smallest_balance_loan=smallest.loan_id if smallest else None,
    )
