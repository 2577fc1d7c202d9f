"""Loan payment and amortization schedule calculator.

Monthly simple amortization only: the annual percentage rate is converted to
a monthly fractional rate (rate / 100 / 12) and interest accrues on the
running balance once per month.

Two ways of estimating a payoff live here:
- ``generate_schedule``: the full month-by-month amortization.
- ``estimate_flat_payoff``: ceil(balance / payment) months and
  payment * months - balance interest. It is what the strategy planner and
  savings sweeps use. It is an approximation, not amortized interest.

Pure math — every function returns the same output for the same input.
"""

import math
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from debtwise.financial.validation import (
    require_non_negative,
    require_positive,
    require_positive_int,
)

BALANCE_EPSILON = 0.01  # a balance at or below this is paid off


class ScheduleStatus(Enum):
    """How a generated schedule ended."""

    PAID_OFF = "paid_off"  # balance reached epsilon
    INCOMPLETE = "incomplete"  # still paying down when the month cap hit
    NON_AMORTIZING = "non_amortizing"  # payment never covered the first month's interest


@dataclass(frozen=True)
class ScheduleEntry:
    """One month of an amortization schedule."""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float
    total_interest: float


@dataclass(frozen=True)
class AmortizationSchedule:
    """A generated schedule plus its summary figures.

    Attributes:
        entries: One row per month, month numbers 1..n.
        principal: Starting balance.
        monthly_payment: Base payment (annuity or the supplied override).
        extra_payment: Added to the base payment every month.
        total_interest: Interest over all entries.
        total_payments: Number of payments made (len(entries)).
        status: PAID_OFF, INCOMPLETE or NON_AMORTIZING.
    """

    entries: tuple[ScheduleEntry, ...]
    principal: float
    monthly_payment: float
    extra_payment: float
    total_interest: float
    total_payments: int
    status: ScheduleStatus

    @property
    def final_balance(self) -> float:
        if not self.entries:
            return self.principal
        return self.entries[-1].balance

    @property
    def is_complete(self) -> bool:
        return self.status == ScheduleStatus.PAID_OFF

    @property
    def total_paid(self) -> float:
        return sum(e.payment for e in self.entries)

    @property
    def total_principal(self) -> float:
        return sum(e.principal for e in self.entries)


@dataclass(frozen=True)
class FlatPayoff:
    """Flat payoff estimate. ``months`` is None when the loan never pays off."""

    months: int | None
    total_paid: float | None
    interest: float | None

    @property
    def pays_off(self) -> bool:
        return self.months is not None


@dataclass(frozen=True)
class ExtraPaymentComparison:
    """Standard schedule vs the same loan with a recurring extra payment."""

    standard: AmortizationSchedule
    accelerated: AmortizationSchedule
    interest_saved: float
    months_saved: int


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual percentage (3.25) to a monthly fraction."""
    return annual_rate / 100 / 12


def calculate_monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Calculate the fixed monthly payment that amortizes a loan.

    Args:
        principal: Loan amount.
        annual_rate: Annual interest rate in percent (e.g. 3.5 for 3.5%).
        term_months: Number of monthly payments.

    Returns:
        Monthly payment amount. A zero rate divides the principal evenly.

    Raises:
        InvalidInputError: On a negative principal or rate, a non-positive
            term, or non-numeric input.
    """
    principal = require_non_negative("principal", principal)
    annual_rate = require_non_negative("interest rate", annual_rate)
    term_months = require_positive_int("term", term_months)

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return principal / term_months

    # expm1/log1p keep (1 + rate) ** n - 1 away from zero for vanishingly small rates
    growth_less_one = math.expm1(term_months * math.log1p(rate))
    if growth_less_one == 0:
        return principal / term_months
    return principal * rate * (growth_less_one + 1) / growth_less_one


def generate_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_payment: float = 0.0,
    payment: float | None = None,
) -> AmortizationSchedule:
    """Generate a month-by-month amortization schedule.

    Args:
        principal: Starting balance.
        annual_rate: Annual interest rate in percent.
        term_months: Loan term; also the hard cap on schedule length.
        extra_payment: Added to the base payment every month.
        payment: Base payment override (e.g. a contractual payment). When
            omitted the annuity payment for ``term_months`` is used.

    Returns:
        AmortizationSchedule. Its status tells a slow payoff (INCOMPLETE)
        apart from one that can never reach zero (NON_AMORTIZING).
    """
    principal = require_non_negative("principal", principal)
    extra_payment = require_non_negative("extra payment", extra_payment)
    if payment is None:
        base_payment = calculate_monthly_payment(principal, annual_rate, term_months)
    else:
        base_payment = require_positive("payment", payment)
        annual_rate = require_non_negative("interest rate", annual_rate)
        term_months = require_positive_int("term", term_months)

    rate = monthly_rate(annual_rate)
    total_payment = base_payment + extra_payment

    balance = principal
    total_interest = 0.0
    entries: list[ScheduleEntry] = []
    month = 1

    while balance > BALANCE_EPSILON and month <= term_months:
        interest = balance * rate
        principal_part = total_payment - interest
        if principal_part > balance:
            principal_part = balance

        balance -= principal_part
        total_interest += interest

        entries.append(
            ScheduleEntry(
                month=month,
                payment=principal_part + interest,
                principal=principal_part,
                interest=interest,
                balance=max(0.0, balance),
                total_interest=total_interest,
            )
        )
        month += 1

    if balance <= BALANCE_EPSILON:
        status = ScheduleStatus.PAID_OFF
    elif total_payment <= principal * rate:
        status = ScheduleStatus.NON_AMORTIZING
    else:
        status = ScheduleStatus.INCOMPLETE

    if status != ScheduleStatus.PAID_OFF:
        logger.warning(
            f"Schedule stopped at month {len(entries)} with ${max(0.0, balance):,.2f} left ({status.value})"
        )
    else:
        logger.debug(f"Schedule for ${principal:,.2f} at {annual_rate}% paid off in {len(entries)} months")

    return AmortizationSchedule(
        entries=tuple(entries),
        principal=principal,
        monthly_payment=base_payment,
        extra_payment=extra_payment,
        total_interest=total_interest,
        total_payments=len(entries),
        status=status,
    )


def estimate_flat_payoff(balance: float, payment: float) -> FlatPayoff:
    """Estimate months and interest as ceil(balance / payment).

    A non-positive payment against a positive balance never pays off; that is
    reported as ``months=None`` rather than an infinite or NaN figure.
    """
    if balance <= 0:
        return FlatPayoff(months=0, total_paid=0.0, interest=0.0)
    if payment <= 0:
        return FlatPayoff(months=None, total_paid=None, interest=None)

    months = math.ceil(balance / payment)
    total_paid = payment * months
    return FlatPayoff(months=months, total_paid=total_paid, interest=total_paid - balance)


def compare_extra_payment(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_payment: float,
) -> ExtraPaymentComparison:
    """Compare the standard schedule with one that adds ``extra_payment`` monthly."""
    standard = generate_schedule(principal, annual_rate, term_months)
    accelerated = generate_schedule(principal, annual_rate, term_months, extra_payment=extra_payment)
    return ExtraPaymentComparison(
        standard=standard,
        accelerated=accelerated,
        interest_saved=standard.total_interest - accelerated.total_interest,
        months_saved=standard.total_payments - accelerated.total_payments,
    )


def payment_for_target(balance: float, annual_rate: float, target_months: int) -> float:
    """Monthly payment needed to clear ``balance`` in ``target_months``."""
    return calculate_monthly_payment(balance, annual_rate, target_months)
