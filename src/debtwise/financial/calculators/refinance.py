"""Refinance comparison — keep the current loan or take a new one.

Closing costs and cash-out are rolled into the new principal rather than paid
out of pocket. Both loans get a full amortization schedule; the break-even
point is how many months of payment difference it takes to recover the
closing costs.
"""

import math
from dataclasses import dataclass

from loguru import logger

from debtwise.financial.calculators.amortization import AmortizationSchedule, generate_schedule
from debtwise.financial.validation import require_non_negative


@dataclass(frozen=True)
class RefinanceComparison:
    """Current loan vs refinanced loan.

    Attributes:
        monthly_difference: New payment minus current payment (negative = cheaper).
        total_interest_savings: Current total interest minus new total interest.
        net_savings: Interest savings less closing costs.
        break_even_months: Months to recover closing costs; 0 when not applicable.
    """

    current_schedule: AmortizationSchedule
    new_schedule: AmortizationSchedule
    new_principal: float
    closing_costs: float
    cash_out: float
    monthly_difference: float
    total_interest_savings: float
    net_savings: float
    break_even_months: float

    @property
    def current_payment(self) -> float:
        return self.current_schedule.monthly_payment

    @property
    def new_payment(self) -> float:
        return self.new_schedule.monthly_payment

    @property
    def is_worthwhile(self) -> bool:
        return self.net_savings > 0


def break_even_months(closing_costs: float, monthly_difference: float) -> float:
    """closing_costs / |monthly_difference|, or 0 when that is undefined."""
    if monthly_difference == 0:
        return 0.0
    months = closing_costs / abs(monthly_difference)
    if not math.isfinite(months):
        return 0.0
    return months


def compare_refinance(
    current_balance: float,
    current_rate: float,
    remaining_term: int,
    new_rate: float,
    new_term: int,
    closing_costs: float = 0.0,
    cash_out: float = 0.0,
) -> RefinanceComparison:
    """Compare keeping the current loan with refinancing it.

    Args:
        current_balance: Balance owed today.
        current_rate: Current annual rate in percent.
        remaining_term: Months left on the current loan.
        new_rate: Offered annual rate in percent.
        new_term: Term of the new loan in months.
        closing_costs: Fees, added to the new principal.
        cash_out: Cash taken out, added to the new principal.

    Raises:
        InvalidInputError: On negative amounts or non-positive terms.
    """
    closing_costs = require_non_negative("closing costs", closing_costs)
    cash_out = require_non_negative("cash out", cash_out)
    current_balance = require_non_negative("current balance", current_balance)

    new_principal = current_balance + cash_out + closing_costs
    current = generate_schedule(current_balance, current_rate, remaining_term)
    new = generate_schedule(new_principal, new_rate, new_term)

    monthly_difference = new.monthly_payment - current.monthly_payment
    interest_savings = current.total_interest - new.total_interest

    comparison = RefinanceComparison(
        current_schedule=current,
        new_schedule=new,
        new_principal=new_principal,
        closing_costs=closing_costs,
        cash_out=cash_out,
        monthly_difference=monthly_difference,
        total_interest_savings=interest_savings,
        net_savings=interest_savings - closing_costs,
        break_even_months=break_even_months(closing_costs, monthly_difference),
    )
    logger.debug(
        f"Refinance {current_rate}% -> {new_rate}%: {monthly_difference:+,.2f}/mo, "
        f"net savings ${comparison.net_savings:,.2f}"
    )
    return comparison
