"""debtwise schedule / refinance — single-loan calculators."""

from __future__ import annotations

import click

from debtwise.core.cli.common import echo_json, fmt_money, run_guarded


@click.command()
@click.argument("principal", type=float)
@click.argument("rate", type=float)
@click.argument("term", type=int)
@click.option("--extra", type=float, default=0.0, show_default=True, help="Extra payment added every month.")
@click.option("--rows", type=int, default=12, show_default=True, help="Schedule rows to print.")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
def schedule(principal: float, rate: float, term: int, extra: float, rows: int, as_json: bool) -> None:
    """Amortization schedule for PRINCIPAL at RATE percent over TERM months."""
    from debtwise.financial.calculators.amortization import compare_extra_payment, generate_schedule

    if extra != 0:
        comparison = run_guarded(compare_extra_payment, principal, rate, term, extra)
        result = comparison.accelerated
    else:
        comparison = None
        result = run_guarded(generate_schedule, principal, rate, term)

    if as_json:
        echo_json(comparison or result)
        return

    click.echo(f"Monthly payment: {fmt_money(result.monthly_payment)}")
    if extra != 0:
        click.echo(f"With extra:      {fmt_money(result.monthly_payment + extra)}")
    click.echo(f"Total interest:  {fmt_money(result.total_interest)}")
    click.echo(f"Payments:        {result.total_payments} months ({result.status.value})")
    if comparison is not None:
        click.echo(f"Interest saved:  {fmt_money(comparison.interest_saved)}")
        click.echo(f"Time saved:      {comparison.months_saved} months")

    if rows > 0 and result.entries:
        click.echo("")
        click.echo(f"{'Month':>5} {'Payment':>12} {'Principal':>12} {'Interest':>12} {'Balance':>14}")
        for entry in result.entries[:rows]:
            click.echo(
                f"{entry.month:>5} {entry.payment:>12,.2f} {entry.principal:>12,.2f} "
                f"{entry.interest:>12,.2f} {entry.balance:>14,.2f}"
            )


@click.command()
@click.option("--balance", type=float, required=True, help="Current balance.")
@click.option("--rate", type=float, required=True, help="Current annual rate (percent).")
@click.option("--remaining", type=int, required=True, help="Months left on the current loan.")
@click.option("--new-rate", type=float, required=True, help="Offered annual rate (percent).")
@click.option("--new-term", type=int, required=True, help="Term of the new loan in months.")
@click.option("--closing-costs", type=float, default=0.0, show_default=True)
@click.option("--cash-out", type=float, default=0.0, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
def refinance(
    balance: float,
    rate: float,
    remaining: int,
    new_rate: float,
    new_term: int,
    closing_costs: float,
    cash_out: float,
    as_json: bool,
) -> None:
    """Compare keeping a loan with refinancing it."""
    from debtwise.financial.calculators.refinance import compare_refinance

    result = run_guarded(
        compare_refinance,
        current_balance=balance,
        current_rate=rate,
        remaining_term=remaining,
        new_rate=new_rate,
        new_term=new_term,
        closing_costs=closing_costs,
        cash_out=cash_out,
    )
    if as_json:
        echo_json(result)
        return

    click.echo(f"Current payment:   {fmt_money(result.current_payment)}")
    click.echo(f"New payment:       {fmt_money(result.new_payment)} (principal {fmt_money(result.new_principal)})")
    click.echo(f"Monthly change:    {result.monthly_difference:+,.2f}")
    click.echo(f"Interest savings:  {fmt_money(result.total_interest_savings)}")
    click.echo(f"Net savings:       {fmt_money(result.net_savings)}")
    click.echo(f"Break-even:        {result.break_even_months:.1f} months")
