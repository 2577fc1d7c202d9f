"""debtwise summary / alerts — portfolio views of the loan book."""

from __future__ import annotations

from datetime import date

import click

from debtwise.core.cli.common import echo_json, fmt_money, load_book
from debtwise.core.cli.plan_cmd import loans_option


@click.command()
@loans_option
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON.")
@click.pass_obj
def summary(app, loans_file: str | None, as_json: bool) -> None:
    """Totals, average rate and progress across all loans."""
    from debtwise.financial.portfolio import summarize_portfolio

    book = load_book(app, loans_file)
    result = summarize_portfolio(book.snapshot())
    if as_json:
        echo_json(result)
        return

    click.echo(f"Loans:            {result.loan_count} ({result.active_loans} active)")
    click.echo(f"Total debt:       {fmt_money(result.total_debt)}")
    click.echo(f"Monthly payments: {fmt_money(result.total_monthly_payments)}")
    click.echo(f"Average rate:     {result.average_interest_rate:.2f}%")
    click.echo(f"Progress:         {result.total_progress:.1f}% repaid")
    for loan_type, breakdown in result.by_type.items():
        click.echo(f"  {loan_type:<14} {breakdown.count:>3}  {fmt_money(breakdown.balance):>14}")


@click.command()
@loans_option
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Reference date.")
@click.option("--json", "as_json", is_flag=True, help="Print alerts as JSON.")
@click.pass_obj
def alerts(app, loans_file: str | None, today, as_json: bool) -> None:
    """Payment-due and credit-utilization alerts."""
    from debtwise.financial.alerts import AlertGenerator

    book = load_book(app, loans_file)
    generator = AlertGenerator.from_config(app.settings)
    ref_date: date = today.date() if today else date.today()
    found = generator.generate(book.snapshot(), today=ref_date)
    upcoming = generator.upcoming_payments(book.snapshot(), today=ref_date)

    if as_json:
        echo_json({"alerts": found, "upcoming": upcoming})
        return

    if not found:
        click.echo("No alerts.")
    for alert in found:
        click.echo(f"[{alert.severity.value.upper()}] {alert.title}: {alert.message}")

    if upcoming:
        click.echo("\nUpcoming payments:")
        for payment in upcoming:
            click.echo(f"  {payment.due_date.isoformat()}  {payment.loan_name:<28} {fmt_money(payment.amount)}")
