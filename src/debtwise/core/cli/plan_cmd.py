"""debtwise strategies / savings — plans over the whole loan book."""

from __future__ import annotations

import click

from debtwise.core.cli.common import echo_json, fmt_money, fmt_months, load_book, run_guarded

loans_option = click.option(
    "--loans", "loans_file", type=click.Path(dir_okay=False), help="Loan file (defaults to paths.loans_file)."
)


@click.command()
@loans_option
@click.option("--extra-budget", type=float, default=500.0, show_default=True, help="Extra money per month.")
@click.option(
    "--strategy",
    type=click.Choice(["avalanche", "snowball", "hybrid"]),
    default=None,
    help="Show one strategy's plan (default: strategies.default).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the full comparison as JSON.")
@click.pass_obj
def strategies(app, loans_file: str | None, extra_budget: float, strategy: str | None, as_json: bool) -> None:
    """Compare avalanche, snowball and hybrid repayment."""
    from debtwise.financial.calculators.strategies import Strategy, StrategyEngine

    book = load_book(app, loans_file)
    engine = StrategyEngine.from_config(app.settings)
    comparison = run_guarded(engine.compare, book.active_loans(), extra_budget)

    if as_json:
        echo_json(comparison)
        return

    click.echo(f"{'Strategy':<12} {'Interest':>14} {'Debt-free in':>14}")
    for plan in comparison.plans.values():
        click.echo(f"{plan.strategy.value:<12} {fmt_money(plan.total_interest):>14} {fmt_months(plan.total_months):>14}")
    click.echo(f"\nLowest interest: {comparison.best.strategy.value}")

    chosen = comparison.plans[Strategy(strategy or app.settings.strategies.default)]
    click.echo(f"\n{chosen.strategy.value} plan:")
    for entry in chosen.entries:
        click.echo(
            f"  {entry.loan_name:<28} {fmt_money(entry.monthly_payment):>12}/mo "
            f"(+{entry.extra_payment:,.2f})  {fmt_months(entry.months_to_payoff)}"
        )


@click.command()
@loans_option
@click.option("--json", "as_json", is_flag=True, help="Print the full analysis as JSON.")
@click.pass_obj
def savings(app, loans_file: str | None, as_json: bool) -> None:
    """Sweep extra payments and rate reductions for the best savings."""
    from debtwise.financial.calculators.savings import SavingsAnalyzer

    book = load_book(app, loans_file)
    analysis = run_guarded(SavingsAnalyzer.from_config(app.settings).analyze, book.active_loans())

    if as_json:
        echo_json(analysis)
        return

    click.echo(f"Baseline interest: {fmt_money(analysis.baseline_total_interest)}")
    click.echo("\nExtra monthly payment:")
    for point in analysis.extra_payment:
        click.echo(
            f"  +${point.extra_amount:,.0f}/mo  saves {fmt_money(point.total_interest_saved)}, "
            f"{point.total_time_saved} months sooner"
        )
    click.echo("\nRate reduction:")
    for point in analysis.refinance:
        click.echo(
            f"  -{point.rate_reduction}%  saves {fmt_money(point.total_interest_saved)}, "
            f"{fmt_money(point.total_monthly_saved)}/mo"
        )

    if analysis.best_extra_payment is not None:
        best = analysis.best_extra_payment
        click.echo(f"\nBest: add ${best.extra_amount:,.0f}/mo to save {fmt_money(best.total_interest_saved)}.")
    if analysis.best_refinance is not None:
        best_refi = analysis.best_refinance
        click.echo(
            f"Best: cut rates by {best_refi.rate_reduction}% to save {fmt_money(best_refi.total_interest_saved)}."
        )
