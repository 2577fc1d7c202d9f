"""debtwise scenario — what-if simulations over the loan book."""

from __future__ import annotations

import click

from debtwise.core.cli.common import echo_json, fmt_money, fmt_months, load_book, run_guarded
from debtwise.core.cli.plan_cmd import loans_option

_KINDS = ["all", "current", "rate_increase", "rate_decrease", "extra_payments", "refinance", "economic_stress"]


@click.command()
@click.argument("kind", type=click.Choice(_KINDS), default="all")
@loans_option
@click.option("--rate-change", type=float, default=None, help="Rate delta in points (default: scenarios.rate_change).")
@click.option("--extra-budget", type=float, default=None, help="Extra per month (default: scenarios.extra_budget).")
@click.option("--refinance-rate", type=float, default=None, help="Target refinance rate in percent.")
@click.option("--model", type=click.Choice(["amortized", "flat"]), default=None, help="Interest model.")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
@click.pass_obj
def scenario(
    app,
    kind: str,
    loans_file: str | None,
    rate_change: float | None,
    extra_budget: float | None,
    refinance_rate: float | None,
    model: str | None,
    as_json: bool,
) -> None:
    """Simulate rate changes, extra payments, refinancing or a stress test."""
    from debtwise.financial.calculators.scenarios import ScenarioEngine, ScenarioParameters

    settings = app.settings
    book = load_book(app, loans_file)
    engine = ScenarioEngine.from_config(settings)
    if model:
        engine = ScenarioEngine(
            interest_model=model,
            default_remaining_term=engine.default_remaining_term,
            max_projection_months=engine.max_projection_months,
        )

    rate_change = settings.scenarios.rate_change if rate_change is None else rate_change
    extra_budget = settings.scenarios.extra_budget if extra_budget is None else extra_budget
    loans = book.active_loans()

    if kind == "all":
        results = run_guarded(engine.run_all, loans, rate_change=rate_change, extra_budget=extra_budget)
    else:
        params = run_guarded(
            ScenarioParameters,
            rate_change=rate_change,
            extra_budget=extra_budget,
            refinance_rate=refinance_rate,
        )
        result = run_guarded(engine.run, loans, kind, params)
        results = {result.kind: result}

    if as_json:
        echo_json(list(results.values()))
        return

    click.echo(f"{'Scenario':<16} {'Interest':>14} {'Monthly':>12} {'Payoff':>12} {'Savings':>14}")
    for result in results.values():
        s = result.summary
        click.echo(
            f"{result.kind.value:<16} {fmt_money(s.total_interest):>14} {fmt_money(s.total_monthly_payment):>12} "
            f"{fmt_months(s.max_payoff_time):>12} {fmt_money(s.total_interest_savings):>14}"
        )
