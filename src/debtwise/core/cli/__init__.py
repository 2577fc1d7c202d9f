"""Debtwise CLI — entry point for calculator, planning and alert commands."""

import click

from debtwise import __version__

from .common import init_context


@click.group()
@click.version_option(version=__version__, package_name="debtwise")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """Debtwise — loan amortization and repayment planning."""
    init_context(ctx, config_file, verbose)


# Register subcommands
from .calc_cmd import refinance, schedule
from .plan_cmd import savings, strategies
from .portfolio_cmd import alerts, summary
from .scenario_cmd import scenario

main.add_command(schedule)
main.add_command(refinance)
main.add_command(strategies)
main.add_command(savings)
main.add_command(scenario)
main.add_command(summary)
main.add_command(alerts)
