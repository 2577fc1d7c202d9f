"""Shared setup logic for CLI commands."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import click

from debtwise.core.config import Config
from debtwise.core.exceptions import DebtwiseError
from debtwise.core.utils.logging import setup_logging

DEBTWISE_DIR = Path.home() / ".debtwise"
CONFIG_PATH = DEBTWISE_DIR / "config.yaml"


class AppContext:
    """Config and validated settings shared by every subcommand."""

    def __init__(self, config: Config):
        self.config = config
        self.settings = config.validated()


def load_config(config_file: str | None = None) -> Config:
    """Load config from ``config_file`` or ~/.debtwise/config.yaml."""
    return Config(config_file=config_file or str(CONFIG_PATH))


def init_context(ctx: click.Context, config_file: str | None, verbose: bool) -> AppContext:
    try:
        app = AppContext(load_config(config_file))
    except DebtwiseError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(app.settings.logging, verbose=verbose)
    ctx.obj = app
    return app


def load_book(app: AppContext, loans_file: str | None):
    """Load the loan book from ``loans_file`` or the configured default."""
    from debtwise.financial.store import LoanBook

    path = loans_file or app.settings.paths.loans_file
    try:
        return LoanBook.load(path)
    except DebtwiseError as e:
        raise click.ClickException(str(e)) from e


def to_jsonable(value: Any) -> Any:
    """Turn result dataclasses (with enums, dates, enum-keyed dicts) into JSON types."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def echo_json(value: Any) -> None:
    click.echo(json.dumps(to_jsonable(value), indent=2))


def fmt_money(value: float | None) -> str:
    if value is None:
        return "n/a"
    return f"${value:,.2f}"


def fmt_months(value: int | None) -> str:
    if value is None:
        return "never"
    return f"{value} months"


def run_guarded(func, *args, **kwargs):
    """Call into the library, turning DebtwiseError into a click error."""
    try:
        return func(*args, **kwargs)
    except DebtwiseError as e:
        raise click.ClickException(str(e)) from e
