"""Stored calculation settings commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from hprcost.cli._utils import STORE_OPTION_HELP, open_store, parse_setting_argument
from hprcost.cli.render import render_settings
from hprcost.config.loaders import load_settings, merge_settings
from hprcost.core.errors import HPRValueError
from hprcost.pipeline import CalculatorSession

settings_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Stored calculation settings.")
console = Console()

StoreOption = typer.Option(None, "--store", help=STORE_OPTION_HELP, dir_okay=False)


@settings_app.command("show")
def show(store: Path | None = StoreOption) -> None:
    """Print the stored settings."""
    session = CalculatorSession(store=open_store(store))
    render_settings(console, session.settings)


@settings_app.command("set")
def set_value(
    field: str = typer.Argument(..., help="Setting name, e.g. harvesting_cost_rate."),
    value: str = typer.Argument(..., help="Numeric value (comma decimals accepted)."),
    store: Path | None = StoreOption,
) -> None:
    """Change one stored setting."""

    name = parse_setting_argument(field)
    session = CalculatorSession(store=open_store(store))
    updated = merge_settings(session.settings, {name: value})
    session.update_settings(updated)
    render_settings(console, updated)


@settings_app.command("load")
def load(
    config: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML settings file."),
    store: Path | None = StoreOption,
) -> None:
    """Replace stored settings with the values from a YAML file (over defaults)."""

    try:
        loaded = load_settings(config)
    except HPRValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="CONFIG") from exc
    session = CalculatorSession(store=open_store(store))
    session.update_settings(loaded)
    render_settings(console, loaded)
