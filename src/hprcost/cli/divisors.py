"""Divisor table maintenance commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from hprcost.cli._utils import (
    STORE_OPTION_HELP,
    open_store,
    parse_class_argument,
    parse_species_argument,
)
from hprcost.cli.render import render_divisors
from hprcost.classification.diameter import DBH_CLASSES
from hprcost.pipeline import CalculatorSession

divisors_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Species × diameter-class divisor table.")
console = Console()

StoreOption = typer.Option(None, "--store", help=STORE_OPTION_HELP, dir_okay=False)


@divisors_app.command("show")
def show(store: Path | None = StoreOption) -> None:
    """Print divisors with the resulting price per m³."""
    session = CalculatorSession(store=open_store(store))
    render_divisors(console, session.divisors, session.settings)


@divisors_app.command("set")
def set_divisor(
    species: str = typer.Argument(..., help="Tall/Pine, Gran/Spruce, or Löv/Broadleaf."),
    dbh_class: int = typer.Argument(..., help="Diameter class in mm (e.g. 160) or class index."),
    value: float = typer.Argument(..., help="Divisor (> 0)."),
    store: Path | None = StoreOption,
) -> None:
    """Set one divisor."""

    category = parse_species_argument(species)
    index = parse_class_argument(dbh_class)
    if value <= 0:
        raise typer.BadParameter("Divisor must be > 0; use 'unset' to clear a class.", param_hint="VALUE")
    session = CalculatorSession(store=open_store(store))
    session.set_divisor(category, index, value)
    console.print(f"{category.label} {DBH_CLASSES[index]} mm divisor set to {value:g}.")


@divisors_app.command("unset")
def unset_divisor(
    species: str = typer.Argument(...),
    dbh_class: int = typer.Argument(...),
    store: Path | None = StoreOption,
) -> None:
    """Clear one divisor (the class becomes unpriced)."""

    category = parse_species_argument(species)
    index = parse_class_argument(dbh_class)
    session = CalculatorSession(store=open_store(store))
    session.set_divisor(category, index, None)
    console.print(f"{category.label} {DBH_CLASSES[index]} mm is now unpriced.")


@divisors_app.command("reset")
def reset(store: Path | None = StoreOption) -> None:
    """Restore the packaged default divisors."""
    session = CalculatorSession(store=open_store(store))
    session.reset_divisors()
    console.print("Divisors reset to defaults.")
