"""Legacy price list maintenance commands."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console

from hprcost.cli._utils import STORE_OPTION_HELP, open_store
from hprcost.cli.render import render_legacy_prices
from hprcost.core.errors import HPRValueError
from hprcost.pipeline import CalculatorSession

prices_app = typer.Typer(add_completion=False, no_args_is_help=True, help="Legacy price list (average stem volume → price).")
console = Console()

StoreOption = typer.Option(None, "--store", help=STORE_OPTION_HELP, dir_okay=False)


@prices_app.command("show")
def show(store: Path | None = StoreOption) -> None:
    """Print the legacy price list."""
    session = CalculatorSession(store=open_store(store))
    render_legacy_prices(console, session.legacy_prices)


@prices_app.command("import")
def import_prices(
    source: str = typer.Argument(..., help="Text file with pasted prices, or '-' to read stdin."),
    store: Path | None = StoreOption,
) -> None:
    """Bulk-import prices from pasted spreadsheet text."""

    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            raise typer.BadParameter(f"File not found: {path}", param_hint="SOURCE")
        text = path.read_text(encoding="utf-8")

    session = CalculatorSession(store=open_store(store))
    outcome = session.import_legacy_prices(text)
    if not outcome.updated:
        console.print("[red]No prices recognised; the price list was left unchanged.[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Updated {len(set(outcome.assigned_indices))} price(s).[/green]")
    render_legacy_prices(console, session.legacy_prices)


@prices_app.command("set")
def set_price(
    index: int = typer.Argument(..., help="Breakpoint index (0 = 0.20 m³)."),
    price: float = typer.Argument(..., help="Price in kr/m³ (0 clears the entry)."),
    store: Path | None = StoreOption,
) -> None:
    """Set one legacy price by breakpoint index."""

    session = CalculatorSession(store=open_store(store))
    try:
        session.set_legacy_price(index, price)
    except HPRValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="INDEX") from exc
    render_legacy_prices(console, session.legacy_prices)


@prices_app.command("clear")
def clear(store: Path | None = StoreOption) -> None:
    """Reset every legacy price to unset."""
    session = CalculatorSession(store=open_store(store))
    session.clear_legacy_prices()
    console.print("Legacy prices cleared.")
