from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from hprcost.cli._utils import STORE_OPTION_HELP, configure_logging, open_store
from hprcost.cli.divisors import divisors_app
from hprcost.cli.prices import prices_app
from hprcost.cli.render import render_results, render_totals
from hprcost.cli.settings import settings_app
from hprcost.classification.species import classify_species, normalize_species_identifier
from hprcost.config.loaders import load_settings, merge_settings
from hprcost.core.errors import HPRValueError
from hprcost.pipeline import CalculatorSession
from hprcost.reporting import export_results, export_results_by_species
from hprcost.telemetry import append_run_record, calculation_record

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Harvester production (HPR) pricing calculator.")
app.add_typer(prices_app, name="prices")
app.add_typer(divisors_app, name="divisors")
app.add_typer(settings_app, name="settings")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging(verbose)


@app.command()
def calc(
    files: list[Path] = typer.Argument(
        ..., exists=True, dir_okay=False, help="HPR files (.hpr/.xml) or .zip archives."
    ),
    config: Path | None = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="YAML settings layered over stored settings."
    ),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP, dir_okay=False),
    out: Path | None = typer.Option(None, "--out", help="Write result rows to this CSV file."),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", file_okay=False, help="Write all/per-species/totals CSV files here."
    ),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", dir_okay=False, help="Append a run record to this JSONL file."
    ),
    max_per_tree_time: float | None = typer.Option(None, help="Max processing time per stem (s, capped at 30)."),
    harvesting_cost_rate: float | None = typer.Option(None, help="Harvesting cost rate (kr/h)."),
    forwarding_sk: float | None = typer.Option(None, help="Forwarding rate SK (kr/h)."),
    skidding_distance_sa: float | None = typer.Option(None, help="Skidding distance SA (m)."),
    stand_removal_ut: float | None = typer.Option(None, help="Stand removal UT (m³/ha)."),
    k1: float | None = typer.Option(None, help="Forwarding constant k1."),
    k2: float | None = typer.Option(None, help="Forwarding constant k2."),
    c11: float | None = typer.Option(None, help="Forwarding constant c11."),
) -> None:
    """Parse HPR files and price them with the per-bin and legacy models."""

    session = CalculatorSession(store=open_store(store))
    settings = session.settings
    try:
        if config is not None:
            settings = load_settings(config, base=settings)
        settings = merge_settings(
            settings,
            {
                "max_per_tree_time": max_per_tree_time,
                "harvesting_cost_rate": harvesting_cost_rate,
                "forwarding_sk": forwarding_sk,
                "skidding_distance_sa": skidding_distance_sa,
                "stand_removal_ut": stand_removal_ut,
                "k1": k1,
                "k2": k2,
                "c11": c11,
            },
        )
    except HPRValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    dataset = session.load_files(files)
    for failure in dataset.failures:
        console.print(f"[yellow]Skipped {failure.source}: {failure.reason}[/yellow]")
    console.print(f"Parsed {dataset.stem_count} stems, {dataset.log_count} logs")

    result = session.calculate(settings)
    if telemetry_log is not None:
        append_run_record(telemetry_log, calculation_record(result, dataset, settings))
    if result.is_empty:
        console.print("[red]No stems detected: no record had a usable diameter.[/red]")
        raise typer.Exit(1)

    render_results(console, result)
    render_totals(console, result)
    if out is not None:
        export_results(result, out)
        console.print(f"Results written to {out}")
    if out_dir is not None:
        written = export_results_by_species(result, out_dir)
        console.print(f"Wrote {len(written)} file(s) to {out_dir}")


@app.command()
def classify(name: str = typer.Argument(..., help="Species name as found in an HPR file.")) -> None:
    """Show the pricing category a species name maps to."""

    category = classify_species(name)
    console.print(f"{name} ({normalize_species_identifier(name)}) → {category.value} ({category.label})")


if __name__ == "__main__":
    app()
