"""Rich renderers for calculation output and price tables."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from hprcost.classification.diameter import DBH_CLASSES
from hprcost.classification.species import SPECIES_ORDER
from hprcost.cli._utils import format_amount
from hprcost.config.models import CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.costing.pricing import CalculationResult, species_price_matrix


def render_results(console: Console, result: CalculationResult) -> None:
    table = Table(title="Per-bin pricing", header_style="bold cyan", expand=True)
    table.add_column("Species", style="bold")
    table.add_column("DBH class (mm)", justify="right")
    table.add_column("Stems", justify="right")
    table.add_column("Volume (m³)", justify="right")
    table.add_column("Time (s)", justify="right")
    table.add_column("m³/h", justify="right")
    table.add_column("Harvesting kr/m³", justify="right")
    table.add_column("Price kr/m³", justify="right")
    table.add_column("Total cost kr/m³", justify="right")
    table.add_column("Total price (kr)", justify="right")
    for row in result.rows:
        table.add_row(
            row.species.label,
            str(row.dbh_class),
            str(row.stems),
            format_amount(row.total_volume, 3),
            format_amount(row.total_time, 0),
            format_amount(row.productivity),
            format_amount(row.harvesting_cost),
            format_amount(row.price_per_m3) if row.price_per_m3 > 0 else "[dim]unpriced[/dim]",
            format_amount(row.total_cost),
            format_amount(row.total_price),
        )
    console.print(table)


def render_totals(console: Console, result: CalculationResult) -> None:
    new = result.new_totals
    legacy = result.legacy_totals
    table = Table(title="Model comparison", show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Per-bin model", justify="right")
    table.add_column("Legacy model", justify="right")
    rows = [
        ("Stems", str(new.total_stems), str(legacy.total_stems)),
        ("Volume (m³)", format_amount(new.total_volume, 3), format_amount(legacy.total_volume, 3)),
        ("Average volume / stem (m³)", "-", format_amount(legacy.average_volume, 3)),
        ("Average price (kr/m³)", format_amount(new.average_price), format_amount(legacy.average_price)),
        ("Total price (kr)", format_amount(new.total_price), format_amount(legacy.total_price)),
        ("Forwarding (kr/m³)", format_amount(new.forwarding_cost_per_m3), "-"),
        ("Forwarding total (kr)", format_amount(new.total_forwarding_cost), "-"),
        ("Combined total (kr)", format_amount(new.combined_total), "-"),
    ]
    for field, per_bin, old in rows:
        table.add_row(field, per_bin, old)
    console.print(table)


def render_legacy_prices(console: Console, prices: LegacyPriceTable) -> None:
    table = Table(title="Legacy price list", header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Avg. volume (m³)", justify="right")
    table.add_column("Price (kr/m³)", justify="right")
    for index, entry in enumerate(prices.entries):
        price = format_amount(entry.price) if entry.price > 0 else "[dim]unset[/dim]"
        table.add_row(str(index), f"{entry.average_volume:.2f}", price)
    console.print(table)
    console.print(f"Base price entries set: {prices.assigned_count}/{len(prices)}")


def render_divisors(console: Console, divisors: DivisorTable, settings: CalculationSettings) -> None:
    matrix = species_price_matrix(settings.harvesting_cost_rate, divisors)
    table = Table(title="Divisors and price per m³", header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("DBH class (mm)", justify="right")
    for species in SPECIES_ORDER:
        table.add_column(f"{species.label} divisor", justify="right")
        table.add_column(f"{species.label} kr/m³", justify="right")
    for index, dbh_class in enumerate(DBH_CLASSES):
        cells = [str(index), str(dbh_class)]
        for species in SPECIES_ORDER:
            divisor = divisors.get(species, index)
            cells.append(format_amount(divisor, 1) if divisor is not None else "[dim]unset[/dim]")
            cells.append(format_amount(matrix[species][index]))
        table.add_row(*cells)
    console.print(table)


def render_settings(console: Console, settings: CalculationSettings) -> None:
    table = Table(title="Calculation settings", show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    for key, value in settings.model_dump().items():
        table.add_row(key, f"{value:g}")
    console.print(table)


__all__ = [
    "render_results",
    "render_totals",
    "render_legacy_prices",
    "render_divisors",
    "render_settings",
]
