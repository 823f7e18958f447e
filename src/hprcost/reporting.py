"""Tabular views of calculation results (pandas) and CSV export."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path

import pandas as pd

from hprcost.classification.diameter import DBH_CLASSES
from hprcost.classification.species import SPECIES_ORDER, SpeciesCategory
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.pricing import CalculationResult, ResultRow, species_price_matrix

__all__ = [
    "RESULT_COLUMNS",
    "results_dataframe",
    "species_summary_dataframe",
    "totals_dataframe",
    "price_matrix_dataframe",
    "export_results",
    "export_results_by_species",
]

RESULT_COLUMNS = [
    "species",
    "dbh_class",
    "stems",
    "total_time",
    "total_volume",
    "productivity",
    "harvesting_cost",
    "forwarding_cost_per_m3",
    "price_per_m3",
    "total_cost",
    "total_price",
]

_SUMMARY_COLUMNS = ["species", "stems", "total_volume", "total_price"]


def _rows_dataframe(rows: list[ResultRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    records = []
    for row in rows:
        payload = asdict(row)
        payload["species"] = row.species.value
        records.append(payload)
    return pd.DataFrame(records).reindex(columns=RESULT_COLUMNS)


def results_dataframe(result: CalculationResult, species: SpeciesCategory | None = None) -> pd.DataFrame:
    """Result rows as a DataFrame, optionally restricted to one species."""

    rows = list(result.rows) if species is None else result.rows_for(species)
    return _rows_dataframe(rows)


def species_summary_dataframe(result: CalculationResult) -> pd.DataFrame:
    """Stems, volume, and per-bin price totals per species (zero rows kept)."""

    frame = results_dataframe(result)
    summary = (
        frame.groupby("species", sort=False)
        .agg(
            stems=("stems", "sum"),
            total_volume=("total_volume", "sum"),
            total_price=("total_price", "sum"),
        )
        .reindex([species.value for species in SPECIES_ORDER], fill_value=0)
        .rename_axis("species")
        .reset_index()
    )
    return summary.reindex(columns=_SUMMARY_COLUMNS)


def totals_dataframe(result: CalculationResult) -> pd.DataFrame:
    """Side-by-side totals of the per-bin and legacy models."""

    new = result.new_totals
    legacy = result.legacy_totals
    return pd.DataFrame(
        [
            {
                "model": "per_bin",
                "total_stems": new.total_stems,
                "total_volume": new.total_volume,
                "average_price": new.average_price,
                "total_price": new.total_price,
                "total_forwarding_cost": new.total_forwarding_cost,
                "combined_total": new.combined_total,
            },
            {
                "model": "legacy",
                "total_stems": legacy.total_stems,
                "total_volume": legacy.total_volume,
                "average_price": legacy.average_price,
                "total_price": legacy.total_price,
                "total_forwarding_cost": None,
                "combined_total": None,
            },
        ]
    )


def price_matrix_dataframe(harvesting_cost_rate: float, divisors: DivisorTable) -> pd.DataFrame:
    """Price per m³ indexed by diameter class, one column per species."""

    matrix = species_price_matrix(harvesting_cost_rate, divisors)
    frame = pd.DataFrame(
        {species.value: matrix[species] for species in SPECIES_ORDER},
        index=pd.Index(DBH_CLASSES, name="dbh_class"),
    )
    return frame


def export_results(result: CalculationResult, path: str | Path) -> Path:
    """Write all result rows to ``path`` as CSV and return the path."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    results_dataframe(result).to_csv(target, index=False)
    return target


def export_results_by_species(result: CalculationResult, directory: str | Path) -> list[Path]:
    """Write ``all.csv``, one CSV per populated species, and ``totals.csv`` into ``directory``."""

    root = Path(directory)
    root.mkdir(parents=True, exist_ok=True)
    written = [export_results(result, root / "all.csv")]
    for species in SPECIES_ORDER:
        frame = results_dataframe(result, species)
        if frame.empty:
            continue
        path = root / f"{species.label.lower()}.csv"
        frame.to_csv(path, index=False)
        written.append(path)
    totals_path = root / "totals.csv"
    totals_dataframe(result).to_csv(totals_path, index=False)
    written.append(totals_path)
    return written
