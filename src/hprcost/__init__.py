"""Harvester production (HPR) ingestion, aggregation, and pricing."""

from hprcost.classification import SpeciesCategory, classify_species, resolve_dbh_class
from hprcost.config import CalculationSettings
from hprcost.costing import (
    CalculationResult,
    DivisorTable,
    LegacyPriceTable,
    apply_bulk_pricing,
    calculate,
)
from hprcost.ingest import Dataset, TreeRecord, load_hpr_files, parse_hpr_text
from hprcost.pipeline import CalculatorSession

__version__ = "0.1.0"

__all__ = [
    "SpeciesCategory",
    "classify_species",
    "resolve_dbh_class",
    "CalculationSettings",
    "CalculationResult",
    "DivisorTable",
    "LegacyPriceTable",
    "apply_bulk_pricing",
    "calculate",
    "Dataset",
    "TreeRecord",
    "load_hpr_files",
    "parse_hpr_text",
    "CalculatorSession",
    "__version__",
]
