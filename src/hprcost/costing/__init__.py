"""Aggregation, pricing models, and price tables."""

from .aggregation import AggregateBin, aggregate_records, per_stem_time
from .divisors import DivisorTable, normalise_divisor
from .legacy import LEGACY_AVERAGE_VOLUMES, LegacyPriceEntry, LegacyPriceTable, breakpoint_index
from .legacy_import import BulkImportResult, apply_bulk_pricing
from .pricing import (
    CalculationResult,
    LegacyModelTotals,
    NewModelTotals,
    ResultRow,
    calculate,
    forwarding_cost_per_m3,
    forwarding_time_factor,
    price_bin,
    price_per_m3,
    species_price_matrix,
    summarise_legacy_model,
    summarise_new_model,
)

__all__ = [
    "AggregateBin",
    "aggregate_records",
    "per_stem_time",
    "DivisorTable",
    "normalise_divisor",
    "LEGACY_AVERAGE_VOLUMES",
    "LegacyPriceEntry",
    "LegacyPriceTable",
    "breakpoint_index",
    "BulkImportResult",
    "apply_bulk_pricing",
    "CalculationResult",
    "LegacyModelTotals",
    "NewModelTotals",
    "ResultRow",
    "calculate",
    "forwarding_cost_per_m3",
    "forwarding_time_factor",
    "price_bin",
    "price_per_m3",
    "species_price_matrix",
    "summarise_legacy_model",
    "summarise_new_model",
]
