"""Per-bin and legacy pricing models."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from hprcost.classification.diameter import DBH_CLASSES, dbh_class_index
from hprcost.classification.species import SPECIES_ORDER, SpeciesCategory
from hprcost.config.models import CalculationSettings
from hprcost.costing.aggregation import AggregateBin, aggregate_records
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.ingest.records import TreeRecord

# Base terminal time (min) and cost per 100 m of skidding distance in the forwarding model.
_FORWARDING_BASE_MINUTES = 5.7
_SKIDDING_COST_PER_100M = 4.0


@dataclass(frozen=True)
class ResultRow:
    """Priced aggregate for one (species, diameter class) bin.

    Attributes
    ----------
    total_time:
        Credited processing time (s).
    productivity:
        m³ per processing hour.
    harvesting_cost:
        Harvesting cost per m³ derived from time, volume, and the cost rate.
    forwarding_cost_per_m3:
        Stand-level forwarding cost per m³ (identical on every row of a run).
    price_per_m3:
        ``harvesting_cost_rate / divisor``; ``0`` when the bin has no divisor.
    total_cost:
        ``harvesting_cost + forwarding_cost_per_m3 - price_per_m3`` (informational).
    total_price:
        ``price_per_m3 * total_volume``.
    """

    species: SpeciesCategory
    dbh_class: int
    stems: int
    total_time: float
    total_volume: float
    productivity: float
    harvesting_cost: float
    forwarding_cost_per_m3: float
    price_per_m3: float
    total_cost: float
    total_price: float


@dataclass(frozen=True)
class NewModelTotals:
    total_stems: int
    total_volume: float
    average_price: float
    total_price: float
    forwarding_cost_per_m3: float
    total_forwarding_cost: float
    combined_total: float


@dataclass(frozen=True)
class LegacyModelTotals:
    total_stems: int
    total_volume: float
    average_volume: float
    average_price: float
    total_price: float


@dataclass(frozen=True)
class CalculationResult:
    """Ordered result rows with totals for both pricing models."""

    rows: tuple[ResultRow, ...]
    new_totals: NewModelTotals
    legacy_totals: LegacyModelTotals

    @property
    def is_empty(self) -> bool:
        """``True`` when no stem could be binned ("no stems detected")."""
        return not self.rows

    def rows_for(self, species: SpeciesCategory) -> list[ResultRow]:
        return [row for row in self.rows if row.species is species]


def forwarding_time_factor(settings: CalculationSettings) -> float:
    """Forwarding time per m³ (min) from stand removal and the k1/k2/c11 constants."""

    removal = settings.stand_removal_ut
    if removal <= 0:
        return 0.0
    return (
        settings.k1
        * (_FORWARDING_BASE_MINUTES + settings.k2 * removal + settings.c11 * math.sqrt(removal))
        / removal
    )


def forwarding_cost_per_m3(settings: CalculationSettings) -> float:
    """Forwarding cost (kr/m³): time factor at the SK rate plus the skidding-distance term."""

    return (forwarding_time_factor(settings) / 60) * settings.forwarding_sk + (
        settings.skidding_distance_sa / 100
    ) * _SKIDDING_COST_PER_100M


def price_per_m3(harvesting_cost_rate: float, divisor: float | None) -> float:
    if divisor is None or divisor <= 0:
        return 0.0
    return harvesting_cost_rate / divisor


def price_bin(
    item: AggregateBin,
    settings: CalculationSettings,
    divisors: DivisorTable,
    *,
    forwarding_cost: float | None = None,
) -> ResultRow:
    """Price one aggregate bin with the per-bin model."""

    if forwarding_cost is None:
        forwarding_cost = forwarding_cost_per_m3(settings)
    total_time = item.total_time
    total_volume = item.total_volume
    productivity = total_volume / (total_time / 3600) if total_time > 0 else 0.0
    harvesting_cost = (
        (total_time / total_volume) * (settings.harvesting_cost_rate / 3600) if total_volume > 0 else 0.0
    )
    unit_price = price_per_m3(
        settings.harvesting_cost_rate,
        divisors.get(item.species, dbh_class_index(item.dbh_class)),
    )
    return ResultRow(
        species=item.species,
        dbh_class=item.dbh_class,
        stems=item.stems,
        total_time=total_time,
        total_volume=total_volume,
        productivity=productivity,
        harvesting_cost=harvesting_cost,
        forwarding_cost_per_m3=forwarding_cost,
        price_per_m3=unit_price,
        total_cost=harvesting_cost + forwarding_cost - unit_price,
        total_price=unit_price * total_volume,
    )


def summarise_new_model(rows: Sequence[ResultRow], forwarding_cost: float) -> NewModelTotals:
    total_stems = sum(row.stems for row in rows)
    total_volume = sum(row.total_volume for row in rows)
    total_price = sum(row.total_price for row in rows)
    total_forwarding_cost = forwarding_cost * total_volume
    return NewModelTotals(
        total_stems=total_stems,
        total_volume=total_volume,
        average_price=total_price / total_volume if total_volume > 0 else 0.0,
        total_price=total_price,
        forwarding_cost_per_m3=forwarding_cost,
        total_forwarding_cost=total_forwarding_cost,
        combined_total=total_price + total_forwarding_cost,
    )


def summarise_legacy_model(
    total_stems: int, total_volume: float, legacy_prices: LegacyPriceTable
) -> LegacyModelTotals:
    """Price the whole dataset as one bin via the nearest average-stem-volume breakpoint."""

    average_volume = total_volume / total_stems if total_stems > 0 else 0.0
    legacy_price = legacy_prices.price_for_volume(average_volume)
    return LegacyModelTotals(
        total_stems=total_stems,
        total_volume=total_volume,
        average_volume=average_volume,
        average_price=legacy_price,
        total_price=legacy_price * total_volume,
    )


def calculate(
    records: Iterable[TreeRecord],
    settings: CalculationSettings,
    divisors: DivisorTable,
    legacy_prices: LegacyPriceTable,
) -> CalculationResult:
    """Run aggregation and both pricing models over ``records``.

    Pure function of its inputs: calling it twice with the same arguments yields equal
    results.
    """

    bins = aggregate_records(records, settings.max_per_tree_time)
    forwarding_cost = forwarding_cost_per_m3(settings)
    rows = tuple(
        price_bin(item, settings, divisors, forwarding_cost=forwarding_cost) for item in bins
    )
    new_totals = summarise_new_model(rows, forwarding_cost)
    legacy_totals = summarise_legacy_model(
        new_totals.total_stems, new_totals.total_volume, legacy_prices
    )
    return CalculationResult(rows=rows, new_totals=new_totals, legacy_totals=legacy_totals)


def species_price_matrix(
    harvesting_cost_rate: float, divisors: DivisorTable
) -> dict[SpeciesCategory, list[float]]:
    """Price per m³ for every species and diameter class (``0`` where unpriced)."""

    return {
        species: [
            price_per_m3(harvesting_cost_rate, divisors.get(species, index))
            for index in range(len(DBH_CLASSES))
        ]
        for species in SPECIES_ORDER
    }


__all__ = [
    "ResultRow",
    "NewModelTotals",
    "LegacyModelTotals",
    "CalculationResult",
    "forwarding_time_factor",
    "forwarding_cost_per_m3",
    "price_per_m3",
    "price_bin",
    "summarise_new_model",
    "summarise_legacy_model",
    "calculate",
    "species_price_matrix",
]
