"""Group stems into (species, diameter class) bins."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from hprcost.classification.diameter import resolve_dbh_class
from hprcost.classification.species import SPECIES_ORDER, SpeciesCategory
from hprcost.config.models import PER_TREE_TIME_CAP_SECONDS
from hprcost.ingest.records import TreeRecord


@dataclass(slots=True)
class AggregateBin:
    """Running totals for one (species, diameter class) combination."""

    species: SpeciesCategory
    dbh_class: int
    records: list[TreeRecord] = field(default_factory=list)
    total_volume: float = 0.0
    total_time: float = 0.0

    @property
    def stems(self) -> int:
        return len(self.records)

    def add(self, record: TreeRecord, seconds: float) -> None:
        self.records.append(record)
        self.total_volume += record.stem_volume
        self.total_time += seconds


def per_stem_time(max_per_tree_time: float) -> float:
    """Seconds credited per stem; the cap can be lowered but never raised."""
    return min(max_per_tree_time, PER_TREE_TIME_CAP_SECONDS)


def aggregate_records(
    records: Iterable[TreeRecord],
    max_per_tree_time: float,
) -> list[AggregateBin]:
    """Accumulate stems into bins ordered by species priority, then ascending class.

    Stems without a diameter class are skipped and do not appear in any bin.
    """

    seconds = per_stem_time(max_per_tree_time)
    bins: dict[tuple[SpeciesCategory, int], AggregateBin] = {}
    for record in records:
        dbh_class = resolve_dbh_class(record.dbh)
        if dbh_class is None:
            continue
        key = (record.species_category, dbh_class)
        current = bins.get(key)
        if current is None:
            current = bins[key] = AggregateBin(species=record.species_category, dbh_class=dbh_class)
        current.add(record, seconds)
    order = {species: position for position, species in enumerate(SPECIES_ORDER)}
    return sorted(bins.values(), key=lambda item: (order[item.species], item.dbh_class))


__all__ = ["AggregateBin", "aggregate_records", "per_stem_time"]
