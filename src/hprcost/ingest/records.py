"""Parsed harvester stem records."""

from __future__ import annotations

from dataclasses import dataclass

from hprcost.classification.diameter import resolve_dbh_class
from hprcost.classification.species import SpeciesCategory


@dataclass(frozen=True)
class TreeRecord:
    """One felled stem as reported in an HPR file.

    Attributes
    ----------
    stem_key:
        ``StemKey`` attribute, or ``stem_<index>`` when the file omits it.
    harvest_date:
        ``HarvestDate`` attribute as written in the file (ISO timestamp of parsing when absent).
    stem_volume:
        Volume in m³ (summed log volumes, falling back to stem attributes).
    dbh:
        Diameter at breast height (mm); ``None`` excludes the stem from binning.
    species_category:
        Pricing category resolved from the species-group name.
    species_group_key, species_name:
        Raw identifiers from the file, kept for diagnostics.
    """

    stem_key: str
    harvest_date: str
    stem_volume: float
    species_category: SpeciesCategory
    dbh: float | None = None
    species_group_key: str | None = None
    species_name: str | None = None

    @property
    def dbh_class(self) -> int | None:
        return resolve_dbh_class(self.dbh)


@dataclass(frozen=True)
class HPRParseResult:
    """Records extracted from one document plus the number of ``Log`` elements seen."""

    records: tuple[TreeRecord, ...]
    log_count: int = 0


__all__ = ["TreeRecord", "HPRParseResult"]
