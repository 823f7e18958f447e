"""Per-species, per-diameter-class divisor table."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from hprcost.classification.diameter import DBH_CLASSES
from hprcost.classification.species import SPECIES_ORDER, SpeciesCategory
from hprcost.core.errors import HPRValueError

_DEFAULT_DIVISORS: dict[SpeciesCategory, tuple[float, ...]] = {
    SpeciesCategory.PINE: (
        2.5, 3.8, 6.2, 9.2, 12.7, 16.8, 21.1, 25.3, 29.6, 33.8, 38.1, 42.0, 46.6,
        49.7, 53.4, 55.4, 57.2, 56.9, 60.1, 57.6, 54.7, 57.8, 54.8, 54.0, 57.0, 57.8,
    ),
    SpeciesCategory.SPRUCE: (
        3.4, 5.1, 7.6, 10.7, 14.1, 17.8, 21.8, 25.7, 30.3, 34.7, 38.9, 43.2, 47.0,
        49.5, 51.8, 53.1, 54.1, 53.9, 54.2, 52.7, 52.6, 51.8, 50.4, 54.1, 48.4, 46.8,
    ),
    SpeciesCategory.BROADLEAF: (
        2.8, 4.1, 6.1, 8.3, 11.1, 14.0, 16.7, 20.6, 23.2, 26.2, 28.3, 31.0, 33.9,
        34.1, 36.1, 38.9, 39.6, 38.3, 39.0, 42.4, 41.0, 41.0, 41.0, 41.0, 41.0, 41.0,
    ),
}


def normalise_divisor(value: object) -> float | None:
    """Keep finite, strictly positive numbers; everything else means "unset"."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return float(value)


def _ensure_divisor_row(values: object) -> tuple[float | None, ...]:
    sequence = values if isinstance(values, Sequence) and not isinstance(values, str) else ()
    return tuple(
        normalise_divisor(sequence[index]) if index < len(sequence) else None
        for index in range(len(DBH_CLASSES))
    )


def _check_index(class_index: int) -> None:
    if not 0 <= class_index < len(DBH_CLASSES):
        raise HPRValueError(
            f"class_index must be within 0..{len(DBH_CLASSES) - 1} (got {class_index})."
        )


@dataclass(frozen=True)
class DivisorTable:
    """Divisors converting the harvesting cost rate into a price per m³.

    Each species row has one slot per entry in :data:`DBH_CLASSES`. ``None`` marks an unpriced
    class.
    """

    rows: Mapping[SpeciesCategory, tuple[float | None, ...]]

    @classmethod
    def default(cls) -> DivisorTable:
        return cls({species: _ensure_divisor_row(_DEFAULT_DIVISORS[species]) for species in SPECIES_ORDER})

    @classmethod
    def empty(cls) -> DivisorTable:
        return cls({species: _ensure_divisor_row(()) for species in SPECIES_ORDER})

    @classmethod
    def from_mapping(cls, payload: object) -> DivisorTable:
        """Normalise a stored payload (keyed by category value) into a table.

        A payload that is not a mapping yields the default table. Missing species or slots and
        invalid divisors become unset.
        """

        if not isinstance(payload, Mapping):
            return cls.default()
        return cls({species: _ensure_divisor_row(payload.get(species.value)) for species in SPECIES_ORDER})

    def to_dict(self) -> dict[str, list[float | None]]:
        return {species.value: list(self.rows[species]) for species in SPECIES_ORDER}

    def get(self, species: SpeciesCategory, class_index: int) -> float | None:
        if not 0 <= class_index < len(DBH_CLASSES):
            return None
        return self.rows[species][class_index]

    def with_divisor(
        self, species: SpeciesCategory, class_index: int, value: float | None
    ) -> DivisorTable:
        """Return a copy with one slot replaced (``None`` or non-positive clears it)."""

        _check_index(class_index)
        row = list(self.rows[species])
        row[class_index] = normalise_divisor(value)
        rows = dict(self.rows)
        rows[species] = tuple(row)
        return DivisorTable(rows)


__all__ = ["DivisorTable", "normalise_divisor"]
