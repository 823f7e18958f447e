"""Legacy single-bin price table keyed by average stem volume."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from hprcost.core.errors import HPRValueError

#: Average stem volume breakpoints (m³) of the legacy price list.
LEGACY_AVERAGE_VOLUMES: tuple[float, ...] = (
    0.2, 0.25, 0.3, 0.35, 0.4, 0.45, 0.5, 0.55, 0.6, 0.65, 0.7, 0.75, 0.8, 0.9, 1.0,
)


@dataclass(frozen=True)
class LegacyPriceEntry:
    average_volume: float
    price: float = 0.0


@dataclass(frozen=True)
class LegacyPriceTable:
    """Fixed set of breakpoints with their prices (``0`` = unset)."""

    entries: tuple[LegacyPriceEntry, ...]

    @classmethod
    def default(cls) -> LegacyPriceTable:
        return cls(tuple(LegacyPriceEntry(volume) for volume in LEGACY_AVERAGE_VOLUMES))

    @classmethod
    def from_prices(cls, prices: Iterable[object]) -> LegacyPriceTable:
        """Build a table from stored prices in breakpoint order (invalid → 0)."""

        values = list(prices) if not isinstance(prices, (str, bytes)) else []
        entries = []
        for index, volume in enumerate(LEGACY_AVERAGE_VOLUMES):
            raw = values[index] if index < len(values) else 0.0
            price = float(raw) if isinstance(raw, (int, float)) and not isinstance(raw, bool) else 0.0
            entries.append(LegacyPriceEntry(volume, price if math.isfinite(price) else 0.0))
        return cls(tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def prices(self) -> list[float]:
        return [entry.price for entry in self.entries]

    @property
    def assigned_count(self) -> int:
        """Number of breakpoints with a price set."""
        return sum(1 for entry in self.entries if entry.price > 0)

    def with_price(self, index: int, price: float) -> LegacyPriceTable:
        if not 0 <= index < len(self.entries):
            raise HPRValueError(f"index must be within 0..{len(self.entries) - 1} (got {index}).")
        entries = list(self.entries)
        entries[index] = replace(entries[index], price=float(price))
        return LegacyPriceTable(tuple(entries))

    def nearest_entry(self, average_volume: float) -> LegacyPriceEntry | None:
        """Entry whose breakpoint is closest to ``average_volume``; first one wins ties."""

        if not self.entries:
            return None
        nearest = self.entries[0]
        min_diff = abs(nearest.average_volume - average_volume)
        for entry in self.entries[1:]:
            diff = abs(entry.average_volume - average_volume)
            if diff < min_diff:
                nearest = entry
                min_diff = diff
        return nearest

    def price_for_volume(self, average_volume: float | None) -> float:
        """Legacy price for an average stem volume (``0`` for empty/non-positive input)."""

        if not average_volume or average_volume <= 0:
            return 0.0
        entry = self.nearest_entry(average_volume)
        return entry.price if entry is not None else 0.0


def breakpoint_index(
    value: float,
    *,
    tolerance: float = 1e-6,
    volumes: Sequence[float] = LEGACY_AVERAGE_VOLUMES,
) -> int | None:
    """Index of the breakpoint equal to ``value`` within ``tolerance``."""

    for index, volume in enumerate(volumes):
        if abs(volume - value) < tolerance:
            return index
    return None


__all__ = [
    "LEGACY_AVERAGE_VOLUMES",
    "LegacyPriceEntry",
    "LegacyPriceTable",
    "breakpoint_index",
]
