"""Calculator session tying the dataset, settings, tables, and store together."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from hprcost.classification.species import SpeciesCategory
from hprcost.config.models import CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.costing.legacy_import import BulkImportResult, apply_bulk_pricing
from hprcost.costing.pricing import CalculationResult, calculate
from hprcost.ingest.dataset import Dataset, load_hpr_files
from hprcost.store.base import KeyValueStore, MemoryStore
from hprcost.store.tables import (
    load_divisors,
    load_legacy_prices,
    load_stored_settings,
    save_divisors,
    save_legacy_prices,
    save_settings,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalculatorSession:
    """Single owner of the mutable calculator state.

    Settings and tables are read from ``store`` on creation and written back whenever an
    admin operation changes them. :meth:`calculate` itself never touches the store.
    """

    store: KeyValueStore = field(default_factory=MemoryStore)
    dataset: Dataset = field(default_factory=Dataset)
    settings: CalculationSettings = field(init=False)
    divisors: DivisorTable = field(init=False)
    legacy_prices: LegacyPriceTable = field(init=False)

    def __post_init__(self) -> None:
        self.settings = load_stored_settings(self.store)
        self.divisors = load_divisors(self.store)
        self.legacy_prices = load_legacy_prices(self.store)

    def load_files(self, paths: Iterable[str | Path], *, append: bool = False) -> Dataset:
        """Replace (or extend, with ``append``) the dataset with the stems in ``paths``."""

        if not append:
            self.dataset = Dataset()
        return load_hpr_files(paths, dataset=self.dataset)

    def reset(self) -> None:
        self.dataset = Dataset()

    def calculate(self, settings: CalculationSettings | None = None) -> CalculationResult:
        result = calculate(
            self.dataset.records,
            settings or self.settings,
            self.divisors,
            self.legacy_prices,
        )
        if result.is_empty:
            logger.info("No stems with a usable diameter in %d record(s)", self.dataset.stem_count)
        return result

    def update_settings(self, settings: CalculationSettings) -> None:
        self.settings = settings
        save_settings(self.store, settings)

    def set_divisor(self, species: SpeciesCategory, class_index: int, value: float | None) -> None:
        self.divisors = self.divisors.with_divisor(species, class_index, value)
        save_divisors(self.store, self.divisors)

    def reset_divisors(self) -> None:
        self.divisors = DivisorTable.default()
        save_divisors(self.store, self.divisors)

    def set_legacy_price(self, index: int, price: float) -> None:
        self.legacy_prices = self.legacy_prices.with_price(index, price)
        save_legacy_prices(self.store, self.legacy_prices)

    def clear_legacy_prices(self) -> None:
        self.legacy_prices = LegacyPriceTable.default()
        save_legacy_prices(self.store, self.legacy_prices)

    def import_legacy_prices(self, text: str) -> BulkImportResult:
        """Apply pasted price text; the store is only written when something changed."""

        outcome = apply_bulk_pricing(self.legacy_prices, text)
        if outcome.updated:
            self.legacy_prices = outcome.table
            save_legacy_prices(self.store, self.legacy_prices)
        return outcome


__all__ = ["CalculatorSession"]
