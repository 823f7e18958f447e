"""Load/save helpers mapping store entries onto settings and price tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from hprcost.config.models import SETTING_FIELDS, CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.store.base import KeyValueStore

logger = logging.getLogger(__name__)

DIVISORS_KEY = "speciesDivisors"
LEGACY_PRICES_KEY = "legacyPrices"
SETTINGS_KEY = "settings"


def load_divisors(store: KeyValueStore) -> DivisorTable:
    """Stored divisor table, or the packaged defaults when nothing usable is stored."""

    payload = store.get(DIVISORS_KEY)
    if payload is None:
        return DivisorTable.default()
    if not isinstance(payload, Mapping):
        logger.warning("Ignoring malformed %s entry; using default divisors", DIVISORS_KEY)
    return DivisorTable.from_mapping(payload)


def save_divisors(store: KeyValueStore, table: DivisorTable) -> None:
    store.set(DIVISORS_KEY, table.to_dict())


def load_legacy_prices(store: KeyValueStore) -> LegacyPriceTable:
    payload = store.get(LEGACY_PRICES_KEY)
    if payload is None:
        return LegacyPriceTable.default()
    if not isinstance(payload, list):
        logger.warning("Ignoring malformed %s entry; prices reset to unset", LEGACY_PRICES_KEY)
        return LegacyPriceTable.default()
    return LegacyPriceTable.from_prices(payload)


def save_legacy_prices(store: KeyValueStore, table: LegacyPriceTable) -> None:
    store.set(LEGACY_PRICES_KEY, table.prices)


def load_stored_settings(store: KeyValueStore) -> CalculationSettings:
    payload = store.get(SETTINGS_KEY)
    if payload is None:
        return CalculationSettings()
    if not isinstance(payload, Mapping):
        logger.warning("Ignoring malformed %s entry; using default settings", SETTINGS_KEY)
        return CalculationSettings()
    known = {key: value for key, value in payload.items() if key in SETTING_FIELDS}
    try:
        return CalculationSettings.model_validate(known)
    except ValidationError as exc:
        logger.warning("Stored settings rejected (%s); using defaults", exc)
        return CalculationSettings()


def save_settings(store: KeyValueStore, settings: CalculationSettings) -> None:
    store.set(SETTINGS_KEY, settings.model_dump())


__all__ = [
    "DIVISORS_KEY",
    "LEGACY_PRICES_KEY",
    "SETTINGS_KEY",
    "load_divisors",
    "save_divisors",
    "load_legacy_prices",
    "save_legacy_prices",
    "load_stored_settings",
    "save_settings",
]
