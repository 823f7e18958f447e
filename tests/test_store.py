from __future__ import annotations

import logging
import sqlite3

import pytest

from hprcost.classification.species import SpeciesCategory
from hprcost.config.models import CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.store import (
    DIVISORS_KEY,
    LEGACY_PRICES_KEY,
    SETTINGS_KEY,
    MemoryStore,
    SQLiteStore,
    load_divisors,
    load_legacy_prices,
    load_stored_settings,
    save_divisors,
    save_legacy_prices,
    save_settings,
)


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return SQLiteStore(tmp_path / "nested" / "store.sqlite")


def test_get_missing_returns_none(store):
    assert store.get("nothing") is None


def test_set_then_get(store):
    store.set("key", {"a": [1, None, 2.5]})
    assert store.get("key") == {"a": [1, None, 2.5]}
    store.set("key", [3])
    assert store.get("key") == [3]


def test_memory_store_copies_values():
    store = MemoryStore()
    payload = {"a": [1]}
    store.set("key", payload)
    payload["a"].append(2)
    store.get("key")["a"].append(3)
    assert store.get("key") == {"a": [1]}
    assert "key" in store


def test_sqlite_store_persists_between_instances(tmp_path):
    path = tmp_path / "store.sqlite"
    SQLiteStore(path).set(LEGACY_PRICES_KEY, [1.0, 2.0])
    assert SQLiteStore(path).get(LEGACY_PRICES_KEY) == [1.0, 2.0]


def test_sqlite_store_ignores_undecodable_values(tmp_path):
    path = tmp_path / "store.sqlite"
    store = SQLiteStore(path)
    store.set("key", 1)
    conn = sqlite3.connect(path)
    with conn:
        conn.execute("UPDATE settings SET value_json = ? WHERE key = ?", ("{broken", "key"))
    conn.close()
    assert store.get("key") is None


def test_defaults_when_store_is_empty(store):
    assert load_divisors(store) == DivisorTable.default()
    assert load_legacy_prices(store) == LegacyPriceTable.default()
    assert load_stored_settings(store) == CalculationSettings()


def test_tables_round_trip(store):
    divisors = DivisorTable.default().with_divisor(SpeciesCategory.SPRUCE, 2, None)
    prices = LegacyPriceTable.default().with_price(3, 150.0)
    settings = CalculationSettings(harvesting_cost_rate=2000)

    save_divisors(store, divisors)
    save_legacy_prices(store, prices)
    save_settings(store, settings)

    assert load_divisors(store) == divisors
    assert load_legacy_prices(store) == prices
    assert load_stored_settings(store) == settings
    assert store.get(DIVISORS_KEY)["Gran"][2] is None


def test_empty_divisor_mapping_means_all_unset():
    store = MemoryStore({DIVISORS_KEY: {}})
    assert load_divisors(store) == DivisorTable.empty()


def test_malformed_entries_fall_back(caplog):
    store = MemoryStore({DIVISORS_KEY: "bad", LEGACY_PRICES_KEY: {"a": 1}, SETTINGS_KEY: [1, 2]})
    with caplog.at_level(logging.WARNING, logger="hprcost.store.tables"):
        assert load_divisors(store) == DivisorTable.default()
        assert load_legacy_prices(store) == LegacyPriceTable.default()
        assert load_stored_settings(store) == CalculationSettings()
    assert caplog.text.count("Ignoring malformed") == 3


def test_stored_settings_ignore_unknown_keys():
    store = MemoryStore({SETTINGS_KEY: {"k2": "0,8", "legacyField": 5}})
    settings = load_stored_settings(store)
    assert settings.k2 == pytest.approx(0.8)
    assert settings.k1 == pytest.approx(1.0)
