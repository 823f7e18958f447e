from __future__ import annotations

import pytest

from hprcost.classification.species import SpeciesCategory
from hprcost.config.models import CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.pipeline import CalculatorSession
from hprcost.store import DIVISORS_KEY, LEGACY_PRICES_KEY, SETTINGS_KEY, MemoryStore


def test_session_starts_from_defaults():
    session = CalculatorSession()
    assert session.settings == CalculationSettings()
    assert session.divisors == DivisorTable.default()
    assert session.legacy_prices.assigned_count == 0
    assert session.dataset.is_empty()


def test_session_reads_store_on_creation():
    store = MemoryStore({LEGACY_PRICES_KEY: [90.0] * 15, SETTINGS_KEY: {"harvesting_cost_rate": 1000}})
    session = CalculatorSession(store=store)
    assert session.settings.harvesting_cost_rate == 1000.0
    assert session.legacy_prices.assigned_count == 15


def test_load_replaces_or_appends(sample_hpr_file):
    session = CalculatorSession()
    session.load_files([sample_hpr_file])
    session.load_files([sample_hpr_file])
    assert session.dataset.stem_count == 4
    session.load_files([sample_hpr_file], append=True)
    assert session.dataset.stem_count == 8
    session.reset()
    assert session.dataset.is_empty()


def test_calculate_uses_session_state(sample_hpr_file):
    session = CalculatorSession()
    session.load_files([sample_hpr_file])
    session.set_legacy_price(6, 100.0)

    result = session.calculate()

    assert result.new_totals.total_stems == 3
    assert result.legacy_totals.average_price == pytest.approx(100.0)

    cheaper = session.calculate(CalculationSettings(harvesting_cost_rate=900))
    assert cheaper.new_totals.total_price == pytest.approx(result.new_totals.total_price / 2)


def test_calculate_without_stems_is_empty():
    session = CalculatorSession()
    assert session.calculate().is_empty


def test_admin_operations_persist():
    store = MemoryStore()
    session = CalculatorSession(store=store)

    session.set_divisor(SpeciesCategory.PINE, 0, 5.0)
    session.update_settings(CalculationSettings(k1=1.1))
    session.set_legacy_price(0, 80.0)

    reloaded = CalculatorSession(store=store)
    assert reloaded.divisors.get(SpeciesCategory.PINE, 0) == 5.0
    assert reloaded.settings.k1 == pytest.approx(1.1)
    assert reloaded.legacy_prices.prices[0] == 80.0

    reloaded.reset_divisors()
    reloaded.clear_legacy_prices()
    again = CalculatorSession(store=store)
    assert again.divisors == DivisorTable.default()
    assert again.legacy_prices.assigned_count == 0


def test_import_only_writes_store_when_updated():
    store = MemoryStore()
    session = CalculatorSession(store=store)

    assert not session.import_legacy_prices("nothing here").updated
    assert LEGACY_PRICES_KEY not in store

    outcome = session.import_legacy_prices("0.20\t110")
    assert outcome.updated
    assert store.get(LEGACY_PRICES_KEY)[0] == 110.0
    assert DIVISORS_KEY not in store
