from __future__ import annotations

import json

from hprcost.config.models import CalculationSettings
from hprcost.costing.divisors import DivisorTable
from hprcost.costing.legacy import LegacyPriceTable
from hprcost.costing.pricing import calculate
from hprcost.ingest.dataset import load_hpr_files
from hprcost.telemetry import append_run_record, calculation_record, read_run_records


def test_append_run_record_creates_parent(tmp_path):
    path = tmp_path / "logs" / "runs.jsonl"
    assert append_run_record(path, {"a": 1}) == path
    append_run_record(path, {"b": "ö"})
    assert read_run_records(path) == [{"a": 1}, {"b": "ö"}]
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_calculation_record(sample_hpr_file, broken_hpr_file):
    dataset = load_hpr_files([sample_hpr_file, broken_hpr_file])
    settings = CalculationSettings()
    result = calculate(dataset.records, settings, DivisorTable.default(), LegacyPriceTable.default())

    record = calculation_record(result, dataset, settings)

    assert record["record_type"] == "calculation"
    assert record["stems_parsed"] == 4
    assert record["stems_binned"] == 3
    assert record["logs_parsed"] == 4
    assert record["bins"] == 3
    assert [failure["source"] for failure in record["failures"]] == [str(broken_hpr_file)]
    assert record["settings"]["harvesting_cost_rate"] == 1800.0
    json.dumps(record)
