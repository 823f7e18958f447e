"""Calculation run log: one JSON line per ``calc`` invocation."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from uuid import uuid4

from hprcost.config.models import CalculationSettings
from hprcost.costing.pricing import CalculationResult
from hprcost.ingest.dataset import Dataset

SCHEMA_VERSION = "1.0"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def calculation_record(
    result: CalculationResult,
    dataset: Dataset,
    settings: CalculationSettings,
) -> dict[str, Any]:
    """Build the JSON-serialisable record appended after a calculation."""

    return {
        "record_type": "calculation",
        "schema_version": SCHEMA_VERSION,
        "run_id": uuid4().hex,
        "timestamp": _iso_now(),
        "sources": list(dataset.sources),
        "failures": [asdict(failure) for failure in dataset.failures],
        "stems_parsed": dataset.stem_count,
        "logs_parsed": dataset.log_count,
        "stems_binned": result.new_totals.total_stems,
        "bins": len(result.rows),
        "settings": settings.model_dump(),
        "new_totals": asdict(result.new_totals),
        "legacy_totals": asdict(result.legacy_totals),
    }


def append_run_record(path: str | Path, record: Mapping[str, Any]) -> Path:
    """Append ``record`` to the log at ``path`` as a single compact line."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    line = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    with target.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
    return target


def read_run_records(path: str | Path) -> list[dict[str, Any]]:
    """Records previously appended to ``path``, oldest first (blank lines skipped)."""

    with Path(path).open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


__all__ = ["SCHEMA_VERSION", "calculation_record", "append_run_record", "read_run_records"]
