from pathlib import Path

import pandas as pd
import pytest

from hprcost.classification.species import SpeciesCategory
from hprcost.cli.main import app
from hprcost.costing.divisors import DivisorTable
from hprcost.store import SQLiteStore, save_divisors
from hprcost.telemetry import read_run_records
from tests.cli import CliRunner, cli_text


@pytest.fixture
def store_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "store.sqlite"
    monkeypatch.setenv("HPRCOST_STORE", str(path))
    return path


def test_calc_exports(tmp_path: Path, sample_hpr_file: Path, store_path: Path) -> None:
    runner = CliRunner()
    out_path = tmp_path / "results.csv"
    out_dir = tmp_path / "export"
    telemetry_path = tmp_path / "runs.jsonl"

    result = runner.invoke(
        app,
        [
            "calc",
            str(sample_hpr_file),
            "--out",
            str(out_path),
            "--out-dir",
            str(out_dir),
            "--telemetry-log",
            str(telemetry_path),
        ],
        prog_name="hprcost",
    )

    assert result.exit_code == 0, result.stdout
    text = cli_text(result)
    assert "Parsed 4 stems, 4 logs" in text
    assert "Per-bin pricing" in text

    frame = pd.read_csv(out_path)
    assert frame["species"].tolist() == ["Tall", "Gran", "Löv"]
    assert sorted(path.name for path in out_dir.iterdir()) == [
        "all.csv",
        "broadleaf.csv",
        "pine.csv",
        "spruce.csv",
        "totals.csv",
    ]

    (record,) = read_run_records(telemetry_path)
    assert record["stems_binned"] == 3


def test_calc_uses_stored_divisors_and_overrides(
    tmp_path: Path, sample_hpr_file: Path, store_path: Path
) -> None:
    save_divisors(
        SQLiteStore(store_path),
        DivisorTable.empty().with_divisor(SpeciesCategory.SPRUCE, 4, 20),
    )
    out_path = tmp_path / "results.csv"

    result = CliRunner().invoke(
        app,
        ["calc", str(sample_hpr_file), "--harvesting-cost-rate", "900", "--out", str(out_path)],
        prog_name="hprcost",
    )

    assert result.exit_code == 0, result.stdout
    frame = pd.read_csv(out_path).set_index("species")
    assert frame.loc["Gran", "price_per_m3"] == pytest.approx(45.0)
    assert frame.loc["Tall", "price_per_m3"] == 0.0


def test_calc_config_file(tmp_path: Path, sample_hpr_file: Path, store_path: Path) -> None:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text("settings:\n  max_per_tree_time: 10\n", encoding="utf-8")
    out_path = tmp_path / "results.csv"

    result = CliRunner().invoke(
        app,
        ["calc", str(sample_hpr_file), "--config", str(config_path), "--out", str(out_path)],
        prog_name="hprcost",
    )

    assert result.exit_code == 0, result.stdout
    assert pd.read_csv(out_path)["total_time"].tolist() == [10.0, 10.0, 10.0]


def test_calc_rejects_unknown_config_keys(tmp_path: Path, sample_hpr_file: Path, store_path: Path) -> None:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text("harvest_rate: 10\n", encoding="utf-8")

    result = CliRunner().invoke(
        app, ["calc", str(sample_hpr_file), "--config", str(config_path)], prog_name="hprcost"
    )

    assert result.exit_code == 2
    assert "Unknown setting" in cli_text(result)


def test_calc_skips_broken_files(
    sample_hpr_file: Path, broken_hpr_file: Path, store_path: Path
) -> None:
    result = CliRunner().invoke(
        app, ["calc", str(broken_hpr_file), str(sample_hpr_file)], prog_name="hprcost"
    )

    assert result.exit_code == 0, result.stdout
    text = cli_text(result)
    assert "Skipped" in text
    assert "Parsed 4 stems, 4 logs" in text


def test_calc_without_diameters_exits_nonzero(tmp_path: Path, store_path: Path) -> None:
    path = tmp_path / "nodbh.hpr"
    path.write_text(
        "<HarvestedProduction><Stem StemKey='1' StemVolume='0.4'/></HarvestedProduction>",
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["calc", str(path)], prog_name="hprcost")

    assert result.exit_code == 1
    text = cli_text(result)
    assert "Parsed 1 stems, 0 logs" in text
    assert "No stems detected" in text


def test_classify() -> None:
    result = CliRunner().invoke(app, ["classify", "Björk"], prog_name="hprcost")

    assert result.exit_code == 0
    assert "Löv (Broadleaf)" in cli_text(result)
