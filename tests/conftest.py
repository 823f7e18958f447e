from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_HPR = """<?xml version="1.0" encoding="UTF-8"?>
<HarvestedProduction xmlns="urn:skogforsk:stanford2010" version="3.0">
  <Machine>
    <SpeciesGroupDefinition>
      <SpeciesGroupKey>1</SpeciesGroupKey>
      <SpeciesGroupName>Tall</SpeciesGroupName>
    </SpeciesGroupDefinition>
    <SpeciesGroupDefinition>
      <SpeciesGroupKey>2</SpeciesGroupKey>
      <SpeciesGroupName>Gran</SpeciesGroupName>
    </SpeciesGroupDefinition>
    <SpeciesGroupDefinition>
      <SpeciesGroupKey>3</SpeciesGroupKey>
      <SpeciesGroupName>Björk</SpeciesGroupName>
    </SpeciesGroupDefinition>
    <Stem StemKey="101" HarvestDate="2024-05-01T08:00:00">
      <SpeciesGroupKey>2</SpeciesGroupKey>
      <SingleTreeProcessedStem>
        <DBH>150</DBH>
        <Log>
          <LogVolume logVolumeCategory="m3sob">0.5</LogVolume>
          <LogVolume logVolumeCategory="m3sub">0,45</LogVolume>
        </Log>
        <Log>
          <LogVolume logVolumeCategory="m3sub">0.35</LogVolume>
        </Log>
      </SingleTreeProcessedStem>
    </Stem>
    <Stem StemKey="102" HarvestDate="2024-05-01T08:01:00" DBH="230">
      <SpeciesGroupKey>1</SpeciesGroupKey>
      <Log Volume="0.3"/>
      <Log VolumeDm3="250"/>
    </Stem>
    <Stem StemVolume="0.2">
      <SpeciesGroupKey>3</SpeciesGroupKey>
      <SingleTreeProcessedStem>
        <DBH>95</DBH>
      </SingleTreeProcessedStem>
    </Stem>
    <Stem StemKey="104" StemVolume="1.2">
      <SpeciesGroupKey>2</SpeciesGroupKey>
    </Stem>
  </Machine>
</HarvestedProduction>
"""


@pytest.fixture
def sample_hpr_text() -> str:
    """Four stems: spruce 150 mm, pine 230 mm, birch 95 mm, and a spruce without DBH."""
    return SAMPLE_HPR


@pytest.fixture
def sample_hpr_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.hpr"
    path.write_text(SAMPLE_HPR, encoding="utf-8")
    return path


@pytest.fixture
def broken_hpr_file(tmp_path: Path) -> Path:
    path = tmp_path / "broken.hpr"
    path.write_text("<HarvestedProduction><Stem>", encoding="utf-8")
    return path
