"""HPR (StanForD 2010 harvested production) document parsing."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
import zipfile
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

from hprcost.classification.species import classify_species
from hprcost.core.numeric import parse_number
from hprcost.ingest.records import HPRParseResult, TreeRecord
from hprcost.ingest.volume import resolve_log_volume, resolve_stem_attribute_volume
from hprcost.ingest.xml_lookup import Node, element_text, first_local, first_local_text, iter_local

logger = logging.getLogger(__name__)

#: File suffixes treated as HPR documents (also inside ``.zip`` archives).
HPR_SUFFIXES = (".hpr", ".xml")


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def species_name_index(document: Node) -> dict[str, str]:
    """Map ``SpeciesGroupKey`` → ``SpeciesGroupName`` from the document's definitions."""

    names: dict[str, str] = {}
    for definition in iter_local(document, "SpeciesGroupDefinition"):
        key = first_local_text(definition, "SpeciesGroupKey")
        name = first_local_text(definition, "SpeciesGroupName")
        if key and name:
            names[key] = name
    return names


def _resolve_dbh(stem: ET.Element) -> float | None:
    attribute_value = parse_number(stem.get("DBH"))
    if attribute_value > 0:
        return attribute_value
    text_value = parse_number(element_text(first_local(stem, "DBH")))
    return text_value if text_value > 0 else None


def parse_hpr_document(document: Node) -> HPRParseResult:
    """Extract :class:`TreeRecord` entries from a parsed HPR tree.

    Parameters
    ----------
    document:
        ``ElementTree`` or root ``Element``; element names are matched without namespaces.

    Returns
    -------
    HPRParseResult
        Stems in document order and the number of ``Log`` elements encountered.
    """

    if isinstance(document, ET.Element):
        document = ET.ElementTree(document)
    species_names = species_name_index(document)
    records: list[TreeRecord] = []
    log_count = 0

    for index, stem in enumerate(iter_local(document, "Stem")):
        stem_key = stem.get("StemKey")
        if stem_key is None:
            stem_key = f"stem_{index}"
        harvest_date = stem.get("HarvestDate")
        if harvest_date is None:
            harvest_date = _iso_now()

        group_key = first_local_text(stem, "SpeciesGroupKey")
        species_name = species_names.get(group_key) if group_key else None

        log_volume = 0.0
        for log in iter_local(stem, "Log"):
            log_count += 1
            log_volume += resolve_log_volume(log)
        stem_volume = log_volume if log_volume > 0 else resolve_stem_attribute_volume(stem)

        records.append(
            TreeRecord(
                stem_key=stem_key,
                harvest_date=harvest_date,
                stem_volume=stem_volume,
                species_category=classify_species(species_name),
                dbh=_resolve_dbh(stem),
                species_group_key=group_key,
                species_name=species_name,
            )
        )

    return HPRParseResult(records=tuple(records), log_count=log_count)


def parse_hpr_text(content: str | bytes) -> HPRParseResult:
    """Parse raw HPR XML content.

    Raises
    ------
    xml.etree.ElementTree.ParseError
        When ``content`` is not well-formed XML.
    """

    root = ET.fromstring(content)
    return parse_hpr_document(ET.ElementTree(root))


def iter_hpr_sources(path: str | Path) -> Iterator[tuple[str, bytes]]:
    """Yield ``(label, content)`` for an HPR file or each HPR member of a ``.zip`` archive.

    The label is the file path, or ``<archive path>:<member name>`` for archive members.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix.lower() == ".zip":
        with zipfile.ZipFile(path) as archive:
            for member in archive.infolist():
                if member.is_dir() or not member.filename.lower().endswith(HPR_SUFFIXES):
                    continue
                yield f"{path}:{member.filename}", archive.read(member)
        return
    yield str(path), path.read_bytes()


def read_hpr_file(path: str | Path) -> HPRParseResult:
    """Parse every HPR document found at ``path`` (plain file or ``.zip``) into one result.

    Any malformed member fails the whole call; :func:`hprcost.ingest.dataset.load_hpr_files`
    recovers per member instead.
    """

    records: list[TreeRecord] = []
    log_count = 0
    for name, content in iter_hpr_sources(path):
        result = parse_hpr_text(content)
        logger.debug("Parsed %s: %d stems, %d logs", name, len(result.records), result.log_count)
        records.extend(result.records)
        log_count += result.log_count
    return HPRParseResult(records=tuple(records), log_count=log_count)


__all__ = [
    "HPR_SUFFIXES",
    "species_name_index",
    "parse_hpr_document",
    "parse_hpr_text",
    "iter_hpr_sources",
    "read_hpr_file",
]
