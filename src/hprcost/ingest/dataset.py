"""In-memory dataset assembled from one or more HPR files."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from hprcost.ingest.hpr import iter_hpr_sources, parse_hpr_text
from hprcost.ingest.records import HPRParseResult, TreeRecord

logger = logging.getLogger(__name__)

# Failures confined to one document; other members of the same archive are still read.
_DOCUMENT_ERRORS = (ET.ParseError, UnicodeDecodeError)
# Failures opening or reading a file (or archive) as a whole.
_FILE_ERRORS = (OSError, zipfile.BadZipFile)


@dataclass(frozen=True)
class LoadFailure:
    """A source that contributed no stems: file path or ``<archive>:<member>`` label."""

    source: str
    reason: str


@dataclass(slots=True)
class Dataset:
    """Stems accumulated across uploads.

    Files are appended as-is; loading the same file twice doubles its stems (and a broken
    file passed twice is reported twice).
    """

    records: list[TreeRecord] = field(default_factory=list)
    log_count: int = 0
    sources: list[str] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def stem_count(self) -> int:
        return len(self.records)

    def is_empty(self) -> bool:
        return not self.records

    def extend(self, result: HPRParseResult, *, source: str | None = None) -> None:
        self.records.extend(result.records)
        self.log_count += result.log_count
        if source is not None:
            self.sources.append(source)

    def record_failure(self, source: str, exc: Exception) -> None:
        logger.warning("Error parsing file %s: %s", source, exc)
        self.failures.append(LoadFailure(source=source, reason=str(exc)))

    def clear(self) -> None:
        self.records.clear()
        self.log_count = 0
        self.sources.clear()
        self.failures.clear()


def load_hpr_files(
    paths: Iterable[str | Path],
    *,
    dataset: Dataset | None = None,
) -> Dataset:
    """Parse ``paths`` in order into ``dataset`` (a fresh one when omitted).

    Each document is handled on its own: a malformed file, or a malformed member of a
    ``.zip`` archive, contributes no stems, is logged and recorded in
    :attr:`Dataset.failures`, and loading carries on with the next document.
    """

    target = dataset if dataset is not None else Dataset()
    for raw_path in paths:
        path = Path(raw_path)
        try:
            for label, content in iter_hpr_sources(path):
                try:
                    result = parse_hpr_text(content)
                except _DOCUMENT_ERRORS as exc:
                    target.record_failure(label, exc)
                    continue
                logger.debug("Parsed %s: %d stems, %d logs", label, len(result.records), result.log_count)
                target.extend(result, source=label)
        except _FILE_ERRORS as exc:
            target.record_failure(str(path), exc)
    logger.info(
        "Dataset holds %d stems and %d logs from %d document(s)",
        target.stem_count,
        target.log_count,
        len(target.sources),
    )
    return target


__all__ = ["Dataset", "LoadFailure", "load_hpr_files"]
