"""HPR ingestion: XML lookup, volume resolution, record extraction, datasets."""

from .dataset import Dataset, LoadFailure, load_hpr_files
from .hpr import (
    HPR_SUFFIXES,
    iter_hpr_sources,
    parse_hpr_document,
    parse_hpr_text,
    read_hpr_file,
    species_name_index,
)
from .records import HPRParseResult, TreeRecord
from .volume import resolve_log_volume, resolve_stem_attribute_volume

__all__ = [
    "Dataset",
    "LoadFailure",
    "load_hpr_files",
    "HPR_SUFFIXES",
    "iter_hpr_sources",
    "parse_hpr_document",
    "parse_hpr_text",
    "read_hpr_file",
    "species_name_index",
    "HPRParseResult",
    "TreeRecord",
    "resolve_log_volume",
    "resolve_stem_attribute_volume",
]
