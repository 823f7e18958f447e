"""Species and diameter classification helpers."""

from .diameter import DBH_CLASSES, dbh_class_index, resolve_dbh_class
from .species import (
    DEFAULT_CATEGORY,
    SPECIES_ORDER,
    SpeciesCategory,
    classify_species,
    normalize_species_identifier,
    parse_species_category,
)

__all__ = [
    "DBH_CLASSES",
    "dbh_class_index",
    "resolve_dbh_class",
    "DEFAULT_CATEGORY",
    "SPECIES_ORDER",
    "SpeciesCategory",
    "classify_species",
    "normalize_species_identifier",
    "parse_species_category",
]
