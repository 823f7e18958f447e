"""Species-name classification into pricing categories."""

from __future__ import annotations

import unicodedata
from enum import Enum

from hprcost.core.errors import HPRValueError


class SpeciesCategory(str, Enum):
    """Species categories priced by the divisor table (values follow the Swedish labels)."""

    PINE = "Tall"
    SPRUCE = "Gran"
    BROADLEAF = "Löv"

    @property
    def label(self) -> str:
        """English display label."""
        return _ENGLISH_LABELS[self]


_ENGLISH_LABELS: dict[SpeciesCategory, str] = {
    SpeciesCategory.PINE: "Pine",
    SpeciesCategory.SPRUCE: "Spruce",
    SpeciesCategory.BROADLEAF: "Broadleaf",
}

#: Output ordering for result rows and per-species summaries.
SPECIES_ORDER: tuple[SpeciesCategory, ...] = (
    SpeciesCategory.PINE,
    SpeciesCategory.SPRUCE,
    SpeciesCategory.BROADLEAF,
)

DEFAULT_CATEGORY = SpeciesCategory.BROADLEAF

# Checked in order; a name matching two families lands in the first one.
_KEYWORD_FAMILIES: tuple[tuple[SpeciesCategory, tuple[str, ...]], ...] = (
    (SpeciesCategory.PINE, ("TALL", "PINE", "LARK")),
    (SpeciesCategory.SPRUCE, ("GRAN", "SPRUCE", "BARKBORRE")),
    (SpeciesCategory.BROADLEAF, ("LOV", "BJORK", "ASP", "BOK", "EK", "OVR")),
)


def normalize_species_identifier(value: str) -> str:
    """Strip diacritics and uppercase (``"Björk"`` → ``"BJORK"``)."""

    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.upper()


def classify_species(raw_name: str | None) -> SpeciesCategory:
    """Map a free-text species name onto a :class:`SpeciesCategory`.

    Unknown, empty, or missing names fall back to :data:`DEFAULT_CATEGORY`.
    """

    if not raw_name:
        return DEFAULT_CATEGORY
    normalized = normalize_species_identifier(raw_name)
    for category, keywords in _KEYWORD_FAMILIES:
        if any(keyword in normalized for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def parse_species_category(value: str | SpeciesCategory) -> SpeciesCategory:
    """Resolve a category from its enum value, member name, or English label."""

    if isinstance(value, SpeciesCategory):
        return value
    key = normalize_species_identifier(value.strip())
    for category in SpeciesCategory:
        candidates = {
            normalize_species_identifier(category.value),
            category.name,
            category.label.upper(),
        }
        if key in candidates:
            return category
    raise HPRValueError(
        f"Unknown species category '{value}'. Expected one of: "
        + ", ".join(f"{c.value} ({c.label})" for c in SPECIES_ORDER)
    )


__all__ = [
    "SpeciesCategory",
    "SPECIES_ORDER",
    "DEFAULT_CATEGORY",
    "normalize_species_identifier",
    "classify_species",
    "parse_species_category",
]
