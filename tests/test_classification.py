from __future__ import annotations

import math

import pytest

from hprcost.classification import (
    DBH_CLASSES,
    DEFAULT_CATEGORY,
    SpeciesCategory,
    classify_species,
    dbh_class_index,
    normalize_species_identifier,
    parse_species_category,
    resolve_dbh_class,
)
from hprcost.core.errors import HPRValueError


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Tall", SpeciesCategory.PINE),
        ("Scots pine", SpeciesCategory.PINE),
        ("Lärk", SpeciesCategory.PINE),
        ("Gran", SpeciesCategory.SPRUCE),
        ("Norway spruce", SpeciesCategory.SPRUCE),
        ("Barkborregran", SpeciesCategory.SPRUCE),
        ("Björk", SpeciesCategory.BROADLEAF),
        ("Asp", SpeciesCategory.BROADLEAF),
        ("Övrigt löv", SpeciesCategory.BROADLEAF),
        ("Contorta", SpeciesCategory.BROADLEAF),
        ("", SpeciesCategory.BROADLEAF),
        (None, SpeciesCategory.BROADLEAF),
    ],
)
def test_classify_species(name, expected):
    assert classify_species(name) is expected


def test_classify_species_first_family_wins():
    # Matches both the pine ("TALL") and spruce ("GRAN") keywords.
    assert classify_species("Tall/Gran blandning") is SpeciesCategory.PINE


def test_default_category_is_broadleaf():
    assert DEFAULT_CATEGORY is SpeciesCategory.BROADLEAF


def test_normalize_species_identifier_strips_diacritics():
    assert normalize_species_identifier("Björk") == "BJORK"
    assert normalize_species_identifier("Löv") == "LOV"


@pytest.mark.parametrize("value", ["Gran", "spruce", "SPRUCE", "gran"])
def test_parse_species_category_aliases(value):
    assert parse_species_category(value) is SpeciesCategory.SPRUCE


def test_parse_species_category_accepts_swedish_broadleaf():
    assert parse_species_category("Löv") is SpeciesCategory.BROADLEAF
    assert parse_species_category("lov") is SpeciesCategory.BROADLEAF


def test_parse_species_category_unknown():
    with pytest.raises(HPRValueError):
        parse_species_category("oak")


def test_dbh_classes_table():
    assert DBH_CLASSES[0] == 80
    assert DBH_CLASSES[-1] == 580
    assert len(DBH_CLASSES) == 26
    assert list(DBH_CLASSES) == sorted(DBH_CLASSES)


@pytest.mark.parametrize(
    ("dbh", "expected"),
    [
        (1.0, 80),
        (80.0, 80),
        (80.1, 100),
        (150.0, 160),
        (579.0, 580),
        (580.0, 580),
        (900.0, 580),
        (None, None),
        (0.0, None),
        (-5.0, None),
        (math.nan, None),
        (math.inf, None),
    ],
)
def test_resolve_dbh_class(dbh, expected):
    assert resolve_dbh_class(dbh) == expected


def test_resolve_dbh_class_is_monotonic():
    diameters = [float(value) for value in range(1, 700, 7)]
    classes = [resolve_dbh_class(value) for value in diameters]
    assert classes == sorted(classes)


def test_dbh_class_index():
    assert dbh_class_index(80) == 0
    assert dbh_class_index(160) == 4
    with pytest.raises(HPRValueError):
        dbh_class_index(150)
