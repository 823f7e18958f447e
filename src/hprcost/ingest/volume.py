"""Stem and log volume resolution.

Harvesters report log volumes in several units and places (``LogVolume`` children tagged with
a category, plain attributes, or cubic decimetres). Each resolver below walks an ordered list
of candidates and keeps the first strictly positive value.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Sequence

from hprcost.core.numeric import first_positive, parse_number
from hprcost.ingest.xml_lookup import element_text, iter_local

#: ``logVolumeCategory`` values in order of preference.
PREFERRED_LOG_VOLUME_CATEGORIES: tuple[str, ...] = (
    "m3sub",
    "m3 fub",
    "m3fub",
    "m3 (price)",
    "m3ub",
    "m3sob",
)

LOG_VOLUME_ATTRIBUTES: tuple[str, ...] = ("Volume", "VolumeM3", "VolumeUnderBark", "VolumeOverBark")
STEM_VOLUME_ATTRIBUTES: tuple[str, ...] = ("StemVolume", "Volume", "VolumeUnderBark", "VolumeOverBark")

_WHITESPACE = re.compile(r"\s+")


def normalise_volume_category(value: str | None) -> str:
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", value.strip().lower())


def _attribute_volume(element: ET.Element, name: str) -> Callable[[], float]:
    return lambda: parse_number(element.get(name))


def _category_volume(nodes: Sequence[ET.Element], category: str) -> Callable[[], float]:
    def resolve() -> float:
        for node in nodes:
            if normalise_volume_category(node.get("logVolumeCategory")) == category:
                return parse_number(element_text(node))
        return 0.0

    return resolve


def _any_volume(nodes: Sequence[ET.Element]) -> Callable[[], float]:
    def resolve() -> float:
        for node in nodes:
            volume = parse_number(element_text(node))
            if volume > 0:
                return volume
        return 0.0

    return resolve


def _dm3_volume(log: ET.Element) -> Callable[[], float]:
    def resolve() -> float:
        raw = log.get("VolumeDm3")
        if raw is None:
            raw = log.get("VolumeDM3")
        return parse_number(raw) / 1000

    return resolve


def resolve_log_volume(log: ET.Element) -> float:
    """Best-available volume (m³) for one ``Log`` element, ``0.0`` when nothing is usable.

    Only the first ``LogVolume`` carrying a given category is considered for that category;
    if it is not positive the next preferred category is tried.
    """

    nodes = list(iter_local(log, "LogVolume"))
    candidates: list[Callable[[], float]] = [
        _category_volume(nodes, category) for category in PREFERRED_LOG_VOLUME_CATEGORIES
    ]
    candidates.append(_any_volume(nodes))
    candidates.extend(_attribute_volume(log, name) for name in LOG_VOLUME_ATTRIBUTES)
    candidates.append(_dm3_volume(log))
    return first_positive(candidates) or 0.0


def resolve_stem_attribute_volume(stem: ET.Element) -> float:
    """Stem-level volume attribute fallback (``StemVolume`` first)."""

    return first_positive(_attribute_volume(stem, name) for name in STEM_VOLUME_ATTRIBUTES) or 0.0


__all__ = [
    "PREFERRED_LOG_VOLUME_CATEGORIES",
    "LOG_VOLUME_ATTRIBUTES",
    "STEM_VOLUME_ATTRIBUTES",
    "normalise_volume_category",
    "resolve_log_volume",
    "resolve_stem_attribute_volume",
]
