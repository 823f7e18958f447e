"""Namespace-agnostic element lookup over :mod:`xml.etree.ElementTree` trees.

HPR files are usually written with a default StanForD namespace, but exports from some
machines drop or rename it. Every lookup here matches on the local part of the tag only, so
``{urn:skogforsk:stanford2010}Stem`` and ``Stem`` are treated alike.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator

Node = ET.Element | ET.ElementTree


def local_name(tag: object) -> str | None:
    """Return the tag without its ``{namespace}`` prefix (``None`` for comments/PIs)."""

    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def iter_local(node: Node, name: str) -> Iterator[ET.Element]:
    """Yield descendants of ``node`` whose local name equals ``name``, in document order.

    An ``ElementTree`` includes its root element in the search; an ``Element`` does not
    include itself.
    """

    if isinstance(node, ET.ElementTree):
        root = node.getroot()
        if root is None:
            return
        elements = root.iter()
    else:
        elements = node.iter()
        next(elements, None)
    for element in elements:
        if local_name(element.tag) == name:
            yield element


def first_local(node: Node, name: str) -> ET.Element | None:
    return next(iter_local(node, name), None)


def element_text(element: ET.Element | None) -> str | None:
    """Concatenated, trimmed text content of ``element`` (all descendant text nodes)."""

    if element is None:
        return None
    return "".join(element.itertext()).strip()


def first_local_text(node: Node, name: str) -> str | None:
    """Trimmed text of the first descendant named ``name``; ``None`` when absent or blank."""

    text = element_text(first_local(node, name))
    return text or None


__all__ = [
    "local_name",
    "iter_local",
    "first_local",
    "element_text",
    "first_local_text",
]
