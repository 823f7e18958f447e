"""Diameter (DBH) class thresholds."""

from __future__ import annotations

import math

from hprcost.core.errors import HPRValueError

#: Upper bounds (mm) of each diameter class, ascending.
DBH_CLASSES: tuple[int, ...] = tuple(range(80, 600, 20))


def resolve_dbh_class(dbh: float | None) -> int | None:
    """Return the first class threshold >= ``dbh``.

    Diameters above the last threshold collapse into the last class. Missing, non-finite and
    non-positive diameters have no class.
    """

    if dbh is None or not math.isfinite(dbh) or dbh <= 0:
        return None
    for threshold in DBH_CLASSES:
        if dbh <= threshold:
            return threshold
    return DBH_CLASSES[-1]


def dbh_class_index(dbh_class: int) -> int:
    """Position of ``dbh_class`` within :data:`DBH_CLASSES`."""

    try:
        return DBH_CLASSES.index(dbh_class)
    except ValueError as exc:
        raise HPRValueError(
            f"{dbh_class} is not a diameter class; expected one of {DBH_CLASSES[0]}..{DBH_CLASSES[-1]}"
        ) from exc


__all__ = ["DBH_CLASSES", "resolve_dbh_class", "dbh_class_index"]
