"""CLI helper utilities for hprcost."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.logging import RichHandler

from hprcost.classification.diameter import DBH_CLASSES
from hprcost.classification.species import SpeciesCategory, parse_species_category
from hprcost.config.models import SETTING_FIELDS
from hprcost.core.errors import HPRValueError
from hprcost.store.sqlite_store import SQLiteStore

STORE_ENV = "HPRCOST_STORE"
DEFAULT_STORE_PATH = Path.home() / ".hprcost" / "store.sqlite"

STORE_OPTION_HELP = f"SQLite store for settings and price tables (defaults to ${STORE_ENV} or {DEFAULT_STORE_PATH})."


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; ``verbose`` enables DEBUG output."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
        force=True,
    )


def open_store(path: Path | None) -> SQLiteStore:
    """Open the store at ``path``, the ``HPRCOST_STORE`` path, or the default location."""

    if path is None:
        env_value = os.environ.get(STORE_ENV)
        path = Path(env_value) if env_value else DEFAULT_STORE_PATH
    return SQLiteStore(path)


def parse_species_argument(value: str) -> SpeciesCategory:
    try:
        return parse_species_category(value)
    except HPRValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_setting_argument(value: str) -> str:
    """Match a settings field name case-insensitively."""

    key = value.strip().lower()
    if key in SETTING_FIELDS:
        return key
    raise typer.BadParameter(
        f"Unknown setting '{value}'. Expected one of: {', '.join(SETTING_FIELDS)}.",
        param_hint="FIELD",
    )


def parse_class_argument(value: int) -> int:
    """Accept either a class threshold in mm (e.g. ``160``) or a 0-based class index."""

    if value in DBH_CLASSES:
        return DBH_CLASSES.index(value)
    if 0 <= value < len(DBH_CLASSES):
        return value
    raise typer.BadParameter(
        f"'{value}' is neither a diameter class ({DBH_CLASSES[0]}..{DBH_CLASSES[-1]} mm) "
        f"nor a class index (0..{len(DBH_CLASSES) - 1})."
    )


def format_amount(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "-"
    return f"{value:,.{digits}f}".replace(",", " ")


__all__ = [
    "STORE_ENV",
    "DEFAULT_STORE_PATH",
    "STORE_OPTION_HELP",
    "configure_logging",
    "open_store",
    "parse_species_argument",
    "parse_setting_argument",
    "parse_class_argument",
    "format_amount",
]
