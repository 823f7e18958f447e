"""Persistence for settings, divisors, and legacy prices."""

from .base import KeyValueStore, MemoryStore
from .sqlite_store import SQLiteStore
from .tables import (
    DIVISORS_KEY,
    LEGACY_PRICES_KEY,
    SETTINGS_KEY,
    load_divisors,
    load_legacy_prices,
    load_stored_settings,
    save_divisors,
    save_legacy_prices,
    save_settings,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "DIVISORS_KEY",
    "LEGACY_PRICES_KEY",
    "SETTINGS_KEY",
    "load_divisors",
    "load_legacy_prices",
    "load_stored_settings",
    "save_divisors",
    "save_legacy_prices",
    "save_settings",
]
