"""Key-value store interface used to persist settings and price tables."""

from __future__ import annotations

import copy
from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Minimal get/set store of JSON-compatible values."""

    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """Dictionary-backed store for tests and one-off runs."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._data


__all__ = ["KeyValueStore", "MemoryStore"]
