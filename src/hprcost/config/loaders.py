"""Settings loading (YAML) and override merging."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from hprcost.config.models import SETTING_FIELDS, CalculationSettings
from hprcost.core.errors import HPRValueError

__all__ = ["load_settings", "merge_settings"]


def load_settings(yaml_path: str | Path, *, base: CalculationSettings | None = None) -> CalculationSettings:
    """Load settings from YAML, layering them over ``base`` (defaults when omitted).

    The file may hold the fields at top level or under a ``settings`` key. Unknown keys are
    rejected so typos do not silently fall back to defaults.
    """

    path = Path(yaml_path)
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, Mapping):
        raise HPRValueError(f"Settings file {path} must contain a mapping")
    if "settings" in payload and isinstance(payload["settings"], Mapping):
        payload = payload["settings"]
    return merge_settings(base or CalculationSettings(), payload)


def merge_settings(base: CalculationSettings, overrides: Mapping[str, Any]) -> CalculationSettings:
    """Return ``base`` with ``overrides`` applied; ``None`` override values are ignored."""

    unknown = sorted(set(overrides) - set(SETTING_FIELDS))
    if unknown:
        allowed = ", ".join(SETTING_FIELDS)
        raise HPRValueError(f"Unknown setting(s) {', '.join(unknown)}. Allowed keys: {allowed}.")
    merged = base.model_dump()
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return CalculationSettings.model_validate(merged)
