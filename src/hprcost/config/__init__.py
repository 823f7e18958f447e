"""Calculator settings."""

from .loaders import load_settings, merge_settings
from .models import PER_TREE_TIME_CAP_SECONDS, SETTING_FIELDS, CalculationSettings

__all__ = [
    "CalculationSettings",
    "PER_TREE_TIME_CAP_SECONDS",
    "SETTING_FIELDS",
    "load_settings",
    "merge_settings",
]
