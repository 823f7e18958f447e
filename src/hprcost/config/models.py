"""Pydantic models describing calculator settings."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from hprcost.core.numeric import parse_number

#: Hard ceiling (seconds) on processing time credited to a single stem.
PER_TREE_TIME_CAP_SECONDS = 30.0


class CalculationSettings(BaseModel):
    """Numeric inputs shared by the per-bin and legacy pricing models.

    Attributes
    ----------
    max_per_tree_time:
        Maximum processing time credited per stem (seconds). Values above
        :data:`PER_TREE_TIME_CAP_SECONDS` are clipped to that cap during aggregation.
    harvesting_cost_rate:
        Harvester cost rate (kr per productive hour); divided by the species/class divisor to
        give the price per m³.
    forwarding_sk:
        Forwarder cost rate (kr per hour), ``SK``.
    skidding_distance_sa:
        Average skidding distance (m), ``SA``.
    stand_removal_ut:
        Removal volume of the stand (m³/ha), ``UT``.
    k1, k2, c11:
        Constants of the forwarding time model.
    """

    max_per_tree_time: float = 600.0
    harvesting_cost_rate: float = 1800.0
    forwarding_sk: float = 1500.0
    skidding_distance_sa: float = 300.0
    stand_removal_ut: float = 280.0
    k1: float = 1.0
    k2: float = 0.73
    c11: float = 11.45

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_number(cls, value: object) -> float:
        # Form input arrives as text; anything unparseable counts as zero.
        if value is None or isinstance(value, (str, int, float)):
            return parse_number(value)
        return 0.0


SETTING_FIELDS: tuple[str, ...] = tuple(CalculationSettings.model_fields)


__all__ = ["CalculationSettings", "PER_TREE_TIME_CAP_SECONDS", "SETTING_FIELDS"]
