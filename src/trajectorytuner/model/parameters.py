"""
Parameter Schemas
=================
Describes the tunable parameters of a trajectory model: default value, slider
bounds, step granularity and display label.

The bounds exist for the tuner/UI only. Models never validate against them;
whatever number reaches a model is used as-is.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from trajectorytuner.config import FALLBACK_MAX, FALLBACK_MIN, FALLBACK_STEP
from trajectorytuner.utils import snap_to_step

# Parameter name -> value
ParameterSet = Dict[str, float]


@dataclass(frozen=True)
class ParamConfig:
    """Slider configuration of one parameter."""
    default: float
    min: float
    max: float
    step: float
    label: str

    def coerce(self, value: float) -> float:
        """
        Snap a raw input onto the step grid and clamp it into [min, max].

        Args:
            value: Finite raw value.

        Returns:
            The value the tuner should store.
        """
        snapped = snap_to_step(value, self.step)
        return min(self.max, max(self.min, snapped))


def fallback_config(key: str) -> ParamConfig:
    """Config used for parameters that have no schema entry."""
    return ParamConfig(
        default=0.0,
        min=FALLBACK_MIN,
        max=FALLBACK_MAX,
        step=FALLBACK_STEP,
        label=key,
    )


def freeze_schema(schema: Mapping[str, ParamConfig]) -> Mapping[str, ParamConfig]:
    """Return a read-only view of an ordered schema dict."""
    return MappingProxyType(dict(schema))


def defaults_from_schema(schema: Mapping[str, ParamConfig]) -> ParameterSet:
    """Build a fresh default parameter set; key order follows the schema."""
    return {key: cfg.default for key, cfg in schema.items()}
