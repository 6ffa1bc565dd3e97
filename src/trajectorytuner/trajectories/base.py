from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, Mapping, Optional

from trajectorytuner.model.parameters import ParamConfig, ParameterSet, defaults_from_schema
from trajectorytuner.utils import format_number

if TYPE_CHECKING:
    import numpy as np

    from trajectorytuner.model.samples import Sample, TrajectoryBatch

COMMAND_PREFIX = "mc_raptor intref"


class TrajectoryId(StrEnum):
    LISSAJOUS = "lissajous"
    LANGEVIN = "langevin"


class TrajectoryModel(ABC):
    """
    Abstract base class for trajectory models.

    Subclasses define their identity and parameter schema as class attributes
    and implement the time horizon, the simulation and the command format.
    """
    ID: ClassVar[str] = "trajectory"
    NAME: ClassVar[str] = "Trajectory"
    IS_STOCHASTIC: ClassVar[bool] = False
    PARAM_CONFIG: ClassVar[Mapping[str, ParamConfig]] = {}
    # Order of the values in the command line
    COMMAND_KEYS: ClassVar[tuple[str, ...]] = ()

    def default_params(self) -> ParameterSet:
        """A fresh copy of the default parameter set."""
        return defaults_from_schema(self.PARAM_CONFIG)

    @abstractmethod
    def get_plot_time(self, params: ParameterSet) -> float:
        """
        Total time span to simulate and plot.

        Args:
            params: Parameter set of this model.

        Returns:
            Horizon in seconds; 0 for a degenerate parameter set.
        """

    @abstractmethod
    def simulate(
        self,
        params: ParameterSet,
        dt: float,
        n_samples: int = 1,
        rng: Optional[np.random.Generator] = None
    ) -> TrajectoryBatch:
        """
        Sample the model on ``[0, get_plot_time(params)]``.

        Args:
            params: Parameter set of this model.
            dt: Time step in seconds, positive and finite.
            n_samples: Number of realizations to return.
            rng: Random generator for stochastic models.

        Returns:
            ``n_samples`` index-aligned trajectories, or an empty list when
            the time horizon is degenerate.
        """

    def evaluate(self, time: float, params: ParameterSet) -> Sample:
        """
        Closed-form state at ``time``. Only deterministic models have one.

        Raises:
            NotImplementedError: For models that can only be simulated.
        """
        raise NotImplementedError(f"{self.NAME} requires simulation, not point evaluation")

    def has_singularity(self, params: ParameterSet) -> bool:
        """Whether the parameters demand an instantaneous velocity jump."""
        return False

    def get_command(self, params: ParameterSet) -> str:
        """Single-line command for the vehicle shell."""
        values = " ".join(format_number(params[key]) for key in self.COMMAND_KEYS)
        return f"{COMMAND_PREFIX} {self.ID} {values}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.ID!r})"


def count_steps(plot_time: float, dt: float) -> int:
    """
    Number of integration steps covering ``plot_time``; always at least one.

    Raises:
        ValueError: If ``dt`` is not a positive finite number.
    """
    if not (dt > 0) or not math.isfinite(dt):
        raise ValueError(f"Time step must be a positive finite number, got {dt}")
    return max(1, math.floor(plot_time / dt))


def is_degenerate(plot_time: float) -> bool:
    """True for horizons that produce no samples (non-positive or non-finite)."""
    return not (plot_time > 0) or not math.isfinite(plot_time)
