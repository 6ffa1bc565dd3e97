"""
Tuner State (Data Model)
========================
This module defines the central data structure of a tuning session.

Why is this file needed?
------------------------
1. State Management: It holds the selected trajectory, its parameters, the
   sample count, the time step and the time cursor in one place.
2. Input Rules: Raw inputs from sliders or the command line are snapped to the
   parameter grid and clamped here, never inside the models.
3. Derived Data: The simulated batch and its statistics are cached and
   recomputed only after an input changed.

Classes:
    TunerState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional

from trajectorytuner.config import (
    DEFAULT_DT,
    DEFAULT_N_SAMPLES,
    MAX_N_SAMPLES,
    MAX_SIMULATION_STEPS,
    MAX_TICKS,
    MIN_N_SAMPLES,
    TIME_STEP,
)
from trajectorytuner.model.parameters import ParameterSet, fallback_config
from trajectorytuner.model.samples import Sample, StatRecord, TrajectoryBatch
from trajectorytuner.model.sampling import make_rng
from trajectorytuner.model.statistics import Domain, closest_index, closest_record, compute_stats, xy_bounds
from trajectorytuner.trajectories.base import TrajectoryModel, count_steps, is_degenerate
from trajectorytuner.trajectories.registry import default_trajectory, resolve_trajectory
from trajectorytuner.utils import make_pow10_ticks, snap_to_step

logger = logging.getLogger(__name__)

ORIGIN = Sample(
    t=0.0, x=0.0, y=0.0, z=0.0, vx=0.0, vy=0.0, vz=0.0, speed=0.0,
    ax=0.0, ay=0.0, az=0.0, accel=0.0,
)


@dataclass
class TunerState:
    """
    Holds the state of one tuning session.
    Mutate it only through the ``select_*``/``set_*`` methods so the cached
    batch stays consistent with the inputs.
    """
    trajectory_id: str = field(default_factory=lambda: default_trajectory().ID)
    params: ParameterSet = field(default_factory=lambda: default_trajectory().default_params())
    n_samples: int = DEFAULT_N_SAMPLES
    dt: float = DEFAULT_DT
    time: float = 0.0
    seed: Optional[int] = None

    _batch: Optional[TrajectoryBatch] = field(default=None, init=False, repr=False)
    _stats: Optional[list[StatRecord]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        model = resolve_trajectory(self.trajectory_id)
        if model.ID != self.trajectory_id:
            logger.warning(f"Unknown trajectory '{self.trajectory_id}', using '{model.ID}'")
        self.trajectory_id = model.ID
        # Parameters of another model (e.g. the default factory's) are replaced
        if set(self.params) != set(model.PARAM_CONFIG):
            self.params = model.default_params()
        else:
            self.params = dict(self.params)

    # --------------------------------------------------------------------------
    # Inputs
    # --------------------------------------------------------------------------
    @property
    def trajectory(self) -> TrajectoryModel:
        return resolve_trajectory(self.trajectory_id)

    def select_trajectory(self, trajectory_id: str) -> None:
        """Switch model; parameters go back to its defaults, the cursor to 0."""
        model = resolve_trajectory(trajectory_id)
        if model.ID != trajectory_id:
            logger.warning(f"Unknown trajectory '{trajectory_id}', using '{model.ID}'")
        self.trajectory_id = model.ID
        self.params = model.default_params()
        self.time = 0.0
        self._invalidate()

    def set_param(self, key: str, value: float) -> None:
        """
        Store a parameter after snapping it to its step and clamping to bounds.
        Non-finite input is ignored.
        """
        if not math.isfinite(value):
            logger.debug(f"Ignoring non-finite value for '{key}': {value}")
            return
        cfg = self.trajectory.PARAM_CONFIG.get(key) or fallback_config(key)
        self.params = {**self.params, key: cfg.coerce(value)}
        self._invalidate()
        self._clamp_time()

    def set_time(self, value: float) -> None:
        """Move the time cursor, snapped to the cursor grid and kept in range."""
        if not math.isfinite(value):
            return
        self.time = min(max(0.0, snap_to_step(value, TIME_STEP)), self.plot_time)

    def set_n_samples(self, value: int) -> None:
        """Set the number of stochastic realizations; values below 1 are ignored."""
        if value < MIN_N_SAMPLES:
            return
        n = min(MAX_N_SAMPLES, max(MIN_N_SAMPLES, int(value)))
        if n != self.n_samples:
            self.n_samples = n
            self._invalidate()

    def set_dt(self, value: float) -> None:
        if not (value > 0) or not math.isfinite(value):
            logger.debug(f"Ignoring invalid time step: {value}")
            return
        self.dt = value
        self._invalidate()

    def reset(self) -> None:
        """Go back to the default trajectory and session settings."""
        self.trajectory_id = default_trajectory().ID
        self.params = default_trajectory().default_params()
        self.n_samples = DEFAULT_N_SAMPLES
        self.dt = DEFAULT_DT
        self.time = 0.0
        self._invalidate()
        logger.info("Tuner state has been reset.")

    def _invalidate(self) -> None:
        self._batch = None
        self._stats = None

    def _clamp_time(self) -> None:
        self.time = min(self.time, self.plot_time)

    # --------------------------------------------------------------------------
    # Derived data
    # --------------------------------------------------------------------------
    @property
    def plot_time(self) -> float:
        return self.trajectory.get_plot_time(self.params)

    @property
    def batch(self) -> TrajectoryBatch:
        """
        Simulated trajectories for the current inputs.

        Raises:
            ValueError: If the simulation would exceed MAX_SIMULATION_STEPS.
        """
        if self._batch is None:
            self._batch = self._simulate()
        return self._batch

    @property
    def stats(self) -> list[StatRecord]:
        if self._stats is None:
            self._stats = compute_stats(self.batch)
        return self._stats

    def _simulate(self) -> TrajectoryBatch:
        model = self.trajectory
        plot_time = model.get_plot_time(self.params)
        if is_degenerate(plot_time):
            return []

        steps = count_steps(plot_time, self.dt)
        if steps > MAX_SIMULATION_STEPS:
            raise ValueError(
                f"{steps} steps exceed the limit of {MAX_SIMULATION_STEPS}; "
                f"increase dt or shorten the trajectory"
            )

        n = self.n_samples if model.IS_STOCHASTIC else 1
        logger.info(f"Simulating '{model.ID}' for {plot_time:.2f} s ({steps} steps, {n} sample(s))")
        # A new generator per run, so cached batches never share random state
        return model.simulate(self.params, self.dt, n, rng=make_rng(self.seed))

    @property
    def current_stats(self) -> Optional[StatRecord]:
        return closest_record(self.stats, self.time)

    @property
    def current_position(self) -> Sample:
        """Sample of the first trajectory closest to the time cursor."""
        if not self.batch or len(self.batch[0]) == 0:
            return ORIGIN
        first = self.batch[0]
        return first[closest_index(first.t, self.time)]

    @property
    def has_singularity(self) -> bool:
        return self.trajectory.has_singularity(self.params)

    @property
    def command(self) -> str:
        return self.trajectory.get_command(self.params)

    @property
    def bounds(self) -> tuple[Domain, Domain]:
        return xy_bounds(self.batch)

    @property
    def ticks(self) -> tuple[list[float], list[float]]:
        x_domain, y_domain = self.bounds
        return make_pow10_ticks(x_domain, MAX_TICKS), make_pow10_ticks(y_domain, MAX_TICKS)

    @property
    def time_bar_half(self) -> float:
        """Half width of the time cursor band drawn on the charts."""
        plot_time = self.plot_time
        if not (plot_time > 0):
            return 0.01
        return min(0.25, max(0.01, plot_time / 600))
