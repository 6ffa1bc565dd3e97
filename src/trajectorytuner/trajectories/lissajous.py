"""
Lissajous Trajectory
====================
Deterministic parametric curve, one sine per axis driven by a shared progress
variable:

    x = A sin(a p(t)),  y = B sin(b p(t)),  z = C sin(c p(t))

During the first ``ramp_duration`` seconds the progress rate grows linearly
from zero to its cruise value ``2π / duration``, afterwards it stays constant.
The ramp ends with a jump of the second derivative of the progress to zero,
which shows up as a step in the acceleration.
"""
from __future__ import annotations

import logging
import math
from functools import reduce
from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np

from trajectorytuner.model.parameters import ParamConfig, ParameterSet, freeze_schema
from trajectorytuner.model.samples import Sample, Trajectory, TrajectoryBatch
from trajectorytuner.trajectories.base import TrajectoryId, TrajectoryModel, count_steps, is_degenerate

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

GCD_TOLERANCE = 1e-9
SINGULARITY_TOLERANCE = 1e-9

# (amplitude, frequency) parameter names per axis
AXES = (("A", "a"), ("B", "b"), ("C", "c"))


def float_gcd(a: float, b: float, tol: float = GCD_TOLERANCE) -> float:
    """
    Greatest common divisor of two reals by Euclid's algorithm.

    Remainders below ``tol`` count as zero, so e.g. ``float_gcd(0.75, 0.5)``
    gives 0.25.
    """
    a = abs(a)
    b = abs(b)
    if a < tol:
        return b
    if b < tol:
        return a
    # An infinite input turns the remainder into NaN, which ends the loop
    with np.errstate(invalid="ignore"):
        while b > tol:
            a, b = b, float(np.fmod(a, b))
    return a


def gcd_multiple(values: Iterable[float], tol: float = GCD_TOLERANCE) -> float:
    """GCD of any number of reals; 0 for no values."""
    return reduce(lambda acc, v: float_gcd(acc, v, tol), values, 0.0)


class LissajousModel(TrajectoryModel):
    """
    Lissajous curve with a velocity ramp.
    """
    ID = TrajectoryId.LISSAJOUS.value
    NAME = "Lissajous Curve"
    IS_STOCHASTIC = False

    PARAM_CONFIG = freeze_schema({
        "A": ParamConfig(default=0.5, min=0.0, max=3.0, step=0.05, label="A (x amplitude)"),
        "B": ParamConfig(default=1.0, min=0.0, max=3.0, step=0.05, label="B (y amplitude)"),
        "C": ParamConfig(default=0.0, min=0.0, max=3.0, step=0.05, label="C (z amplitude)"),
        "a": ParamConfig(default=2.0, min=0.0, max=10.0, step=0.25, label="a (x frequency)"),
        "b": ParamConfig(default=1.0, min=0.0, max=10.0, step=0.25, label="b (y frequency)"),
        "c": ParamConfig(default=1.0, min=0.0, max=10.0, step=0.25, label="c (z frequency)"),
        "duration": ParamConfig(default=10.0, min=0.1, max=60.0, step=0.25, label="Duration"),
        "ramp_duration": ParamConfig(default=3.0, min=0.0, max=30.0, step=0.25, label="Ramp Duration"),
    })
    COMMAND_KEYS = ("A", "B", "C", "a", "b", "c", "duration", "ramp_duration")

    def get_cycle_duration(self, params: ParameterSet) -> float:
        """
        Time for the curve to close, without the ramp.

        The figure closes once every active axis has completed an integer
        number of periods. With progress advancing 2π per ``duration``, that
        takes ``duration / gcd(active frequencies)``.

        Args:
            params: Lissajous parameter set.

        Returns:
            The closing time; ``duration`` if no axis is active or the GCD
            vanishes.
        """
        duration = params["duration"]
        active = [
            params[freq] for amp, freq in AXES
            if params[amp] != 0 and params[freq] != 0
        ]
        if not active:
            return duration

        freq_gcd = gcd_multiple(active)
        if not (freq_gcd > GCD_TOLERANCE):
            return duration
        return duration / freq_gcd

    def get_plot_time(self, params: ParameterSet) -> float:
        if not (params["duration"] > 0):
            return 0.0
        ramp = float(np.maximum(0.0, params["ramp_duration"]))
        return ramp + self.get_cycle_duration(params)

    def kinematics(
        self,
        times: npt.ArrayLike,
        params: ParameterSet
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Closed-form position, velocity and acceleration.

        Args:
            times: (L,) evaluation times.
            params: Lissajous parameter set.

        Returns:
            Three (L, 3) arrays: position, velocity, acceleration.
        """
        time = np.asarray(times, dtype=np.float64)
        duration = np.float64(params["duration"])
        ramp = np.float64(params["ramp_duration"])

        # Non-finite or zero parameters must propagate as NaN/inf, not raise
        with np.errstate(divide="ignore", invalid="ignore"):
            if ramp > 0:
                time_velocity = np.minimum(time, ramp) / ramp
                dd_progress = np.where(time < ramp, 2 * np.pi / (ramp * duration), 0.0)
            else:
                time_velocity = np.ones_like(time)
                dd_progress = np.zeros_like(time)

            ramp_time = time_velocity * np.minimum(time, ramp) / 2.0
            progress = (ramp_time + np.maximum(0.0, time - ramp)) * (2 * np.pi) / duration
            d_progress = (2 * np.pi * time_velocity) / duration

            position = np.empty(time.shape + (3,))
            velocity = np.empty(time.shape + (3,))
            acceleration = np.empty(time.shape + (3,))

            for axis, (amp_key, freq_key) in enumerate(AXES):
                amp = np.float64(params[amp_key])
                freq = np.float64(params[freq_key])
                sin_p = np.sin(freq * progress)
                cos_p = np.cos(freq * progress)

                position[..., axis] = amp * sin_p
                velocity[..., axis] = amp * cos_p * freq * d_progress
                acceleration[..., axis] = amp * freq * (
                    -freq * sin_p * d_progress * d_progress + cos_p * dd_progress
                )

        return position, velocity, acceleration

    def evaluate(self, time: float, params: ParameterSet) -> Sample:
        """
        Closed-form state at a single instant.

        Args:
            time: Time in seconds.
            params: Lissajous parameter set.

        Returns:
            The sample at ``time``.
        """
        position, velocity, acceleration = self.kinematics([time], params)
        return Trajectory.from_arrays([time], position, velocity, acceleration)[0]

    def simulate(
        self,
        params: ParameterSet,
        dt: float,
        n_samples: int = 1,
        rng: Optional[np.random.Generator] = None
    ) -> TrajectoryBatch:
        plot_time = self.get_plot_time(params)
        if is_degenerate(plot_time):
            return []

        steps = count_steps(plot_time, dt)
        times = np.minimum(np.arange(steps + 1) * dt, plot_time)
        logger.debug(f"Evaluating {self.ID}: {steps + 1} samples over {plot_time:.3f} s")

        trajectory = Trajectory.from_arrays(times, *self.kinematics(times, params))
        # Deterministic: every realization is the same immutable trajectory
        return [trajectory] * n_samples

    def has_singularity(self, params: ParameterSet) -> bool:
        """
        Without a ramp the curve starts at full speed, i.e. the velocity jumps
        at t = 0 unless every axis is idle.
        """
        if params["ramp_duration"] > 0:
            return False
        with np.errstate(divide="ignore", invalid="ignore"):
            d_progress = (2 * np.pi) / np.float64(params["duration"])
            v0 = [np.float64(params[amp]) * params[freq] * d_progress for amp, freq in AXES]
        return math.hypot(*v0) > SINGULARITY_TOLERANCE
