"""
Langevin Trajectory
===================
Stochastic damped harmonic oscillator, integrated per axis with the
Euler-Maruyama scheme:

    v_{n+1} = v_n + (-γ v_n - ω² x_n) dt + σ dW,    dW ~ N(0, dt)
    x_{n+1} = x_n + v_{n+1} dt

The raw velocity is low-pass filtered before it is output:

    ṽ_{n+1} = α v_{n+1} + (1 - α) ṽ_n,    x̃_{n+1} = x̃_n + ṽ_{n+1} dt

and the reported acceleration is the finite difference of the filtered
velocity across one step, (ṽ_{n+1} - ṽ_n) / dt.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from trajectorytuner.model.parameters import ParamConfig, ParameterSet, freeze_schema
from trajectorytuner.model.samples import Trajectory, TrajectoryBatch
from trajectorytuner.model.sampling import make_rng, normal_random
from trajectorytuner.trajectories.base import TrajectoryId, TrajectoryModel, count_steps, is_degenerate

logger = logging.getLogger(__name__)


class LangevinModel(TrajectoryModel):
    """
    Noise-driven oscillator; every realization is an independent random path.
    """
    ID = TrajectoryId.LANGEVIN.value
    NAME = "Langevin Dynamics"
    IS_STOCHASTIC = True

    PARAM_CONFIG = freeze_schema({
        "gamma": ParamConfig(default=0.5, min=0.0, max=5.0, step=0.1, label="γ (damping)"),
        "omega": ParamConfig(default=1.0, min=0.1, max=5.0, step=0.1, label="ω (frequency)"),
        "sigma": ParamConfig(default=0.3, min=0.0, max=2.0, step=0.05, label="σ (noise)"),
        "alpha": ParamConfig(default=0.1, min=0.01, max=1.0, step=0.01, label="α (smoothing)"),
        "duration": ParamConfig(default=20.0, min=1.0, max=60.0, step=1.0, label="Duration"),
    })
    COMMAND_KEYS = ("gamma", "omega", "sigma", "alpha", "duration")

    def get_plot_time(self, params: ParameterSet) -> float:
        duration = params["duration"]
        return duration if duration > 0 else 0.0

    def simulate(
        self,
        params: ParameterSet,
        dt: float,
        n_samples: int = 1,
        rng: Optional[np.random.Generator] = None
    ) -> TrajectoryBatch:
        """
        Integrate ``n_samples`` independent realizations starting at rest in
        the origin.

        Args:
            params: Langevin parameter set.
            dt: Integration step in seconds.
            n_samples: Number of independent realizations.
            rng: Generator for the Brownian increments; a fresh unseeded one
                is created when omitted.

        Returns:
            One trajectory per realization, each with ``steps + 1`` samples.
        """
        plot_time = self.get_plot_time(params)
        if is_degenerate(plot_time) or n_samples <= 0:
            return []

        steps = count_steps(plot_time, dt)
        rng = rng if rng is not None else make_rng()
        logger.debug(f"Integrating {self.ID}: {steps} steps x {n_samples} realizations")

        gamma = np.float64(params["gamma"])
        omega2 = np.float64(params["omega"]) ** 2
        sigma = np.float64(params["sigma"])
        alpha = np.float64(params["alpha"])
        sqrt_dt = math.sqrt(dt)

        shape = (n_samples, 3)
        pos_raw = np.zeros(shape)
        vel_raw = np.zeros(shape)
        pos = np.zeros(shape)
        vel = np.zeros(shape)

        # History layout: (time index, realization, axis); index 0 is the rest state
        pos_hist = np.zeros((steps + 1,) + shape)
        vel_hist = np.zeros((steps + 1,) + shape)
        acc_hist = np.zeros((steps + 1,) + shape)

        with np.errstate(over="ignore", invalid="ignore"):
            for i in range(1, steps + 1):
                d_w = sqrt_dt * normal_random(rng, shape)

                vel_raw = vel_raw + (-gamma * vel_raw - omega2 * pos_raw) * dt + sigma * d_w
                pos_raw = pos_raw + vel_raw * dt

                vel_prev = vel
                vel = alpha * vel_raw + (1 - alpha) * vel
                pos = pos + vel * dt

                pos_hist[i] = pos
                vel_hist[i] = vel
                acc_hist[i] = (vel - vel_prev) / dt

        times = np.minimum(np.arange(steps + 1) * dt, plot_time)
        return [
            Trajectory.from_arrays(times, pos_hist[:, n], vel_hist[:, n], acc_hist[:, n])
            for n in range(n_samples)
        ]
