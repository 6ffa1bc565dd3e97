from __future__ import annotations

import numpy as np
import pytest

from trajectorytuner.model.samples import Trajectory


def make_trajectory(speeds, accels=None, dt: float = 0.1) -> Trajectory:
    """Synthetic trajectory moving along x with the given speed/accel profile."""
    speeds = np.asarray(speeds, dtype=np.float64)
    accels = np.zeros_like(speeds) if accels is None else np.asarray(accels, dtype=np.float64)
    zeros = np.zeros_like(speeds)
    return Trajectory.from_arrays(
        t=np.arange(len(speeds)) * dt,
        position=np.column_stack((np.cumsum(speeds) * dt, zeros, zeros)),
        velocity=np.column_stack((speeds, zeros, zeros)),
        acceleration=np.column_stack((accels, zeros, zeros)),
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
