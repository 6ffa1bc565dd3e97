"""
Trajectory Data Structures
==========================
Plain, immutable containers produced by the trajectory models and consumed by
the statistics layer and any plotting front end.

Classes:
    Sample: One time instant (position, velocity, acceleration).
    Trajectory: One simulated realization, stored column-wise.
    StatRecord: Speed/acceleration bands of a batch at one time index.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def norm3(vectors: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Euclidean norm of each row of an (L, 3) array.

    Uses hypot so that an infinite component yields an infinite norm even when
    another component is NaN.
    """
    return np.hypot(np.hypot(vectors[..., 0], vectors[..., 1]), vectors[..., 2])


def _frozen(array: npt.ArrayLike, ndim: int) -> npt.NDArray[np.float64]:
    arr = np.array(array, dtype=np.float64)
    if arr.ndim != ndim:
        raise ValueError(f"Expected a {ndim}D array, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class Sample:
    """Kinematic state at a single instant."""
    t: float
    x: float
    y: float
    z: float
    vx: float
    vy: float
    vz: float
    speed: float
    ax: float
    ay: float
    az: float
    accel: float


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    One realization of a trajectory model.

    Attributes:
        t: (L,) sample times, non-decreasing, starting at 0.
        position: (L, 3) positions.
        velocity: (L, 3) velocities.
        acceleration: (L, 3) accelerations.
        speed: (L,) norm of the velocity.
        accel: (L,) norm of the acceleration.

    All arrays are read-only.
    """
    t: npt.NDArray[np.float64]
    position: npt.NDArray[np.float64]
    velocity: npt.NDArray[np.float64]
    acceleration: npt.NDArray[np.float64]
    speed: npt.NDArray[np.float64]
    accel: npt.NDArray[np.float64]

    @classmethod
    def from_arrays(
        cls,
        t: npt.ArrayLike,
        position: npt.ArrayLike,
        velocity: npt.ArrayLike,
        acceleration: npt.ArrayLike
    ) -> Trajectory:
        """
        Build a trajectory and derive the speed/acceleration magnitudes.

        Args:
            t: Sample times, shape (L,).
            position: Positions, shape (L, 3).
            velocity: Velocities, shape (L, 3).
            acceleration: Accelerations, shape (L, 3).
        """
        velocity = np.asarray(velocity, dtype=np.float64)
        acceleration = np.asarray(acceleration, dtype=np.float64)
        return cls(
            t=_frozen(t, 1),
            position=_frozen(position, 2),
            velocity=_frozen(velocity, 2),
            acceleration=_frozen(acceleration, 2),
            speed=_frozen(norm3(velocity), 1),
            accel=_frozen(norm3(acceleration), 1),
        )

    def __len__(self) -> int:
        return len(self.t)

    def __getitem__(self, index: int) -> Sample:
        x, y, z = self.position[index]
        vx, vy, vz = self.velocity[index]
        ax, ay, az = self.acceleration[index]
        return Sample(
            t=float(self.t[index]),
            x=float(x), y=float(y), z=float(z),
            vx=float(vx), vy=float(vy), vz=float(vz),
            speed=float(self.speed[index]),
            ax=float(ax), ay=float(ay), az=float(az),
            accel=float(self.accel[index]),
        )

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self)):
            yield self[i]


# One realization per entry, index-aligned
TrajectoryBatch = List[Trajectory]


@dataclass(frozen=True)
class StatRecord:
    """Per-timestep spread of speed and acceleration across a batch."""
    t: float
    speed_min: float
    speed_max: float
    speed_mean: float
    speed_std: float
    speed_lower: float
    speed_upper: float
    accel_min: float
    accel_max: float
    accel_mean: float
    accel_std: float
    accel_lower: float
    accel_upper: float
