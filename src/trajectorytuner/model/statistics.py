"""
Batch Statistics
================
Reduces a batch of index-aligned trajectories to per-timestep bands
(min/max/mean/std) of speed and acceleration, plus the small lookups a plotting
front end needs (closest sample to a time cursor, square XY plot domain).
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from trajectorytuner.model.samples import StatRecord, Trajectory

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Domain = tuple[float, float]

DEFAULT_DOMAIN: Domain = (-1.0, 1.0)


def compute_stats(batch: Sequence[Trajectory]) -> list[StatRecord]:
    """
    Compute speed/acceleration statistics at every time index of a batch.

    With a single trajectory the values are copied through with zero spread.
    Otherwise the arithmetic mean, the population standard deviation
    (divided by N), the minimum and the maximum are taken across the batch.

    Args:
        batch: Trajectories sharing the same length and time coordinates.

    Raises:
        ValueError: If the trajectories differ in length.

    Returns:
        One record per time index, in time order. Empty for an empty batch.
    """
    if not batch:
        return []

    n_steps = len(batch[0])
    if any(len(traj) != n_steps for traj in batch):
        raise ValueError(
            f"Trajectories in a batch must share the same length; got "
            f"{sorted({len(traj) for traj in batch})}"
        )

    speeds = np.vstack([traj.speed for traj in batch])
    accels = np.vstack([traj.accel for traj in batch])
    logger.debug(f"Aggregating {speeds.shape[0]} trajectories x {n_steps} steps")

    speed_cols = _bands(speeds)
    accel_cols = _bands(accels)

    return [
        StatRecord(
            float(t),
            *(float(col[i]) for col in speed_cols),
            *(float(col[i]) for col in accel_cols),
        )
        for i, t in enumerate(batch[0].t)
    ]


def _bands(values: npt.NDArray[np.float64]) -> tuple[npt.NDArray[np.float64], ...]:
    """(min, max, mean, std, lower, upper) along the batch axis of an (N, L) array."""
    if values.shape[0] == 1:
        row = values[0]
        std = np.zeros_like(row)
        return row, row, row, std, row, row

    mean = values.mean(axis=0)
    std = values.std(axis=0)
    return values.min(axis=0), values.max(axis=0), mean, std, mean - std, mean + std


def closest_index(times: npt.ArrayLike, t: float) -> Optional[int]:
    """
    Index of the time closest to ``t``; the earliest one wins on ties.

    Returns:
        The index, or None when ``times`` is empty.
    """
    times = np.asarray(times, dtype=np.float64)
    if times.size == 0:
        return None
    return int(np.argmin(np.abs(times - t)))


def closest_record(records: Sequence[StatRecord], t: float) -> Optional[StatRecord]:
    """Statistic record whose time is closest to the cursor ``t``."""
    index = closest_index([r.t for r in records], t)
    return None if index is None else records[index]


def xy_bounds(batch: Sequence[Trajectory]) -> tuple[Domain, Domain]:
    """
    Square XY plot domain enclosing every trajectory of a batch.

    The larger of the x/y extents is padded by 6% on each side (0.1 when the
    extent is zero) and used for both axes, centered on the data.

    Returns:
        ``(x_domain, y_domain)``; ``(-1, 1)`` for both when there is no data.
    """
    if not batch or len(batch[0]) == 0:
        return DEFAULT_DOMAIN, DEFAULT_DOMAIN

    xy = np.concatenate([traj.position[:, :2] for traj in batch])
    x_min, x_max = _extent(xy[:, 0])
    y_min, y_max = _extent(xy[:, 1])

    cx = (x_min + x_max) / 2
    cy = (y_min + y_max) / 2
    span = max(x_max - x_min, y_max - y_min)
    pad = span * 0.06 if span > 0 else 0.1
    half = span / 2 + pad

    return (cx - half, cx + half), (cy - half, cy + half)


def _extent(values: npt.NDArray[np.float64]) -> Domain:
    # NaN samples are skipped, infinities are kept
    values = values[~np.isnan(values)]
    if values.size == 0:
        return float("inf"), float("-inf")
    return float(values.min()), float(values.max())
