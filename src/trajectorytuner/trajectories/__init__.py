"""
Trajectory models and the registry that looks them up by id.
"""
from trajectorytuner.trajectories.base import TrajectoryId, TrajectoryModel
from trajectorytuner.trajectories.langevin import LangevinModel
from trajectorytuner.trajectories.lissajous import LissajousModel
from trajectorytuner.trajectories.registry import (
    TRAJECTORIES,
    TRAJECTORY_LIST,
    default_trajectory,
    get_trajectory,
    list_ids,
    resolve_trajectory,
)

__all__ = [
    "TrajectoryId",
    "TrajectoryModel",
    "LissajousModel",
    "LangevinModel",
    "TRAJECTORIES",
    "TRAJECTORY_LIST",
    "default_trajectory",
    "get_trajectory",
    "list_ids",
    "resolve_trajectory",
]
