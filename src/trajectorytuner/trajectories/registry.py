from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from trajectorytuner.trajectories.base import TrajectoryModel
from trajectorytuner.trajectories.langevin import LangevinModel
from trajectorytuner.trajectories.lissajous import LissajousModel

# Selection order; the first entry is the default
TRAJECTORY_LIST: tuple[TrajectoryModel, ...] = (
    LissajousModel(),
    LangevinModel(),
)

TRAJECTORIES: Mapping[str, TrajectoryModel] = MappingProxyType(
    {model.ID: model for model in TRAJECTORY_LIST}
)


def get_trajectory(trajectory_id: str) -> Optional[TrajectoryModel]:
    """Model registered under ``trajectory_id``, or None if there is none."""
    return TRAJECTORIES.get(trajectory_id)


def default_trajectory() -> TrajectoryModel:
    return TRAJECTORY_LIST[0]


def resolve_trajectory(trajectory_id: Optional[str]) -> TrajectoryModel:
    """Look up a model, falling back to the default for unknown ids."""
    model = get_trajectory(trajectory_id) if trajectory_id is not None else None
    return model if model is not None else default_trajectory()


def list_ids() -> list[str]:
    return [model.ID for model in TRAJECTORY_LIST]
