"""
Random Sampling
===============
All randomness of the stochastic models goes through this module, so a
different generator (or a seeded one for reproducible runs) can be swapped in
without touching the model code.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent generator; ``None`` draws fresh OS entropy."""
    return np.random.default_rng(seed)


def normal_random(
    rng: np.random.Generator,
    size: int | tuple[int, ...] | None = None
) -> float | npt.NDArray[np.float64]:
    """
    Standard normal variates via the Box-Muller transform.

    Each variate consumes two independent uniform [0, 1) draws. A first draw of
    exactly 0 is redrawn since log(0) is undefined.

    Args:
        rng: Generator supplying the uniform draws.
        size: Output shape. ``None`` returns a single float.

    Returns:
        Variate(s) with mean 0 and variance 1.
    """
    if size is None:
        u1 = rng.random()
        while u1 == 0.0:
            u1 = rng.random()
        u2 = rng.random()
        return float(np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2))

    u1 = rng.random(size)
    zeros = u1 == 0.0
    while zeros.any():
        u1[zeros] = rng.random(int(zeros.sum()))
        zeros = u1 == 0.0
    u2 = rng.random(size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
