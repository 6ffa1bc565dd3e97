"""
Configuration & Global Constants
================================
Central place for the numeric defaults shared by the tuner state and the CLI.

Why is this file needed?
------------------------
1. Abstraction: Session defaults (time step, sample count) and the interactive
   limits are not scattered as magic numbers through the code.
2. Single source: The CLI and the tuner state read the same bounds.

Exports:
    DEFAULT_DT (float): Integration/sampling time step in seconds.
    DEFAULT_N_SAMPLES (int): Realizations drawn for stochastic models.
    MIN_N_SAMPLES, MAX_N_SAMPLES (int): Bounds for the sample count.
    TIME_STEP (float): Granularity of the time cursor.
    MAX_SIMULATION_STEPS (int): Step cap applied by the tuner state.
"""
import math

DEFAULT_DT: float = 0.02
DEFAULT_N_SAMPLES: int = 10
MIN_N_SAMPLES: int = 1
MAX_N_SAMPLES: int = 100

TIME_STEP: float = 0.01

# The engine is uncapped; interactive callers stop here to bound latency
MAX_SIMULATION_STEPS: int = 12000

# Slider fallback for parameters without a schema entry
FALLBACK_STEP: float = 0.01
FALLBACK_MIN: float = -math.inf
FALLBACK_MAX: float = math.inf

# Axis tick budget for the XY plot
MAX_TICKS: int = 9
