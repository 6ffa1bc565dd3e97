"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import Optional, Sequence

from trajectorytuner.config import DEFAULT_DT, DEFAULT_N_SAMPLES
from trajectorytuner.logging_config import setup_logging
from trajectorytuner.model.state import TunerState
from trajectorytuner.trajectories.registry import TRAJECTORY_LIST, default_trajectory, list_ids
from trajectorytuner.utils import fmt2, format_number

logger = logging.getLogger(__name__)


def parse_assignment(text: str) -> tuple[str, float]:
    """Parse ``key=value`` into a parameter name and a number."""
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    try:
        return key.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not a number") from None
    if not (value > 0) or not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"expected a positive finite number, got '{text}'")
    return value


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not an integer") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trajectorytuner",
        description="Simulate a trajectory shape and print its command and speed/acceleration bands.",
    )
    parser.add_argument("-t", "--trajectory", choices=list_ids(), default=default_trajectory().ID,
                        help="trajectory model (default: %(default)s)")
    parser.add_argument("-s", "--set", dest="assignments", metavar="KEY=VALUE", action="append",
                        type=parse_assignment, default=[], help="override a parameter (repeatable)")
    parser.add_argument("--dt", type=positive_float, default=DEFAULT_DT,
                        help="time step in seconds (default: %(default)s)")
    parser.add_argument("-n", "--samples", type=positive_int, default=DEFAULT_N_SAMPLES,
                        help="realizations for stochastic models (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible stochastic runs")
    parser.add_argument("--time", type=float, default=0.0, help="time cursor in seconds (default: %(default)s)")
    parser.add_argument("--list", action="store_true", help="list trajectory models and their parameters")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="also write the log to PATH")
    return parser


def format_model_list() -> str:
    lines = []
    for model in TRAJECTORY_LIST:
        kind = " (stochastic)" if model.IS_STOCHASTIC else ""
        lines.append(f"{model.ID}: {model.NAME}{kind}")
        for key, cfg in model.PARAM_CONFIG.items():
            lines.append(
                f"  {key:<14} default={format_number(cfg.default):<6} "
                f"range=[{format_number(cfg.min)}, {format_number(cfg.max)}] "
                f"step={format_number(cfg.step):<5} {cfg.label}"
            )
    return "\n".join(lines)


def format_report(state: TunerState) -> str:
    model = state.trajectory
    batch = state.batch
    lines = [
        f"Trajectory:  {model.NAME} ({model.ID})",
        "Parameters:  " + ", ".join(f"{k}={format_number(v)}" for k, v in state.params.items()),
        f"Plot time:   {fmt2(state.plot_time)} s",
        f"Samples:     {len(batch)} x {len(batch[0]) if batch else 0}",
        f"Command:     {state.command}",
    ]
    if state.has_singularity:
        lines.append("Warning:     velocity jumps at t = 0 (no ramp), acceleration is unbounded")

    record = state.current_stats
    if record is not None:
        lines.append(f"At t = {fmt2(record.t)} s:")
        lines.append(
            f"  speed  mean {fmt2(record.speed_mean)}  std {fmt2(record.speed_std)}  "
            f"min {fmt2(record.speed_min)}  max {fmt2(record.speed_max)}"
        )
        lines.append(
            f"  accel  mean {fmt2(record.accel_mean)}  std {fmt2(record.accel_std)}  "
            f"min {fmt2(record.accel_min)}  max {fmt2(record.accel_max)}"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point of the ``trajectorytuner`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, log_file=args.log_file)

    if args.list:
        print(format_model_list())
        return 0

    state = TunerState(trajectory_id=args.trajectory, seed=args.seed)
    state.set_dt(args.dt)
    state.set_n_samples(args.samples)
    for key, value in args.assignments:
        if key not in state.params:
            parser.error(f"unknown parameter '{key}' for {args.trajectory}; "
                         f"expected one of {', '.join(state.params)}")
        state.set_param(key, value)
    state.set_time(args.time)

    try:
        report = format_report(state)
    except ValueError as e:
        parser.error(str(e))

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
