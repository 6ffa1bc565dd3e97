"""Axis tick generation and number snapping/formatting helpers."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Sequence

from trajectorytuner.config import MAX_TICKS


def format_number(value: float) -> str:
    """
    Format a number the way JavaScript's ``Number#toString`` does.

    The command strings are pasted into a shell that was written against that
    formatting, so ``10.0`` must render as ``"10"`` and ``1e-7`` as ``"1e-7"``.

    Args:
        value: Number to format.

    Returns:
        Shortest round-trip text of the value.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest digit string that round-trips
    _, digits_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digits_tuple)
    k = len(digits)
    n = exponent + k  # value = 0.d1d2...dk * 10**n

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    exp = n - 1
    exp_text = f"e+{exp}" if exp >= 0 else f"e-{-exp}"
    mantissa = digits[0] if k == 1 else digits[0] + "." + digits[1:]
    return sign + mantissa + exp_text


def decimals_from_step(step: float) -> int:
    """Number of decimals implied by the textual form of a slider step."""
    text = format_number(step)
    if "e-" in text:
        try:
            return int(text.split("e-")[1])
        except ValueError:
            return 0
    i = text.find(".")
    return len(text) - i - 1 if i >= 0 else 0


def snap_to_step(value: float, step: float) -> float:
    """
    Snap a value onto the grid spanned by ``step``.

    Args:
        value: Raw value, e.g. from a slider or a text field.
        step: Grid spacing. Must be finite and positive to have an effect.

    Returns:
        The snapped value, rounded to the decimals of the step (at most 8).
        Non-finite inputs or a non-positive step return the value unchanged.
    """
    if not math.isfinite(value) or not math.isfinite(step) or step <= 0:
        return value
    # Half-up rounding, matching the browser sliders
    snapped = math.floor(value / step + 0.5) * step
    dec = min(8, decimals_from_step(step))
    return float(f"{snapped:.{dec}f}")


def fmt2(value: float | str) -> str:
    """
    Format with German grouping and exactly two decimals (``1.234,50``).

    Ties round away from zero on the shortest decimal text of the value, so
    ``0.125`` gives ``0,13`` and ``1.005`` gives ``1,01``.
    """
    try:
        n = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(n):
        return format_number(n)
    d = Decimal(repr(n))
    context = Context(prec=max(28, d.adjusted() + 3))
    d = d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP, context=context)
    return f"{d:,.2f}".translate(str.maketrans({",": ".", ".": ","}))


def pow10(x: float) -> float:
    """Largest power of ten not greater than ``x`` (1 for invalid input)."""
    if not (x > 0) or not math.isfinite(x):
        return 1.0
    return 10.0 ** math.floor(math.log10(x))


def make_pow10_ticks(domain: Sequence[float] | None, max_ticks: int = MAX_TICKS) -> list[float]:
    """
    Generate axis ticks spaced by a power of ten.

    The spacing starts at the power of ten that would give roughly
    ``max_ticks`` ticks and grows tenfold until the count fits. Zero is always
    included when the domain spans it.

    Args:
        domain: ``(min, max)`` of the axis. Reversed bounds are accepted.
        max_ticks: Upper limit on the number of regular ticks.

    Returns:
        Sorted tick values. ``[min]`` for a zero-width domain, ``[]`` for a
        malformed or non-finite domain.
    """
    if not domain or len(domain) != 2:
        return []
    lo, hi = float(domain[0]), float(domain[1])
    if not math.isfinite(lo) or not math.isfinite(hi):
        return []
    if hi < lo:
        lo, hi = hi, lo

    span = hi - lo
    if not (span > 0):
        return [lo]

    step = pow10(span / max(1, max_ticks - 1))
    count = math.floor(span / step) + 1
    while count > max_ticks:
        step *= 10
        count = math.floor(span / step) + 1

    start = math.ceil(lo / step) * step
    end = math.floor(hi / step) * step

    ticks: list[float] = []
    v = start
    while v <= end + step * 0.5:
        vv = float(f"{v:.12f}")
        if abs(vv) < step * 1e-9:
            vv = 0.0
        ticks.append(vv)
        v += step

    if lo <= 0 <= hi and 0 not in ticks:
        ticks.append(0.0)
        ticks.sort()

    return ticks
