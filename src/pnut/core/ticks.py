"""
Tick generation on "nice" 1-2-5 steps, following the d3-array conventions.

Used by continuous scales (ticks(), nice()) and by histogram binning when a
threshold count is supplied.
"""

from __future__ import annotations

import math

__all__ = ["ticks", "tick_increment", "tick_step", "nice_domain"]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _factor(error: float) -> int:
    if error >= _E10:
        return 10
    if error >= _E5:
        return 5
    if error >= _E2:
        return 2
    return 1


def tick_increment(start: float, stop: float, count: float) -> float:
    """
    Return a signed step: positive for steps >= 1, negative reciprocal for fractional steps.

    A negative result -k means the step is 1/k, which keeps fractional ticks exact.
    """
    step = (stop - start) / max(0, count) if count > 0 else math.inf
    if step <= 0 or not math.isfinite(step):
        return 0.0 if step <= 0 else math.inf
    power = math.floor(math.log10(step))
    error = step / 10**power
    if power >= 0:
        return _factor(error) * 10**power
    return -(10**-power) / _factor(error)


def tick_step(start: float, stop: float, count: float) -> float:
    step0 = abs(stop - start) / max(0, count) if count > 0 else math.inf
    if step0 == 0 or not math.isfinite(step0):
        return 0.0 if step0 == 0 else math.inf
    step1 = 10 ** math.floor(math.log10(step0))
    step1 *= _factor(step0 / step1)
    return -step1 if stop < start else step1


def ticks(start: float, stop: float, count: int) -> list[float]:
    """
    Return approximately `count` evenly spaced, human-friendly values in [start, stop].

    Examples:
        >>> ticks(0, 10, 5)
        [0, 2, 4, 6, 8, 10]
        >>> ticks(0, 1, 4)
        [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]
    """
    if start == stop and count > 0:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    step = tick_increment(start, stop, count)
    if step == 0 or not math.isfinite(step):
        return []
    out: list[float]
    if step > 0:
        lo = math.ceil(start / step)
        hi = math.floor(stop / step)
        out = [(lo + i) * step for i in range(int(hi - lo + 1))]
    else:
        inv = -step
        lo = math.ceil(start * inv)
        hi = math.floor(stop * inv)
        out = [(lo + i) / inv for i in range(int(hi - lo + 1))]
    if reverse:
        out.reverse()
    return out


def nice_domain(start: float, stop: float, count: int) -> tuple[float, float]:
    """Extend [start, stop] outward to whole tick steps (d3 linear nice)."""
    if start == stop:
        return start, stop
    reverse = stop < start
    lo, hi = (stop, start) if reverse else (start, stop)
    prestep = None
    for _ in range(10):
        step = tick_increment(lo, hi, count)
        if step == prestep or step == 0 or not math.isfinite(step):
            break
        if step > 0:
            lo = math.floor(lo / step) * step
            hi = math.ceil(hi / step) * step
        else:
            lo = math.ceil(lo * step) / step
            hi = math.floor(hi * step) / step
        prestep = step
    return (hi, lo) if reverse else (lo, hi)
