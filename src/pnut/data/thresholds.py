"""
Histogram threshold rules.

The three rules mirror d3-array: Sturges (bin count from sample size), Scott
(bin width from the sample standard deviation) and Freedman-Diaconis (bin width
from the interquartile range). Each returns a bin count; counts become concrete
thresholds through count_thresholds(), which places them on nice 1-2-5 steps.

All functions operate on plain floats; ChartData converts datetimes to epoch
milliseconds before calling them.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import polars as pl

from pnut.core.ticks import tick_step

__all__ = [
    "sturges",
    "scott",
    "freedman_diaconis",
    "ThresholdGenerators",
    "GENERATORS",
    "count_thresholds",
]


def sturges(values: Sequence[float], min_value: float | None = None, max_value: float | None = None) -> int:
    """Sturges' rule: ceil(log2(n)) + 1."""
    n = len(values)
    if n == 0:
        return 1
    return math.ceil(math.log2(n)) + 1


def _width_rule(span: float, width: float) -> int:
    if width <= 0 or not math.isfinite(width) or span <= 0:
        return 1
    return max(1, math.ceil(span / width))


def scott(values: Sequence[float], min_value: float, max_value: float) -> int:
    """Scott's normal reference rule: width = 3.5 * stdev * n^(-1/3)."""
    n = len(values)
    if n < 2:
        return 1
    deviation = pl.Series("value", values, dtype=pl.Float64).std(ddof=1) or 0.0
    return _width_rule(max_value - min_value, 3.5 * deviation * n ** (-1 / 3))


def freedman_diaconis(values: Sequence[float], min_value: float, max_value: float) -> int:
    """Freedman-Diaconis rule: width = 2 * IQR * n^(-1/3)."""
    n = len(values)
    if n < 2:
        return 1
    series = pl.Series("value", values, dtype=pl.Float64)
    upper = series.quantile(0.75, interpolation="linear") or 0.0
    lower = series.quantile(0.25, interpolation="linear") or 0.0
    return _width_rule(max_value - min_value, 2 * (upper - lower) * n ** (-1 / 3))


ThresholdRule = Callable[[Sequence[float], float, float], int]


@dataclass(frozen=True)
class ThresholdGenerators:
    """Named threshold rules handed to custom threshold callables."""

    freedman_diaconis: ThresholdRule = freedman_diaconis
    scott: ThresholdRule = scott
    sturges: ThresholdRule = sturges

    def get(self, name: str) -> ThresholdRule:
        return getattr(self, name)


GENERATORS = ThresholdGenerators()


def count_thresholds(x0: float, x1: float, count: float) -> list[float]:
    """
    Thresholds for roughly `count` bins over [x0, x1], on multiples of a nice step.

    Examples:
        >>> count_thresholds(4, 99, 4)
        [20, 40, 60, 80]
    """
    step = tick_step(x0, x1, count)
    if step <= 0 or not math.isfinite(step):
        return []
    out: list[float] = []
    i = math.ceil(x0 / step)
    while i * step < x1:
        out.append(i * step)
        i += 1
    return out
