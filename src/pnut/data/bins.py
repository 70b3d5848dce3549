"""
Histogram bucketing for ChartData.bin().

Bins are half-open [lower, upper) except the last, which is closed on the right.
Thresholds at or below the domain start, and above the domain end, are discarded
before bucketing (d3-array histogram semantics). Values are assigned to bins by
direct threshold comparison.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field

__all__ = ["Bin", "histogram"]


@dataclass(frozen=True)
class Bin:
    """
    One histogram bucket.

    Attributes:
        lower (float): Inclusive lower edge.
        upper (float): Exclusive upper edge (inclusive for the final bin).
        indices (list[int]): Positions (in the input sequence) of values in this bin.
    """

    lower: float
    upper: float
    indices: list[int] = field(default_factory=list)


def histogram(
    values: Sequence[float | None],
    domain: tuple[float, float],
    thresholds: Sequence[float],
) -> list[Bin]:
    """
    Bucket values into bins defined by a domain and interior thresholds.

    Args:
        values: Numeric values (None entries are skipped, but keep their position).
        domain: (x0, x1) covering all bins; values outside are dropped.
        thresholds: Candidate interior edges, in any order.

    Returns:
        list[Bin]: All bins in ascending order, including empty ones.

    Examples:
        >>> [(b.lower, b.upper, b.indices) for b in histogram([4, 99, 88, 55], (4, 99), [80])]
        [(4, 80, [0, 3]), (80, 99, [1, 2])]
    """
    x0, x1 = domain
    edges = sorted(t for t in thresholds if x0 < t <= x1)
    bounds = [x0, *edges, x1]
    bins = [Bin(lower=bounds[i], upper=bounds[i + 1]) for i in range(len(edges) + 1)]
    for position, value in enumerate(values):
        if value is None or not x0 <= value <= x1:
            continue
        bins[bisect_right(edges, value)].indices.append(position)
    return bins
