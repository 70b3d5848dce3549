"""
Categorical scales: band, point and ordinal.

Band and point scales divide a numeric range into evenly spaced positions, one
per distinct domain value (d3-scale band semantics). Ordinal scales map domain
values onto a list of arbitrary outputs (e.g. colours), cycling when the range is
shorter than the domain.

Notes
- Domains are de-duplicated on construction, keeping first-seen order.
- Values outside the domain map to None (band/point) or to ``unknown`` (ordinal).

Examples:
    >>> from pnut.scale.categorical import BandScale
    >>> scale = BandScale(domain=("a", "b", "c", "d"), range=(0, 100))
    >>> scale("b"), scale.bandwidth(), scale("z") is None
    (25.0, 25.0, True)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any

from pnut.core.constants import BAND_ALIGN, BAND_PADDING_INNER, BAND_PADDING_OUTER

__all__ = ["BandScale", "PointScale", "OrdinalScale", "BandLayout", "band_layout"]


@dataclass(frozen=True)
class BandLayout:
    """Resolved positions of a band scale."""

    start: float
    step: float
    bandwidth: float
    positions: tuple[float, ...]


def band_layout(
    n: int,
    extent: tuple[float, float],
    padding_inner: float,
    padding_outer: float,
    align: float,
    rounded: bool,
) -> BandLayout:
    """
    Compute band positions for n domain values.

    Args:
        n (int): Number of distinct domain values.
        extent (tuple[float, float]): Output range; a reversed range reverses positions.
        padding_inner (float): Fraction of each step left empty between bands.
        padding_outer (float): Padding before the first and after the last band,
            in multiples of the step.
        align (float): Distribution of the outer space (0 start, 0.5 centred, 1 end).
        rounded (bool): Snap start and bandwidth to whole pixels.

    Returns:
        BandLayout: start, step, bandwidth and one position per domain value.
    """
    r0, r1 = extent
    reverse = r1 < r0
    start, stop = (r1, r0) if reverse else (r0, r1)
    step = (stop - start) / max(1, n - padding_inner + padding_outer * 2)
    if rounded:
        step = math.floor(step)
    start += (stop - start - step * (n - padding_inner)) * align
    bandwidth = step * (1 - padding_inner)
    if rounded:
        # Half-up, not banker's rounding.
        start = math.floor(start + 0.5)
        bandwidth = math.floor(bandwidth + 0.5)
    positions = [start + step * i for i in range(n)]
    if reverse:
        positions.reverse()
    return BandLayout(start=start, step=step, bandwidth=bandwidth, positions=tuple(positions))


def _unit(value: float, name: str) -> None:
    if not 0 <= value <= 1:
        raise ValueError(f"{name} must be within [0, 1] (got {value})")


@dataclass(frozen=True)
class BandScale:
    """
    Discrete domain mapped onto evenly spaced bands of a numeric range.

    Attributes:
        domain (tuple): Distinct values, in display order.
        range (tuple[float, float]): Output extent.
        padding_inner (float): In [0, 1].
        padding_outer (float): In [0, 1].
        align (float): In [0, 1].
        rounded (bool): Round positions and bandwidth to integers.
    """

    domain: tuple[Any, ...] = ()
    range: tuple[float, float] = (0.0, 1.0)
    padding_inner: float = BAND_PADDING_INNER
    padding_outer: float = BAND_PADDING_OUTER
    align: float = BAND_ALIGN
    rounded: bool = False
    _layout: BandLayout = field(init=False, repr=False, compare=False)
    _index: dict[Any, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", tuple(dict.fromkeys(self.domain)))
        object.__setattr__(self, "range", tuple(self.range))
        for name in ("padding_inner", "padding_outer", "align"):
            _unit(getattr(self, name), name)
        object.__setattr__(
            self,
            "_layout",
            band_layout(
                len(self.domain),
                self.range,
                self.padding_inner,
                self.padding_outer,
                self.align,
                self.rounded,
            ),
        )
        object.__setattr__(self, "_index", {v: i for i, v in enumerate(self.domain)})

    def __call__(self, value: Any) -> float | None:
        if value is None:
            return None
        try:
            i = self._index.get(value)
        except TypeError:
            return None
        return None if i is None else self._layout.positions[i]

    def bandwidth(self) -> float:
        return self._layout.bandwidth

    def step(self) -> float:
        return self._layout.step

    def with_domain(self, domain: tuple[Any, ...]) -> BandScale:
        return replace(self, domain=tuple(domain))

    def with_range(self, range: tuple[float, float]) -> BandScale:
        return replace(self, range=tuple(range))

    def with_padding(self, padding: float) -> BandScale:
        """Set inner and outer padding at once."""
        return replace(self, padding_inner=padding, padding_outer=padding)

    def with_padding_inner(self, padding: float) -> BandScale:
        return replace(self, padding_inner=padding)

    def with_padding_outer(self, padding: float) -> BandScale:
        return replace(self, padding_outer=padding)

    def with_align(self, align: float) -> BandScale:
        return replace(self, align=align)

    def with_round(self, rounded: bool = True) -> BandScale:
        return replace(self, rounded=rounded)


@dataclass(frozen=True)
class PointScale(BandScale):
    """
    Band scale with zero bandwidth: every domain value maps to a single point.

    ``padding_outer`` is the point padding; ``padding_inner`` is fixed at 1.

    Examples:
        >>> PointScale(domain=("a", "b", "c"), range=(0, 100)).step()
        50.0
    """

    padding_inner: float = field(default=1.0, init=False)

    def with_padding(self, padding: float) -> PointScale:
        return replace(self, padding_outer=padding)

    def with_padding_inner(self, padding: float) -> PointScale:
        raise TypeError("point scales have a fixed inner padding of 1")


@dataclass(frozen=True)
class OrdinalScale:
    """
    Discrete domain mapped onto a discrete range, cycling the range as needed.

    Attributes:
        domain (tuple): Distinct input values.
        range (tuple): Output values (colours, symbols, numbers, ...).
        unknown (Any): Output for values outside the domain.

    Examples:
        >>> scale = OrdinalScale(domain=("a", "b", "c"), range=("red", "blue"))
        >>> scale("a"), scale("c"), scale("z") is None
        ('red', 'red', True)
    """

    domain: tuple[Any, ...] = ()
    range: tuple[Any, ...] = ()
    unknown: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", tuple(dict.fromkeys(self.domain)))
        object.__setattr__(self, "range", tuple(self.range))

    def __call__(self, value: Any) -> Any:
        if value is None or not self.range:
            return self.unknown
        try:
            i = self.domain.index(value)
        except ValueError:
            return self.unknown
        return self.range[i % len(self.range)]

    def with_domain(self, domain: tuple[Any, ...]) -> OrdinalScale:
        return replace(self, domain=tuple(domain))

    def with_range(self, range: tuple[Any, ...]) -> OrdinalScale:
        return replace(self, range=tuple(range))

    def with_unknown(self, unknown: Any) -> OrdinalScale:
        return replace(self, unknown=unknown)
